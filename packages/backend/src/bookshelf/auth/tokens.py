"""JWT issuance and verification.

Learn: tokens are stateless — nothing is stored server-side, and a token
dies only by expiring. The claim set is deliberately small: the user id
(``sub``), email and username, plus ``iat``/``exp``.

TokenService takes its secret, algorithm and TTL at construction instead
of reading settings on every call. The app builds one instance at startup
(``from_settings``); tests build their own with fixed values.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from bookshelf.config import Settings


class TokenError(Exception):
    """Raised when a token can't be verified."""


class TokenExpiredError(TokenError):
    """Signature was fine but ``exp`` is in the past."""


class TokenInvalidError(TokenError):
    """Bad signature, bad encoding, or missing claims."""


@dataclass(frozen=True)
class Identity:
    """The verified claims carried by a token."""

    user_id: str
    email: str
    username: str


class TokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(hours=2)):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(minutes=settings.token_expire_minutes),
        )

    def issue(self, user) -> str:
        """Mint a token for anything with ``id``, ``email`` and ``username``."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "username": user.username,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Verify signature and expiry, returning the embedded identity.

        Raises TokenExpiredError or TokenInvalidError.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

        try:
            return Identity(
                user_id=str(payload["sub"]),
                email=payload["email"],
                username=payload["username"],
            )
        except KeyError as e:
            raise TokenInvalidError(f"Invalid token: missing claim {e}")

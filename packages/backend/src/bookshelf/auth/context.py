"""Request context — who (if anyone) is making this request.

Learn: the resolver is the "soft" half of auth. It never rejects a
request: no token, an expired token and a forged token all produce an
anonymous context, so public operations (login, addUser) stay reachable
even with a stale token attached. The "hard" half is
``require_authenticated``, called by each operation that touches a
user's own data.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from bookshelf.auth.tokens import Identity, TokenExpiredError, TokenError, TokenService
from bookshelf.errors import AuthenticationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class RequestContext:
    """Authenticated-or-anonymous identity, computed once per request."""

    identity: Optional[Identity] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


ANONYMOUS = RequestContext()


def extract_token(raw_header: Optional[str]) -> Optional[str]:
    """Pull the token out of an Authorization header value.

    Accepts ``Bearer <token>`` (any case) or the bare token.
    """
    if not raw_header:
        return None
    value = raw_header.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


def resolve_context(raw_header: Optional[str], tokens: TokenService) -> RequestContext:
    """Build the RequestContext for one request's Authorization header."""
    token = extract_token(raw_header)
    if token is None:
        return ANONYMOUS

    try:
        identity = tokens.verify(token)
    except TokenError as e:
        reason = "expired" if isinstance(e, TokenExpiredError) else "invalid"
        logger.debug("bookshelf.auth.token_rejected", reason=reason)
        return ANONYMOUS

    return RequestContext(identity=identity)


def require_authenticated(context: RequestContext, message: str = "Not logged in") -> Identity:
    """Return the caller's identity or raise AuthenticationError."""
    if context.identity is None:
        raise AuthenticationError(message)
    return context.identity

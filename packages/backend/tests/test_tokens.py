"""TokenService tests — issue/verify, expiry, tampering."""

import uuid
from dataclasses import dataclass
from datetime import timedelta

import jwt
import pytest

from bookshelf.auth.tokens import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenService,
)
from bookshelf.config import Settings


@dataclass
class FakeUser:
    id: uuid.UUID
    email: str
    username: str


@pytest.fixture()
def user():
    return FakeUser(id=uuid.uuid4(), email="reader@example.com", username="reader")


@pytest.fixture()
def service():
    return TokenService(secret="s3cret", expires_in=timedelta(hours=2))


def test_issue_then_verify_returns_claims(service, user):
    identity = service.verify(service.issue(user))
    assert identity.user_id == str(user.id)
    assert identity.email == user.email
    assert identity.username == user.username


def test_expiry_is_issue_time_plus_ttl(service, user):
    payload = jwt.decode(service.issue(user), "s3cret", algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == 2 * 60 * 60


def test_zero_ttl_token_is_expired(user):
    service = TokenService(secret="s3cret", expires_in=timedelta(0))
    with pytest.raises(TokenExpiredError):
        service.verify(service.issue(user))


def test_wrong_secret_is_invalid(service, user):
    other = TokenService(secret="other-secret")
    with pytest.raises(TokenInvalidError):
        service.verify(other.issue(user))


def test_garbage_is_invalid(service):
    with pytest.raises(TokenInvalidError):
        service.verify("not.a.jwt")


def test_missing_claims_is_invalid(service):
    token = jwt.encode({"sub": "abc", "exp": 9999999999}, "s3cret", algorithm="HS256")
    with pytest.raises(TokenInvalidError):
        service.verify(token)


def test_expired_and_invalid_share_a_base():
    assert issubclass(TokenExpiredError, TokenError)
    assert issubclass(TokenInvalidError, TokenError)


def test_from_settings_uses_configured_ttl():
    service = TokenService.from_settings(
        Settings(jwt_secret="abc", jwt_algorithm="HS256", token_expire_minutes=15)
    )
    assert service.secret == "abc"
    assert service.expires_in == timedelta(minutes=15)


def test_default_secret_rejected_outside_development():
    with pytest.raises(ValueError):
        Settings(environment="production")

"""Auth helper and token tests."""

from datetime import timedelta

import pytest
from fastapi import HTTPException, Response
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError

from app.dependencies import get_current_user
from app.routers.auth import set_refresh_cookie
from app.schemas.user import ChangePassword
from app.services.auth_service import (
    create_token,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip() -> None:
    """Hashed passwords should verify the original plain text."""
    hashed = hash_password("CorrectHorseBatteryStaple")
    assert hashed != "CorrectHorseBatteryStaple"
    assert hashed.startswith("$2")
    assert verify_password("CorrectHorseBatteryStaple", hashed)
    assert not verify_password("wrong-password", hashed)
    assert not verify_password("CorrectHorseBatteryStaple", "invalid-hash")


def test_access_token_contains_expected_claims() -> None:
    """Access tokens should encode subject and token type."""
    token = create_access_token("user-123")
    payload = decode_token(token)
    assert payload["sub"] == "user-123"
    assert payload["token_type"] == "access"
    assert "exp" in payload


def test_refresh_token_contains_expected_claims() -> None:
    """Refresh tokens should encode subject and token type."""
    token = create_refresh_token("user-456")
    payload = decode_token(token)
    assert payload["sub"] == "user-456"
    assert payload["token_type"] == "refresh"
    assert "exp" in payload


def test_decode_token_rejects_invalid_input() -> None:
    """Invalid JWT values should raise ValueError."""
    with pytest.raises(ValueError):
        decode_token("not-a-jwt")


def test_set_refresh_cookie_uses_http_only_scoped_cookie(monkeypatch) -> None:
    """Refresh cookie should use the expected security and path settings."""
    monkeypatch.setattr("app.routers.auth.settings.jwt_refresh_token_expire_days", 7)
    monkeypatch.setattr("app.routers.auth.settings.auth_cookie_secure", True)
    monkeypatch.setattr("app.routers.auth.settings.auth_cookie_samesite", "strict")

    response = Response()
    set_refresh_cookie(response, "refresh-token-value")

    cookie_header = response.headers.get("set-cookie", "")
    cookie_header_lower = cookie_header.lower()

    assert "refresh_token=refresh-token-value" in cookie_header
    assert "httponly" in cookie_header_lower
    assert "secure" in cookie_header_lower
    assert "path=/api/auth" in cookie_header_lower
    assert "samesite=strict" in cookie_header_lower
    assert "max-age=604800" in cookie_header_lower


def test_create_token_embeds_extra_claims() -> None:
    """Typed tokens should carry caller-supplied claims alongside the subject."""
    token = create_token("user-789", "ad_stage", timedelta(minutes=5), stage=2, started_at=1.5)
    payload = decode_token(token)
    assert payload["sub"] == "user-789"
    assert payload["token_type"] == "ad_stage"
    assert payload["stage"] == 2
    assert payload["started_at"] == 1.5


def test_expired_token_is_rejected() -> None:
    token = create_token("user-789", "access", timedelta(seconds=-5))
    with pytest.raises(ValueError):
        decode_token(token)


def test_decode_token_chains_jwt_error() -> None:
    with pytest.raises(ValueError) as exc_info:
        decode_token("not-a-jwt")
    assert isinstance(exc_info.value.__cause__, JWTError)


@pytest.mark.asyncio
async def test_access_token_with_malformed_subject_is_rejected() -> None:
    """A subject that is not a UUID fails before any database lookup."""
    credentials = HTTPAuthorizationCredentials(
        scheme="Bearer", credentials=create_access_token("not-a-uuid")
    )

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(credentials, db=None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid or expired token"
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_change_password_requires_eight_characters() -> None:
    assert ChangePassword(current_password="old", new_password="longenough").new_password == "longenough"
    with pytest.raises(ValidationError):
        ChangePassword(current_password="old", new_password="short")

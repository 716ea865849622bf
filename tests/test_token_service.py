from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from adtrack.infrastructure.security.token_service import JwtTokenService


USER_ID = "6f1c2d3e-4b5a-4c6d-8e7f-901234567890"


def _service(**overrides) -> JwtTokenService:
    params = {"jwt_secret": "test-secret", "access_ttl_minutes": 60}
    params.update(overrides)
    return JwtTokenService(**params)


def test_access_token_round_trip():
    now = datetime.now(timezone.utc)

    token, expires_at = _service().create_access_token(user_id=USER_ID, now=now)
    payload = _service().decode_access_token(token=token)

    assert payload.user_id == USER_ID
    assert expires_at == now + timedelta(minutes=60)


def test_token_signed_with_other_secret_is_rejected():
    token, _ = _service(jwt_secret="other").create_access_token(user_id=USER_ID, now=datetime.now(timezone.utc))

    with pytest.raises(ValueError, match="Invalid access token."):
        _service().decode_access_token(token=token)


def test_token_from_other_issuer_is_rejected():
    token, _ = _service(issuer="someone-else").create_access_token(
        user_id=USER_ID,
        now=datetime.now(timezone.utc),
    )

    with pytest.raises(ValueError):
        _service().decode_access_token(token=token)


def test_expired_token_is_rejected():
    token, _ = _service().create_access_token(
        user_id=USER_ID,
        now=datetime.now(timezone.utc) - timedelta(hours=2),
    )

    with pytest.raises(ValueError, match="Access token expired."):
        _service().decode_access_token(token=token)


def test_non_access_token_is_rejected():
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode(
        {"iss": "adtrack", "sub": USER_ID, "type": "refresh", "exp": int(expires_at.timestamp())},
        "test-secret",
        algorithm="HS256",
    )

    with pytest.raises(ValueError, match="Invalid token type."):
        _service().decode_access_token(token=token)


def test_non_uuid_subject_is_rejected():
    token, _ = _service().create_access_token(user_id="user-1", now=datetime.now(timezone.utc))

    with pytest.raises(ValueError, match="Invalid token subject."):
        _service().decode_access_token(token=token)

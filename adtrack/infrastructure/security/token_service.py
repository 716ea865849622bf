from __future__ import annotations

from datetime import datetime, timedelta
from uuid import UUID

import jwt

from adtrack.application.dto.auth import AccessTokenPayload
from adtrack.application.ports.token_port import TokenPort


_ALGORITHM = "HS256"


class JwtTokenService(TokenPort):
    """Access tokens shared with the AdTrack web backend.

    The backend signs, this service only needs to verify. ``create_access_token``
    exists for local tooling and tests.
    """

    def __init__(
        self,
        *,
        jwt_secret: str,
        access_ttl_minutes: int,
        issuer: str = "adtrack",
    ):
        self._jwt_secret = jwt_secret
        self._access_ttl_minutes = access_ttl_minutes
        self._issuer = issuer

    def create_access_token(self, *, user_id: str, now: datetime) -> tuple[str, datetime]:
        expires_at = now + timedelta(minutes=self._access_ttl_minutes)
        claims = {
            "iss": self._issuer,
            "sub": user_id,
            "type": "access",
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._jwt_secret, algorithm=_ALGORITHM), expires_at

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            claims = jwt.decode(
                token,
                self._jwt_secret,
                algorithms=[_ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "sub", "iss"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ValueError("Access token expired.") from exc
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid access token.") from exc

        if claims.get("type") != "access":
            raise ValueError("Invalid token type.")

        subject = claims["sub"]
        if not isinstance(subject, str) or not subject:
            raise ValueError("Invalid token subject.")
        # users.id is a UUID column; anything else would fail in the lookup.
        try:
            UUID(subject)
        except ValueError as exc:
            raise ValueError("Invalid token subject.") from exc
        return AccessTokenPayload(user_id=subject)

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_issuer: str
    cors_allow_origins: tuple[str, ...]
    log_level: str
    feature_catalog_json: str | None


def get_settings() -> Settings:
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "60")),
        jwt_issuer=_env("JWT_ISSUER", "adtrack"),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        feature_catalog_json=_env("FEATURE_CATALOG_JSON"),
    )

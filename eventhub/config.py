"""Process configuration loaded from the environment (and ``.env``)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("config")

DEFAULT_JWT_SECRET = "dev-secret-change-me"


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Immutable settings handed to the services that need them."""

    database_url: Optional[str] = None
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiry_minutes: int = 60
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"


def load_settings(env: Mapping[str, str] = os.environ) -> Settings:
    secret = env.get("JWT_SECRET") or DEFAULT_JWT_SECRET
    if secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET not set; using the development default.")

    try:
        expiry = int(env.get("JWT_EXPIRY_MINUTES", "60"))
    except ValueError:
        expiry = 60

    return Settings(
        database_url=env.get("DATABASE_URL") or env.get("POSTGRES_URL") or None,
        jwt_secret=secret,
        jwt_algorithm=env.get("JWT_ALGORITHM", "HS256"),
        jwt_expiry_minutes=expiry,
        sqlalchemy_echo=_truthy(env.get("SQLALCHEMY_ECHO")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached process-wide settings (FastAPI dependency)."""
    return load_settings()

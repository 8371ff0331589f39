"""Application settings read from the environment.

``load_dotenv()`` runs first so a local ``.env`` file can supply any of the
variables below. Values are resolved once, when this module is imported, so
tests must set environment variables before importing ``app``.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    """Settings loaded from environment variables."""

    app_title: str = os.getenv("APP_TITLE", "Portal de Servicios")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./data.db")
    sql_echo: bool = _flag("SQL_ECHO")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Sessions live for one hour unless overridden.
    session_ttl_seconds: int = int(os.getenv("SESSION_TTL_SECONDS", str(60 * 60)))
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "portal_session")
    session_cookie_secure: bool = _flag("SESSION_COOKIE_SECURE")

    # bcrypt cost factor; 4 is the lowest value bcrypt accepts.
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))


settings = Settings()

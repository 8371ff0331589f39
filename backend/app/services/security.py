"""Password hashing with bcrypt."""

import logging
from typing import Optional

import bcrypt

from app.config import settings

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash ``password`` with a fresh bcrypt salt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor; defaults to ``settings.bcrypt_rounds``

    Returns:
        The bcrypt hash as text, e.g. ``$2b$10$...``
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        # Raised for a corrupt stored hash or a password bcrypt refuses (> 72 bytes).
        logger.warning(f"Password verification rejected input: {e}")
        return False

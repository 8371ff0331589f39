"""Credential checks and the request-level auth gate."""

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session, select

from app.config import settings
from app.errors import LoginRequired
from app.models.user import User
from app.services.security import hash_password, verify_password
from app.services.session_store import Identity, SessionStore, get_session_store

logger = logging.getLogger(__name__)

_dummy_hash: Optional[str] = None


def _timing_dummy_hash() -> str:
    """Hash checked for unknown usernames so both failure paths cost one bcrypt check."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("unknown-user-placeholder")
    return _dummy_hash


def authenticate(session: Session, username: str, password: str) -> Optional[Identity]:
    """
    Return the identity for a valid username/password pair, else None.

    The caller gets the same None for an unknown username and for a wrong
    password. Storage errors propagate.
    """
    user = session.exec(select(User).where(User.username == username)).first()
    if user is None:
        verify_password(password, _timing_dummy_hash())
        logger.info(f"Login failed for '{username}'")
        return None
    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed for '{username}'")
        return None
    return Identity(id=user.id, username=user.username, name=user.name)


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


def current_identity(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> Optional[Identity]:
    """Resolve the session cookie without enforcing login."""
    return store.lookup(session_token(request))


def require_identity(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> Identity:
    """Dependency for protected routes: attach the identity or redirect to /login."""
    identity = store.lookup(session_token(request))
    if identity is None:
        raise LoginRequired()
    request.state.identity = identity
    return identity

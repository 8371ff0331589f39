"""Session store: opaque token -> authenticated identity.

Callers only use ``create``/``lookup``/``destroy``, so the in-memory store can
be swapped for a shared backend (Redis, a database table) without touching the
routes. Each entry expires ``ttl_seconds`` after it was created.
"""

import logging
import secrets
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Snapshot of the logged-in user taken at login time."""

    id: int
    username: str
    name: str


class SessionStore(ABC):
    @abstractmethod
    def create(self, identity: Identity) -> str:
        """Start a session for ``identity`` and return its token."""

    @abstractmethod
    def lookup(self, token: Optional[str]) -> Optional[Identity]:
        """Return the identity for a live token, else None."""

    @abstractmethod
    def destroy(self, token: Optional[str]) -> None:
        """End the session. Unknown tokens are ignored."""


class InMemorySessionStore(SessionStore):
    """
    Process-local session store.

    Sync FastAPI handlers run in a thread pool, so the entry map is guarded by
    a lock. Sessions of the same user are independent of each other.
    """

    def __init__(self, ttl_seconds: int = 3600, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Identity, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for _, expires_at in self._entries.values() if expires_at > now)

    def create(self, identity: Identity) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            now = self._clock()
            # Abandoned sessions are never looked up again; drop them here.
            purged = self._purge_locked(now)
            while token in self._entries:
                token = secrets.token_urlsafe(32)
            self._entries[token] = (identity, now + self.ttl_seconds)
        if purged:
            logger.debug(f"Purged {purged} expired session(s)")
        return token

    def lookup(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            return None
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            identity, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[token]
                return None
            return identity

    def destroy(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            self._entries.pop(token, None)

    def _purge_locked(self, now: float) -> int:
        expired = [t for t, (_, expires_at) in self._entries.items() if expires_at <= now]
        for token in expired:
            del self._entries[token]
        return len(expired)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        with self._lock:
            purged = self._purge_locked(now)
        if purged:
            logger.debug(f"Purged {purged} expired session(s)")
        return purged


_session_store: Optional[SessionStore] = None
_session_store_lock = threading.Lock()


def get_session_store() -> SessionStore:
    """Get or create the process-wide session store."""
    global _session_store
    if _session_store is None:
        with _session_store_lock:
            if _session_store is None:
                _session_store = InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)
    return _session_store

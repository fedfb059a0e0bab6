"""Login sessions: opaque signed cookie token -> user id, fixed lifetime.

The manager owns token issuance and expiry; where the entries live is up to
the injected store. ``MemorySessionStore`` keeps them in-process,
``DatabaseSessionStore`` keeps them in the ``sessions`` table so several
worker processes can share logins.
"""
from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from ecotrack.core.security import sign_token, unsign_token
from ecotrack.models.session import AuthSession

log = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(days=7)


def utcnow() -> datetime:
    """Naive UTC timestamp (matches how DateTime columns are stored)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class SessionEntry:
    user_id: int
    created_at: datetime
    expires_at: datetime


class SessionStore(Protocol):
    def put(self, session_id: str, entry: SessionEntry) -> None: ...

    def get(self, session_id: str) -> SessionEntry | None: ...

    def delete(self, session_id: str) -> None: ...

    def purge(self, now: datetime) -> int: ...


class MemorySessionStore:
    """Process-local store; a lock guards the dict across threadpool workers."""

    def __init__(self) -> None:
        self._entries: dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    def put(self, session_id: str, entry: SessionEntry) -> None:
        with self._lock:
            self._entries[session_id] = entry

    def get(self, session_id: str) -> SessionEntry | None:
        with self._lock:
            return self._entries.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._entries.pop(session_id, None)

    def purge(self, now: datetime) -> int:
        with self._lock:
            expired = [sid for sid, e in self._entries.items() if e.expires_at <= now]
            for sid in expired:
                del self._entries[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class DatabaseSessionStore:
    """Durable store backed by the ``sessions`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def put(self, session_id: str, entry: SessionEntry) -> None:
        with self._session_factory() as db:
            db.add(
                AuthSession(
                    token=session_id,
                    user_id=entry.user_id,
                    created_at=entry.created_at,
                    expires_at=entry.expires_at,
                )
            )
            db.commit()

    def get(self, session_id: str) -> SessionEntry | None:
        with self._session_factory() as db:
            row = db.get(AuthSession, session_id)
            if row is None:
                return None
            return SessionEntry(user_id=row.user_id, created_at=row.created_at, expires_at=row.expires_at)

    def delete(self, session_id: str) -> None:
        with self._session_factory() as db:
            db.execute(delete(AuthSession).where(AuthSession.token == session_id))
            db.commit()

    def purge(self, now: datetime) -> int:
        with self._session_factory() as db:
            result = db.execute(delete(AuthSession).where(AuthSession.expires_at <= now))
            db.commit()
            return result.rowcount or 0

    def count(self) -> int:
        with self._session_factory() as db:
            return len(db.execute(select(AuthSession.token)).all())


class SessionManager:
    def __init__(
        self,
        store: SessionStore,
        secret_key: str,
        max_age: timedelta = DEFAULT_MAX_AGE,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.store = store
        self.max_age = max_age
        self._secret_key = secret_key
        self._clock = clock

    def create(self, user_id: int) -> str:
        """Issue a new session for user_id and return the signed cookie token."""
        session_id = secrets.token_urlsafe(32)
        now = self._clock()
        # reclaim sessions whose cookies were never presented again
        self.store.purge(now)
        self.store.put(session_id, SessionEntry(user_id=user_id, created_at=now, expires_at=now + self.max_age))
        log.debug("Session issued for user %s", user_id)
        return sign_token(session_id, self._secret_key)

    def resolve(self, token: str | None) -> int | None:
        """Return the bound user id, or None for missing/forged/unknown/expired tokens."""
        session_id = unsign_token(token, self._secret_key)
        if session_id is None:
            return None
        entry = self.store.get(session_id)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            self.store.delete(session_id)
            return None
        return entry.user_id

    def destroy(self, token: str | None) -> None:
        session_id = unsign_token(token, self._secret_key)
        if session_id is not None:
            self.store.delete(session_id)

    def purge_expired(self) -> int:
        removed = self.store.purge(self._clock())
        if removed:
            log.info("Purged %d expired sessions", removed)
        return removed

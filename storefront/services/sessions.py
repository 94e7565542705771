"""Server-side session storage.

A session maps an opaque token to a small identity record. Expiry is absolute:
it is fixed when the session is created and never refreshed by activity.
"""

import json
import logging
import secrets
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import asdict, dataclass, replace
from datetime import timedelta

import redis

from storefront.config import Settings
from storefront.errors import InternalError
from storefront.models.enums import Role

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


@dataclass(frozen=True)
class SessionIdentity:
    """Who a session belongs to. References the user by id only."""

    user_id: int
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def with_name(self, name: str) -> "SessionIdentity":
        return replace(self, name=name)

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str | bytes) -> "SessionIdentity":
        return cls(**json.loads(raw))


def new_token() -> str:
    """Generate an unguessable session token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


class SessionStore(ABC):
    """Token -> identity mapping with a fixed time-to-live."""

    def __init__(self, ttl: timedelta):
        self.ttl = ttl

    @abstractmethod
    def create(self, identity: SessionIdentity) -> str:
        """Store the identity under a new token and return the token."""

    @abstractmethod
    def resolve(self, token: str | None) -> SessionIdentity | None:
        """Return the identity for a live token, or None.

        Raises InternalError when the backing store cannot be read.
        """

    @abstractmethod
    def destroy(self, token: str | None) -> None:
        """Remove a session. Unknown tokens are ignored."""

    @abstractmethod
    def update(self, token: str, identity: SessionIdentity) -> bool:
        """Replace a live session's identity, keeping its expiry.

        Returns False if the session no longer exists.
        """


class MemorySessionStore(SessionStore):
    """In-process store. Safe for FastAPI's threadpool; not shared across workers."""

    def __init__(self, ttl: timedelta, clock: Callable[[], float] = time.monotonic):
        super().__init__(ttl)
        self._clock = clock
        self._entries: dict[str, tuple[SessionIdentity, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def create(self, identity: SessionIdentity) -> str:
        token = new_token()
        expires_at = self._clock() + self.ttl.total_seconds()
        with self._lock:
            self._purge_expired()
            self._entries[token] = (identity, expires_at)
        return token

    def resolve(self, token: str | None) -> SessionIdentity | None:
        if not token:
            return None
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            identity, expires_at = entry
            if expires_at <= self._clock():
                del self._entries[token]
                return None
            return identity

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._entries.pop(token, None)

    def update(self, token: str, identity: SessionIdentity) -> bool:
        with self._lock:
            entry = self._entries.get(token)
            if entry is None or entry[1] <= self._clock():
                return False
            self._entries[token] = (identity, entry[1])
            return True

    def _purge_expired(self) -> None:
        # Caller holds the lock
        now = self._clock()
        expired = [token for token, (_, expires_at) in self._entries.items() if expires_at <= now]
        for token in expired:
            del self._entries[token]


class RedisSessionStore(SessionStore):
    """Redis-backed store shared by every worker. Expiry is enforced by key TTL."""

    key_prefix = "session:"

    def __init__(self, client: redis.Redis, ttl: timedelta):
        super().__init__(ttl)
        self._redis = client

    def _key(self, token: str) -> str:
        return f"{self.key_prefix}{token}"

    def create(self, identity: SessionIdentity) -> str:
        token = new_token()
        try:
            self._redis.set(self._key(token), identity.to_json(), ex=int(self.ttl.total_seconds()))
        except redis.RedisError as e:
            logger.error(f"Failed to create session: {e}")
            raise InternalError("Could not create session", detail=str(e)) from e
        return token

    def resolve(self, token: str | None) -> SessionIdentity | None:
        if not token:
            return None
        try:
            raw = self._redis.get(self._key(token))
        except redis.RedisError as e:
            logger.error(f"Failed to resolve session: {e}")
            raise InternalError("Could not read session", detail=str(e)) from e
        if raw is None:
            return None
        try:
            return SessionIdentity.from_json(raw)
        except (ValueError, TypeError) as e:
            logger.warning(f"Discarding malformed session record: {e}")
            return None

    def destroy(self, token: str | None) -> None:
        if not token:
            return
        try:
            self._redis.delete(self._key(token))
        except redis.RedisError as e:
            logger.error(f"Failed to destroy session: {e}")
            raise InternalError("Logout failed", detail=str(e)) from e

    def update(self, token: str, identity: SessionIdentity) -> bool:
        try:
            result = self._redis.set(self._key(token), identity.to_json(), xx=True, keepttl=True)
        except redis.RedisError as e:
            logger.error(f"Failed to update session: {e}")
            raise InternalError("Could not update session", detail=str(e)) from e
        return bool(result)


def build_session_store(settings: Settings) -> SessionStore:
    """Create the session store selected by SESSION_BACKEND."""
    ttl = timedelta(hours=settings.session_ttl_hours)
    if settings.session_backend == "redis":
        logger.info("Using Redis session store")
        return RedisSessionStore(redis.from_url(settings.redis_url), ttl)
    if settings.is_production:
        logger.warning("Using in-memory session store in production; sessions are per-process")
    return MemorySessionStore(ttl)

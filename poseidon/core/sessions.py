"""
In-memory session registry: one live session token per username.

A new login for a username that already holds a live token evicts the old token
(newest login wins). Evicted and idle-expired tokens are remembered until they are
presented once more, so the request carrying them can be sent to /login?expired.
"""

import logging
import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class SessionExpiredError(Exception):
    """Raised by lookup() for a token that was superseded or idled out."""

    def __init__(self, message: str, username: str | None = None) -> None:
        self.message = message
        self.username = username
        super().__init__(message)


@dataclass
class SessionRecord:
    """One authenticated session."""

    token: str
    username: str
    authority: str
    created_at: float
    last_accessed_at: float
    expired: bool = field(default=False)


class SessionRegistry:
    """
    Thread-safe token -> session map with a per-username index.

    All mutations happen under a single lock, so two concurrent logins for the same
    username cannot both end up holding a live token.
    """

    def __init__(
        self,
        idle_timeout_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_timeout_seconds = idle_timeout_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._by_token: dict[str, SessionRecord] = {}
        self._token_by_username: dict[str, str] = {}

    def register(self, username: str, authority: str) -> SessionRecord:
        """Create a session for username, evicting any live session it already holds."""
        now = self._clock()
        with self._lock:
            self._purge_stale(now)
            previous = self._token_by_username.pop(username, None)
            if previous is not None and previous in self._by_token:
                self._by_token[previous].expired = True
                logger.info("Session superseded by a newer login: username=%s", username)
            token = secrets.token_urlsafe(TOKEN_BYTES)
            record = SessionRecord(
                token=token,
                username=username,
                authority=authority,
                created_at=now,
                last_accessed_at=now,
            )
            self._by_token[token] = record
            self._token_by_username[username] = token
            return record

    def lookup(self, token: str | None) -> SessionRecord | None:
        """
        Return the live session for token and refresh its idle timer.

        Returns None for unknown tokens. Raises SessionExpiredError (once) for tokens
        that were superseded or idled out; the token is forgotten afterwards.
        """
        if not token:
            return None
        now = self._clock()
        with self._lock:
            record = self._by_token.get(token)
            if record is None:
                return None
            if not record.expired and now - record.last_accessed_at > self.idle_timeout_seconds:
                record.expired = True
                if self._token_by_username.get(record.username) == token:
                    del self._token_by_username[record.username]
                logger.info("Session idle timeout: username=%s", record.username)
            if record.expired:
                del self._by_token[token]
                raise SessionExpiredError("Session expired.", username=record.username)
            record.last_accessed_at = now
            return record

    def invalidate(self, token: str | None) -> None:
        """Destroy a session (logout). Unknown tokens are ignored."""
        if not token:
            return
        with self._lock:
            record = self._by_token.pop(token, None)
            if record is not None and self._token_by_username.get(record.username) == token:
                del self._token_by_username[record.username]

    def invalidate_user(self, username: str) -> None:
        """Destroy the live session held by username, if any."""
        with self._lock:
            token = self._token_by_username.pop(username, None)
            if token is not None:
                self._by_token.pop(token, None)

    def active_token_for(self, username: str) -> str | None:
        with self._lock:
            return self._token_by_username.get(username)

    def active_count(self) -> int:
        with self._lock:
            return len(self._token_by_username)

    def clear(self) -> None:
        with self._lock:
            self._by_token.clear()
            self._token_by_username.clear()

    def _purge_stale(self, now: float) -> None:
        # Forget records untouched for two idle windows; caller holds the lock.
        cutoff = now - 2 * self.idle_timeout_seconds
        stale = [t for t, r in self._by_token.items() if r.last_accessed_at < cutoff]
        for token in stale:
            record = self._by_token.pop(token)
            if self._token_by_username.get(record.username) == token:
                del self._token_by_username[record.username]

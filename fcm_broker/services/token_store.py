"""In-memory registry of issued access tokens with expiry."""

from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class AccessToken:
    """An opaque access token granted to an authenticated client."""

    value: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


class TokenStore:
    """Process-local set of currently valid access tokens.

    All operations take the same lock, so the store can be shared between the
    event loop and FastAPI's worker threads. Expired tokens are treated as
    absent by ``is_valid`` even before ``sweep`` removes them.
    """

    def __init__(self, ttl_seconds: int, clock: Clock = utcnow) -> None:
        if ttl_seconds <= 0:
            raise ValueError("Access token TTL must be positive.")
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._tokens: Dict[str, AccessToken] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self) -> AccessToken:
        """Create, store and return a new access token."""
        with self._lock:
            value = str(uuid.uuid4())
            while value in self._tokens:
                value = str(uuid.uuid4())
            token = AccessToken(value=value, expires_at=self._clock() + self._ttl)
            self._tokens[value] = token
        return token

    def is_valid(self, value: str) -> bool:
        """Return whether ``value`` names a stored, unexpired token."""
        now = self._clock()
        with self._lock:
            token = self._tokens.get(value)
        return token is not None and not token.is_expired(now)

    def sweep(self, now: Optional[datetime] = None) -> int:
        """Remove every token expired at ``now`` and return how many were removed."""
        now = now or self._clock()
        with self._lock:
            expired = [value for value, token in self._tokens.items() if token.is_expired(now)]
            for value in expired:
                del self._tokens[value]
        if expired:
            logger.debug("Swept %d expired access token(s)", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)


class TokenSweeper:
    """Periodically sweeps a token store from a background asyncio task."""

    def __init__(self, store: TokenStore, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("Sweep interval must be positive.")
        self._store = store
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info("Background token sweep started (every %ss)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Background token sweep stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._store.sweep()
            except Exception:  # keep sweeping on the next tick
                logger.exception("Background token sweep failed")


__all__ = ["AccessToken", "Clock", "TokenStore", "TokenSweeper", "utcnow"]

"""In-memory registry of live token sessions with sliding expiration.

Each token maps to the monotonic time it was last used. A token is live
while it has been used within the expiration window; tokens that are never
presented again are dropped by a periodic sweep.
"""

import asyncio
import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_SECONDS = 1800
DEFAULT_SWEEP_INTERVAL_SECONDS = 600


class SessionManager:
    """Tracks last access per token and expires idle ones.

    All map operations hold a lock, so the instance can be shared by
    request handlers, threadpool workers and the sweep task.
    """

    def __init__(
        self,
        expiration_seconds: float = DEFAULT_EXPIRATION_SECONDS,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.expiration_seconds = expiration_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._sessions: dict[str, float] = {}
        self._lock = threading.Lock()
        self._task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._sessions

    def _is_stale(self, last_access: float, now: float) -> bool:
        return now - last_access > self.expiration_seconds

    def is_expired(self, token: str) -> bool:
        """True for unknown tokens and for tokens idle past the window.

        An expired record is removed as a side effect.
        """
        with self._lock:
            last_access = self._sessions.get(token)
            if last_access is None:
                return True
            if self._is_stale(last_access, self._clock()):
                del self._sessions[token]
                return True
            return False

    def touch(self, token: str) -> None:
        """Record a use of the token now, (re)starting its window."""
        with self._lock:
            self._sessions[token] = self._clock()

    def invalidate(self, token: str) -> None:
        """Forget the token regardless of its state."""
        with self._lock:
            self._sessions.pop(token, None)

    def sweep(self) -> int:
        """Remove every expired record. Returns count removed."""
        with self._lock:
            now = self._clock()
            expired = [t for t, last in self._sessions.items() if self._is_stale(last, now)]
            for token in expired:
                del self._sessions[token]
            return len(expired)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background sweep task."""
        if self.running:
            logger.warning("Session sweeper is already running")
            return
        self._task = asyncio.create_task(self._sweep_loop(), name="session-sweeper")
        logger.info(
            f"Session sweeper started (window: {self.expiration_seconds}s, "
            f"interval: {self.sweep_interval_seconds}s)"
        )

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session sweeper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            removed = self.sweep()
            if removed > 0:
                logger.info(f"Swept {removed} expired sessions")

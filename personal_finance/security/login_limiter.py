"""Per-IP tracking of consecutive failed logins.

An IP that fails ``max_attempts`` times in a row is blocked until
``block_seconds`` have passed since its latest failure. The block lapses on
its own; a successful login resets the counter.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class LoginAttempts:
    """Failure tracking for a single client IP."""

    count: int = 0
    last_failure: float = 0.0


class LoginLimiter:
    """Blocks client IPs after too many consecutive failed logins."""

    def __init__(
        self,
        max_attempts: int,
        block_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_attempts = max_attempts
        self.block_seconds = block_seconds
        self._clock = clock
        self._attempts: dict[str, LoginAttempts] = {}
        self._lock = threading.Lock()

    def _lapsed(self, attempts: LoginAttempts, now: float) -> bool:
        return now - attempts.last_failure >= self.block_seconds

    def record_failure(self, ip: str) -> int:
        """Count a failed login. Returns the consecutive failure count."""
        with self._lock:
            now = self._clock()
            attempts = self._attempts.get(ip)
            if attempts is None or self._lapsed(attempts, now):
                attempts = LoginAttempts()
                self._attempts[ip] = attempts
            attempts.count += 1
            attempts.last_failure = now
            count = attempts.count
        if count >= self.max_attempts:
            logger.warning(f"Login failure {count} from {ip}; IP is blocked")
        return count

    def record_success(self, ip: str) -> None:
        """Reset the IP's counter after a successful login."""
        with self._lock:
            self._attempts.pop(ip, None)

    def failure_count(self, ip: str) -> int:
        with self._lock:
            attempts = self._attempts.get(ip)
            return attempts.count if attempts else 0

    def is_blocked(self, ip: str) -> bool:
        return self.remaining_block_seconds(ip) > 0

    def remaining_block_seconds(self, ip: str) -> float:
        """Seconds until the IP is unblocked; 0 when it is not blocked."""
        with self._lock:
            attempts = self._attempts.get(ip)
            if attempts is None or attempts.count < self.max_attempts:
                return 0.0
            elapsed = self._clock() - attempts.last_failure
            return max(0.0, self.block_seconds - elapsed)

    def prune(self) -> int:
        """Drop counters whose last failure is older than the block window."""
        with self._lock:
            now = self._clock()
            stale = [ip for ip, a in self._attempts.items() if self._lapsed(a, now)]
            for ip in stale:
                del self._attempts[ip]
            return len(stale)

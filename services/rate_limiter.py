"""
Per-actor rate limiting for booking actions.
Counters live in process memory and expire lazily when their window has passed.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from core.providers import Clock, SystemClock
from core.utils_datetime import format_timestamp
from domain.errors import RateLimitedError


logger = logging.getLogger(__name__)


DEFAULT_LIMIT = 5
DEFAULT_WINDOW_SECONDS = 60.0


@dataclass
class RateLimitState:
    """Counter for one actor within the current window."""
    count: int
    reset_at: datetime


class RateLimiter:
    """Fixed-duration window counter keyed by actor ID."""

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Optional[Clock] = None
    ):
        """
        Initialize the rate limiter.

        Args:
            limit: Actions allowed per window
            window_seconds: Window length in seconds
            clock: Time source (defaults to the system clock)
        """
        self.limit = limit
        self.window = timedelta(seconds=window_seconds)
        self.clock = clock or SystemClock()
        self._entries: Dict[str, RateLimitState] = {}
        self._lock = threading.Lock()

    def apply(self, actor_id: str) -> RateLimitState:
        """
        Count one action for an actor.

        The counter is incremented even when the call is rejected.

        Args:
            actor_id: Acting coordinator ID

        Returns:
            The actor's state after counting this action

        Raises:
            RateLimitedError: If the actor has exceeded the limit in this window
        """
        with self._lock:
            now = self.clock.now()
            entry = self._entries.get(actor_id)
            if entry is None:
                entry = RateLimitState(count=0, reset_at=now + self.window)
                self._entries[actor_id] = entry

            if now > entry.reset_at:
                entry.count = 0
                entry.reset_at = now + self.window

            entry.count += 1
            snapshot = RateLimitState(count=entry.count, reset_at=entry.reset_at)

        if snapshot.count > self.limit:
            logger.warning(
                f"Rate limit exceeded for {actor_id}: {snapshot.count}/{self.limit}"
            )
            raise RateLimitedError(details={"resetAt": format_timestamp(snapshot.reset_at)})

        return snapshot

    def get_state(self, actor_id: str) -> Optional[RateLimitState]:
        """Get a copy of an actor's current counter, if any."""
        with self._lock:
            entry = self._entries.get(actor_id)
            if entry is None:
                return None
            return RateLimitState(count=entry.count, reset_at=entry.reset_at)

    def reset(self) -> None:
        """Forget all counters."""
        with self._lock:
            self._entries.clear()

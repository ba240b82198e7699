"""
Per-provider fixed-window rate limiting for outgoing generation calls.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from ideagen.utils.config import config


@dataclass
class RateLimitState:
    """Call counter for one provider's current window."""

    window_start: Optional[float] = None
    calls_in_window: int = 0


class RateLimiter:
    """Fixed window limiter keyed by provider id."""

    def __init__(
        self,
        max_calls: int = config.rate_limit_max_calls,
        window_seconds: float = config.rate_limit_window_seconds,
        clock: Callable[[], float] = time.monotonic,
        provider_ids: Iterable[str] = (),
    ):
        """
        Initialize the rate limiter.

        Args:
            max_calls: Maximum acquisitions allowed per window
            window_seconds: Length of a window in seconds
            clock: Source of the current time, in seconds
            provider_ids: Providers whose counters are created up front
        """
        self.max_calls = max_calls
        self.window_seconds = window_seconds
        self.clock = clock
        self._states: Dict[str, RateLimitState] = {
            provider_id: RateLimitState() for provider_id in provider_ids
        }

    def state(self, provider_id: str) -> RateLimitState:
        return self._states.setdefault(provider_id, RateLimitState())

    def try_acquire(self, provider_id: str) -> bool:
        """
        Count a call against the provider's window if there is room left.

        Must stay synchronous: the check and the increment cannot be split
        across an await.

        Args:
            provider_id: Provider the call is made to

        Returns:
            True if the call may proceed, False if the window is full
        """
        now = self.clock()
        state = self.state(provider_id)

        if state.window_start is None or now - state.window_start > self.window_seconds:
            state.window_start = now
            state.calls_in_window = 0

        if state.calls_in_window >= self.max_calls:
            return False

        state.calls_in_window += 1
        return True

    def reset(self, provider_id: Optional[str] = None):
        """Forget the counters of one provider, or of all of them."""
        if provider_id is None:
            self._states.clear()
        else:
            self._states.pop(provider_id, None)

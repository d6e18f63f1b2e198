"""Exponential backoff with jitter for rate-limited upstream calls.

``RetryPolicy`` doubles as a tenacity wait strategy: tenacity calls it with the
per-call ``RetryCallState`` and sleeps for the returned number of seconds.

Delay for retry ``n`` (1-based)::

    base = min(initial_delay * multiplier ** (n - 1), max_delay)
    delay = uniform(base * (1 - jitter_ratio), min(base * (1 + jitter_ratio), max_delay))

Jitter never pushes a wait past ``max_delay``; once the base is capped the
wait falls in ``[max_delay * (1 - jitter_ratio), max_delay]``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from tenacity import RetryCallState

from employee_facade.core.config import Settings


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 10
    initial_delay: float = 30.0
    max_delay: float = 90.0
    multiplier: float = 2.0
    jitter_ratio: float = 0.5

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0:
            raise ValueError("initial_delay must not be negative")
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must not be smaller than initial_delay")
        if self.multiplier < 1:
            raise ValueError("multiplier must be at least 1")
        if not 0.0 <= self.jitter_ratio <= 1.0:
            raise ValueError("jitter_ratio must be between 0 and 1")

    @classmethod
    def from_settings(cls, settings: Settings) -> RetryPolicy:
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            initial_delay=settings.RETRY_INITIAL_DELAY_SECONDS,
            max_delay=settings.RETRY_MAX_DELAY_SECONDS,
            multiplier=settings.RETRY_BACKOFF_MULTIPLIER,
            jitter_ratio=settings.RETRY_JITTER_RATIO,
        )

    def base_delay(self, retry_number: int) -> float:
        if retry_number < 1:
            raise ValueError("retry_number is 1-based")
        return min(self.initial_delay * self.multiplier ** (retry_number - 1), self.max_delay)

    def delay_bounds(self, retry_number: int) -> tuple[float, float]:
        base = self.base_delay(retry_number)
        low = max(0.0, base * (1 - self.jitter_ratio))
        return low, max(low, min(base * (1 + self.jitter_ratio), self.max_delay))

    def next_delay(self, retry_number: int) -> float:
        low, high = self.delay_bounds(retry_number)
        return random.uniform(low, high)

    def __call__(self, retry_state: RetryCallState) -> float:
        # attempt_number is the attempt that just failed, i.e. the 1-based retry about to happen
        return self.next_delay(retry_state.attempt_number)

"""Backoff policy for retryable model errors."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff.

    Attributes:
        max_attempts: Total submissions for one round, first try included.
        initial_delay: Seconds before the first retry.
        max_delay: Upper bound for any single delay.
        exponential_base: Growth factor between consecutive delays.
        jitter: Scale each delay by a random factor in [0.5, 1.5).
    """

    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")

    def get_delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (counted from 0)."""
        delay = min(
            self.initial_delay * (self.exponential_base ** attempt),
            self.max_delay,
        )
        if self.jitter:
            delay *= 0.5 + random.random()
        return delay

    @classmethod
    def none(cls) -> "RetryPolicy":
        """Never retry."""
        return cls(max_attempts=1)

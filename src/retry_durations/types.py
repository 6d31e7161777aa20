"""retry-durations type definitions."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Protocol, runtime_checkable

from retry_durations.duration import saturating_mul


class GrowthKind(Enum):
    """How the base duration evolves between pulls."""

    FIXED = "fixed"
    EXPONENTIAL = "exponential"

    def apply(self, duration: timedelta) -> timedelta:
        """Return the base duration for the step after ``duration``."""
        if self is GrowthKind.FIXED:
            return duration
        return saturating_mul(duration, 2)


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer draws over an inclusive range.

    ``random.Random`` satisfies this protocol.
    """

    def randint(self, a: int, b: int) -> int: ...

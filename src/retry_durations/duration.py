"""Saturating ``timedelta`` arithmetic and input coercion."""

from __future__ import annotations

import math
from datetime import timedelta
from numbers import Real
from typing import Union

from retry_durations.errors import BuildError

ZERO = timedelta(0)
MAX = timedelta.max
MAX_MILLIS = MAX // timedelta(milliseconds=1)

DurationLike = Union[timedelta, int, float]


def saturating_mul(duration: timedelta, factor: int) -> timedelta:
    """Multiply a non-negative duration, capping at ``timedelta.max``."""
    try:
        return duration * factor
    except OverflowError:
        return MAX


def saturating_add(duration: timedelta, other: timedelta) -> timedelta:
    """Add two non-negative durations, capping at ``timedelta.max``."""
    try:
        return duration + other
    except OverflowError:
        return MAX


def saturating_sub(duration: timedelta, other: timedelta) -> timedelta:
    """Subtract ``other`` from ``duration``, flooring at zero."""
    if other >= duration:
        return ZERO
    return duration - other


def from_millis(millis: int) -> timedelta:
    """Build a span of ``millis`` milliseconds, capping at ``timedelta.max``."""
    try:
        return timedelta(milliseconds=millis)
    except OverflowError:
        return MAX


def to_timedelta(value: DurationLike, *, field: str) -> timedelta:
    """Coerce a ``timedelta`` or a number of seconds into a non-negative span.

    Raises:
        BuildError: If ``value`` is not a duration, is not finite, is negative
            or does not fit in a ``timedelta``.
    """
    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, Real) and not isinstance(value, bool):
        seconds = float(value)
        if not math.isfinite(seconds):
            raise BuildError(field, f"duration must be finite, got {value!r}")
        try:
            duration = timedelta(seconds=seconds)
        except OverflowError:
            raise BuildError(field, f"{value!r} seconds exceeds the largest duration") from None
    else:
        raise BuildError(
            field, f"expected a timedelta or a number of seconds, got {type(value).__name__}"
        )

    if duration < ZERO:
        raise BuildError(field, f"duration must be non-negative, got {duration}")
    return duration

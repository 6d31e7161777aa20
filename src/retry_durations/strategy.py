"""Lazily generated retry durations with growth, ceiling and jitter."""

from __future__ import annotations

import logging
import math
import random
import sys
from dataclasses import dataclass
from datetime import timedelta
from numbers import Real

from retry_durations.duration import (
    DurationLike,
    MAX_MILLIS,
    from_millis,
    saturating_add,
    saturating_sub,
    to_timedelta,
)
from retry_durations.errors import BuildError
from retry_durations.types import GrowthKind, RandomSource

logger = logging.getLogger("retry_durations.strategy")

DEFAULT_DURATION = timedelta(seconds=2)
DEFAULT_JITTER = 0.1


@dataclass(frozen=True)
class StrategyConfig:
    """Resolved settings a Strategy was built from."""

    duration: timedelta = DEFAULT_DURATION
    duration_max: timedelta | None = None
    growth_kind: GrowthKind = GrowthKind.EXPONENTIAL
    jitter: float = DEFAULT_JITTER


class Strategy:
    """Infinite iterator of retry durations.

    Each pull returns the current base duration with jitter applied, then
    grows the base for the next pull. The sequence never ends, so take a
    finite slice for a bounded retry count::

        from itertools import islice

        strategy = (
            Strategy.builder()
            .duration(timedelta(seconds=3))
            .duration_max(timedelta(minutes=2))
            .build()
        )
        for delay in islice(strategy, 10):
            print(delay)

    A Strategy is not safe to pull from several threads at once.
    """

    def __init__(self, config: StrategyConfig, rng: RandomSource) -> None:
        self._config = config
        self._rng = rng
        self._duration = config.duration
        if config.duration_max is not None:
            self._duration = min(self._duration, config.duration_max)
        self._at_ceiling = False

    @staticmethod
    def builder() -> StrategyBuilder:
        """Create a new strategy builder."""
        return StrategyBuilder()

    @staticmethod
    def create(
        *,
        duration: DurationLike = DEFAULT_DURATION,
        duration_max: DurationLike | None = None,
        growth_kind: GrowthKind | str = GrowthKind.EXPONENTIAL,
        jitter: float = DEFAULT_JITTER,
        rng: RandomSource | None = None,
    ) -> Strategy:
        """Create a strategy directly without builder.

        Durations may be given as ``timedelta`` or as a number of seconds.

        Raises:
            BuildError: If any field cannot be materialized.
        """
        config = StrategyConfig(
            duration=to_timedelta(duration, field="duration"),
            duration_max=(
                None if duration_max is None else to_timedelta(duration_max, field="duration_max")
            ),
            growth_kind=_resolve_growth_kind(growth_kind),
            jitter=_resolve_jitter(jitter),
        )
        logger.debug(
            "Built %s strategy (duration=%s, duration_max=%s, jitter=%s)",
            config.growth_kind.value,
            config.duration,
            config.duration_max,
            config.jitter,
        )
        return Strategy(config, rng if rng is not None else random.Random())

    @property
    def config(self) -> StrategyConfig:
        """Immutable settings this strategy was built from."""
        return self._config

    @property
    def duration(self) -> timedelta:
        """Base duration the next pull starts from."""
        return self._duration

    @property
    def duration_max(self) -> timedelta | None:
        """Ceiling on produced and stored durations, or None."""
        return self._config.duration_max

    @property
    def growth_kind(self) -> GrowthKind:
        """Growth policy applied between pulls."""
        return self._config.growth_kind

    @property
    def jitter(self) -> float:
        """Jitter ratio as configured."""
        return self._config.jitter

    def __iter__(self) -> Strategy:
        return self

    def __next__(self) -> timedelta:
        base = self._duration
        advanced = self._config.growth_kind.apply(base)
        ceiling = self._config.duration_max

        if ceiling is None:
            self._duration = advanced
            return self._jittered(base)

        self._duration = min(advanced, ceiling)
        if self._duration == ceiling and not self._at_ceiling:
            self._at_ceiling = True
            logger.debug("Base duration reached its ceiling of %s", ceiling)
        return min(self._jittered(base), ceiling)

    def __length_hint__(self) -> int:
        # Unbounded: callers truncate.
        return sys.maxsize

    def __repr__(self) -> str:
        return (
            f"Strategy(duration={self._duration!r}, duration_max={self._config.duration_max!r}, "
            f"growth_kind={self._config.growth_kind}, jitter={self._config.jitter!r})"
        )

    def _jittered(self, base: timedelta) -> timedelta:
        """Spread ``base`` by a random number of milliseconds within the jitter window."""
        raw = abs(base.total_seconds() * self._config.jitter * 1000)
        # Capped at the millisecond span of timedelta.max.
        spread = int(raw) if math.isfinite(raw) and raw < MAX_MILLIS else MAX_MILLIS
        offset = self._rng.randint(-spread, spread)
        if offset >= 0:
            return saturating_add(base, from_millis(offset))
        return saturating_sub(base, from_millis(-offset))


class StrategyBuilder:
    """Fluent builder for Strategy.

    Every setter returns the builder. ``build()`` may be called more than
    once; each call returns an independent Strategy with its own random
    source.
    """

    def __init__(self) -> None:
        self._duration: DurationLike = DEFAULT_DURATION
        self._duration_max: DurationLike | None = None
        self._growth_kind: GrowthKind = GrowthKind.EXPONENTIAL
        self._jitter: float = DEFAULT_JITTER
        self._seed: int | None = None

    def duration(self, d: DurationLike) -> StrategyBuilder:
        """Set the initial duration (timedelta or seconds). Default is 2 seconds."""
        self._duration = d
        return self

    def duration_max(self, d: DurationLike | None) -> StrategyBuilder:
        """Set the duration ceiling, or clear it with None. Default is no ceiling."""
        self._duration_max = d
        return self

    def jitter(self, ratio: float) -> StrategyBuilder:
        """Set the jitter ratio. Default is 0.1."""
        self._jitter = ratio
        return self

    def fixed(self) -> StrategyBuilder:
        """Select the fixed interval strategy."""
        self._growth_kind = GrowthKind.FIXED
        return self

    def exponential(self) -> StrategyBuilder:
        """Select the exponential interval strategy. This is the default."""
        self._growth_kind = GrowthKind.EXPONENTIAL
        return self

    def seed(self, seed: int | None) -> StrategyBuilder:
        """Seed the random source of built strategies. Default seeds from system entropy."""
        self._seed = seed
        return self

    def build(self) -> Strategy:
        """Build the strategy. Raises BuildError if a field cannot be materialized."""
        return Strategy.create(
            duration=self._duration,
            duration_max=self._duration_max,
            growth_kind=self._growth_kind,
            jitter=self._jitter,
            rng=random.Random(self._seed),
        )


def builder() -> StrategyBuilder:
    """Create a new strategy builder.

    A built strategy yields forever, so slice it for a finite retry count.
    """
    return StrategyBuilder()


def _resolve_growth_kind(kind: GrowthKind | str) -> GrowthKind:
    if isinstance(kind, str):
        kind = kind.lower()
    try:
        return GrowthKind(kind)
    except ValueError:
        raise BuildError("growth_kind", f"unknown growth kind {kind!r}") from None


def _resolve_jitter(ratio: float) -> float:
    if not isinstance(ratio, Real) or isinstance(ratio, bool):
        raise BuildError("jitter", f"expected a number, got {type(ratio).__name__}")
    value = float(ratio)
    if not math.isfinite(value):
        raise BuildError("jitter", f"jitter must be finite, got {ratio!r}")
    if not 0.0 <= value <= 1.0:
        logger.warning(
            "Jitter ratio %s is outside [0, 1]; the jitter window spans %s%% of the base",
            value,
            abs(value) * 100,
        )
    return value

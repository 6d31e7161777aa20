"""retry-durations: infinite iterators of retry/backoff durations."""

from retry_durations.errors import BuildError, RetryDurationsError
from retry_durations.strategy import Strategy, StrategyBuilder, StrategyConfig, builder
from retry_durations.types import GrowthKind, RandomSource

__all__ = [
    # Core classes
    "builder",
    "Strategy",
    "StrategyBuilder",
    "StrategyConfig",
    # Errors
    "RetryDurationsError",
    "BuildError",
    # Types
    "GrowthKind",
    "RandomSource",
]

"""retry-durations error types."""


class RetryDurationsError(Exception):
    """Base error for all retry-durations errors."""


class BuildError(RetryDurationsError, ValueError):
    """A strategy field could not be materialized at build time."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field

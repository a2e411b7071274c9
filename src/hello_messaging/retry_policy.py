"""Fixed-interval retry policy for establishing broker connections."""

from dataclasses import dataclass

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_DELAY = 5.0


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded number of connection attempts separated by a constant delay (seconds)."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_delay: float = DEFAULT_RETRY_DELAY

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must not be negative, got {self.retry_delay}")

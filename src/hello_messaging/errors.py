"""Exception hierarchy for hello-messaging."""

from __future__ import annotations

from typing import Optional


class MessagingError(Exception):
    """Base class for all hello-messaging failures."""


class ConnectionExhaustedError(MessagingError):
    """Raised when every connection attempt allowed by the retry policy failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None) -> None:
        message = f"Failed to connect to RabbitMQ after {attempts} attempts"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class BrokerOperationError(MessagingError):
    """A channel, declare or publish operation failed after the connection was open."""


class QueueDeclarationMismatchError(BrokerOperationError):
    """The broker refused a queue declaration whose parameters differ from the existing queue."""


class PublishRejectedError(BrokerOperationError):
    """A confirmed publish was nacked by the broker or returned as unroutable."""

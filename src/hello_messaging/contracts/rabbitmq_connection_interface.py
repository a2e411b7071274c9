"""Defines the contract for RabbitMQ connections."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pika.adapters.blocking_connection import BlockingChannel


class IRabbitMQConnection(ABC):
    """Represents a RabbitMQ connection capable of producing blocking channels."""

    @abstractmethod
    def connect(self) -> BlockingChannel:
        """Return an open blocking channel ready for message operations."""

    @abstractmethod
    def close(self) -> None:
        """Close the channel first, then the connection."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the underlying transport session is still alive."""

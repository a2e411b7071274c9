"""Defines the contract for handling consumed messages."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IMessageHandler(ABC):
    """Processes the raw payload of a single delivered message."""

    @abstractmethod
    def handle(self, body: bytes) -> None:
        """Handle one message body. Raising marks the delivery as failed."""

"""Defines the contract for building outgoing message payloads."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IPayloadFactory(ABC):
    """Creates the body of the next message to publish."""

    @abstractmethod
    def build(self) -> bytes:
        """Return the encoded payload, evaluated at call time."""

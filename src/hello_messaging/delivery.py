"""Delivery guarantee policies for publishing and consuming."""

from enum import Enum


class AckMode(str, Enum):
    """How consumed messages are acknowledged.

    ``AUTO`` removes a message from the queue as soon as it is handed to the consumer
    (at-most-once). ``MANUAL`` acknowledges only after the handler returns, so a crash
    mid-handler leaves the message for redelivery (at-least-once).
    """

    AUTO = "auto"
    MANUAL = "manual"


class PublishMode(str, Enum):
    """Whether the publisher waits for broker confirmation of each message."""

    UNCONFIRMED = "unconfirmed"
    CONFIRMED = "confirmed"

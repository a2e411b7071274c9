"""Configuration primitives for wiring publishers and consumers."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from .connection import RabbitMQConnection
from .contracts import IMessageHandler, IPayloadFactory, IRabbitMQConnection
from .logging_message_handler import LoggingMessageHandler
from .timestamp_payload_factory import TimestampPayloadFactory


@dataclass(frozen=True)
class MessagingDependencies:
    """Bundles factory functions used when building components from settings."""

    make_connection: Callable[[str], IRabbitMQConnection] = field(
        default=lambda rabbitmq_url: RabbitMQConnection(rabbitmq_url)
    )
    make_payload_factory: Callable[[], IPayloadFactory] = field(default=TimestampPayloadFactory)
    make_message_handler: Callable[[], IMessageHandler] = field(default=LoggingMessageHandler)
    sleep: Callable[[float], None] = field(default=time.sleep)

"""Messaging package providing a retrying RabbitMQ connector, publisher and consumer."""

from .connection import Connector, RabbitMQConnection
from .consumer import ConsumerState, ConsumerSupervisor, HelloConsumer
from .contracts import IMessageHandler, IPayloadFactory, IRabbitMQConnection
from .delivery import AckMode, PublishMode
from .dependencies import MessagingDependencies
from .errors import (
    BrokerOperationError,
    ConnectionExhaustedError,
    MessagingError,
    PublishRejectedError,
    QueueDeclarationMismatchError,
)
from .logging_message_handler import LoggingMessageHandler
from .publisher import HelloPublisher
from .queue_config import DEFAULT_QUEUE_NAME, QueueConfig
from .retry_policy import RetryPolicy
from .settings import MessagingSettings
from .timestamp_payload_factory import TimestampPayloadFactory

__all__ = [
    "AckMode",
    "BrokerOperationError",
    "ConnectionExhaustedError",
    "Connector",
    "ConsumerState",
    "ConsumerSupervisor",
    "DEFAULT_QUEUE_NAME",
    "HelloConsumer",
    "HelloPublisher",
    "IMessageHandler",
    "IPayloadFactory",
    "IRabbitMQConnection",
    "LoggingMessageHandler",
    "MessagingDependencies",
    "MessagingError",
    "MessagingSettings",
    "PublishMode",
    "PublishRejectedError",
    "QueueConfig",
    "QueueDeclarationMismatchError",
    "RabbitMQConnection",
    "RetryPolicy",
    "TimestampPayloadFactory",
]

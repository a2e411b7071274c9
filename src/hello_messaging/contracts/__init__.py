"""Contract interfaces for hello messaging."""

from .message_handler_interface import IMessageHandler
from .payload_factory_interface import IPayloadFactory
from .rabbitmq_connection_interface import IRabbitMQConnection

__all__ = [
    "IMessageHandler",
    "IPayloadFactory",
    "IRabbitMQConnection",
]

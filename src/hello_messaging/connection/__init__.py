"""RabbitMQ connectivity: the blocking connection wrapper and the retrying connector."""

from .connector import Connector
from .rabbitmq_connection import RabbitMQConnection

__all__ = ["Connector", "RabbitMQConnection"]

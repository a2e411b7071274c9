"""Blocking RabbitMQ connection owning a single channel."""

from __future__ import annotations

import logging
from typing import Optional

import pika
from pika.adapters.blocking_connection import BlockingChannel, BlockingConnection
from pika.connection import Parameters

from hello_messaging.contracts import IRabbitMQConnection


class RabbitMQConnection(IRabbitMQConnection):
    """One broker session: opened by :meth:`connect`, released by :meth:`close`.

    The publisher and the consumer each use a connection for a single run, so a
    closed session is replaced wholesale rather than repaired channel by channel.
    """

    def __init__(self, rabbitmq_url: str) -> None:
        url = (rabbitmq_url or "").strip()
        if not url:
            raise ValueError("RabbitMQ URL must be provided.")

        try:
            self._parameters: Parameters = pika.URLParameters(url)
        except ValueError as exc:
            raise ValueError(f"Invalid RabbitMQ URL provided: {url}") from exc

        self.rabbitmq_url = url
        self.connection: Optional[BlockingConnection] = None
        self.channel: Optional[BlockingChannel] = None
        self.logger = logging.getLogger(__name__)

    @property
    def is_open(self) -> bool:
        return self.connection is not None and self.connection.is_open

    def connect(self) -> BlockingChannel:
        if self.is_open and self.channel is not None:
            return self.channel

        host = self._parameters.host
        self.logger.debug("Opening RabbitMQ session to %s", host)
        self.channel = None
        self.connection = pika.BlockingConnection(self._parameters)
        self.channel = self.connection.channel()
        self.logger.info("Connected to RabbitMQ at %s.", host)
        return self.channel

    def close(self) -> None:
        channel, connection = self.channel, self.connection
        if channel is not None and channel.is_open:
            channel.close()
            self.logger.debug("Closed RabbitMQ channel.")
        if connection is not None and connection.is_open:
            connection.close()
            self.logger.info("Closed RabbitMQ connection to %s.", self._parameters.host)

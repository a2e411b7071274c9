"""Long-lived consumer for the hello queue."""

from __future__ import annotations

import logging
from typing import Optional

import pika
from pika.adapters.blocking_connection import BlockingChannel

from hello_messaging.contracts import IMessageHandler, IRabbitMQConnection
from hello_messaging.delivery import AckMode
from hello_messaging.errors import BrokerOperationError
from hello_messaging.queue_config import QueueConfig, declare_queue


class HelloConsumer:
    """Declares the queue and hands every delivery to a message handler.

    ``start`` blocks until the process is interrupted. Connection-loss errors raised by
    pika while consuming propagate to the caller once the connection is released, so a
    supervisor can reconnect.
    """

    MANUAL_ACK_PREFETCH = 1

    def __init__(
        self,
        *,
        connection: IRabbitMQConnection,
        queue_config: QueueConfig,
        message_handler: IMessageHandler,
        ack_mode: AckMode = AckMode.AUTO,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.connection = connection
        self.queue_config = queue_config
        self.message_handler = message_handler
        self.ack_mode = ack_mode

    def start(self) -> None:
        queue_name = self.queue_config.queue_name
        auto_ack = self.ack_mode is AckMode.AUTO

        try:
            channel = self.connection.connect()
            declare_queue(channel, self.queue_config)
            if not auto_ack:
                channel.basic_qos(prefetch_count=self.MANUAL_ACK_PREFETCH)
            channel.basic_consume(
                queue=queue_name,
                on_message_callback=self._on_message,
                auto_ack=auto_ack,
            )

            self.logger.info(" [*] Waiting for messages in %s.", queue_name)
            try:
                channel.start_consuming()
            except KeyboardInterrupt:
                self.logger.info("Stopping consumer...")
                channel.stop_consuming()
        except pika.exceptions.AMQPChannelError as exc:
            raise BrokerOperationError(
                f"Channel failure while consuming from {queue_name!r}: {exc!r}"
            ) from exc
        finally:
            self.connection.close()

    def _on_message(
        self,
        channel: BlockingChannel,
        method: pika.spec.Basic.Deliver,
        properties: pika.spec.BasicProperties,
        body: bytes,
    ) -> None:
        try:
            self.message_handler.handle(body)
        except Exception as exc:
            self.logger.error("Error handling message: %s", exc, exc_info=True)
            if self.ack_mode is AckMode.MANUAL:
                channel.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            return

        if self.ack_mode is AckMode.MANUAL:
            channel.basic_ack(delivery_tag=method.delivery_tag)

"""One-shot publisher for the hello queue."""

from __future__ import annotations

import logging
from typing import Optional

import pika

from hello_messaging.connection import Connector
from hello_messaging.contracts import IPayloadFactory, IRabbitMQConnection
from hello_messaging.delivery import PublishMode
from hello_messaging.dependencies import MessagingDependencies
from hello_messaging.errors import BrokerOperationError, PublishRejectedError
from hello_messaging.queue_config import QueueConfig, declare_queue
from hello_messaging.settings import MessagingSettings

DEFAULT_EXCHANGE = ""


class HelloPublisher:
    """Declares the queue, publishes a single message and releases the connection."""

    def __init__(
        self,
        *,
        connection: IRabbitMQConnection,
        queue_config: QueueConfig,
        payload_factory: IPayloadFactory,
        publish_mode: PublishMode = PublishMode.UNCONFIRMED,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.connection = connection
        self.queue_config = queue_config
        self.payload_factory = payload_factory
        self.publish_mode = publish_mode

    @classmethod
    def from_settings(
        cls,
        settings: MessagingSettings,
        *,
        dependencies: Optional[MessagingDependencies] = None,
    ) -> "HelloPublisher":
        """Connect to the broker (retrying per ``settings.retry``) and bind a publisher.

        Raises :class:`ConnectionExhaustedError` if the broker stays unreachable.
        """
        deps = dependencies or MessagingDependencies()
        payload_factory = deps.make_payload_factory()
        connector = Connector(
            lambda: deps.make_connection(settings.rabbitmq_url),
            settings.retry,
            role="publisher",
            sleep=deps.sleep,
        )

        return cls(
            connection=connector.connect(),
            queue_config=settings.queue,
            payload_factory=payload_factory,
            publish_mode=settings.publish_mode,
        )

    def publish(self, payload: Optional[bytes] = None) -> bytes:
        """Publish ``payload`` (or a freshly built one) and close channel then connection.

        Returns the body that was sent.
        """
        confirmed = self.publish_mode is PublishMode.CONFIRMED
        queue_name = self.queue_config.queue_name

        try:
            body = payload if payload is not None else self.payload_factory.build()
            channel = self.connection.connect()
            declare_queue(channel, self.queue_config)
            if confirmed:
                channel.confirm_delivery()
            channel.basic_publish(
                exchange=DEFAULT_EXCHANGE,
                routing_key=queue_name,
                body=body,
                properties=pika.BasicProperties(content_type="text/plain"),
                mandatory=confirmed,
            )
        except (pika.exceptions.UnroutableError, pika.exceptions.NackError) as exc:
            raise PublishRejectedError(
                f"Broker did not accept message for queue {queue_name!r}"
            ) from exc
        except pika.exceptions.AMQPError as exc:
            raise BrokerOperationError(
                f"Failed to publish to queue {queue_name!r}: {exc!r}"
            ) from exc
        finally:
            self.connection.close()

        self.logger.info(
            " [x] Sent %r to queue %s", body.decode("utf-8", errors="replace"), queue_name
        )
        return body

"""Reconnecting supervisor around the consume loop."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

import pika

from hello_messaging.connection import Connector
from hello_messaging.contracts import IRabbitMQConnection
from hello_messaging.dependencies import MessagingDependencies
from hello_messaging.errors import ConnectionExhaustedError
from hello_messaging.retry_policy import DEFAULT_RETRY_DELAY
from hello_messaging.settings import MessagingSettings

from .hello_consumer import HelloConsumer


class ConsumerState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    CONSUMING = "consuming"
    FAILED = "failed"


class ConsumerSupervisor:
    """Keeps a consumer attached to the broker across connection drops.

    Losing the connection while consuming sends the supervisor back through the
    bounded-retry connector after a pause of ``reconnect_delay`` seconds. Only an
    exhausted connector, or a non-connection failure, ends in ``FAILED``; an
    interrupted consumer ends in ``DISCONNECTED``.
    """

    def __init__(
        self,
        *,
        connector: Connector,
        make_consumer: Callable[[IRabbitMQConnection], HelloConsumer],
        reconnect_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.connector = connector
        self.make_consumer = make_consumer
        self.reconnect_delay = reconnect_delay
        self._sleep = sleep
        self.state = ConsumerState.DISCONNECTED
        self.history: List[ConsumerState] = [self.state]

    @classmethod
    def from_settings(
        cls,
        settings: MessagingSettings,
        *,
        dependencies: Optional[MessagingDependencies] = None,
    ) -> "ConsumerSupervisor":
        deps = dependencies or MessagingDependencies()
        connector = Connector(
            lambda: deps.make_connection(settings.rabbitmq_url),
            settings.retry,
            role="consumer",
            sleep=deps.sleep,
        )

        def make_consumer(connection: IRabbitMQConnection) -> HelloConsumer:
            return HelloConsumer(
                connection=connection,
                queue_config=settings.queue,
                message_handler=deps.make_message_handler(),
                ack_mode=settings.ack_mode,
            )

        return cls(
            connector=connector,
            make_consumer=make_consumer,
            reconnect_delay=settings.retry.retry_delay,
            sleep=deps.sleep,
        )

    def run(self) -> ConsumerState:
        while True:
            self._transition(ConsumerState.CONNECTING)
            try:
                connection = self.connector.connect()
            except ConnectionExhaustedError:
                self._transition(ConsumerState.FAILED)
                raise

            self._transition(ConsumerState.CONNECTED)
            consumer = self.make_consumer(connection)

            self._transition(ConsumerState.CONSUMING)
            try:
                consumer.start()
            except pika.exceptions.AMQPConnectionError as exc:
                self.logger.warning(
                    "Lost connection to RabbitMQ while consuming: %r. Reconnecting in %ss.",
                    exc,
                    self.reconnect_delay,
                )
                self._transition(ConsumerState.DISCONNECTED)
                self._sleep(self.reconnect_delay)
                continue
            except Exception:
                self._transition(ConsumerState.FAILED)
                raise

            self._transition(ConsumerState.DISCONNECTED)
            return self.state

    def _transition(self, state: ConsumerState) -> None:
        self.logger.info("Consumer state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

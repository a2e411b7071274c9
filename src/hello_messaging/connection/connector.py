"""Bounded, fixed-interval retry around opening a RabbitMQ connection."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import pika
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from hello_messaging.contracts import IRabbitMQConnection
from hello_messaging.errors import ConnectionExhaustedError
from hello_messaging.retry_policy import RetryPolicy


class Connector:
    """Opens a broker connection, retrying transient failures.

    Every call to :meth:`connect` is independent: attempts are counted from one, made
    sequentially, and separated by exactly ``retry_policy.retry_delay`` seconds. The
    first success is returned straight away. When the attempt budget is spent a
    :class:`ConnectionExhaustedError` is raised and the caller is expected to give up
    (the hosting process exits and its supervisor restarts it).
    """

    def __init__(
        self,
        connection_factory: Callable[[], IRabbitMQConnection],
        retry_policy: Optional[RetryPolicy] = None,
        *,
        role: str = "client",
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.connection_factory = connection_factory
        self.retry_policy = retry_policy or RetryPolicy()
        self.role = role
        self._sleep = sleep
        self.logger = logger or logging.getLogger(__name__)

    def connect(self) -> IRabbitMQConnection:
        max_attempts = self.retry_policy.max_attempts
        retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_fixed(self.retry_policy.retry_delay),
            retry=retry_if_exception_type(pika.exceptions.AMQPConnectionError),
            sleep=self._sleep,
            before_sleep=self._log_retry,
        )

        try:
            for attempt in retrying:
                with attempt:
                    connection = self._open()
        except RetryError as exc:
            last_error = exc.last_attempt.exception()
            self.logger.warning(
                "[%s] Not possible to connect to RabbitMQ. Attempt %d of %d: %s",
                self.role,
                max_attempts,
                max_attempts,
                last_error,
            )
            raise ConnectionExhaustedError(max_attempts, last_error) from last_error

        attempt_number = attempt.retry_state.attempt_number
        if attempt_number > 1:
            self.logger.info(
                "[%s] Connected to RabbitMQ on attempt %d of %d.",
                self.role,
                attempt_number,
                max_attempts,
            )
        return connection

    def _open(self) -> IRabbitMQConnection:
        connection = self.connection_factory()
        try:
            connection.connect()
        except Exception:
            # The socket may be open even though the channel never was.
            self._discard(connection)
            raise
        return connection

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        self.logger.warning(
            "[%s] Not possible to connect to RabbitMQ. Retrying in %ss. Attempt %d of %d: %s",
            self.role,
            self.retry_policy.retry_delay,
            retry_state.attempt_number,
            self.retry_policy.max_attempts,
            error,
        )

    def _discard(self, connection: IRabbitMQConnection) -> None:
        try:
            connection.close()
        except pika.exceptions.AMQPError as exc:
            self.logger.debug("Ignoring error while discarding failed connection: %s", exc)

"""Default payload: a greeting stamped with the time it was built."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from hello_messaging.contracts import IPayloadFactory

DEFAULT_GREETING = "Hello, RabbitMQ!"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class TimestampPayloadFactory(IPayloadFactory):
    """Builds ``"<greeting> Now is <timestamp>"`` payloads encoded as UTF-8."""

    def __init__(
        self,
        greeting: str = DEFAULT_GREETING,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.greeting = greeting
        self._clock = clock

    def build(self) -> bytes:
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        return f"{self.greeting} Now is {timestamp}".encode("utf-8")

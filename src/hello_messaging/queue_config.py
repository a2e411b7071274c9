"""Provides queue declaration parameters shared by publishers and consumers."""

from dataclasses import dataclass
from typing import Any, Dict

import pika
from pika.adapters.blocking_connection import BlockingChannel

from .errors import QueueDeclarationMismatchError

DEFAULT_QUEUE_NAME = "hello"
PRECONDITION_FAILED = 406


@dataclass(frozen=True)
class QueueConfig:
    """Encapsulates queue declaration options.

    The broker rejects a declaration whose flags differ from an existing queue of the
    same name, so publisher and consumer must be built from the same instance (or from
    instances that compare equal).
    """

    queue_name: str = DEFAULT_QUEUE_NAME
    durable: bool = False
    exclusive: bool = False
    auto_delete: bool = False

    def __post_init__(self) -> None:
        if not self.queue_name:
            raise ValueError("Queue name must not be empty.")

    def declare_arguments(self) -> Dict[str, Any]:
        return {
            "queue": self.queue_name,
            "durable": self.durable,
            "exclusive": self.exclusive,
            "auto_delete": self.auto_delete,
        }


def declare_queue(channel: BlockingChannel, queue_config: QueueConfig) -> None:
    """Idempotently declare ``queue_config`` on ``channel``.

    Raises :class:`QueueDeclarationMismatchError` when the queue already exists with
    different flags.
    """
    try:
        channel.queue_declare(**queue_config.declare_arguments())
    except pika.exceptions.ChannelClosedByBroker as exc:
        if exc.reply_code == PRECONDITION_FAILED:
            raise QueueDeclarationMismatchError(
                f"Queue {queue_config.queue_name!r} exists with different parameters: "
                f"{exc.reply_text}"
            ) from exc
        raise

"""Hello queue consumer and its reconnecting supervisor."""

from .consumer_supervisor import ConsumerState, ConsumerSupervisor
from .hello_consumer import HelloConsumer

__all__ = [
    "ConsumerState",
    "ConsumerSupervisor",
    "HelloConsumer",
]

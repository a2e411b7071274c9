"""One-shot publisher for the hello queue."""

from .hello_publisher import HelloPublisher

__all__ = ["HelloPublisher"]

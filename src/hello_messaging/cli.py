"""Process entry points translating library outcomes into exit codes."""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, Optional, Sequence

import pika

from .consumer import ConsumerSupervisor
from .dependencies import MessagingDependencies
from .errors import ConnectionExhaustedError, MessagingError
from .publisher import HelloPublisher
from .settings import MessagingSettings

EXIT_OK = 0
EXIT_FAILURE = 1

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    raw = level or os.getenv("LOG_LEVEL") or "INFO"
    level_name = raw.strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got {raw!r}")
    logging.basicConfig(level=level_name, format=LOG_FORMAT)
    # pika is chatty at INFO about every connection/channel state change.
    logging.getLogger("pika").setLevel(logging.WARNING)


def run_publisher(
    settings: Optional[MessagingSettings] = None,
    dependencies: Optional[MessagingDependencies] = None,
) -> int:
    try:
        settings = settings or MessagingSettings.from_env()
        publisher = HelloPublisher.from_settings(settings, dependencies=dependencies)
        publisher.publish()
    except ConnectionExhaustedError as exc:
        logger.error("%s. Exiting; the service will be restarted by its supervisor.", exc)
        return EXIT_FAILURE
    except (MessagingError, pika.exceptions.AMQPError, ValueError) as exc:
        logger.error("Publisher failed: %s", exc)
        return EXIT_FAILURE
    return EXIT_OK


def run_consumer(
    settings: Optional[MessagingSettings] = None,
    dependencies: Optional[MessagingDependencies] = None,
) -> int:
    try:
        settings = settings or MessagingSettings.from_env()
        supervisor = ConsumerSupervisor.from_settings(settings, dependencies=dependencies)
        supervisor.run()
    except KeyboardInterrupt:
        logger.info("Consumer interrupted.")
    except ConnectionExhaustedError as exc:
        logger.error("%s. Exiting; the service will be restarted by its supervisor.", exc)
        return EXIT_FAILURE
    except (MessagingError, pika.exceptions.AMQPError, ValueError) as exc:
        logger.error("Consumer failed: %s", exc)
        return EXIT_FAILURE
    return EXIT_OK


def _start(run: Callable[[], int]) -> None:
    try:
        configure_logging()
    except ValueError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.exit(EXIT_FAILURE)
    sys.exit(run())


def publisher_main() -> None:
    _start(run_publisher)


def consumer_main() -> None:
    _start(run_consumer)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    commands = {"publish": publisher_main, "consume": consumer_main}
    if len(args) != 1 or args[0] not in commands:
        sys.stderr.write("usage: python -m hello_messaging.cli {publish|consume}\n")
        sys.exit(2)
    commands[args[0]]()


if __name__ == "__main__":
    main()

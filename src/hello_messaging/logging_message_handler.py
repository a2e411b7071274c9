"""Default consumer handler that writes each payload to the log."""

from __future__ import annotations

import logging
from typing import Optional

from .contracts import IMessageHandler


class LoggingMessageHandler(IMessageHandler):
    """Logs the decoded text of every received message."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def handle(self, body: bytes) -> None:
        self.logger.info(" [x] Received: %s", body.decode("utf-8", errors="replace"))

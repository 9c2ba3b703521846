"""Alert notification dispatch."""

from __future__ import annotations

import logging
from typing import Callable

from altus.alerts import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """Delivers alert notifications to an optional sink.

    Every delivered notification is logged. The sink (a desktop notifier, a
    message queue, a test recorder) receives the Notification object; errors
    it raises are logged and never reach the forecast flow.
    """

    def __init__(
        self,
        enabled: bool = True,
        sink: Callable[[Notification], None] | None = None,
    ) -> None:
        self.enabled = enabled
        self.sink = sink

    @property
    def permission(self) -> str:
        return "granted" if self.enabled else "denied"

    def send(self, notification: Notification) -> bool:
        """Deliver a notification. Returns False when notifications are off."""
        if not self.enabled:
            logger.debug("Notifications disabled, dropping %s", notification.tag)
            return False
        logger.info("%s: %s", notification.title, notification.body)
        if self.sink is not None:
            try:
                self.sink(notification)
            except Exception:
                logger.warning("Notification sink failed for %s", notification.tag, exc_info=True)
        return True

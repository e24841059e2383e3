"""Log-only notifier, used when no webhook is configured."""

import logging

from ticketflow.application.ports.notifier_port import Notification, NotifierPort

logger = logging.getLogger(__name__)


class LogNotifier(NotifierPort):
    async def publish(self, notification: Notification) -> None:
        logger.info("%s\n%s", notification.subject, notification.body)
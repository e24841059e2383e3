"""NotifySupportTeamUseCase — alert humans about a freshly enriched ticket."""

from __future__ import annotations

import logging

from ticketflow.application.ports.notifier_port import Notification, NotifierPort
from ticketflow.domain.entities.analytics import TicketAnalytics
from ticketflow.domain.entities.message import SupportTicketMessage

logger = logging.getLogger(__name__)


def build_notification(message: SupportTicketMessage, analytics: TicketAnalytics) -> Notification:
    """Subject carries the urgency token so recipients can filter on it."""
    return Notification(
        subject=f"::{analytics.urgency.value}:: New Support Ticket",
        body=(
            f"New support ticket received: {message.ticket_id}\n\n"
            f"Content: {message.content}\n\n"
            f"Analytics: {analytics.response}"
        ),
    )


class NotifySupportTeamUseCase:
    def __init__(self, notifier: NotifierPort):
        self._notifier = notifier

    async def execute(self, message: SupportTicketMessage, analytics: TicketAnalytics) -> Notification:
        notification = build_notification(message, analytics)
        await self._notifier.publish(notification)
        logger.info("Support team notified for ticket %s", message.ticket_id)
        return notification

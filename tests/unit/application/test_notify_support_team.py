"""Tests for NotifySupportTeamUseCase."""

import pytest

from ticketflow.application.ports.notifier_port import NotifierPort
from ticketflow.application.use_cases.notify_support_team import (
    NotifySupportTeamUseCase,
    build_notification,
)
from ticketflow.domain.entities.analytics import TicketAnalytics
from ticketflow.domain.entities.message import SupportTicketMessage
from ticketflow.domain.errors import NotificationError
from ticketflow.domain.value_objects.enums import Urgency


class FakeNotifier(NotifierPort):
    def __init__(self, error: Exception | None = None):
        self.sent = []
        self._error = error

    async def publish(self, notification):
        if self._error is not None:
            raise self._error
        self.sent.append(notification)


MESSAGE = SupportTicketMessage(ticket_id="t-42", content="Payment page shows 500 error")
ANALYTICS = TicketAnalytics(urgency=Urgency.CRITICAL, response="Escalated to billing.")


def test_subject_embeds_urgency():
    notification = build_notification(MESSAGE, ANALYTICS)
    assert notification.subject == "::CRITICAL:: New Support Ticket"


def test_body_carries_id_content_and_response():
    body = build_notification(MESSAGE, ANALYTICS).body
    assert "t-42" in body
    assert "Payment page shows 500 error" in body
    assert "Escalated to billing." in body


@pytest.mark.asyncio
async def test_publishes_once():
    notifier = FakeNotifier()
    await NotifySupportTeamUseCase(notifier).execute(MESSAGE, ANALYTICS)
    assert len(notifier.sent) == 1
    assert "CRITICAL" in notifier.sent[0].subject


@pytest.mark.asyncio
async def test_failure_propagates():
    notifier = FakeNotifier(error=NotificationError("webhook down"))
    with pytest.raises(NotificationError):
        await NotifySupportTeamUseCase(notifier).execute(MESSAGE, ANALYTICS)

"""UpdateTicketUseCase — persist the processing outcome for one ticket."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from ticketflow.application.ports.ticket_repo import TicketRepository
from ticketflow.domain.entities.analytics import TicketAnalytics
from ticketflow.domain.value_objects.enums import UpdateOutcome

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UpdateTicketUseCase:
    """Mark a ticket PROCESSED and attach its analytics in a single conditional write.

    Store errors propagate: a lost update would leave the ticket un-enriched
    with nothing to show for it.
    """

    def __init__(
        self,
        ticket_repo: TicketRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._tickets = ticket_repo
        self._clock = clock

    async def execute(self, ticket_id: str, analytics: TicketAnalytics) -> UpdateOutcome:
        now = self._clock()
        outcome = await self._tickets.apply_analytics(ticket_id, analytics, now)
        if outcome is UpdateOutcome.SKIPPED:
            logger.warning(
                "Ticket %s: update skipped, ticket already advanced or holds a newer update",
                ticket_id,
            )
        else:
            logger.info("Ticket %s: status=PROCESSED, urgency=%s", ticket_id, analytics.urgency.value)
        return outcome

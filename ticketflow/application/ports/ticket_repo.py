"""Port interface for ticket persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from ticketflow.domain.entities.analytics import TicketAnalytics
from ticketflow.domain.entities.ticket import SupportTicket
from ticketflow.domain.value_objects.enums import UpdateOutcome


class TicketRepository(ABC):
    @abstractmethod
    async def add(self, ticket: SupportTicket) -> SupportTicket:
        ...

    @abstractmethod
    async def get(self, ticket_id: str) -> SupportTicket | None:
        ...

    @abstractmethod
    async def apply_analytics(
        self, ticket_id: str, analytics: TicketAnalytics, now: datetime
    ) -> UpdateOutcome:
        """Conditionally mark the ticket PROCESSED and attach analytics in one write.

        Returns APPLIED when the row was written, SKIPPED when the ticket has
        already moved past PROCESSED or carries a newer update.
        Raises TicketNotFoundError for an unknown ticket id.
        """
        ...

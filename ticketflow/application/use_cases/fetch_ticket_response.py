"""FetchTicketResponseUseCase — read-only lookup of a ticket's suggested reply."""

from __future__ import annotations

from ticketflow.application.ports.ticket_repo import TicketRepository
from ticketflow.domain.errors import TicketNotFoundError


class FetchTicketResponseUseCase:
    def __init__(self, ticket_repo: TicketRepository):
        self._tickets = ticket_repo

    async def execute(self, ticket_id: str) -> str | None:
        """Return analytics.response, or None while the ticket is not enriched yet."""
        ticket = await self._tickets.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket.analytics.response if ticket.analytics else None

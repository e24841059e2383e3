"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.adapters.persistence.models import SupportTicketModel
from ticketflow.application.ports.ticket_repo import TicketRepository
from ticketflow.domain.entities.analytics import TicketAnalytics
from ticketflow.domain.entities.ticket import AnalyticsRecord, SupportTicket
from ticketflow.domain.errors import TicketNotFoundError
from ticketflow.domain.policies.status_transitions import sources_for
from ticketflow.domain.value_objects.enums import TicketStatus, UpdateOutcome, Urgency

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _ticket_to_domain(m: SupportTicketModel) -> SupportTicket:
    analytics = None
    if m.urgency is not None and m.response is not None and m.analytics_generated_at is not None:
        analytics = AnalyticsRecord(
            urgency=Urgency(m.urgency),
            response=m.response,
            generated_at=m.analytics_generated_at,
        )
    return SupportTicket(
        id=m.id,
        content=m.content,
        status=TicketStatus(m.status),
        customer_id=m.customer_id,
        created_at=m.created_at,
        updated_at=m.updated_at,
        analytics=analytics,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlTicketRepository(TicketRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def add(self, ticket: SupportTicket) -> SupportTicket:
        m = SupportTicketModel(
            id=ticket.id,
            content=ticket.content,
            status=ticket.status.value,
            customer_id=ticket.customer_id,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )
        self._s.add(m)
        await self._s.flush()
        return ticket

    async def get(self, ticket_id: str) -> SupportTicket | None:
        m = await self._s.get(SupportTicketModel, ticket_id)
        return _ticket_to_domain(m) if m else None

    async def apply_analytics(
        self, ticket_id: str, analytics: TicketAnalytics, now: datetime
    ) -> UpdateOutcome:
        allowed = [s.value for s in sources_for(TicketStatus.PROCESSED)]
        # One conditional UPDATE; the caller commits it before anything else happens.
        result = await self._s.execute(
            update(SupportTicketModel)
            .where(
                SupportTicketModel.id == ticket_id,
                SupportTicketModel.status.in_(allowed),
                SupportTicketModel.updated_at <= now,
            )
            .values(
                status=TicketStatus.PROCESSED.value,
                updated_at=now,
                urgency=analytics.urgency.value,
                response=analytics.response,
                analytics_generated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            return UpdateOutcome.APPLIED

        found = await self._s.execute(
            select(SupportTicketModel.status).where(SupportTicketModel.id == ticket_id)
        )
        status = found.scalar_one_or_none()
        if status is None:
            raise TicketNotFoundError(ticket_id)
        logger.debug("Ticket %s: conditional update matched nothing (status=%s)", ticket_id, status)
        return UpdateOutcome.SKIPPED

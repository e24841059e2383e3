"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.adapters.persistence.database import get_session
from ticketflow.adapters.persistence.message_queue import SqlMessageQueue
from ticketflow.adapters.persistence.repositories import SqlTicketRepository
from ticketflow.application.use_cases.fetch_ticket_response import FetchTicketResponseUseCase
from ticketflow.application.use_cases.submit_ticket import SubmitTicketUseCase
from ticketflow.config import settings

# Re-export session dependency
get_db_session = get_session


def get_submit_ticket_uc(
    session: AsyncSession = Depends(get_session),
) -> SubmitTicketUseCase:
    return SubmitTicketUseCase(
        ticket_repo=SqlTicketRepository(session),
        queue=SqlMessageQueue(
            session,
            visibility_timeout_seconds=settings.queue_visibility_timeout_seconds,
            max_receive_count=settings.queue_max_receive_count,
        ),
    )


def get_fetch_ticket_response_uc(
    session: AsyncSession = Depends(get_session),
) -> FetchTicketResponseUseCase:
    return FetchTicketResponseUseCase(ticket_repo=SqlTicketRepository(session))

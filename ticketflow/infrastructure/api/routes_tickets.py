"""Ticket endpoints — intake and response lookup."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.application.use_cases.fetch_ticket_response import FetchTicketResponseUseCase
from ticketflow.application.use_cases.submit_ticket import SubmitTicketUseCase
from ticketflow.domain.errors import TicketNotFoundError, TicketValidationError
from ticketflow.infrastructure.api.dependencies import (
    get_db_session,
    get_fetch_ticket_response_uc,
    get_submit_ticket_uc,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["tickets"])


# ── Request / Response schemas ──────────────────────────────────────

class CreateTicketRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str | None = None
    customer_id: str | None = Field(default=None, alias="customerId")


class CreateTicketResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    ticket_id: str = Field(serialization_alias="ticketId")


class FetchTicketResponse(BaseModel):
    response: str | None = None


# ── Endpoints ───────────────────────────────────────────────────────

@router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=CreateTicketResponse,
    response_model_by_alias=True,
)
async def create_ticket(
    body: CreateTicketRequest,
    uc: SubmitTicketUseCase = Depends(get_submit_ticket_uc),
    session: AsyncSession = Depends(get_db_session),
):
    """Store a new ticket as RECEIVED and queue it for enrichment."""
    try:
        ticket = await uc.execute(body.content, body.customer_id)
        await session.commit()
    except TicketValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception:
        logger.exception("Error creating ticket")
        await session.rollback()
        raise HTTPException(status_code=500, detail="Internal error creating ticket")

    return CreateTicketResponse(
        message="new ticket has been created for this request",
        ticket_id=ticket.id,
    )


@router.get("/{ticket_id}", response_model=FetchTicketResponse)
async def get_ticket_response(
    ticket_id: str,
    uc: FetchTicketResponseUseCase = Depends(get_fetch_ticket_response_uc),
):
    """Return the suggested reply for a ticket, or null while it is still queued."""
    try:
        response = await uc.execute(ticket_id)
    except TicketNotFoundError:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return FetchTicketResponse(response=response)

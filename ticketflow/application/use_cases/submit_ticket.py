"""SubmitTicketUseCase — intake: validate, store as RECEIVED, enqueue one message."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from ticketflow.application.ports.message_queue import MessageQueue
from ticketflow.application.ports.ticket_repo import TicketRepository
from ticketflow.application.use_cases.update_ticket import utc_now
from ticketflow.domain.entities.message import SupportTicketMessage
from ticketflow.domain.entities.ticket import SupportTicket
from ticketflow.domain.errors import TicketValidationError
from ticketflow.domain.value_objects.enums import TicketStatus

logger = logging.getLogger(__name__)

ANONYMOUS_CUSTOMER = "anonymous"


class SubmitTicketUseCase:
    """The ticket insert and the enqueue must share the caller's transaction."""

    def __init__(
        self,
        ticket_repo: TicketRepository,
        queue: MessageQueue,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._tickets = ticket_repo
        self._queue = queue
        self._clock = clock

    async def execute(self, content: str | None, customer_id: str | None = None) -> SupportTicket:
        if not isinstance(content, str) or not content.strip():
            raise TicketValidationError("content is required")

        now = self._clock()
        ticket = SupportTicket(
            id=str(uuid.uuid4()),
            content=content,
            status=TicketStatus.RECEIVED,
            customer_id=(customer_id or "").strip() or ANONYMOUS_CUSTOMER,
            created_at=now,
            updated_at=now,
        )
        await self._tickets.add(ticket)
        message_id = await self._queue.enqueue(SupportTicketMessage.from_ticket(ticket))
        logger.info("Ticket %s received, queued as message %s", ticket.id, message_id)
        return ticket

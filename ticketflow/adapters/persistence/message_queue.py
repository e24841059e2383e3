"""SQL-backed work queue — implements MessageQueue on the support_ticket_messages table.

Messages are claimed with ``FOR UPDATE SKIP LOCKED`` so concurrent workers never
receive the same delivery. A claimed message stays invisible for the visibility
timeout; if the worker dies it simply becomes visible again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.adapters.persistence.models import SupportTicketMessageModel
from ticketflow.application.ports.message_queue import MessageQueue
from ticketflow.domain.entities.message import QueuedMessage, SupportTicketMessage

logger = logging.getLogger(__name__)

STATE_PENDING = "pending"
STATE_IN_FLIGHT = "in_flight"
STATE_DEAD = "dead"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SqlMessageQueue(MessageQueue):
    def __init__(
        self,
        session: AsyncSession,
        visibility_timeout_seconds: int = 120,
        max_receive_count: int = 5,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._s = session
        self._visibility_timeout = timedelta(seconds=visibility_timeout_seconds)
        self._max_receive_count = max_receive_count
        self._clock = clock

    async def enqueue(self, message: SupportTicketMessage) -> str:
        m = SupportTicketMessageModel(
            body=message.to_json(),
            state=STATE_PENDING,
            receive_count=0,
            visible_at=self._clock(),
        )
        self._s.add(m)
        await self._s.flush()
        return str(m.id)

    async def receive(self, max_messages: int) -> list[QueuedMessage]:
        now = self._clock()
        result = await self._s.execute(
            select(SupportTicketMessageModel)
            .where(
                SupportTicketMessageModel.state.in_([STATE_PENDING, STATE_IN_FLIGHT]),
                SupportTicketMessageModel.visible_at <= now,
            )
            .order_by(SupportTicketMessageModel.id)
            .limit(max_messages)
            .with_for_update(skip_locked=True)
        )
        rows = list(result.scalars())
        for m in rows:
            m.state = STATE_IN_FLIGHT
            m.receive_count += 1
            m.visible_at = now + self._visibility_timeout
        await self._s.flush()
        return [
            QueuedMessage(message_id=str(m.id), body=m.body, receive_count=m.receive_count)
            for m in rows
        ]

    async def delete(self, message_id: str) -> None:
        await self._s.execute(
            delete(SupportTicketMessageModel).where(
                SupportTicketMessageModel.id == int(message_id)
            )
        )
        await self._s.flush()

    async def release(self, message_id: str, error: str) -> None:
        m = await self._s.get(SupportTicketMessageModel, int(message_id))
        if m is None:
            logger.warning("Message %s vanished before it could be released", message_id)
            return

        m.last_error = error[:2000]
        if m.receive_count >= self._max_receive_count:
            m.state = STATE_DEAD
            logger.error(
                "Message %s dead-lettered after %d receives: %s",
                message_id, m.receive_count, error,
            )
        else:
            m.state = STATE_PENDING
            m.visible_at = self._clock()
        await self._s.flush()

    async def depth(self) -> dict[str, int]:
        """Message count per state; states with no messages report 0."""
        result = await self._s.execute(
            select(SupportTicketMessageModel.state, func.count())
            .group_by(SupportTicketMessageModel.state)
        )
        counts = {STATE_PENDING: 0, STATE_IN_FLIGHT: 0, STATE_DEAD: 0}
        counts.update({state: n for state, n in result.all()})
        return counts

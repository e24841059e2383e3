"""Queue payloads: the ticket projection and the delivery envelope around it."""

from __future__ import annotations

import json
from dataclasses import dataclass

from ticketflow.domain.entities.ticket import SupportTicket
from ticketflow.domain.errors import MessageDecodeError


@dataclass(frozen=True)
class SupportTicketMessage:
    """Projection of a ticket at creation time; enough to generate analytics."""

    ticket_id: str
    content: str

    @classmethod
    def from_ticket(cls, ticket: SupportTicket) -> "SupportTicketMessage":
        return cls(ticket_id=ticket.id, content=ticket.content)

    def to_json(self) -> str:
        return json.dumps({"ticketId": self.ticket_id, "content": self.content})

    @classmethod
    def from_json(cls, body: str) -> "SupportTicketMessage":
        """Decode a queue body of shape {"ticketId": str, "content": str}."""
        try:
            data = json.loads(body)
        except (TypeError, json.JSONDecodeError) as e:
            raise MessageDecodeError(f"Message body is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MessageDecodeError("Message body must be a JSON object")

        ticket_id = data.get("ticketId")
        content = data.get("content")
        if not isinstance(ticket_id, str) or not ticket_id.strip():
            raise MessageDecodeError("Message is missing 'ticketId'")
        if not isinstance(content, str):
            raise MessageDecodeError(
                f"Message for ticket {ticket_id} is missing 'content'",
                {"ticket_id": ticket_id},
            )
        return cls(ticket_id=ticket_id, content=content)


@dataclass(frozen=True)
class QueuedMessage:
    """One delivery of a queue message."""

    message_id: str
    body: str
    receive_count: int = 1

"""SupportTicket entity — a customer support request and its enrichment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ticketflow.domain.value_objects.enums import TicketStatus, Urgency


@dataclass(frozen=True)
class AnalyticsRecord:
    """Enrichment stored on a ticket. Always complete: urgency, response, generated_at."""

    urgency: Urgency
    response: str
    generated_at: datetime


@dataclass
class SupportTicket:
    id: str
    content: str
    status: TicketStatus
    customer_id: str
    created_at: datetime
    updated_at: datetime
    analytics: AnalyticsRecord | None = None

    def is_enriched(self) -> bool:
        return self.analytics is not None

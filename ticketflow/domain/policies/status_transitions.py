"""Ticket status lifecycle — forward-only transitions.

RECEIVED → PROCESSED → COMPLETED, and any non-terminal status → FAILED.
Re-entering the current status is allowed so redelivered messages stay idempotent.
"""

from ticketflow.domain.value_objects.enums import TicketStatus

_TRANSITIONS: dict[TicketStatus, set[TicketStatus]] = {
    TicketStatus.RECEIVED: {TicketStatus.PROCESSED, TicketStatus.FAILED},
    TicketStatus.PROCESSED: {TicketStatus.COMPLETED, TicketStatus.FAILED},
    TicketStatus.COMPLETED: set(),
    TicketStatus.FAILED: set(),
}


def can_transition(current: TicketStatus, new: TicketStatus) -> bool:
    if current == new:
        return True
    return new in _TRANSITIONS.get(current, set())


def sources_for(target: TicketStatus) -> set[TicketStatus]:
    """Statuses from which *target* may be applied (used for conditional writes)."""
    return {status for status in TicketStatus if can_transition(status, target)}

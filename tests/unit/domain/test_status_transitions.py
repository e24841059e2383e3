"""Tests for the ticket status lifecycle policy."""

from ticketflow.domain.policies.status_transitions import can_transition, sources_for
from ticketflow.domain.value_objects.enums import TicketStatus


def test_forward_transitions_allowed():
    assert can_transition(TicketStatus.RECEIVED, TicketStatus.PROCESSED)
    assert can_transition(TicketStatus.PROCESSED, TicketStatus.COMPLETED)
    assert can_transition(TicketStatus.RECEIVED, TicketStatus.FAILED)


def test_same_status_is_idempotent():
    for status in TicketStatus:
        assert can_transition(status, status)


def test_no_transition_back_to_received():
    for status in (TicketStatus.PROCESSED, TicketStatus.COMPLETED, TicketStatus.FAILED):
        assert not can_transition(status, TicketStatus.RECEIVED)


def test_processed_cannot_be_reapplied_after_completion():
    assert not can_transition(TicketStatus.COMPLETED, TicketStatus.PROCESSED)
    assert not can_transition(TicketStatus.FAILED, TicketStatus.PROCESSED)


def test_sources_for_processed():
    assert sources_for(TicketStatus.PROCESSED) == {TicketStatus.RECEIVED, TicketStatus.PROCESSED}

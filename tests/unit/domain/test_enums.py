"""Tests for domain enums."""

from ticketflow.domain.value_objects.enums import TicketStatus, Urgency


def test_urgency_values():
    assert [u.value for u in Urgency] == ["LOW", "MEDIUM", "HIGH", "CRITICAL"]


def test_ticket_status_values():
    assert TicketStatus.RECEIVED.value == "RECEIVED"
    assert TicketStatus.PROCESSED.value == "PROCESSED"
    assert TicketStatus.COMPLETED.value == "COMPLETED"
    assert TicketStatus.FAILED.value == "FAILED"


def test_enums_compare_as_strings():
    assert Urgency("HIGH") is Urgency.HIGH
    assert TicketStatus.PROCESSED == "PROCESSED"

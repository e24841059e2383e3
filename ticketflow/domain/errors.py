"""Domain and application errors.

Only decode, persistence and notification errors are allowed to fail a queued
message. Prompt, model-call and parse errors are absorbed by the analytics
generator.
"""

from __future__ import annotations


class TicketflowError(Exception):
    """Base class for all ticketflow errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class TicketValidationError(TicketflowError):
    """Intake payload rejected before anything is stored or enqueued."""


class PromptTooLongError(TicketflowError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Ticket content is {length} characters, model input limit is {limit}",
            {"length": length, "limit": limit},
        )


class ModelInvocationError(TicketflowError):
    """The model call failed: network, timeout, throttling or an error response."""


class ParseFailure(TicketflowError):
    """No JSON object could be recovered from the model reply."""

    def __init__(self, message: str, raw_text: str = ""):
        self.raw_text = raw_text
        super().__init__(message, {"raw_length": len(raw_text)})


class MessageDecodeError(TicketflowError):
    """A queue message body is not a valid SupportTicketMessage."""


class TicketNotFoundError(TicketflowError):
    def __init__(self, ticket_id: str):
        self.ticket_id = ticket_id
        super().__init__(f"Ticket '{ticket_id}' not found", {"ticket_id": ticket_id})


class NotificationError(TicketflowError):
    """Publishing the support team alert failed."""


class BatchProcessingError(TicketflowError):
    """One or more messages of a batch failed; raised after the whole batch ran."""

    def __init__(self, failures: list):
        self.failures = list(failures)
        ids = ", ".join(f.message_id for f in self.failures)
        super().__init__(
            f"{len(self.failures)} message(s) failed: {ids}",
            {"message_ids": [f.message_id for f in self.failures]},
        )

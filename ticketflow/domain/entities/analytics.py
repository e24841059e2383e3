"""TicketAnalytics — urgency and suggested reply produced for one processing attempt."""

from dataclasses import dataclass

from ticketflow.domain.value_objects.enums import Urgency

DEFAULT_URGENCY = Urgency.MEDIUM

# Used when a parsed reply carries no usable "response" field.
PLACEHOLDER_RESPONSE = "Thank you for contacting support."

# Used when the model could not be called or its reply could not be parsed at all.
FALLBACK_RESPONSE = (
    "Thank you for contacting support. We have received your request "
    "and will get back to you soon."
)


@dataclass(frozen=True)
class TicketAnalytics:
    urgency: Urgency
    response: str

    @classmethod
    def fallback(cls) -> "TicketAnalytics":
        return cls(urgency=DEFAULT_URGENCY, response=FALLBACK_RESPONSE)

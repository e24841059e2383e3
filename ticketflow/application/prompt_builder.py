"""Prompt Builder — turn ticket content into a model request."""

from __future__ import annotations

from collections.abc import Iterable

from ticketflow.application.ports.model_port import ModelRequest
from ticketflow.domain.errors import PromptTooLongError
from ticketflow.domain.value_objects.enums import Urgency

PROMPT_TEMPLATE = """\
Analyze the following customer support ticket and provide:
1. Urgency level, exactly one of: {urgency_values}
2. A professional response to the customer

Ticket: {content}

Respond only with valid JSON of this shape:
{{
    "urgency": "one of {urgency_values}",
    "response": "Your response to the ticket"
}}"""


def build_prompt(
    content: str,
    urgencies: Iterable[Urgency] = Urgency,
    *,
    max_input_chars: int | None = None,
    max_tokens: int = 512,
    temperature: float = 0.1,
    top_p: float = 0.9,
) -> ModelRequest:
    """Build the model request for one ticket.

    The content is embedded verbatim. Content longer than *max_input_chars*
    raises PromptTooLongError rather than being cut.
    """
    if max_input_chars is not None and len(content) > max_input_chars:
        raise PromptTooLongError(len(content), max_input_chars)

    urgency_values = ", ".join(u.value for u in urgencies)
    prompt = PROMPT_TEMPLATE.format(urgency_values=urgency_values, content=content)
    return ModelRequest(
        prompt=prompt,
        max_tokens=max_tokens,
        temperature=temperature,
        top_p=top_p,
    )

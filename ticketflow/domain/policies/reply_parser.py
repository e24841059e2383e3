"""Recover TicketAnalytics from a free-form model reply.

The model is asked for a bare JSON object but routinely wraps it in prose,
markdown fences or trailing remarks. We scan for the first *balanced* JSON
object instead of matching with a regex, since prose and string values may
contain braces of their own.
"""

from __future__ import annotations

import json
from collections.abc import Iterator

from ticketflow.domain.entities.analytics import (
    DEFAULT_URGENCY,
    PLACEHOLDER_RESPONSE,
    TicketAnalytics,
)
from ticketflow.domain.errors import ParseFailure
from ticketflow.domain.value_objects.enums import Urgency

URGENCY_MAP: dict[str, Urgency] = {u.value: u for u in Urgency}


def _balanced_objects(text: str) -> Iterator[str]:
    """Yield balanced ``{...}`` substrings, in order of their opening brace.

    Braces inside JSON string literals are ignored. An unbalanced opening
    brace is skipped. Scanning always resumes at the next brace after the
    current opening one, so objects nested in an unparseable candidate are
    still found.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        end = -1
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    end = i
                    break
        if end != -1:
            yield text[start:end + 1]
        start = text.find("{", start + 1)


def extract_json_object(text: str) -> dict:
    """Return the first balanced substring of *text* that parses as a JSON object.

    Raises:
        ParseFailure: no such object exists.
    """
    if not text or not text.strip():
        raise ParseFailure("Model reply is empty", text or "")

    for candidate in _balanced_objects(text):
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value

    raise ParseFailure("Could not parse a JSON object from the model reply", text)


def map_to_analytics(parsed: dict) -> TicketAnalytics:
    """Map a parsed object to TicketAnalytics, defaulting missing or invalid fields."""
    raw_urgency = parsed.get("urgency")
    urgency = DEFAULT_URGENCY
    if isinstance(raw_urgency, str):
        urgency = URGENCY_MAP.get(raw_urgency.strip().upper(), DEFAULT_URGENCY)

    raw_response = parsed.get("response")
    if isinstance(raw_response, str) and raw_response.strip():
        response = raw_response.strip()
    else:
        response = PLACEHOLDER_RESPONSE

    return TicketAnalytics(urgency=urgency, response=response)


def parse_model_reply(text: str) -> TicketAnalytics:
    """Extract TicketAnalytics from *text*; raises ParseFailure if no object is found."""
    return map_to_analytics(extract_json_object(text))

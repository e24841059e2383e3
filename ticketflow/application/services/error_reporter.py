"""ErrorReporter — best-effort structured error logging.

Entries always go to the module logger; the configured sink is an extra copy.
A sink failure is logged locally and never reaches the caller.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone

from ticketflow.application.ports.error_log_port import ErrorLogSink

logger = logging.getLogger(__name__)


class ErrorReporter:
    def __init__(
        self,
        service: str,
        environment: str,
        sink: ErrorLogSink | None = None,
        model_id: str | None = None,
    ):
        self._service = service
        self._environment = environment
        self._sink = sink
        self._model_id = model_id

    def build_entry(
        self, ticket_id: str | None, error: BaseException, context: dict | None = None
    ) -> dict:
        error_info = {
            "name": type(error).__name__,
            "message": str(error) or type(error).__name__,
        }
        if error.__traceback__ is not None:
            error_info["stack"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        details = getattr(error, "details", None)
        if details:
            error_info["details"] = details

        ctx = dict(context or {})
        if self._model_id:
            ctx.setdefault("modelId", self._model_id)

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": "ERROR",
            "service": self._service,
            "ticketId": ticket_id,
            "error": error_info,
            "context": ctx,
            "environment": self._environment,
        }

    async def report(
        self, ticket_id: str | None, error: BaseException, context: dict | None = None
    ) -> None:
        """Record *error* for *ticket_id*. Never raises."""
        try:
            entry = self.build_entry(ticket_id, error, context)
            line = json.dumps(entry, default=str)
        except Exception:
            logger.exception("Failed to build error log entry for ticket %s", ticket_id)
            return

        logger.error(line)
        if self._sink is None:
            return
        try:
            await self._sink.write(entry)
        except Exception as e:
            logger.error("Failed to write to error log sink: %s", e)

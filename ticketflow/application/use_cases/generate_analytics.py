"""GenerateAnalyticsUseCase — model call + reply parsing with a total fallback."""

from __future__ import annotations

import logging

from ticketflow.application.ports.model_port import ModelPort
from ticketflow.application.prompt_builder import build_prompt
from ticketflow.application.services.error_reporter import ErrorReporter
from ticketflow.domain.entities.analytics import TicketAnalytics
from ticketflow.domain.entities.message import SupportTicketMessage
from ticketflow.domain.errors import ParseFailure, PromptTooLongError
from ticketflow.domain.policies.reply_parser import parse_model_reply

logger = logging.getLogger(__name__)


class GenerateAnalyticsUseCase:
    """Produce TicketAnalytics for every message. Never raises."""

    def __init__(
        self,
        model: ModelPort,
        reporter: ErrorReporter,
        max_input_chars: int | None = None,
        max_tokens: int = 512,
        temperature: float = 0.1,
        top_p: float = 0.9,
    ):
        self._model = model
        self._reporter = reporter
        self._max_input_chars = max_input_chars
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._top_p = top_p

    async def execute(self, message: SupportTicketMessage) -> TicketAnalytics:
        stage = "prompt"
        try:
            request = build_prompt(
                message.content,
                max_input_chars=self._max_input_chars,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                top_p=self._top_p,
            )
            stage = "model_call"
            logger.debug("Ticket %s: invoking model %s", message.ticket_id, self._model.model_id)
            reply = await self._model.complete(request)
            stage = "parse"
            return parse_model_reply(reply)
        except PromptTooLongError as e:
            logger.warning("Ticket %s: content exceeds model input limit, using fallback", message.ticket_id)
            await self._reporter.report(message.ticket_id, e, {"stage": stage})
        except ParseFailure as e:
            logger.warning("Ticket %s: could not parse model reply, using fallback", message.ticket_id)
            await self._reporter.report(
                message.ticket_id, e, {"stage": stage, "rawReply": e.raw_text[:500]}
            )
        except Exception as e:
            logger.warning(
                "Ticket %s: model call failed (%s), using fallback",
                message.ticket_id, type(e).__name__,
            )
            await self._reporter.report(message.ticket_id, e, {"stage": stage})

        return TicketAnalytics.fallback()

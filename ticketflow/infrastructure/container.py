"""Process-wide adapters, built once at startup and passed into use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ticketflow.adapters.error_log.jsonl_sink import JsonlErrorLogSink
from ticketflow.adapters.llm.openai_adapter import OpenAIAdapter
from ticketflow.adapters.notifications.log_notifier import LogNotifier
from ticketflow.adapters.notifications.webhook_notifier import WebhookNotifier
from ticketflow.adapters.persistence.message_queue import SqlMessageQueue
from ticketflow.adapters.persistence.repositories import SqlTicketRepository
from ticketflow.adapters.persistence.unit_of_work import SqlUnitOfWork
from ticketflow.application.ports.model_port import ModelPort
from ticketflow.application.ports.notifier_port import NotifierPort
from ticketflow.application.services.error_reporter import ErrorReporter
from ticketflow.application.use_cases.generate_analytics import GenerateAnalyticsUseCase
from ticketflow.application.use_cases.notify_support_team import NotifySupportTeamUseCase
from ticketflow.application.use_cases.process_batch import ProcessBatchUseCase
from ticketflow.application.use_cases.update_ticket import UpdateTicketUseCase
from ticketflow.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    model: ModelPort
    notifier: NotifierPort
    reporter: ErrorReporter

    def message_queue(self, session: AsyncSession) -> SqlMessageQueue:
        return SqlMessageQueue(
            session,
            visibility_timeout_seconds=self.settings.queue_visibility_timeout_seconds,
            max_receive_count=self.settings.queue_max_receive_count,
        )

    def generate_analytics(self) -> GenerateAnalyticsUseCase:
        s = self.settings
        return GenerateAnalyticsUseCase(
            model=self.model,
            reporter=self.reporter,
            max_input_chars=s.model_max_input_chars,
            max_tokens=s.model_max_output_tokens,
            temperature=s.model_temperature,
            top_p=s.model_top_p,
        )

    def process_batch(self, session: AsyncSession) -> ProcessBatchUseCase:
        return ProcessBatchUseCase(
            generate_analytics=self.generate_analytics(),
            update_ticket=UpdateTicketUseCase(SqlTicketRepository(session)),
            notify=NotifySupportTeamUseCase(self.notifier),
            reporter=self.reporter,
            queue=self.message_queue(session),
            uow=SqlUnitOfWork(session),
        )

    async def aclose(self) -> None:
        await self.notifier.aclose()


def build_container(settings: Settings) -> Container:
    model = OpenAIAdapter(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout=settings.model_timeout_seconds,
        max_retries=settings.model_max_retries,
    )

    if settings.notification_webhook_url:
        notifier: NotifierPort = WebhookNotifier(
            url=settings.notification_webhook_url,
            timeout=settings.notification_timeout_seconds,
        )
        logger.info("Notifications go to the configured webhook")
    else:
        notifier = LogNotifier()
        logger.info("NOTIFICATION_WEBHOOK_URL not set, notifications are only logged")

    sink = JsonlErrorLogSink(settings.error_log_dir) if settings.error_log_dir else None
    reporter = ErrorReporter(
        service=settings.service_name,
        environment=settings.stage_name,
        sink=sink,
        model_id=model.model_id,
    )
    return Container(settings=settings, model=model, notifier=notifier, reporter=reporter)

"""ProcessBatchUseCase — queue-triggered entry point: decode → analytics → update → notify."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ticketflow.application.ports.message_queue import MessageQueue
from ticketflow.application.ports.unit_of_work import UnitOfWork
from ticketflow.application.services.error_reporter import ErrorReporter
from ticketflow.application.use_cases.generate_analytics import GenerateAnalyticsUseCase
from ticketflow.application.use_cases.notify_support_team import NotifySupportTeamUseCase
from ticketflow.application.use_cases.update_ticket import UpdateTicketUseCase
from ticketflow.domain.entities.message import QueuedMessage, SupportTicketMessage
from ticketflow.domain.errors import BatchProcessingError
from ticketflow.domain.value_objects.enums import UpdateOutcome, Urgency

logger = logging.getLogger(__name__)


@dataclass
class MessageOutcome:
    """Summary of one successfully processed message."""

    message_id: str
    ticket_id: str
    urgency: Urgency
    update: UpdateOutcome


@dataclass
class MessageFailure:
    message_id: str
    ticket_id: str | None
    stage: str
    error: Exception

    @property
    def reason(self) -> str:
        return f"{self.stage}: {type(self.error).__name__}: {self.error}"


@dataclass
class BatchResult:
    succeeded: list[MessageOutcome] = field(default_factory=list)
    failures: list[MessageFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failures)

    @property
    def failed_message_ids(self) -> list[str]:
        return [f.message_id for f in self.failures]

    def raise_for_failures(self) -> None:
        if self.failures:
            raise BatchProcessingError(self.failures)


class _StageError(Exception):
    def __init__(self, stage: str, ticket_id: str | None, cause: Exception):
        self.stage = stage
        self.ticket_id = ticket_id
        self.cause = cause


class ProcessBatchUseCase:
    """Process a batch of queued messages strictly in order, one at a time.

    Each message is its own unit of work: the ticket update is committed
    before the notification goes out, then the message is acked (or released
    for redelivery) and that is committed too. A failing message does not stop
    the batch; its failure is recorded, reported, and returned in the result.
    """

    def __init__(
        self,
        generate_analytics: GenerateAnalyticsUseCase,
        update_ticket: UpdateTicketUseCase,
        notify: NotifySupportTeamUseCase,
        reporter: ErrorReporter,
        queue: MessageQueue,
        uow: UnitOfWork,
    ):
        self._generate = generate_analytics
        self._update = update_ticket
        self._notify = notify
        self._reporter = reporter
        self._queue = queue
        self._uow = uow

    async def execute(self, messages: list[QueuedMessage]) -> BatchResult:
        logger.info("Start processing %d tickets", len(messages))
        result = BatchResult()

        for queued in messages:
            try:
                outcome = await self._process_one(queued)
            except _StageError as e:
                logger.exception(
                    "Message %s (ticket %s) failed at %s",
                    queued.message_id, e.ticket_id, e.stage,
                )
                failure = MessageFailure(
                    message_id=queued.message_id,
                    ticket_id=e.ticket_id,
                    stage=e.stage,
                    error=e.cause,
                )
                result.failures.append(failure)
                await self._reporter.report(
                    e.ticket_id,
                    e.cause,
                    {
                        "stage": e.stage,
                        "messageId": queued.message_id,
                        "receiveCount": queued.receive_count,
                    },
                )
                await self._release(failure)
            else:
                result.succeeded.append(outcome)
                await self._ack(outcome.message_id)

        logger.info(
            "Batch complete: %d/%d successful", len(result.succeeded), result.total
        )
        return result

    async def _process_one(self, queued: QueuedMessage) -> MessageOutcome:
        try:
            message = SupportTicketMessage.from_json(queued.body)
        except Exception as e:
            raise _StageError("decode", None, e) from e

        analytics = await self._generate.execute(message)
        logger.info(
            "Ticket %s analytics: urgency=%s", message.ticket_id, analytics.urgency.value
        )

        try:
            update = await self._update.execute(message.ticket_id, analytics)
            await self._uow.commit()
        except Exception as e:
            raise _StageError("update", message.ticket_id, e) from e

        try:
            await self._notify.execute(message, analytics)
        except Exception as e:
            raise _StageError("notify", message.ticket_id, e) from e

        return MessageOutcome(
            message_id=queued.message_id,
            ticket_id=message.ticket_id,
            urgency=analytics.urgency,
            update=update,
        )

    async def _ack(self, message_id: str) -> None:
        # An unacked message comes back after the visibility timeout.
        try:
            await self._queue.delete(message_id)
            await self._uow.commit()
        except Exception:
            logger.exception("Could not acknowledge message %s", message_id)
            await self._uow.rollback()

    async def _release(self, failure: MessageFailure) -> None:
        try:
            await self._uow.rollback()
            await self._queue.release(failure.message_id, failure.reason)
            await self._uow.commit()
        except Exception:
            logger.exception("Could not release message %s", failure.message_id)
            await self._uow.rollback()

"""run_batch claims a batch, then commits every message's update before it is notified."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest

from ticketflow import worker
from ticketflow.adapters.persistence.unit_of_work import SqlUnitOfWork
from ticketflow.application.ports.message_queue import MessageQueue
from ticketflow.application.ports.model_port import ModelPort
from ticketflow.application.ports.notifier_port import NotifierPort
from ticketflow.application.ports.ticket_repo import TicketRepository
from ticketflow.application.services.error_reporter import ErrorReporter
from ticketflow.application.use_cases.generate_analytics import GenerateAnalyticsUseCase
from ticketflow.application.use_cases.notify_support_team import NotifySupportTeamUseCase
from ticketflow.application.use_cases.process_batch import ProcessBatchUseCase
from ticketflow.application.use_cases.update_ticket import UpdateTicketUseCase
from ticketflow.domain.entities.message import QueuedMessage, SupportTicketMessage
from ticketflow.domain.value_objects.enums import UpdateOutcome

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class RecordingSession:
    def __init__(self, events):
        self._events = events

    async def commit(self):
        self._events.append("commit")

    async def rollback(self):
        self._events.append("rollback")


class RecordingQueue(MessageQueue):
    def __init__(self, messages, events):
        self.messages = messages
        self._events = events

    async def enqueue(self, message):
        raise NotImplementedError

    async def receive(self, max_messages):
        self._events.append("claim")
        return self.messages[:max_messages]

    async def delete(self, message_id):
        self._events.append(f"ack {message_id}")

    async def release(self, message_id, error):
        self._events.append(f"release {message_id}")


class RecordingRepo(TicketRepository):
    def __init__(self, events):
        self._events = events

    async def add(self, ticket):
        raise NotImplementedError

    async def get(self, ticket_id):
        return None

    async def apply_analytics(self, ticket_id, analytics, now):
        self._events.append(f"update {ticket_id}")
        return UpdateOutcome.APPLIED


class RecordingNotifier(NotifierPort):
    def __init__(self, events, failing=False):
        self._events = events
        self._failing = failing

    async def publish(self, notification):
        self._events.append("notify")
        if self._failing:
            raise ConnectionError("webhook down")


class StaticModel(ModelPort):
    @property
    def model_id(self):
        return "static"

    async def complete(self, request):
        return '{"urgency": "LOW", "response": "Thanks, noted."}'


class StubContainer:
    def __init__(self, queue, events, notifier=None):
        self.queue = queue
        self.events = events
        self.notifier = notifier or RecordingNotifier(events)

    def message_queue(self, session):
        return self.queue

    def process_batch(self, session):
        reporter = ErrorReporter(service="test", environment="test")
        return ProcessBatchUseCase(
            generate_analytics=GenerateAnalyticsUseCase(StaticModel(), reporter),
            update_ticket=UpdateTicketUseCase(RecordingRepo(self.events), clock=lambda: NOW),
            notify=NotifySupportTeamUseCase(self.notifier),
            reporter=reporter,
            queue=self.queue,
            uow=SqlUnitOfWork(session),
        )


def _queued(ticket_id: str) -> QueuedMessage:
    body = SupportTicketMessage(ticket_id=ticket_id, content="Cannot log in").to_json()
    return QueuedMessage(message_id=f"m-{ticket_id}", body=body)


@pytest.fixture
def events(monkeypatch):
    events = []

    @asynccontextmanager
    async def factory():
        yield RecordingSession(events)

    monkeypatch.setattr(worker, "async_session_factory", factory)
    return events


@pytest.mark.asyncio
async def test_empty_queue_returns_none(events):
    container = StubContainer(RecordingQueue([], events), events)

    assert await worker.run_batch(container, 10) is None
    assert events == ["claim", "commit"]


@pytest.mark.asyncio
async def test_status_committed_before_each_notification(events):
    container = StubContainer(RecordingQueue([_queued("t1"), _queued("t2")], events), events)

    result = await worker.run_batch(container, 10)

    assert [o.ticket_id for o in result.succeeded] == ["t1", "t2"]
    assert events == [
        "claim", "commit",
        "update t1", "commit", "notify", "ack m-t1", "commit",
        "update t2", "commit", "notify", "ack m-t2", "commit",
    ]


@pytest.mark.asyncio
async def test_notification_failure_keeps_committed_status_and_releases(events):
    container = StubContainer(
        RecordingQueue([_queued("t1")], events), events,
        notifier=RecordingNotifier(events, failing=True),
    )

    result = await worker.run_batch(container, 10)

    assert result.failed_message_ids == ["m-t1"]
    assert events == [
        "claim", "commit",
        "update t1", "commit", "notify", "rollback", "release m-t1", "commit",
    ]


@pytest.mark.asyncio
async def test_batch_size_limits_receive(events):
    messages = [_queued(f"t{i}") for i in range(5)]
    container = StubContainer(RecordingQueue(messages, events), events)

    result = await worker.run_batch(container, 2)

    assert result.total == 2

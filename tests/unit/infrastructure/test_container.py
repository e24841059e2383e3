"""build_container picks adapters from settings."""

import pytest

from ticketflow.adapters.error_log.jsonl_sink import JsonlErrorLogSink
from ticketflow.adapters.notifications.log_notifier import LogNotifier
from ticketflow.adapters.notifications.webhook_notifier import WebhookNotifier
from ticketflow.adapters.persistence.unit_of_work import SqlUnitOfWork
from ticketflow.config import Settings
from ticketflow.infrastructure.container import build_container


def _settings(**env) -> Settings:
    return Settings(_env_file=None, OPENAI_API_KEY="", OPENAI_MODEL="test-model", **env)


@pytest.mark.asyncio
async def test_defaults_log_notifications_and_skip_file_sink():
    container = build_container(_settings(NOTIFICATION_WEBHOOK_URL="", ERROR_LOG_DIR=""))

    assert isinstance(container.notifier, LogNotifier)
    assert container.reporter._sink is None
    assert container.model.model_id == "test-model"
    await container.aclose()


@pytest.mark.asyncio
async def test_webhook_and_file_sink_when_configured(tmp_path):
    container = build_container(
        _settings(
            NOTIFICATION_WEBHOOK_URL="https://hooks.example.test/support",
            ERROR_LOG_DIR=str(tmp_path),
        )
    )

    assert isinstance(container.notifier, WebhookNotifier)
    assert isinstance(container.reporter._sink, JsonlErrorLogSink)
    await container.aclose()


def test_generate_analytics_uses_model_settings():
    container = build_container(_settings(MODEL_MAX_INPUT_CHARS="100", MODEL_MAX_OUTPUT_TOKENS="64"))
    uc = container.generate_analytics()

    assert uc._max_input_chars == 100
    assert uc._max_tokens == 64


def test_process_batch_commits_through_the_request_session():
    container = build_container(_settings())
    session = object()

    uc = container.process_batch(session)

    assert isinstance(uc._uow, SqlUnitOfWork)
    assert uc._uow._s is session
    assert uc._queue._s is session

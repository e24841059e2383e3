"""Tests for OpenAIAdapter — uses a stub client, no network."""

from types import SimpleNamespace

import pytest
from openai import OpenAIError

from ticketflow.adapters.llm.openai_adapter import OpenAIAdapter
from ticketflow.application.ports.model_port import ModelRequest
from ticketflow.domain.errors import ModelInvocationError


class StubCompletions:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self._error is not None:
            raise self._error
        return self._response


def _response(*contents):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


def _adapter(completions: StubCompletions) -> OpenAIAdapter:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIAdapter(model="test-model", client=client)


REQUEST = ModelRequest(prompt="Classify this", max_tokens=256, temperature=0.1, top_p=0.9)


@pytest.mark.asyncio
async def test_returns_trimmed_reply_text():
    completions = StubCompletions(_response('  {"urgency": "LOW"}\n'))
    text = await _adapter(completions).complete(REQUEST)
    assert text == '{"urgency": "LOW"}'


@pytest.mark.asyncio
async def test_passes_generation_parameters():
    completions = StubCompletions(_response("ok"))
    await _adapter(completions).complete(REQUEST)
    assert completions.kwargs["model"] == "test-model"
    assert completions.kwargs["max_tokens"] == 256
    assert completions.kwargs["temperature"] == 0.1
    assert completions.kwargs["top_p"] == 0.9
    assert completions.kwargs["messages"][-1] == {"role": "user", "content": "Classify this"}


@pytest.mark.asyncio
async def test_sdk_error_becomes_model_invocation_error():
    completions = StubCompletions(error=OpenAIError("rate limited"))
    with pytest.raises(ModelInvocationError, match="rate limited"):
        await _adapter(completions).complete(REQUEST)


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [_response(), _response(None), _response("   ")])
async def test_empty_reply_is_an_invocation_error(response):
    with pytest.raises(ModelInvocationError):
        await _adapter(StubCompletions(response)).complete(REQUEST)


@pytest.mark.asyncio
async def test_missing_api_key_fails_every_call():
    adapter = OpenAIAdapter(api_key="", model="test-model")
    assert adapter.model_id == "test-model"
    with pytest.raises(ModelInvocationError, match="OPENAI_API_KEY"):
        await adapter.complete(REQUEST)

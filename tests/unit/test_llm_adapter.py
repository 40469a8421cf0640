# tests/unit/test_llm_adapter.py
from types import SimpleNamespace

import httpx
import openai
import pytest

from cookmate.config import Settings
from cookmate.core.models import ChatMessage
from cookmate.services.exceptions import LLMAuthError, LLMEmptyResponse, LLMUnavailable
from cookmate.services.llm import (
    CompletionResult,
    OpenAIChatCompleter,
    compose_turns,
    init_completer,
)

REQ = httpx.Request("POST", "https://llm.test/v1/chat/completions")


def _turns(n):
    return [ChatMessage(role="user" if i % 2 == 0 else "assistant", content=f"turn {i}") for i in range(n)]


def _completer_with(create):
    completer = OpenAIChatCompleter(Settings(openai_api_key="sk-test"))
    completer._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return completer


def test_compose_turns_keeps_last_ten_and_appends_message():
    turns = compose_turns(_turns(14), "what now?", limit=10)
    assert len(turns) == 11
    assert turns[0].content == "turn 4"
    assert turns[-1] == ChatMessage(role="user", content="what now?")


def test_compose_turns_does_not_repeat_the_current_message():
    history = [ChatMessage(role="user", content="hello")]
    assert compose_turns(history, "hello") == history


def test_require_content():
    assert CompletionResult(content="hi").require_content() == "hi"
    with pytest.raises(LLMEmptyResponse):
        CompletionResult(content="   ").require_content()
    with pytest.raises(LLMUnavailable):
        CompletionResult().require_content()


def test_missing_credential_is_reported_at_startup():
    result = init_completer(Settings(openai_api_key="your_groq_api_key_here"))
    assert not result.ok
    assert isinstance(result.error, LLMAuthError)
    assert result.error.missing_credential is True


def test_init_with_key():
    assert init_completer(Settings(openai_api_key="sk-test")).ok


def test_complete_maps_response():
    def create(**kwargs):
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
        assert kwargs["messages"][-1] == {"role": "user", "content": "hi"}
        msg = SimpleNamespace(content="hello there")
        return SimpleNamespace(model="m", choices=[SimpleNamespace(message=msg, finish_reason="stop")])

    result = _completer_with(create).complete("sys", [ChatMessage(role="user", content="hi")])
    assert result.content == "hello there"
    assert result.finish_reason == "stop"


def test_no_choices_means_no_content():
    result = _completer_with(lambda **kw: SimpleNamespace(model="m", choices=[])).complete("sys", [])
    assert result.content is None


@pytest.mark.parametrize("error,expected", [
    (openai.APIConnectionError(request=REQ), LLMUnavailable),
    (openai.APITimeoutError(request=REQ), LLMUnavailable),
    (openai.RateLimitError("slow down", response=httpx.Response(429, request=REQ), body=None), LLMUnavailable),
    (openai.InternalServerError("boom", response=httpx.Response(500, request=REQ), body=None), LLMUnavailable),
    (openai.AuthenticationError("bad key", response=httpx.Response(401, request=REQ), body=None), LLMAuthError),
])
def test_sdk_errors_are_translated(error, expected):
    def create(**kwargs):
        raise error

    with pytest.raises(expected) as info:
        _completer_with(create).complete("sys", [])
    if expected is LLMAuthError:
        assert info.value.missing_credential is False

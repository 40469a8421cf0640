from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import httpx
from pydantic import BaseModel

from .exceptions import LLMAuthError, LLMEmptyResponse, LLMError, LLMUnavailable
from cookmate.core.models import ChatMessage
from cookmate.config import Settings

# OpenAI SDK v1+
try:
    import openai
    from openai import OpenAI
except Exception as e:  # pragma: no cover
    raise LLMError("Failed to import OpenAI SDK. Install with `pip install openai`") from e

log = logging.getLogger(__name__)

JSON_SYSTEM_PROMPT = "You are a precise recipe generator returning strict JSON."


class CompletionResult(BaseModel):
    """What came back from one chat completion; ``content`` may be missing."""
    content: Optional[str] = None
    model: Optional[str] = None
    finish_reason: Optional[str] = None

    def require_content(self) -> str:
        if not self.content or not self.content.strip():
            raise LLMEmptyResponse("No response generated from the LLM")
        return self.content


def compose_turns(history: Sequence[ChatMessage], message: str, limit: int = 10) -> List[ChatMessage]:
    """The last ``limit`` turns, then ``message`` unless it already closes the history."""
    recent = list(history)[-limit:] if limit > 0 else []
    already_sent = bool(recent) and recent[-1].role == "user" and recent[-1].content == message
    if not already_sent:
        recent.append(ChatMessage(role="user", content=message))
    return recent


class ChatCompleter(BaseModel):
    """
    Interface-like base to keep types clear. Concrete impl below.
    """
    def complete(self, system_prompt: str, messages: Sequence[ChatMessage], **options: Any) -> CompletionResult:  # pragma: no cover - interface
        raise NotImplementedError

    def complete_prompt(self, prompt: str, system_prompt: str = JSON_SYSTEM_PROMPT, **options: Any) -> str:
        """One-shot prompt with no history; returns non-empty text or raises."""
        result = self.complete(system_prompt, [ChatMessage(role="user", content=prompt)], **options)
        return result.require_content()


class OpenAIChatCompleter(ChatCompleter):
    _client: OpenAI
    _model: str
    _settings: Settings

    def __init__(self, settings: Settings):
        super().__init__()
        if not settings.has_llm_credential():
            raise LLMAuthError(
                "OPENAI_API_KEY (or GROQ_API_KEY) is required. Add it to your .env file.",
                missing_credential=True,
            )
        try:
            self._client = OpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout=httpx.Timeout(settings.llm_timeout_seconds, connect=min(10.0, settings.llm_timeout_seconds)),
                max_retries=0,
            )
        except Exception as e:
            raise LLMError("Could not initialize OpenAI client") from e
        self._model = settings.openai_model_chat
        self._settings = settings

    @property
    def model(self) -> str:
        return self._model

    def complete(self, system_prompt: str, messages: Sequence[ChatMessage], **options: Any) -> CompletionResult:
        payload = [{"role": "system", "content": system_prompt}]
        payload.extend({"role": m.role, "content": m.content} for m in messages)
        try:
            resp = self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                max_tokens=options.get("max_tokens", self._settings.llm_max_tokens),
                temperature=options.get("temperature", self._settings.llm_temperature),
                top_p=options.get("top_p", self._settings.llm_top_p),
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise LLMAuthError(f"LLM rejected the credential: {e}") from e
        except openai.APITimeoutError as e:
            raise LLMUnavailable(f"LLM request timed out after {self._settings.llm_timeout_seconds}s") from e
        except openai.APIConnectionError as e:
            raise LLMUnavailable(f"Network error talking to the LLM: {e}") from e
        except openai.RateLimitError as e:
            raise LLMUnavailable(f"LLM quota or rate limit hit: {e}") from e
        except openai.APIStatusError as e:
            raise LLMUnavailable(f"LLM API error ({e.status_code}): {e}") from e
        except openai.OpenAIError as e:
            raise LLMUnavailable(f"LLM request failed: {e}") from e

        if not resp.choices:
            return CompletionResult(model=getattr(resp, "model", None))
        choice = resp.choices[0]
        content = choice.message.content if choice.message is not None else None
        return CompletionResult(content=content, model=resp.model, finish_reason=choice.finish_reason)


@dataclass
class CompleterInit:
    """Outcome of building the LLM client at startup: one of the two is set."""
    completer: Optional[ChatCompleter] = None
    error: Optional[LLMError] = None

    @property
    def ok(self) -> bool:
        return self.completer is not None


def init_completer(settings: Settings) -> CompleterInit:
    try:
        return CompleterInit(completer=OpenAIChatCompleter(settings))
    except LLMError as e:
        log.warning("LLM client not configured: %s", e)
        return CompleterInit(error=e)

from typing import Any, List, Optional

import pytest
from pydantic import ConfigDict

from cookmate.config import Settings
from cookmate.services.llm import ChatCompleter, CompletionResult


class FakeCompleter(ChatCompleter):
    """Returns canned replies in order and records every call."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    replies: List[Optional[str]] = []
    error: Optional[Exception] = None
    calls: List[Any] = []

    def complete(self, system_prompt, messages, **options):
        self.calls.append({"system": system_prompt, "messages": list(messages), "options": options})
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if self.replies else None
        return CompletionResult(content=content, model="fake")


@pytest.fixture
def fake_completer():
    def make(*replies, error=None):
        return FakeCompleter(replies=list(replies), error=error)
    return make


@pytest.fixture
def data_env(tmp_path, monkeypatch):
    # isolate data dir and drop any real credential
    d = tmp_path / "data"
    d.mkdir()
    monkeypatch.setenv("DATA_DIR", str(d))
    monkeypatch.setenv("PROFILES_FILE", str(d / "profiles.json"))
    monkeypatch.setenv("RECIPES_FILE", str(d / "recipes.json"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    return d


@pytest.fixture
def settings(data_env):
    return Settings()

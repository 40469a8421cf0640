"""Chat turn pipeline: classify the message, talk to the LLM, post-process the reply.

Non-cooking intents are answered locally. Cooking questions go to the LLM; the
reply is mined for recipe names (structured JSON first, heuristics second) and
reduced to the conversational text shown in the chat bubble.
"""
from __future__ import annotations

import logging
import random
from typing import Any, Callable, List, Optional, Sequence, Tuple

from cookmate.config import Settings
from cookmate.core.extractor import extract_recipes_from_response
from cookmate.core.ingredients import extract_ingredients
from cookmate.core.intents import classify
from cookmate.core.models import ChatRequest, ChatResponse, Classification, UserProfile
from cookmate.core.prompts import GRATITUDE_PROMPT, build_chat_system_prompt
from cookmate.core.replies import (
    DEVELOPER_REPLY,
    IDENTITY_REPLY,
    clean_gratitude_reply,
    gratitude_fallback,
    off_topic_reply,
    offline_reply,
)
from cookmate.core.sanitizer import sanitize
from cookmate.core.structured import parse_structured_recipes
from cookmate.services.exceptions import LLMAuthError, LLMError, LLMUnavailable
from cookmate.services.llm import ChatCompleter, compose_turns
from cookmate.services.metrics import MetricsLogger
from cookmate.services.repo.base import ProfileRepo, RecipeRepo
from cookmate.services.repo.profile_repo import find_profile

log = logging.getLogger(__name__)

GRATITUDE_SYSTEM_PROMPT = "You are CookMate, a friendly cooking assistant."
GRATITUDE_MAX_TOKENS = 150

# (name, servings, difficulty); the last two are only known for structured output
DetectedRecipe = Tuple[str, Optional[str], Optional[str]]
Defer = Callable[..., Any]


def _run_now(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
    fn(*args, **kwargs)


class ChatOrchestrator:
    """One chat turn from request to ``ChatResponse``.

    ``completer`` is None when no LLM credential was configured at startup;
    cooking questions then raise ``LLMAuthError(missing_credential=True)``.
    """

    def __init__(
        self,
        completer: Optional[ChatCompleter],
        profile_repo: ProfileRepo,
        recipe_repo: RecipeRepo,
        settings: Optional[Settings] = None,
        metrics: Optional[MetricsLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        self.completer = completer
        self.profile_repo = profile_repo
        self.recipe_repo = recipe_repo
        self.settings = settings or Settings()
        self.metrics = metrics
        self.rng = rng

    def handle(self, request: ChatRequest, user_id: str = "anonymous", defer: Optional[Defer] = None) -> ChatResponse:
        message = request.message
        kind = classify(message)
        log.info("Chat message classified as %s", kind.value)

        base = {"user_id": user_id, "session_id": request.session_id, "classification": kind}
        if kind is Classification.DEVELOPER:
            return ChatResponse(message=DEVELOPER_REPLY, is_developer_response=True, **base)
        if kind is Classification.IDENTITY:
            return ChatResponse(message=IDENTITY_REPLY, is_identity_response=True, **base)
        if kind is Classification.GRATITUDE:
            return ChatResponse(message=self._gratitude_reply(message), is_gratitude_response=True, **base)
        if kind is Classification.OFF_TOPIC:
            return ChatResponse(
                message=off_topic_reply(message, self.rng),
                is_off_topic=True,
                redirect_to_cooking=True,
                **base,
            )
        return self._on_topic(request, user_id, defer or _run_now, base)

    # ---- intents answered without recipes ----------------------------------

    def _gratitude_reply(self, message: str) -> str:
        if self.completer is None:
            return gratitude_fallback(self.rng)
        try:
            text = self.completer.complete_prompt(
                GRATITUDE_PROMPT.format(message=message),
                system_prompt=GRATITUDE_SYSTEM_PROMPT,
                max_tokens=GRATITUDE_MAX_TOKENS,
            )
        except LLMError as e:
            log.warning("Gratitude reply fell back to canned text: %s", e)
            return gratitude_fallback(self.rng)
        return clean_gratitude_reply(text)

    # ---- cooking questions ---------------------------------------------------

    def _complete(self, request: ChatRequest, profile: Optional[UserProfile], user_id: str) -> str:
        if self.completer is None:
            raise LLMAuthError(
                "OPENAI_API_KEY (or GROQ_API_KEY) is required. Add it to your .env file.",
                missing_credential=True,
            )
        turns = compose_turns(request.history, request.message, self.settings.history_limit)
        if self.metrics is None:
            return self.completer.complete(build_chat_system_prompt(profile), turns).require_content()
        with self.metrics.timed("chat_complete", user_id=user_id, history=len(turns) - 1):
            return self.completer.complete(build_chat_system_prompt(profile), turns).require_content()

    def _on_topic(self, request: ChatRequest, user_id: str, defer: Defer, base: dict) -> ChatResponse:
        message = request.message
        ingredients = sorted(extract_ingredients(message))

        try:
            raw = self._complete(request, find_profile(self.profile_repo, user_id), user_id)
        except LLMAuthError as e:
            if e.missing_credential:
                raise
            log.warning("LLM rejected the credential, answering offline: %s", e)
            return self._offline_response(message, ingredients, base)
        except LLMUnavailable as e:
            log.warning("LLM unavailable, answering offline: %s", e)
            return self._offline_response(message, ingredients, base)

        detected, consumed = self.detect_recipes(raw)
        reply = sanitize(raw, consumed)

        if detected:
            defer(self.persist_detected_recipes, detected, user_id)

        return ChatResponse(
            message=reply,
            detected_ingredients=ingredients,
            detected_recipes=[name for name, _, _ in detected],
            **base,
        )

    def _offline_response(self, message: str, ingredients: List[str], base: dict) -> ChatResponse:
        return ChatResponse(
            message=offline_reply(ingredients),
            detected_ingredients=ingredients,
            detected_recipes=extract_recipes_from_response(message),
            **base,
        )

    @staticmethod
    def detect_recipes(raw: str) -> Tuple[List[DetectedRecipe], Optional[str]]:
        """Recipe names in an LLM reply and the JSON block they came from, if any."""
        parsed = parse_structured_recipes(raw)
        if parsed is not None and parsed.recipes:
            seen = set()
            out: List[DetectedRecipe] = []
            for r in parsed.recipes:
                if r.title.lower() in seen:
                    continue
                seen.add(r.title.lower())
                out.append((r.title, r.servings, r.difficulty))
            return out, parsed.block
        consumed = parsed.block if parsed is not None else None
        return [(name, None, None) for name in extract_recipes_from_response(raw)], consumed

    def persist_detected_recipes(self, detected: Sequence[DetectedRecipe], user_id: str) -> None:
        """Store placeholders for detected names; failures are logged, never raised."""
        for name, servings, difficulty in detected:
            try:
                self.recipe_repo.upsert_detected_recipe(name, user_id, servings=servings, difficulty=difficulty)
            except Exception:
                log.exception("Failed to store detected recipe %r", name)

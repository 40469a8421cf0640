from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cookmate.api.deps import (
    get_completer,
    get_metrics,
    get_profile_repo,
    get_recipe_repo,
    get_settings,
    get_user_id,
)
from cookmate.config import Settings
from cookmate.core.models import ChatEnvelope, ChatRequest, ErrorPayload
from cookmate.services.chat import ChatOrchestrator
from cookmate.services.exceptions import LLMAuthError
from cookmate.services.llm import ChatCompleter
from cookmate.services.metrics import MetricsLogger

log = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

API_KEY_MESSAGE = (
    "An LLM API key is required for AI chat. Set OPENAI_API_KEY (or GROQ_API_KEY) "
    "in your .env file; Groq keys are free at https://console.groq.com/"
)
CHAT_ERROR_MESSAGE = "I'm having trouble responding right now. Please try again in a moment."

# ---- Dependencies ------------------------------------------------------------

def get_orchestrator(
    completer: Optional[ChatCompleter] = Depends(get_completer),
    profile_repo=Depends(get_profile_repo),
    recipe_repo=Depends(get_recipe_repo),
    settings: Settings = Depends(get_settings),
    metrics: MetricsLogger = Depends(get_metrics),
) -> ChatOrchestrator:
    return ChatOrchestrator(completer, profile_repo, recipe_repo, settings=settings, metrics=metrics)

def _error(status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content=ErrorPayload(error=code, message=message).model_dump(exclude_none=True))

# ---- Route ------------------------------------------------------------------

@router.post("/api/chat", response_model=ChatEnvelope)
def chat(
    background: BackgroundTasks,
    payload: Any = Body(None),
    user_id: str = Depends(get_user_id),
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    message = payload.get("message") if isinstance(payload, dict) else None
    if not isinstance(message, str) or not message:
        return JSONResponse(status_code=400, content={"error": "Message is required"})
    try:
        request = ChatRequest.model_validate(payload)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": "Invalid chat request", "details": e.errors(include_url=False)})

    try:
        response = orchestrator.handle(request, user_id, defer=background.add_task)
    except LLMAuthError as e:
        # only a missing credential reaches here; rejected keys get the offline reply
        log.error("Chat unavailable: %s", e)
        return _error(500, "API_KEY_REQUIRED", API_KEY_MESSAGE)
    except Exception:
        log.exception("Chat request failed")
        return _error(500, "CHAT_SERVICE_ERROR", CHAT_ERROR_MESSAGE)
    return ChatEnvelope(response=response)

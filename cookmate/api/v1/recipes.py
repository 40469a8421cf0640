from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cookmate.api.deps import (
    get_completer,
    get_metrics,
    get_profile_repo,
    get_recipe_cache,
    get_recipe_repo,
    get_user_id,
)
from cookmate.core.models import (
    ErrorPayload,
    RecipeDetailsResponse,
    RecipeGenerateRequest,
    RecipeGenerateResponse,
)
from cookmate.services.cache import RecipeCache
from cookmate.services.exceptions import LLMAuthError, LLMError
from cookmate.services.llm import ChatCompleter
from cookmate.services.metrics import MetricsLogger
from cookmate.services.recipe_details import RecipeDetailService, RecipeGenerator
from cookmate.services.repo.profile_repo import find_profile

log = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])

# ---- Dependencies ------------------------------------------------------------

def get_detail_service(
    completer: Optional[ChatCompleter] = Depends(get_completer),
    recipe_repo=Depends(get_recipe_repo),
    cache: RecipeCache = Depends(get_recipe_cache),
    metrics: MetricsLogger = Depends(get_metrics),
) -> RecipeDetailService:
    return RecipeDetailService(completer, recipe_repo, cache, metrics=metrics)

# ---- Route ------------------------------------------------------------------

@router.post("/api/recipe-details", response_model=RecipeDetailsResponse)
def recipe_details(
    payload: Any = Body(None),
    user_id: str = Depends(get_user_id),
    service: RecipeDetailService = Depends(get_detail_service),
    profile_repo=Depends(get_profile_repo),
):
    name = payload.get("recipeName") if isinstance(payload, dict) else None
    if not isinstance(name, str) or not name.strip():
        return JSONResponse(status_code=400, content={"error": "Recipe name is required"})
    name = name.strip()

    try:
        record, source, saved_id = service.get_details(name, user_id, find_profile(profile_repo, user_id))
    except LLMAuthError as e:
        if e.missing_credential:
            log.error("Recipe details unavailable: %s", e)
            return JSONResponse(status_code=500, content=ErrorPayload(
                error="API_KEY_REQUIRED",
                message="An LLM API key is required for recipe details generation.",
            ).model_dump(exclude_none=True))
        return _generation_failed(e)
    except LLMError as e:
        return _generation_failed(e)

    message = "Recipe retrieved from cache" if source == "cache" else "Recipe details generated successfully"
    return RecipeDetailsResponse(message=message, recipe=record, saved_recipe_id=saved_id, user_id=user_id)

def _generation_failed(e: Exception) -> JSONResponse:
    log.warning("Recipe details generation failed: %s", e)
    return JSONResponse(status_code=500, content=ErrorPayload(
        error="RECIPE_DETAILS_GENERATION_FAILED",
        message="I'm having trouble generating the recipe details. Please try again.",
        details={"reason": str(e)},
    ).model_dump(exclude_none=True))


def get_recipe_generator(
    completer: Optional[ChatCompleter] = Depends(get_completer),
    recipe_repo=Depends(get_recipe_repo),
    metrics: MetricsLogger = Depends(get_metrics),
) -> RecipeGenerator:
    return RecipeGenerator(completer, recipe_repo, metrics=metrics)


@router.post("/api/generate-recipe", response_model=RecipeGenerateResponse)
def generate_recipe(
    payload: Any = Body(None),
    user_id: str = Depends(get_user_id),
    generator: RecipeGenerator = Depends(get_recipe_generator),
    profile_repo=Depends(get_profile_repo),
):
    try:
        request = RecipeGenerateRequest.model_validate(payload if isinstance(payload, dict) else {})
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": "Invalid recipe request", "details": e.errors(include_url=False)})

    try:
        record, ingredients, saved_id = generator.generate(request, user_id, find_profile(profile_repo, user_id))
    except LLMAuthError as e:
        if e.missing_credential:
            log.error("Recipe generation unavailable: %s", e)
            return JSONResponse(status_code=500, content=ErrorPayload(
                error="API_KEY_REQUIRED",
                message="An LLM API key is required for recipe generation.",
            ).model_dump(exclude_none=True))
        return _recipe_generation_failed(e)
    except LLMError as e:
        return _recipe_generation_failed(e)

    return RecipeGenerateResponse(
        message="Recipe generation successful",
        recipe=record,
        saved_recipe_id=saved_id,
        detected_ingredients=ingredients,
        user_id=user_id,
    )

def _recipe_generation_failed(e: Exception) -> JSONResponse:
    log.warning("Recipe generation failed: %s", e)
    return JSONResponse(status_code=500, content=ErrorPayload(
        error="RECIPE_GENERATION_FAILED",
        message="I'm having trouble creating that recipe. Can you try again?",
        details={"reason": str(e)},
    ).model_dump(exclude_none=True))

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from cookmate.api.deps import get_completer, get_profile_repo, get_user_id
from cookmate.core.models import IngredientSuggestRequest, IngredientSuggestResponse
from cookmate.services.llm import ChatCompleter
from cookmate.services.recipe_details import IngredientSuggester
from cookmate.services.repo.profile_repo import find_profile

router = APIRouter(tags=["suggestions"])

# ---- Dependencies ------------------------------------------------------------

def get_suggester(completer: Optional[ChatCompleter] = Depends(get_completer)) -> IngredientSuggester:
    # no completer means the rule table answers every request
    return IngredientSuggester(completer)

# ---- Route ------------------------------------------------------------------

@router.post("/api/suggest-ingredients", response_model=IngredientSuggestResponse)
def suggest_ingredients(
    body: IngredientSuggestRequest,
    user_id: str = Depends(get_user_id),
    suggester: IngredientSuggester = Depends(get_suggester),
    profile_repo=Depends(get_profile_repo),
):
    profile = find_profile(profile_repo, user_id) if body.available_ingredients else None
    suggestions, source = suggester.suggest(body.available_ingredients, profile)
    message = "AI-generated ingredient suggestions" if source == "ai" else "Smart ingredient suggestions generated"
    return IngredientSuggestResponse(suggestions=suggestions, message=message, user_id=user_id)

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from cookmate.core.ingredients import extract_ingredients
from cookmate.core.models import NutritionInfo, RecipeGenerateRequest, RecipeRecord, UserProfile
from cookmate.core.prompts import (
    build_generate_recipe_prompt,
    build_recipe_details_prompt,
    build_suggest_ingredients_prompt,
    youtube_search_url,
)
from cookmate.services.cache import RecipeCache
from cookmate.services.exceptions import LLMAuthError, LLMError
from cookmate.services.llm import ChatCompleter
from cookmate.services.metrics import MetricsLogger
from cookmate.services.repo.base import RecipeRepo
from cookmate.services.repo.recipe_repo import recipe_id_for

log = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_INGREDIENTS_HEADING_RE = re.compile(r"^ingredients?\s*:?", re.IGNORECASE)
_INSTRUCTIONS_HEADING_RE = re.compile(r"^(?:instructions?|directions?|steps?)\s*:?", re.IGNORECASE)
_ITEM_RE = re.compile(r"^(?:[•\-*]|\d+\.)\s*")

_REQUIRED_FIELDS = ("title", "ingredients", "instructions")


def _missing_key_error() -> LLMAuthError:
    return LLMAuthError(
        "OPENAI_API_KEY (or GROQ_API_KEY) is required for recipe details generation.",
        missing_credential=True,
    )


def _as_list(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(v) for v in value if v]
    return [str(value)] if value else []


# ---- Parsing the LLM's detail payload ------------------------------------------

def parse_details_json(text: str) -> Optional[Dict[str, Any]]:
    """Outermost ``{...}`` of ``text`` with fences removed, if it has the core fields."""
    cleaned = _FENCE_RE.sub("", text or "").replace("```", "").strip()
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        log.warning("Recipe details JSON did not parse: %s", e)
        return None
    if not isinstance(data, dict) or not all(data.get(k) for k in _REQUIRED_FIELDS):
        return None
    data["ingredients"] = _as_list(data["ingredients"])
    data["instructions"] = _as_list(data["instructions"])
    return data


def parse_details_sections(text: str, name: str) -> Optional[Dict[str, Any]]:
    """Scan Ingredients/Instructions headings for bullet or numbered items; needs both."""
    ingredients: List[str] = []
    instructions: List[str] = []
    section = ""
    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue
        if _INGREDIENTS_HEADING_RE.match(line):
            section = "ingredients"
            continue
        if _INSTRUCTIONS_HEADING_RE.match(line):
            section = "instructions"
            continue
        if not section or not _ITEM_RE.match(line):
            continue
        item = _ITEM_RE.sub("", line, count=1)
        if item:
            (ingredients if section == "ingredients" else instructions).append(item)

    if not ingredients or not instructions:
        return None
    return {
        "title": name,
        "description": f"A delicious {name} recipe made with fresh ingredients",
        "ingredients": ingredients,
        "instructions": instructions,
        "cookingTime": "30-45 minutes",
        "servings": "4",
        "difficulty": "Medium",
        "estimatedCost": "$10-15",
        "nutritionInfo": {
            "calories": "350-450 per serving",
            "protein": "20-30 grams",
            "carbs": "30-40 grams",
            "fat": "15-25 grams",
        },
        "tips": ["Use fresh ingredients for best results", "Taste and adjust seasoning as needed"],
    }


def minimal_details(name: str) -> Dict[str, Any]:
    return {
        "title": name,
        "description": f"A delicious {name} recipe. Click on the recipe card to get detailed ingredients and instructions.",
        "ingredients": ["Please click on the recipe card to get detailed ingredients"],
        "instructions": ["Please click on the recipe card to get detailed cooking instructions"],
        "cookingTime": "Varies",
        "tips": ["Use fresh ingredients", "Cook to proper temperature", "Taste and adjust seasoning"],
    }


def to_record(data: Dict[str, Any], name: str) -> RecipeRecord:
    """Coerce a loosely shaped detail payload into a ``RecipeRecord``."""
    title = str(data.get("title") or name).strip() or name
    nutrition = data.get("nutritionInfo")
    fields = {
        "id": recipe_id_for(title),
        "title": title,
        "description": str(data.get("description") or ""),
        "ingredients": _as_list(data.get("ingredients")),
        "instructions": _as_list(data.get("instructions")),
        "tips": _as_list(data.get("tips")),
        "youtube_search_query": str(data.get("youtubeSearchQuery") or f"{name} recipe tutorial"),
    }
    for key, attr in (("cookingTime", "cooking_time"), ("servings", "servings"),
                      ("difficulty", "difficulty"), ("estimatedCost", "estimated_cost")):
        value = data.get(key)
        if value not in (None, ""):
            fields[attr] = str(value)
    if isinstance(nutrition, dict):
        fields["nutrition_info"] = NutritionInfo(
            **{k: str(v) for k, v in nutrition.items() if k in NutritionInfo.model_fields and v is not None}
        )
    return RecipeRecord(**fields)


# ---- Services --------------------------------------------------------------------

class RecipeDetailService:
    """Full recipe for a name: cache, then recipe store, then the LLM."""

    def __init__(
        self,
        completer: Optional[ChatCompleter],
        recipe_repo: RecipeRepo,
        cache: RecipeCache,
        metrics: Optional[MetricsLogger] = None,
    ):
        self.completer = completer
        self.recipe_repo = recipe_repo
        self.cache = cache
        self.metrics = metrics

    def lookup(self, name: str) -> Optional[RecipeRecord]:
        cached = self.cache.get_full(name)
        if cached is not None:
            return cached
        try:
            stored = self.recipe_repo.get_recipe_by_name(name)
        except Exception as e:
            log.warning("Recipe store lookup failed for %r, generating instead: %s", name, e)
            return None
        if stored is None or stored.is_placeholder():
            return None
        self.cache.set(name, stored)
        return stored

    def generate(self, name: str, profile: Optional[UserProfile] = None, user_id: str = "anonymous") -> RecipeRecord:
        """Ask the LLM for details; parse as JSON, then as sections, then give a minimal record."""
        if self.completer is None:
            raise _missing_key_error()
        prompt = build_recipe_details_prompt(name, profile)
        if self.metrics is None:
            text = self.completer.complete_prompt(prompt)
        else:
            with self.metrics.timed("recipe_details_generate", user_id=user_id, recipe=name):
                text = self.completer.complete_prompt(prompt)

        data = parse_details_json(text)
        if data is None:
            log.warning("Recipe details for %r were not valid JSON, scanning sections", name)
            data = parse_details_sections(text, name)
        if data is None:
            log.warning("No usable recipe details for %r, returning a minimal record", name)
            data = minimal_details(name)
        try:
            record = to_record(data, name)
        except ValidationError as e:
            log.warning("Recipe details for %r had bad field types: %s", name, e)
            record = to_record(minimal_details(name), name)
        return record.model_copy(update={"youtube_url": youtube_search_url(record.youtube_search_query)})

    def get_details(
        self,
        name: str,
        user_id: str = "anonymous",
        profile: Optional[UserProfile] = None,
    ) -> Tuple[RecipeRecord, str, Optional[str]]:
        """Returns ``(record, source, saved_recipe_id)``; source is "cache" or "generated"."""
        found = self.lookup(name)
        if found is not None:
            return found, "cache", found.id

        record = self.generate(name, profile, user_id)
        self.cache.set(name, record)

        saved_id = None
        if user_id and user_id != "anonymous":
            try:
                saved_id = self.recipe_repo.save_recipe(record, user_id)
            except Exception as e:
                log.warning("Could not save recipe %r for %s: %s", name, user_id, e)
        return record, "generated", saved_id


DEFAULT_SUGGESTIONS = ("Garlic", "Olive Oil", "Salt", "Black Pepper", "Fresh Herbs")

# first row whose keys intersect the available ingredients wins
SUGGESTION_RULES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("chicken",), ("Garlic", "Lemon", "Olive Oil", "Fresh Herbs", "Bell Peppers")),
    (("beef",), ("Onion", "Tomato", "Bay Leaves", "Black Pepper", "Carrots")),
    (("fish", "salmon", "shrimp"), ("Lemon", "Dill", "Butter", "Capers", "White Wine")),
    (("pasta",), ("Garlic", "Olive Oil", "Parmesan", "Basil", "Cherry Tomatoes")),
    (("rice",), ("Onion", "Chicken Broth", "Soy Sauce", "Sesame Oil", "Green Onions")),
    (("vegetables", "broccoli", "spinach"), ("Olive Oil", "Garlic", "Salt", "Black Pepper", "Lemon Juice")),
    (("mushrooms",), ("Butter", "Garlic", "Thyme", "White Wine", "Parmesan")),
    (("potatoes",), ("Rosemary", "Olive Oil", "Garlic", "Salt", "Black Pepper")),
)


def rule_based_suggestions(available: Sequence[str]) -> List[str]:
    have = {a.strip().lower() for a in available}
    for keys, suggestions in SUGGESTION_RULES:
        if have.intersection(keys):
            return list(suggestions)
    return list(DEFAULT_SUGGESTIONS)


def parse_suggestions(text: str) -> List[str]:
    start, end = text.find("["), text.rfind("]")
    if start == -1 or end <= start:
        return []
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return []
    if not isinstance(data, list):
        return []
    return [str(s).strip() for s in data if isinstance(s, (str, int, float)) and str(s).strip()]


class IngredientSuggester:
    """Complementary ingredients from the LLM, with a local rule table as fallback."""

    def __init__(self, completer: Optional[ChatCompleter]):
        self.completer = completer

    def suggest(self, available: Sequence[str], profile: Optional[UserProfile] = None) -> Tuple[List[str], str]:
        """Returns ``(suggestions, source)`` where source is "ai" or "rules"."""
        if available and self.completer is not None:
            try:
                text = self.completer.complete_prompt(build_suggest_ingredients_prompt(list(available), profile))
                suggestions = parse_suggestions(text)
                if suggestions:
                    return suggestions, "ai"
                log.warning("LLM suggestions were not a JSON array, using rules")
            except LLMError as e:
                log.warning("AI suggestion failed, using rules: %s", e)
        return rule_based_suggestions(available), "rules"


GENERATED_FALLBACK_TITLE = "AI Generated Recipe"


def fallback_generated_details(text: str, ingredients: Sequence[str]) -> Dict[str, Any]:
    """Keep an unparseable reply as the recipe body, one instruction per line."""
    return {
        "title": GENERATED_FALLBACK_TITLE,
        "description": text.strip(),
        "ingredients": list(ingredients) or ["Please specify ingredients"],
        "instructions": [line.strip() for line in text.splitlines() if line.strip()],
        "cookingTime": "30-45 minutes",
        "servings": "4",
        "difficulty": "Medium",
    }


class RecipeGenerator:
    """A brand-new recipe from free text and/or ingredients, saved for signed-in users."""

    def __init__(
        self,
        completer: Optional[ChatCompleter],
        recipe_repo: RecipeRepo,
        metrics: Optional[MetricsLogger] = None,
    ):
        self.completer = completer
        self.recipe_repo = recipe_repo
        self.metrics = metrics

    def generate(
        self,
        request: RecipeGenerateRequest,
        user_id: str = "anonymous",
        profile: Optional[UserProfile] = None,
    ) -> Tuple[RecipeRecord, List[str], Optional[str]]:
        """Returns ``(record, ingredients_used, saved_recipe_id)``."""
        if self.completer is None:
            raise LLMAuthError(
                "OPENAI_API_KEY (or GROQ_API_KEY) is required for recipe generation.",
                missing_credential=True,
            )
        ingredients = [i.strip() for i in request.ingredients if i and i.strip()]
        if not ingredients and request.user_message:
            ingredients = sorted(extract_ingredients(request.user_message))

        prompt = build_generate_recipe_prompt(
            ingredients, profile, request.dietary_preferences, request.recipe_type,
        )
        if self.metrics is None:
            text = self.completer.complete_prompt(prompt)
        else:
            with self.metrics.timed("recipe_generate", user_id=user_id):
                text = self.completer.complete_prompt(prompt)

        data = parse_details_json(text)
        if data is None:
            log.warning("Generated recipe was not valid JSON, keeping the raw reply")
            data = fallback_generated_details(text, ingredients)
        try:
            record = to_record(data, GENERATED_FALLBACK_TITLE)
        except ValidationError as e:
            log.warning("Generated recipe had bad field types: %s", e)
            record = to_record(fallback_generated_details(text, ingredients), GENERATED_FALLBACK_TITLE)

        saved_id = None
        if user_id and user_id != "anonymous":
            try:
                saved_id = self.recipe_repo.save_recipe(record, user_id)
            except Exception as e:
                log.warning("Could not save generated recipe %r for %s: %s", record.title, user_id, e)
        return record, ingredients, saved_id

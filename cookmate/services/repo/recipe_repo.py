from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from cookmate.core.models import RecipeRecord
from cookmate.services.exceptions import RepoError
from .base import RecipeRepo
from .json_repo import JSONDocumentFile

MAX_ID_LENGTH = 50

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

DETECTED_DESCRIPTION = "A delicious {title} recipe to try"
DETECTED_INGREDIENTS = "Click on the recipe card to get detailed ingredients"
DETECTED_INSTRUCTIONS = "Click on the recipe card to get detailed instructions"
DETECTED_TIPS = "Click on the recipe to get detailed cooking tips"


def recipe_id_for(name: str) -> str:
    """Stable document id for a recipe name: ``"Chicken Adobo!"`` -> ``"chicken_adobo"``."""
    if not name:
        return ""
    slug = _NON_ALNUM_RE.sub("_", name.strip().lower())
    return slug.strip("_")[:MAX_ID_LENGTH]


def placeholder_record(name: str, user_id: str, servings: Optional[str] = None,
                       difficulty: Optional[str] = None) -> RecipeRecord:
    return RecipeRecord(
        id=recipe_id_for(name),
        title=name,
        description=DETECTED_DESCRIPTION.format(title=name),
        ingredients=[DETECTED_INGREDIENTS],
        instructions=[DETECTED_INSTRUCTIONS],
        servings=servings or "4",
        difficulty=difficulty or "Medium",
        tips=[DETECTED_TIPS],
        youtube_search_query=f"{name} recipe tutorial",
        user_id=user_id,
        is_detected=True,
    )


class JSONRecipeRepo(RecipeRepo):
    """Full and detected recipes in one JSON file.

    Layout: ``{"recipes": {id: record}, "detected": {id: record}}``. Generated
    details live under ``recipes``; names only seen in chat replies get a
    placeholder under ``detected``.
    """

    def __init__(self, settings):
        self._doc = JSONDocumentFile(settings.recipes_file)

    @staticmethod
    def _section(obj: Dict[str, Any], key: str) -> Dict[str, Any]:
        section = obj.get(key)
        if not isinstance(section, dict):
            section = {}
            obj[key] = section
        return section

    def _to_record(self, data: Any) -> RecipeRecord:
        try:
            return RecipeRecord.model_validate(data)
        except ValidationError as e:
            raise RepoError(f"Corrupt recipe in {self._doc.path}: {e}") from e

    def upsert_detected_recipe(self, name: str, user_id: str = "anonymous",
                               servings: Optional[str] = None,
                               difficulty: Optional[str] = None) -> str:
        """Store a placeholder for ``name`` unless one exists; returns the id either way."""
        title = (name or "").strip()
        recipe_id = recipe_id_for(title)
        if not recipe_id:
            raise RepoError(f"Cannot store a recipe without a usable title: {name!r}")
        with self._doc.transaction() as obj:
            detected = self._section(obj, "detected")
            if recipe_id not in detected:
                record = placeholder_record(title, user_id, servings, difficulty)
                detected[recipe_id] = record.model_dump(mode="json", by_alias=True)
        return recipe_id

    def get_recipe_by_name(self, name: str) -> Optional[RecipeRecord]:
        """Full record by id, then by exact title, then the detected placeholder."""
        obj = self._doc.read()
        recipe_id = recipe_id_for(name)
        recipes = obj.get("recipes") or {}
        if recipe_id in recipes:
            return self._to_record(recipes[recipe_id])
        for data in recipes.values():
            if isinstance(data, dict) and data.get("title") == name:
                return self._to_record(data)
        detected = obj.get("detected") or {}
        if recipe_id in detected:
            return self._to_record(detected[recipe_id])
        return None

    def save_recipe(self, record: RecipeRecord, user_id: str) -> str:
        recipe_id = recipe_id_for(record.title)
        if not recipe_id:
            raise RepoError(f"Cannot store a recipe without a usable title: {record.title!r}")
        stored = record.model_copy(update={
            "id": recipe_id,
            "user_id": user_id,
            "created_at": datetime.now(timezone.utc),
            "is_detected": False,
        })
        with self._doc.transaction() as obj:
            self._section(obj, "recipes")[recipe_id] = stored.model_dump(mode="json", by_alias=True)
        return recipe_id

# cookmate/core/models.py
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (the frontend's shape)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------- Conversation ----------

class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1)
    history: List[ChatMessage] = Field(default_factory=list)
    session_id: Optional[str] = None


class Classification(str, Enum):
    DEVELOPER = "developer"
    IDENTITY = "identity"
    GRATITUDE = "gratitude"
    OFF_TOPIC = "off_topic"
    ON_TOPIC = "on_topic"


class ChatResponse(CamelModel):
    message: str
    detected_ingredients: List[str] = Field(default_factory=list)
    detected_recipes: List[str] = Field(default_factory=list)
    classification: Classification = Classification.ON_TOPIC
    is_developer_response: bool = False
    is_identity_response: bool = False
    is_gratitude_response: bool = False
    is_off_topic: bool = False
    redirect_to_cooking: bool = False
    user_id: str = "anonymous"
    session_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ChatEnvelope(BaseModel):
    """Body of a successful POST /api/chat."""
    response: ChatResponse


# ---------- Recipe extraction ----------

class RecipeCandidate(BaseModel):
    """Raw substring pulled out of LLM text, tagged with the strategy that found it."""
    text: str
    source: str = "unknown"


_DIFFICULTIES = {"easy": "Easy", "medium": "Medium", "hard": "Hard"}


class StructuredRecipe(BaseModel):
    """One element of the ``recipes`` array in the LLM's trailing JSON block."""
    title: str = Field(..., min_length=1, validation_alias=AliasChoices("title", "name"))
    servings: Optional[str] = None
    difficulty: Optional[Literal["Easy", "Medium", "Hard"]] = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("servings", mode="before")
    @classmethod
    def _servings_as_text(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(int(v)) if float(v).is_integer() else str(v)
        v = str(v).strip()
        return v or None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, v: Any) -> Optional[str]:
        # LLMs write "easy", "EASY", "Easy to medium"...; keep only the exact levels
        if not isinstance(v, str):
            return None
        return _DIFFICULTIES.get(v.strip().lower())


class StructuredParse(BaseModel):
    recipes: List[StructuredRecipe] = Field(default_factory=list)
    block: str = Field(..., description="Exact substring the recipes were decoded from")


# ---------- Profiles ----------

class UserProfile(CamelModel):
    is_vegan: bool = False
    is_diabetic: bool = False
    is_on_diet: bool = False
    allergies: List[str] = Field(default_factory=list)
    prefers_spicy: bool = False
    prefers_salty: bool = False
    disliked_ingredients: List[str] = Field(default_factory=list)
    nationality: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[str] = None


# ---------- Recipe details ----------

PLACEHOLDER_MARKER = "Click on the recipe"


class NutritionInfo(BaseModel):
    calories: str = "Varies"
    protein: str = "Varies"
    carbs: str = "Varies"
    fat: str = "Varies"


class RecipeRecord(CamelModel):
    id: str
    title: str
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    cooking_time: str = "30 mins"
    servings: str = "4"
    difficulty: str = "Medium"
    estimated_cost: str = "Moderate"
    nutrition_info: NutritionInfo = Field(default_factory=NutritionInfo)
    tips: List[str] = Field(default_factory=list)
    youtube_search_query: Optional[str] = None
    youtube_url: Optional[str] = None
    user_id: str = "anonymous"
    created_at: datetime = Field(default_factory=_utcnow)
    is_detected: bool = False

    def is_placeholder(self) -> bool:
        """True for the stub written when a name is only detected, never generated."""
        if not self.ingredients:
            return True
        return PLACEHOLDER_MARKER.lower() in self.ingredients[0].lower()


class RecipeDetailsRequest(CamelModel):
    recipe_name: str = Field(..., min_length=1)


class RecipeDetailsResponse(CamelModel):
    message: str
    recipe: RecipeRecord
    saved_recipe_id: Optional[str] = None
    user_id: str = "anonymous"


class RecipeGenerateRequest(CamelModel):
    user_message: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    dietary_preferences: Optional[str] = None
    recipe_type: Optional[str] = None


class RecipeGenerateResponse(CamelModel):
    message: str
    recipe: RecipeRecord
    saved_recipe_id: Optional[str] = None
    detected_ingredients: List[str] = Field(default_factory=list)
    user_id: str = "anonymous"


class IngredientSuggestRequest(CamelModel):
    available_ingredients: List[str] = Field(default_factory=list)


class IngredientSuggestResponse(CamelModel):
    suggestions: List[str]
    message: str
    user_id: str = "anonymous"


class ErrorPayload(BaseModel):
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None

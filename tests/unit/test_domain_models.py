# tests/unit/test_domain_models.py
import pytest

from cookmate.core.models import (
    ChatRequest,
    ChatResponse,
    RecipeRecord,
    StructuredRecipe,
    UserProfile,
)


def test_chat_request_accepts_camel_case():
    req = ChatRequest.model_validate({
        "message": "hi",
        "history": [{"role": "user", "content": "hello"}],
        "sessionId": "s-1",
    })
    assert req.session_id == "s-1"
    assert req.history[0].role == "user"


def test_chat_request_rejects_empty_message():
    with pytest.raises(Exception):
        ChatRequest(message="")


def test_chat_response_dumps_camel_case():
    body = ChatResponse(message="ok", detected_recipes=["Beef Stew"]).model_dump(by_alias=True, mode="json")
    assert body["detectedRecipes"] == ["Beef Stew"]
    assert body["classification"] == "on_topic"
    assert body["isOffTopic"] is False


def test_structured_recipe_coercions():
    r = StructuredRecipe.model_validate({"name": "  Beef Stew ", "servings": 2.5, "difficulty": "HARD"})
    assert r.title == "Beef Stew"
    assert r.servings == "2.5"
    assert r.difficulty == "Hard"
    assert StructuredRecipe(title="X Dish", servings=True).servings is None


def test_placeholder_detection():
    assert RecipeRecord(id="a", title="A").is_placeholder()
    assert RecipeRecord(id="a", title="A", ingredients=["Click on the recipe card to get detailed ingredients"]).is_placeholder()
    assert RecipeRecord(id="a", title="A", ingredients=["Please click on the recipe card"]).is_placeholder()
    assert not RecipeRecord(id="a", title="A", ingredients=["2 cups rice"]).is_placeholder()


def test_profile_round_trip_by_alias():
    p = UserProfile.model_validate({"isVegan": True, "allergies": ["peanuts"], "age": 30})
    dumped = p.model_dump(by_alias=True)
    assert dumped["isVegan"] is True
    assert UserProfile.model_validate(dumped) == p


def test_profile_age_cannot_be_negative():
    with pytest.raises(Exception):
        UserProfile(age=-1)


def test_timestamps_are_timezone_aware():
    assert RecipeRecord(id="beef_stew", title="Beef Stew").created_at.tzinfo is not None
    assert ChatResponse(message="ok").timestamp.tzinfo is not None

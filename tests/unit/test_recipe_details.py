# tests/unit/test_recipe_details.py
import json

import pytest

from cookmate.core.models import RecipeGenerateRequest, RecipeRecord, UserProfile
from cookmate.services.cache import RecipeCache
from cookmate.services.exceptions import LLMAuthError, LLMUnavailable
from cookmate.services.recipe_details import (
    GENERATED_FALLBACK_TITLE,
    IngredientSuggester,
    RecipeDetailService,
    RecipeGenerator,
    parse_details_json,
    parse_details_sections,
    parse_suggestions,
    rule_based_suggestions,
)
from cookmate.services.repo.recipe_repo import JSONRecipeRepo

DETAILS = {
    "title": "Beef Stew",
    "description": "Hearty.",
    "ingredients": ["1 lb beef", "2 carrots"],
    "instructions": "Simmer everything for two hours.",
    "cookingTime": "2 hours",
    "servings": 6,
    "difficulty": "Easy",
    "nutritionInfo": {"calories": "400", "protein": "30g"},
    "tips": ["Brown the beef first"],
    "youtubeSearchQuery": "Beef Stew recipe tutorial",
}


def test_parse_details_json_strips_fences_and_coerces_lists():
    data = parse_details_json("```json\n" + json.dumps(DETAILS) + "\n```")
    assert data["instructions"] == ["Simmer everything for two hours."]


def test_parse_details_json_needs_core_fields():
    assert parse_details_json('{"title": "Beef Stew"}') is None
    assert parse_details_json("no braces") is None


def test_parse_details_sections():
    text = "Ingredients:\n- 1 lb beef\n- 2 carrots\nInstructions:\n1. Brown the beef\n2. Simmer"
    data = parse_details_sections(text, "Beef Stew")
    assert data["ingredients"] == ["1 lb beef", "2 carrots"]
    assert data["instructions"] == ["Brown the beef", "Simmer"]
    assert parse_details_sections("Ingredients:\n- beef", "Beef Stew") is None


def test_generated_details_are_cached_and_saved(settings, fake_completer):
    completer = fake_completer(json.dumps(DETAILS))
    repo = JSONRecipeRepo(settings)
    cache = RecipeCache()
    service = RecipeDetailService(completer, repo, cache)

    record, source, saved_id = service.get_details("Beef Stew", "u1")
    assert source == "generated"
    assert saved_id == "beef_stew"
    assert record.servings == "6"
    assert record.nutrition_info.calories == "400"
    assert record.nutrition_info.fat == "Varies"
    assert record.youtube_url.endswith("search_query=Beef+Stew+recipe+tutorial")
    assert cache.get_full("Beef Stew") is record

    again, source, _ = service.get_details("Beef Stew", "u1")
    assert source == "cache"
    assert again is record
    assert len(completer.calls) == 1


def test_anonymous_users_are_not_saved(settings, fake_completer):
    repo = JSONRecipeRepo(settings)
    service = RecipeDetailService(fake_completer(json.dumps(DETAILS)), repo, RecipeCache())
    _, _, saved_id = service.get_details("Beef Stew", "anonymous")
    assert saved_id is None
    assert repo.get_recipe_by_name("Beef Stew") is None


def test_placeholders_in_the_store_are_regenerated(settings, fake_completer):
    repo = JSONRecipeRepo(settings)
    repo.upsert_detected_recipe("Beef Stew", "u1")
    completer = fake_completer(json.dumps(DETAILS))
    record, source, _ = RecipeDetailService(completer, repo, RecipeCache()).get_details("Beef Stew")
    assert source == "generated"
    assert not record.is_placeholder()


def test_full_store_record_is_served_and_cached(settings, fake_completer):
    repo = JSONRecipeRepo(settings)
    repo.save_recipe(RecipeRecord(id="x", title="Beef Stew", ingredients=["beef"]), "u1")
    cache = RecipeCache()
    completer = fake_completer()
    record, source, _ = RecipeDetailService(completer, repo, cache).get_details("Beef Stew")
    assert source == "cache"
    assert cache.get_full("Beef Stew") == record
    assert completer.calls == []


def test_unusable_reply_gives_a_minimal_record(settings, fake_completer):
    service = RecipeDetailService(fake_completer("Sorry, no idea."), JSONRecipeRepo(settings), RecipeCache())
    record, _, _ = service.get_details("Beef Stew")
    assert record.title == "Beef Stew"
    assert record.is_placeholder()


def test_llm_failures_propagate(settings, fake_completer):
    service = RecipeDetailService(fake_completer(error=LLMUnavailable("down")), JSONRecipeRepo(settings), RecipeCache())
    with pytest.raises(LLMUnavailable):
        service.get_details("Beef Stew")

    service = RecipeDetailService(None, JSONRecipeRepo(settings), RecipeCache())
    with pytest.raises(LLMAuthError) as info:
        service.get_details("Beef Stew")
    assert info.value.missing_credential


def test_rule_table():
    assert rule_based_suggestions(["Chicken", "rice"])[0] == "Garlic"
    assert rule_based_suggestions(["salmon"]) == ["Lemon", "Dill", "Butter", "Capers", "White Wine"]
    assert rule_based_suggestions([]) == ["Garlic", "Olive Oil", "Salt", "Black Pepper", "Fresh Herbs"]


def test_parse_suggestions():
    assert parse_suggestions('Sure: ["Garlic", "Lemon"]') == ["Garlic", "Lemon"]
    assert parse_suggestions("Garlic and lemon") == []


def test_suggester_prefers_ai_then_rules(fake_completer):
    ai = IngredientSuggester(fake_completer('["Ginger", "Scallions"]'))
    assert ai.suggest(["rice"]) == (["Ginger", "Scallions"], "ai")

    broken = IngredientSuggester(fake_completer(error=LLMUnavailable("down")))
    assert broken.suggest(["beef"]) == (["Onion", "Tomato", "Bay Leaves", "Black Pepper", "Carrots"], "rules")

    assert IngredientSuggester(None).suggest(["pasta"])[1] == "rules"


def test_generator_uses_given_ingredients_and_profile(settings, fake_completer):
    completer = fake_completer("```json\n" + json.dumps(DETAILS) + "\n```")
    repo = JSONRecipeRepo(settings)
    request = RecipeGenerateRequest(ingredients=["beef", "carrots"], recipe_type="stew", dietary_preferences="low salt")

    record, used, saved_id = RecipeGenerator(completer, repo).generate(
        request, "u1", UserProfile(allergies=["peanuts"]),
    )
    assert record.title == "Beef Stew"
    assert used == ["beef", "carrots"]
    assert saved_id == "beef_stew"
    assert repo.get_recipe_by_name("Beef Stew").ingredients == ["1 lb beef", "2 carrots"]

    prompt = completer.calls[0]["messages"][0].content
    assert "using these ingredients: beef, carrots" in prompt
    assert "allergic to: peanuts" in prompt
    assert "Dietary preferences: low salt" in prompt
    assert "Recipe type: stew" in prompt


def test_generator_reads_ingredients_from_the_message(settings, fake_completer):
    completer = fake_completer(json.dumps(DETAILS))
    request = RecipeGenerateRequest(user_message="I have chicken and rice")
    _, used, saved_id = RecipeGenerator(completer, JSONRecipeRepo(settings)).generate(request)
    assert "chicken" in used and "rice" in used
    assert saved_id is None


def test_generator_keeps_unparseable_reply(settings, fake_completer):
    reply = "Fry the rice.\n\nAdd the egg."
    request = RecipeGenerateRequest(ingredients=["rice", "egg"])
    record, _, _ = RecipeGenerator(fake_completer(reply), JSONRecipeRepo(settings)).generate(request)
    assert record.title == GENERATED_FALLBACK_TITLE
    assert record.ingredients == ["rice", "egg"]
    assert record.instructions == ["Fry the rice.", "Add the egg."]
    assert record.description == reply


def test_generator_needs_a_credential(settings):
    with pytest.raises(LLMAuthError) as info:
        RecipeGenerator(None, JSONRecipeRepo(settings)).generate(RecipeGenerateRequest())
    assert info.value.missing_credential

# tests/unit/test_recipe_repo.py
import json

import pytest

from cookmate.core.models import RecipeRecord, UserProfile
from cookmate.services.exceptions import RepoError
from cookmate.services.repo.profile_repo import JSONUserProfileRepo, find_profile
from cookmate.services.repo.recipe_repo import JSONRecipeRepo, recipe_id_for


@pytest.mark.parametrize("name,expected", [
    ("Chicken Adobo", "chicken_adobo"),
    ("  Kare-Kare (Beef) ", "kare_kare_beef"),
    ("Crème Brûlée", "cr_me_br_l_e"),
    ("", ""),
])
def test_recipe_id_for(name, expected):
    assert recipe_id_for(name) == expected


def test_recipe_id_is_truncated():
    assert len(recipe_id_for("Very " * 30 + "Long Soup")) == 50


def test_upsert_detected_is_idempotent(settings):
    repo = JSONRecipeRepo(settings)
    assert repo.upsert_detected_recipe("Chicken Adobo", "u1", servings="4", difficulty="Easy") == "chicken_adobo"
    assert repo.upsert_detected_recipe("chicken adobo", "u2") == "chicken_adobo"

    record = repo.get_recipe_by_name("Chicken Adobo")
    assert record.is_placeholder()
    assert record.is_detected
    assert record.user_id == "u1"
    assert (record.servings, record.difficulty) == ("4", "Easy")

    with open(settings.recipes_file, encoding="utf-8") as f:
        stored = json.load(f)
    assert list(stored["detected"]) == ["chicken_adobo"]


def test_saved_recipe_wins_over_placeholder(settings):
    repo = JSONRecipeRepo(settings)
    repo.upsert_detected_recipe("Beef Stew", "u1")
    saved_id = repo.save_recipe(RecipeRecord(id="x", title="Beef Stew", ingredients=["1 lb beef"]), "u1")
    assert saved_id == "beef_stew"
    record = repo.get_recipe_by_name("Beef Stew")
    assert not record.is_placeholder()
    assert record.id == "beef_stew"
    assert record.is_detected is False


def test_lookup_by_exact_title(settings):
    repo = JSONRecipeRepo(settings)
    with open(settings.recipes_file, "w", encoding="utf-8") as f:
        json.dump({"recipes": {"legacy-id": {"id": "legacy-id", "title": "Pork Sinigang", "ingredients": ["pork"]}}}, f)
    assert repo.get_recipe_by_name("Pork Sinigang").id == "legacy-id"
    assert repo.get_recipe_by_name("Unknown Dish") is None


def test_blank_title_is_rejected(settings):
    with pytest.raises(RepoError):
        JSONRecipeRepo(settings).upsert_detected_recipe("  !!  ", "u1")


def test_corrupt_file_raises_repo_error(settings):
    with open(settings.recipes_file, "w", encoding="utf-8") as f:
        f.write("{not json")
    with pytest.raises(RepoError):
        JSONRecipeRepo(settings).get_recipe_by_name("Beef Stew")


def test_profiles_are_keyed_by_user(settings):
    repo = JSONUserProfileRepo(settings)
    assert repo.get_profile("u1") is None
    repo.save_profile("u1", UserProfile(is_vegan=True))
    repo.save_profile("u2", UserProfile(allergies=["shrimp"]))
    assert repo.get_profile("u1").is_vegan is True
    assert repo.get_profile("u2").allergies == ["shrimp"]


def test_find_profile_swallows_store_errors(settings):
    with open(settings.profiles_file, "w", encoding="utf-8") as f:
        f.write("[]")
    assert find_profile(JSONUserProfileRepo(settings), "u1") is None

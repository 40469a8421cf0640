# tests/unit/test_extractor.py
from cookmate.core.extractor import (
    STRATEGIES,
    ExtractionStrategy,
    clean_recipe_name,
    extract_recipes_from_response,
    find_bold,
    find_numbered,
    run_strategies,
)
from cookmate.core.models import RecipeCandidate


def test_bold_titles_in_order():
    text = "You could try **Chicken Adobo** or **Beef Stew** tonight."
    assert extract_recipes_from_response(text) == ["Chicken Adobo", "Beef Stew"]


def test_duplicates_are_dropped_case_insensitively():
    text = "**Beef Stew** is great. Also **beef stew** and **BEEF STEW** again."
    out = extract_recipes_from_response(text)
    assert out == ["Beef Stew"]
    assert len({r.lower() for r in out}) == len(out)


def test_section_headers_are_not_recipes():
    assert extract_recipes_from_response("**Ingredients:**\n- 2 cups rice") == []


def test_numbered_titles_found_when_nothing_bold():
    text = "1. Garlic Butter Shrimp\n2. Lemon Herb Salmon"
    assert extract_recipes_from_response(text) == ["Garlic Butter Shrimp", "Lemon Herb Salmon"]


def test_numbered_steps_are_skipped():
    text = "1. Heat the oil in a pan.\n2. Add the garlic until golden."
    assert find_numbered(text) == []
    assert extract_recipes_from_response(text) == []


def test_markdown_header():
    assert extract_recipes_from_response("## Creamy Mushroom Soup\nA hearty bowl.") == ["Creamy Mushroom Soup"]


def test_prefixed_title():
    assert extract_recipes_from_response("Recipe: Chicken Tinola\nIt is warm.") == ["Chicken Tinola"]


def test_line_scan_fallback():
    text = "Sure thing!\nSpicy Garlic Noodles\nThey are quick to make."
    assert extract_recipes_from_response(text) == ["Spicy Garlic Noodles"]


def test_quoted_name_is_last_resort():
    assert extract_recipes_from_response('You should make "Mango Float" tonight') == ["Mango Float"]


def test_empty_text():
    assert extract_recipes_from_response("") == []


def test_clean_recipe_name_strips_markers():
    assert clean_recipe_name("1. **Pork Sinigang**") == "Pork Sinigang"
    assert clean_recipe_name("Recipe Name: Beef Caldereta") == "Beef Caldereta"
    assert clean_recipe_name('"Halo-Halo"') == "Halo-Halo"


def test_find_bold_tags_source():
    found = find_bold("**Chicken Curry** and **1. step**")
    assert found == [RecipeCandidate(text="Chicken Curry", source="bold_text")]


def test_only_if_empty_strategies_are_skipped_after_a_hit():
    calls = []

    def first(text):
        calls.append("first")
        return [RecipeCandidate(text="Beef Stew")]

    def second(text):
        calls.append("second")
        return [RecipeCandidate(text="Chicken Curry")]

    out = run_strategies("ignored", [ExtractionStrategy("a", first), ExtractionStrategy("b", second, only_if_empty=True)])
    assert out == ["Beef Stew"]
    assert calls == ["first"]


def test_strategy_table_order():
    assert [s.name for s in STRATEGIES] == [
        "bold_text", "numbered_list", "titled_recipe", "header", "intelligent_fallback", "colon_quote",
    ]

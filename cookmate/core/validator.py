# cookmate/core/validator.py
from __future__ import annotations

import logging
import re

log = logging.getLogger(__name__)

MIN_LENGTH = 3
MAX_TITLE_LENGTH = 80
MAX_TITLE_WORDS = 8

BLOCK_TERMS = (
    "click", "view", "read", "here", "link", "website", "youtube", "video",
    "welcome", "hello", "hi", "thank", "sorry", "goodbye",
)

COOKING_VERB_RE = re.compile(
    r"^(bake|boil|fry|roast|grill|steam|poach|simmer|saute|chop|slice|dice|mince|peel|cut|wash|"
    r"dry|serve|garnish|sprinkle|cover|let|allow|wait|remove|turn|flip|blend|process|whisk|beat|"
    r"marinate|season|taste|adjust|mix|add|pour|place|combine|stir|heat|warm|cool|refrigerate|"
    r"knead|fold)\b",
    re.IGNORECASE,
)

FOOD_KEYWORDS = (
    # core ingredients
    "chicken", "beef", "pork", "fish", "salmon", "shrimp", "tofu", "egg", "eggs", "rice",
    "pasta", "noodles", "bread", "flour", "potato", "tomato", "onion", "garlic", "pepper",
    "carrot", "cheese", "milk", "cream", "butter", "oil", "salt", "sugar", "lemon", "lime",
    "vanilla", "chocolate", "cocoa",
    # dish types and cooking-style words
    "soup", "stew", "salad", "sandwich", "pizza", "cake", "cookie", "pie", "sauce",
    "dressing", "marinade", "spice", "herb", "seasoning", "recipe", "dish", "meal",
    "cooking", "food", "cuisine", "flavor", "style", "method", "technique", "preparation",
    # Filipino dishes
    "adobo", "sinigang", "kare-kare", "tinola", "nilaga", "paksiw", "pinakbet", "chopsuey",
    "sisig", "lechon", "lumpia", "pancit", "palabok", "menudo", "afritada", "caldereta",
    "mechado", "bistek", "picadillo", "arroz", "caldo", "goto", "lugaw", "champorado",
    "bibingka", "puto", "kutsinta", "sapin-sapin", "halo-halo", "turon", "banana", "cue",
    "ginataang", "laing", "pinangat", "bicol", "express", "kinilaw", "kilawin", "bulalo",
    "batchoy", "mami", "lomi", "sotanghon", "misua",
)

FOOD_KEYWORD_RE = re.compile(
    r"\b(" + "|".join(re.escape(k) for k in FOOD_KEYWORDS) + r")\b",
    re.IGNORECASE,
)

# Capitalised word start, e.g. "Kinilaw" but not "KFC" or "kinilaw".
_TITLE_SHAPE_RE = re.compile(r"^[A-Z][a-z]")


def looks_like_title(text: str) -> bool:
    """Lenient shape check for dish names with no known food keyword."""
    return (
        bool(_TITLE_SHAPE_RE.match(text))
        and 5 < len(text) < MAX_TITLE_LENGTH
        and len(text.split(" ")) <= MAX_TITLE_WORDS
    )


def is_instruction(text: str) -> bool:
    """A cooking verb followed by more words reads as a step, not a title.

    "Bake for 20 minutes" is an instruction; "Grill (Korean style)" and a bare
    "Roast" are not.
    """
    m = COOKING_VERB_RE.match(text)
    if not m:
        return False
    rest = text[m.end():].strip()
    return bool(rest) and not rest.startswith(("(", "-"))


def is_valid_recipe(candidate) -> bool:
    """Decide whether ``candidate`` plausibly names a dish.

    Gates, each short-circuiting to False: type/length, block list, leading
    instruction verb, then a food keyword with a title-shape fallback.
    """
    if not isinstance(candidate, str) or len(candidate) < MIN_LENGTH:
        return False

    text = candidate.strip()
    lowered = text.lower()

    if any(lowered.startswith(term) or lowered == term for term in BLOCK_TERMS):
        log.debug("Rejected blocked term: %r", text)
        return False

    if is_instruction(text):
        log.debug("Rejected instruction starting with verb: %r", text)
        return False

    if not FOOD_KEYWORD_RE.search(lowered):
        if looks_like_title(text):
            log.debug("Accepted (lenient title shape): %r", text)
            return True
        log.debug("Rejected (no food keyword): %r", text)
        return False

    log.debug("Accepted: %r", text)
    return True

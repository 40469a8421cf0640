# cookmate/core/extractor.py
"""Pull recipe names out of free-form LLM prose.

Each strategy is a pure ``text -> [RecipeCandidate]`` function. ``STRATEGIES``
orders them; strategies flagged ``only_if_empty`` run only while nothing has
been accepted yet. Every candidate is cleaned, de-duplicated by lowercase form
and validated before it is kept.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence, Set

from .models import RecipeCandidate
from .validator import FOOD_KEYWORD_RE, MAX_TITLE_LENGTH, MIN_LENGTH, is_valid_recipe

log = logging.getLogger(__name__)

SECTION_HEADER_RE = re.compile(
    r"^(ingredients?|instructions?|directions?|steps?|method|tips?|nutrition|safety|"
    r"difficulty|servings|time|cook|prep)\b",
    re.IGNORECASE,
)

# Step-like openers for numbered lines; includes prepositions ("In a bowl...").
STEP_OPENER_RE = re.compile(
    r"^(cook|bake|fry|mix|stir|add|heat|preheat|drain|rinse|pat|trim|peel|core|seed|marinate|"
    r"chill|freeze|cover|uncover|brush|season|serve|whisk|beat|chop|dice|slice|cut|mince|crush|"
    r"mash|blend|simmer|boil|saute|grill|roast|caramelize|baste|glaze|toss|massage|in|on|over|"
    r"under|at|to|for|with|let|allow|keep|pour|combine|place|put|transfer)\b",
    re.IGNORECASE,
)

INSTRUCTION_MARKER_RE = re.compile(
    r"\b(in\s+a|in\s+the|on\s+medium|over\s+medium|until|for\s+\d+|minutes?|hours?|"
    r"according to|package instructions|al dente|tender|golden|cooked|done)\b",
    re.IGNORECASE,
)

FALLBACK_DENY_RE = re.compile(
    r"^(ingredients?|instructions?|directions?|steps?|method|tips?|nutrition|safety|serves?|prep|"
    r"cook|time|difficulty|brush|season|serve|preheat|transfer|pour|combine|whisk|beat|chop|dice|"
    r"slice|cut|mince|drain|rinse|pat dry|trim|peel|core|seed|marinate|chill|freeze|cover|"
    r"uncover|both sides|all sides|to taste|as needed|optional|until|when|while|then|next|"
    r"serve with|garnish with|top with|sprinkle with|dripping|tender|cooked through|juicy|flaky|"
    r"golden brown|on both sides|on all sides|until cooked|until tender|until golden|cup|cups|"
    r"tablespoon|teaspoon|pound|ounce|minutes|hours|degrees)\b",
    re.IGNORECASE,
)

FALLBACK_VERB_RE = re.compile(
    r"^(cook|bake|fry|mix|stir|add|heat|preheat|drain|rinse|pat|trim|peel|core|seed|marinate|"
    r"chill|freeze|cover|uncover|brush|season|serve|whisk|beat|chop|dice|slice|cut|mince|crush|"
    r"mash|blend|simmer|boil|saute|grill|roast|caramelize|baste|glaze|toss|massage|place|put|"
    r"transfer|pour|combine)\b",
    re.IGNORECASE,
)

BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
NUMBERED_TITLE_RE = re.compile(r"^\s*(?:\d+[.)]|\d+\s+)\s*([A-Z][^.!?\n\r]{5,80})(?:\.|$)", re.MULTILINE)
PREFIXED_TITLE_RE = re.compile(
    r"^(?:recipe\s+name\s*:?\s*|recipe\s*:?\s*|dish\s*:?\s*|try\s*:?\s*|make\s*:?\s*|here'?s\s*:?\s*)"
    r"([A-Z][^.!?\n\r]{5,80})",
    re.IGNORECASE | re.MULTILINE,
)
HEADER_RE = re.compile(r"^#{1,3}\s*(.+)$", re.MULTILINE)
COLON_RE = re.compile(r"\b(recipe|dish|meal|food|try|make|here'?s):\s*([A-Z][A-Za-z\s-]{3,80})", re.IGNORECASE)
QUOTE_RE = re.compile(r"[\"']([A-Z][A-Za-z\s-]{5,80})[\"']")
ALL_CAPS_RE = re.compile(r"^[A-Z\s\d]+$")
_DIGIT_PERIOD_RE = re.compile(r"\d\.")

# Applied in order; later rules see the output of earlier ones.
_NAME_CLEANUP = (
    (re.compile(r"^\d+\.\s*"), ""),
    (re.compile(r"^\d+\)\s*"), ""),
    (re.compile(r"^recipe\s+name\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^recipe\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^name\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^dish\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^food\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^meal\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^try\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^make\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^here'?s\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^ingredients?\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^instructions?\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^\*\*"), ""),
    (re.compile(r"\*\*$"), ""),
    (re.compile(r'^"(.*)"$'), r"\1"),
    (re.compile(r"^'(.*)'$"), r"\1"),
    (re.compile(r"^menu\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^special\b\s*:?\s*", re.IGNORECASE), ""),
    (re.compile(r"^signature\b\s*:?\s*", re.IGNORECASE), ""),
)


def clean_recipe_name(name: str) -> str:
    """Strip ordinals, label words, bold markers and wrapping quotes."""
    cleaned = name.strip()
    for pattern, repl in _NAME_CLEANUP:
        cleaned = pattern.sub(repl, cleaned, count=1)
    return cleaned.strip()


# ---- Strategies --------------------------------------------------------------

def find_bold(text: str) -> List[RecipeCandidate]:
    out = []
    for m in BOLD_RE.finditer(text):
        bold = m.group(1).strip()
        if SECTION_HEADER_RE.match(bold):
            continue
        if len(bold) >= 3 and bold[0].isascii() and bold[0].isalpha() and not _DIGIT_PERIOD_RE.search(bold):
            out.append(RecipeCandidate(text=bold, source="bold_text"))
    return out


def find_numbered(text: str) -> List[RecipeCandidate]:
    out = []
    for m in NUMBERED_TITLE_RE.finditer(text):
        phrase = m.group(1).strip()
        if STEP_OPENER_RE.match(phrase) or SECTION_HEADER_RE.match(phrase):
            continue
        if INSTRUCTION_MARKER_RE.search(phrase):
            continue
        out.append(RecipeCandidate(text=phrase, source="numbered_list"))
    return out


def find_prefixed(text: str) -> List[RecipeCandidate]:
    return [RecipeCandidate(text=m.group(1).strip(), source="titled_recipe")
            for m in PREFIXED_TITLE_RE.finditer(text)]


def find_headers(text: str) -> List[RecipeCandidate]:
    out = []
    for m in HEADER_RE.finditer(text):
        header = m.group(1).strip()
        if SECTION_HEADER_RE.match(header):
            continue
        if 3 < len(header) < MAX_TITLE_LENGTH:
            out.append(RecipeCandidate(text=header, source="header"))
    return out


def find_food_lines(text: str) -> List[RecipeCandidate]:
    """Line scan used when nothing more structured matched."""
    out = []
    for line in text.split("\n"):
        line = line.strip()
        if len(line) < 3 or len(line) > 100:
            continue
        if FALLBACK_DENY_RE.match(line):
            continue
        if not ("A" <= line[0] <= "Z") or ALL_CAPS_RE.match(line):
            continue
        if FALLBACK_VERB_RE.match(line):
            continue
        if FOOD_KEYWORD_RE.search(line):
            out.append(RecipeCandidate(text=line, source="intelligent_fallback"))
    return out


def find_colon_and_quoted(text: str) -> List[RecipeCandidate]:
    out = []
    for m in COLON_RE.finditer(text):
        name = m.group(2).strip()
        if 3 < len(name) < MAX_TITLE_LENGTH:
            out.append(RecipeCandidate(text=name, source="colon_pattern"))
    for m in QUOTE_RE.finditer(text):
        name = m.group(1).strip()
        if 3 < len(name) < MAX_TITLE_LENGTH:
            out.append(RecipeCandidate(text=name, source="quote_pattern"))
    return out


@dataclass(frozen=True)
class ExtractionStrategy:
    name: str
    find: Callable[[str], List[RecipeCandidate]]
    only_if_empty: bool = False


STRATEGIES: Sequence[ExtractionStrategy] = (
    ExtractionStrategy("bold_text", find_bold),
    ExtractionStrategy("numbered_list", find_numbered, only_if_empty=True),
    ExtractionStrategy("titled_recipe", find_prefixed),
    ExtractionStrategy("header", find_headers, only_if_empty=True),
    ExtractionStrategy("intelligent_fallback", find_food_lines, only_if_empty=True),
    ExtractionStrategy("colon_quote", find_colon_and_quoted, only_if_empty=True),
)


def accept_candidates(candidates: Iterable[RecipeCandidate], accepted: List[str], seen: Set[str]) -> int:
    """Clean, de-dup and validate ``candidates`` into ``accepted``; returns how many were added."""
    added = 0
    for candidate in candidates:
        name = clean_recipe_name(candidate.text)
        key = name.lower()
        if len(name) < MIN_LENGTH or len(name) > MAX_TITLE_LENGTH or key in seen:
            continue
        if is_valid_recipe(name):
            accepted.append(name)
            seen.add(key)
            added += 1
            log.debug("Recipe %r accepted from %s", name, candidate.source)
    return added


def run_strategies(text: str, strategies: Sequence[ExtractionStrategy] = STRATEGIES) -> List[str]:
    accepted: List[str] = []
    seen: Set[str] = set()
    for strategy in strategies:
        if strategy.only_if_empty and accepted:
            continue
        accept_candidates(strategy.find(text), accepted, seen)
    return accepted


def extract_recipes_from_response(text: str) -> List[str]:
    """Ordered, case-insensitively unique recipe names found in ``text``."""
    if not text:
        return []
    return run_strategies(text)

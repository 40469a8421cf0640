# cookmate/core/structured.py
from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from pydantic import ValidationError

from .models import StructuredParse, StructuredRecipe
from .validator import is_valid_recipe

log = logging.getLogger(__name__)

FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
RAW_RECIPES_OBJECT_RE = re.compile(r"(\{\s*\"?recipes\"?\s*:[\s\S]*\})", re.IGNORECASE)

_TRAILING_COMMA_OBJ_RE = re.compile(r",\s*}")
_TRAILING_COMMA_ARR_RE = re.compile(r",\s*]")
_WHITESPACE_RE = re.compile(r"\s+")


def safe_json_parse(raw: str) -> Optional[Any]:
    """``json.loads`` after the usual LLM repairs; None when it still fails.

    Trailing commas before ``}``/``]`` are dropped and whitespace runs are
    collapsed to a single space.
    """
    cleaned = _TRAILING_COMMA_OBJ_RE.sub("}", raw)
    cleaned = _TRAILING_COMMA_ARR_RE.sub("]", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as e:
        log.warning("JSON parse failed: %s", e)
        return None


def _decode_recipes_object(raw: str) -> Optional[List[Any]]:
    data = safe_json_parse(raw)
    if isinstance(data, dict) and "recipes" in data:
        recipes = data["recipes"]
        return recipes if isinstance(recipes, list) else []
    return None


def to_structured_recipes(rows: List[Any]) -> List[StructuredRecipe]:
    """Map raw JSON rows to validated recipes, dropping untitled or non-dish rows."""
    out: List[StructuredRecipe] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        title = row.get("title") or row.get("name")
        if not isinstance(title, str) or not title.strip():
            continue
        try:
            recipe = StructuredRecipe(
                title=title,
                servings=row.get("servings"),
                difficulty=row.get("difficulty"),
            )
        except ValidationError as e:
            log.debug("Skipping malformed recipe row %r: %s", row, e)
            continue
        if is_valid_recipe(recipe.title):
            out.append(recipe)
        else:
            log.debug("Structured title %r failed validation", recipe.title)
    return out


def parse_structured_recipes(response_text: str) -> Optional[StructuredParse]:
    """Find and decode the ``{"recipes": [...]}`` block an LLM appends to its reply.

    Tries a fenced block first, then a bare object anchored on the ``recipes``
    key. Returns None when neither decodes to an object with ``recipes``; the
    caller then falls back to heuristic extraction.
    """
    if not response_text:
        return None

    fenced = FENCED_BLOCK_RE.search(response_text)
    if fenced and fenced.group(1):
        rows = _decode_recipes_object(fenced.group(1))
        if rows is not None:
            return StructuredParse(recipes=to_structured_recipes(rows), block=fenced.group(0))

    raw = RAW_RECIPES_OBJECT_RE.search(response_text)
    if raw and raw.group(1):
        rows = _decode_recipes_object(raw.group(1))
        if rows is not None:
            return StructuredParse(recipes=to_structured_recipes(rows), block=raw.group(1))

    return None

# cookmate/core/sanitizer.py
"""Reduce an LLM reply to the conversational prose shown in the chat bubble.

Recipe bodies are served by the details endpoint, so ingredient/step lists
and the structured JSON block are removed here. The order of the steps
matters: the JSON block goes first so it is never mistaken for a section,
and the length rules run last on the final text.
"""
from __future__ import annotations

import re
from typing import Optional

FALLBACK_MESSAGE = "I found some recipes! Check below."
SUMMARY_SUFFIX = " Check below for more details."
MIN_MESSAGE_LENGTH = 20
MAX_MESSAGE_LENGTH = 300

EMPTY_FENCE_RE = re.compile(r"```\s*```")
JSON_LEAD_IN_RE = re.compile(r"Here(?: is|'s) the JSON:?", re.IGNORECASE)

# Header at a line start, plain, markdown heading or bold, up to the next line
# that opens with a capitalised word.
SECTION_RE = re.compile(
    r"^[ \t]*(?:#{1,6}[ \t]*)?(?:\*\*)?"
    r"(?i:ingredients?|instructions?|directions?|steps?|method)\b[ \t]*:?(?:\*\*)?[ \t]*:?"
    r"[\s\S]*?(?=\n\s*[A-Z][a-z]|\Z)",
    re.MULTILINE,
)
BULLET_GROUP_RE = re.compile(r"^[ \t]*[•\-*][ \t]*.*(?:\n[ \t]*[•\-*][ \t]*.*)*", re.MULTILINE)
NUMBERED_GROUP_RE = re.compile(r"^[ \t]*\d+\.[ \t]*.*(?:\n[ \t]*\d+\.[ \t]*.*)*", re.MULTILINE)
JSON_WORD_RE = re.compile(r"\bjson\b", re.IGNORECASE)
BLANK_RUN_RE = re.compile(r"\n\s*\n(\s*\n)+")
ALNUM_RE = re.compile(r"[A-Za-z0-9]")
SUMMARY_RE = re.compile(r"Here's [^.!]*\.|How about [^.!]*\.|Let's [^.!]*\.", re.IGNORECASE)


def strip_recipe_artifacts(text: str, consumed_block: Optional[str] = None) -> str:
    """Remove the JSON block, code fences, recipe sections and list groups."""
    out = text or ""
    if consumed_block:
        out = out.replace(consumed_block, "", 1)

    out = EMPTY_FENCE_RE.sub("", out)
    out = JSON_LEAD_IN_RE.sub("", out)

    out = SECTION_RE.sub("", out)
    out = BULLET_GROUP_RE.sub("", out)
    out = NUMBERED_GROUP_RE.sub("", out)

    out = JSON_WORD_RE.sub("recipe data", out)
    out = out.replace("`", "")
    out = BLANK_RUN_RE.sub("\n\n", out)
    return out.strip()


def sanitize(response_text: str, consumed_block: Optional[str] = None) -> str:
    """Chat-bubble text for ``response_text``; never empty."""
    out = strip_recipe_artifacts(response_text, consumed_block)

    if len(out) < MIN_MESSAGE_LENGTH or not ALNUM_RE.search(out):
        return FALLBACK_MESSAGE

    if len(out) > MAX_MESSAGE_LENGTH:
        summary = SUMMARY_RE.search(out)
        if summary:
            out = summary.group(0) + SUMMARY_SUFFIX
    return out

# cookmate/core/prompts.py
from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote_plus

from .models import UserProfile

CHAT_SYSTEM_PROMPT = """You are CookMate, a comprehensive AI cooking assistant. Your primary goal is to provide a helpful and engaging conversational experience about cooking, while also extracting key recipe information in a structured format.

**Conversational Response:**
First, provide a friendly, conversational response to the user's query, as if you were talking to a friend about cooking. Keep it brief: 1-3 sentences.

**Structured JSON Output:**
After the conversational text, you MUST include a JSON object enclosed in ```json code blocks. It contains a single key, "recipes", an array with one object per recipe mentioned or implied:
- "title": the name of the recipe (e.g., "Chicken Adobo").
- "servings": the number of servings as a string (e.g., "4-6").
- "difficulty": "Easy", "Medium" or "Hard".

The ```json block MUST be the very last part of your response.

Example:
That's a great idea! Both are classic Filipino dishes. Adobo is a savory, vinegar-based stew, while Sinigang is a sour and savory soup.

```json
{"recipes": [{"title": "Chicken Adobo", "servings": "4", "difficulty": "Easy"}, {"title": "Pork Sinigang", "servings": "6", "difficulty": "Medium"}]}
```

RECIPE ANALYSIS MODE: if the user shares a recipe and asks how to improve it, list 3-5 concrete suggestions and return the improved version (e.g. "Improved Tomato Sauce") in the recipes array.

NON-FOOD QUERIES: if the user asks about something that is not food, return {"recipes": []}. Never invent recipes for non-food items.
"""

GRATITUDE_PROMPT = (
    'The user said: "{message}". This is a compliment or expression of gratitude. '
    "Respond warmly and naturally as CookMate, the AI cooking assistant. Keep the response "
    "friendly, personal, and cooking-themed. Do NOT generate any recipes or cooking "
    "suggestions - this is purely a social response."
)

RECIPE_DETAILS_PROMPT = """Create detailed recipe information for "{name}". Return ONLY valid JSON, no markdown fences.
{notes}
Use exactly this JSON format:
{{
  "title": "{name}",
  "description": "Brief appetizing description of the dish",
  "ingredients": ["1 cup ingredient", "2 tbsp ingredient"],
  "instructions": ["Step 1 description", "Step 2 description"],
  "cookingTime": "e.g. 30 minutes",
  "servings": "e.g. 4",
  "difficulty": "Easy/Medium/Hard",
  "estimatedCost": "e.g. $10-15",
  "nutritionInfo": {{"calories": "per serving", "protein": "grams", "carbs": "grams", "fat": "grams"}},
  "tips": ["Helpful cooking tip 1", "Cooking tip 2"],
  "youtubeSearchQuery": "{name} recipe tutorial"
}}
Make sure the recipe is practical and detailed."""

SUGGEST_INGREDIENTS_PROMPT = (
    "I have these ingredients: {available}. Suggest 5-7 complementary ingredients that would "
    "go well with them for cooking. Return only a JSON array of ingredient strings.{notes}"
)

YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"


def personalization_lines(profile: Optional[UserProfile]) -> List[str]:
    """Profile facts for the chat system prompt, most safety-critical first."""
    if profile is None:
        return []
    lines: List[str] = []
    if profile.is_vegan:
        lines.append("User is Vegan.")
    if profile.is_diabetic:
        lines.append("User has Diabetes - avoid high sugar ingredients.")
    if profile.is_on_diet:
        lines.append("User is on a diet - suggest healthier options.")
    if profile.allergies:
        lines.append(f"User is allergic to: {', '.join(profile.allergies)}.")
    if profile.prefers_spicy:
        lines.append("User prefers spicy food.")
    if profile.prefers_salty:
        lines.append("User prefers salty food.")
    if profile.disliked_ingredients:
        lines.append(f"User dislikes: {', '.join(profile.disliked_ingredients)}.")
    if profile.nationality and profile.nationality.strip():
        lines.append(f"User's nationality: {profile.nationality}.")
    if profile.age and profile.age > 0:
        lines.append(f"User's age: {profile.age}.")
    if profile.gender and profile.gender.strip():
        lines.append(f"User's gender: {profile.gender}.")
    return lines


def build_chat_system_prompt(profile: Optional[UserProfile] = None) -> str:
    lines = personalization_lines(profile)
    if not lines:
        return CHAT_SYSTEM_PROMPT
    return CHAT_SYSTEM_PROMPT + "\n**User Personalization Context:**\n" + "\n".join(lines) + "\n"


def dietary_notes(profile: Optional[UserProfile], purpose: str = "recipe") -> List[str]:
    """Imperative dietary notes for one-shot generation prompts (details, suggestions)."""
    if profile is None:
        return []
    notes: List[str] = []
    if profile.is_vegan:
        notes.append(f"User is Vegan - keep the {purpose} completely plant-based")
    if profile.is_diabetic:
        notes.append("User has Diabetes - avoid high sugar ingredients")
    if profile.is_on_diet:
        notes.append("User is on a diet - prefer healthier, lower-calorie options")
    if profile.allergies:
        notes.append(f"User is allergic to: {', '.join(profile.allergies)} - DO NOT include these ingredients")
    if profile.prefers_spicy:
        notes.append("User prefers spicy food")
    if profile.prefers_salty:
        notes.append("User prefers savory/salty food")
    if profile.disliked_ingredients:
        notes.append(f"User dislikes: {', '.join(profile.disliked_ingredients)} - avoid these ingredients")
    return notes


def build_recipe_details_prompt(name: str, profile: Optional[UserProfile] = None) -> str:
    notes = dietary_notes(profile)
    notes_text = f"Personalization notes: {'; '.join(notes)}\n" if notes else ""
    return RECIPE_DETAILS_PROMPT.format(name=name, notes=notes_text)


def build_suggest_ingredients_prompt(available: List[str], profile: Optional[UserProfile] = None) -> str:
    notes = dietary_notes(profile, purpose="suggestions")
    notes_text = f" Personalization notes: {'; '.join(notes)}" if notes else ""
    return SUGGEST_INGREDIENTS_PROMPT.format(available=", ".join(available), notes=notes_text)


def youtube_search_url(query: str) -> str:
    return YOUTUBE_SEARCH_URL.format(query=quote_plus(query))


GENERATE_RECIPE_FORMAT = """. IMPORTANT: Return ONLY valid JSON. Do not add markdown formatting like ```json. Just the raw JSON string.

Please provide the recipe in this JSON format:
{
  "title": "Recipe Name",
  "ingredients": ["1 cup ingredient", "2 tbsp ingredient"],
  "instructions": ["Step 1 description", "Step 2 description"],
  "cookingTime": "e.g. 30 minutes",
  "servings": "e.g. 4",
  "difficulty": "Easy/Medium/Hard",
  "description": "Brief appetizing description"
}

Only return the JSON, no additional text."""


def build_generate_recipe_prompt(
    ingredients: List[str],
    profile: Optional[UserProfile] = None,
    dietary_preferences: Optional[str] = None,
    recipe_type: Optional[str] = None,
) -> str:
    prompt = "Create a delicious recipe"
    if ingredients:
        prompt += f" using these ingredients: {', '.join(ingredients)}"
    notes = dietary_notes(profile)
    if notes:
        prompt += f". Personalization notes: {'; '.join(notes)}"
    if dietary_preferences:
        prompt += f". Dietary preferences: {dietary_preferences}"
    if recipe_type:
        prompt += f". Recipe type: {recipe_type}"
    return prompt + GENERATE_RECIPE_FORMAT

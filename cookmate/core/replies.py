# cookmate/core/replies.py
from __future__ import annotations

import random
import re
from typing import Iterable, Optional

DEVELOPER_REPLY = """CookMate was created by:

👨‍💻 **John Mark P. Magdasal**
👨‍💻 **John Paul Mahilom**

We're passionate about cooking and technology, and we built CookMate to make cooking more accessible and enjoyable for everyone. We hope this app helps you create amazing meals and discover new flavors!

What would you like to cook today? 🍳"""

IDENTITY_REPLY = """Hello! I'm CookMate, your comprehensive AI cooking assistant! 👨‍🍳

I'm an intelligent cooking companion designed to help you with everything related to food and cooking. Here's what I can do for you:

**🍳 Recipe Help**: Get detailed recipes with ingredients, step-by-step instructions, cooking times, and difficulty levels

**👨‍🍳 Celebrity Chefs**: Learn about famous chefs, their cooking styles and signature dishes

**🥗 Ingredient Suggestions**: Tell me what ingredients you have, and I'll suggest delicious recipes you can make

**🥗 Health & Nutrition**: Learn about the nutritional benefits of foods and cooking methods

**⚠️ Food Safety**: Get important safety guidelines including proper cooking temperatures, food storage, and hygiene practices

**🍽️ Meal Planning**: Get help planning meals based on your preferences, dietary needs, or available ingredients

I was created by John Mark P. Magdasal and John Paul Mahilom to make cooking more accessible, enjoyable, and safe for everyone.

What would you like to cook or learn about today? 🍳"""

GRATITUDE_REPLIES = (
    "You're very welcome! 😊 I'm happy to help with your cooking adventures!",
    "Thank you for your kind words! 🍳 Let me know if you need more cooking assistance!",
    "I appreciate your feedback! 👨‍🍳 What would you like to cook next?",
    "That's so nice to hear! 😊 What can I help you with in the kitchen today?",
    "Thank you! 🍽️ I'm here whenever you need more recipe ideas or cooking help!",
)

GRATITUDE_DEFAULT = (
    "You're very welcome! 😊 I'm happy to help with your cooking adventures! "
    "Let me know if you need more assistance."
)

COOKING_SUGGESTIONS = (
    "What's in your fridge right now? Let's create something amazing together!",
    "I bet you have some great ingredients waiting to be turned into something delicious. What do you have?",
    "Let's put our culinary skills to work! Do you have any proteins, vegetables, or pantry staples you'd like to use?",
    "I can help you create a mouth-watering meal instead. What ingredients are you working with?",
    "Let's cook something incredible! What do you have in your kitchen?",
    "Cooking together is the perfect solution! Tell me what's in your pantry and I'll suggest a recipe.",
    "Let's put our energy into creating something delicious! What ingredients can we work with today?",
    "I'm here to help with any cooking questions! What would you like to cook or learn about?",
    "How about we explore some recipes together? What sounds good to you?",
    "I can suggest recipes based on what you have available. What ingredients do you have?",
)

OFF_TOPIC_TEMPLATES = (
    "I appreciate your question about \"{snippet}\", but I'm specifically designed to help with cooking! {suggestion}",
    "That's an interesting topic, but I'm your dedicated cooking assistant. Let's focus on creating something delicious! {suggestion}",
    "I understand you're curious about \"{snippet}\", but I'm here to help with recipes, cooking techniques, and food-related questions. {suggestion}",
    "While that's outside my cooking expertise, I'm excellent at helping with culinary topics! {suggestion}",
    "I'm focused on all things cooking and food-related. Let me help you create something amazing in the kitchen! {suggestion}",
    "That's not my specialty area, but I'm passionate about cooking and would love to help with recipes! {suggestion}",
    "I'm your cooking companion, so let's channel that energy into creating something delicious! {suggestion}",
    "That's outside my culinary scope, but I'm great at recipe suggestions and cooking advice! {suggestion}",
    "I'm here specifically for cooking and food topics. Let's explore some recipes instead! {suggestion}",
    "Let me redirect to something I'm really good at - helping you cook amazing dishes! {suggestion}",
)

OFFLINE_WITH_INGREDIENTS = """I'm having trouble connecting to my AI brain right now, but I can still help you cook! 🌟

Based on what you mentioned ({ingredients}), here are some cooking ideas:
• Try combining your ingredients in a simple stir-fry
• Make a hearty soup or stew
• Create a fresh salad with protein
• Grill or roast for flavorful results

**Some delicious recipes to try:**
• **Quick Stir-Fry** - Combine your ingredients with oil, garlic, and your favorite seasonings
• **Simple Soup** - Start with a base of broth, add your ingredients, and simmer until tender
• **Grilled Delight** - Season and grill your main ingredient with vegetables

I'm experiencing technical difficulties at the moment, but I'll be back to full strength soon! In the meantime, feel free to ask me about cooking techniques, food safety, or ingredient substitutions."""

OFFLINE_GENERIC = """I'm having trouble connecting to my brain right now. 🌟

But I'm still here to help! Try asking me about:
• What ingredients you have available
• Cooking techniques and methods
• Food safety and storage tips
• Recipe substitutions
• Kitchen equipment recommendations

I should be back to full AI functionality shortly. Thanks for your patience! 🍳"""

SNIPPET_LENGTH = 30

_JSON_FENCE_RE = re.compile(r"```json[\s\S]*?```", re.IGNORECASE)
_COOKING_TERMS_RE = re.compile(r"\b(recipe|cook|ingredient|dish|meal)\b", re.IGNORECASE)


def _pick(options, rng: Optional[random.Random]) -> str:
    return (rng or random).choice(options)


def gratitude_fallback(rng: Optional[random.Random] = None) -> str:
    return _pick(GRATITUDE_REPLIES, rng)


def clean_gratitude_reply(text: Optional[str]) -> str:
    """Keep the LLM's thank-you social: no JSON, no recipe talk."""
    cleaned = _JSON_FENCE_RE.sub("", text or "", count=1)
    cleaned = cleaned.replace("```", "")
    cleaned = _COOKING_TERMS_RE.sub("cooking", cleaned).strip()
    if len(cleaned) < 10 or "{" in cleaned or "}" in cleaned:
        return GRATITUDE_DEFAULT
    return cleaned


def off_topic_reply(message: str, rng: Optional[random.Random] = None) -> str:
    snippet = message[:SNIPPET_LENGTH] + ("..." if len(message) > SNIPPET_LENGTH else "")
    template = _pick(OFF_TOPIC_TEMPLATES, rng)
    return template.format(snippet=snippet, suggestion=_pick(COOKING_SUGGESTIONS, rng))


def offline_reply(ingredients: Iterable[str]) -> str:
    found = sorted(ingredients)
    if found:
        return OFFLINE_WITH_INGREDIENTS.format(ingredients=", ".join(found))
    return OFFLINE_GENERIC

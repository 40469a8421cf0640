# cookmate/core/intents.py
"""Keyword classifiers that route a chat message before any LLM call.

Every predicate lower-cases the message and tests phrase containment, so
"thanks" also matches "thanksgiving". The lists below are matched as-is,
without word boundaries.
"""
from __future__ import annotations

from typing import Iterable

from .models import Classification

DEVELOPER_PHRASES = (
    "who made this app", "who created this app", "who developed this app",
    "who built this app", "who made you", "who created you", "who developed you",
    "who is your developer", "who is your creator", "who made cookmate",
    "who created cookmate", "who developed cookmate", "who built cookmate",
    "who is the developer", "who is the creator", "who programmed this",
    "who coded this", "who designed this app", "who built this application",
    "john mark", "john paul", "magdasal", "mahilom",
)

IDENTITY_PHRASES = (
    "who are you", "what are you", "introduce yourself", "tell me about yourself",
    "what is cookmate", "who is cookmate", "explain cookmate", "describe cookmate",
    "your purpose", "your function", "what do you do", "your role",
    "tell me about you", "about yourself", "help me understand you",
)

GRATITUDE_PHRASES = (
    "thank you", "thanks", "appreciate", "grateful",
    "great help", "awesome", "amazing", "wonderful",
    "fantastic", "excellent", "perfect", "awesome job",
    "you rock", "youre great", "youre awesome", "youre amazing",
    "well done", "great work", "nice job", "good job",
    "thank you so much", "much appreciated", "youre the best",
    "youre incredible", "youre fantastic", "youre wonderful",
)

# Used to weigh a "thanks, now help me cook X" message against pure gratitude.
GRATITUDE_COOKING_KEYWORDS = (
    "cook", "recipe", "food", "meal", "dish", "ingredient", "kitchen",
    "bake", "fry", "grill", "roast", "boil", "steam", "saute", "stir",
    "chicken", "beef", "fish", "vegetable", "fruit", "rice", "pasta",
)

# Any of these overrides the off-topic taxonomy.
COOKING_KEYWORDS = GRATITUDE_COOKING_KEYWORDS + (
    "soup", "stew", "salad", "sauce", "spice", "herb", "oil", "butter",
)

OFF_TOPIC_KEYWORDS = (
    # Politics & government
    "politics", "election", "vote", "government", "policy", "democrat", "republican",
    "congress", "senate", "parliament", "president", "prime minister", "mayor",
    "political", "campaign", "ballot", "legislation", "law", "court", "judge",
    # Religion & faith
    "religion", "religious", "god", "jesus", "allah", "buddha", "christian", "muslim",
    "jewish", "hindu", "buddhist", "church", "mosque", "temple", "prayer",
    "bible", "quran", "torah", "scripture", "faith", "spirituality", "worship",
    # Sports & recreation
    "sports", "football", "soccer", "basketball", "baseball", "tennis", "golf",
    "hockey", "volleyball", "cricket", "rugby", "olympics", "nfl", "nba", "mlb",
    "fifa", "uefa", "championship", "tournament", "game", "match", "season",
    # Gaming & entertainment
    "gaming", "video games", "xbox", "playstation", "nintendo", "switch", "pc gaming",
    "minecraft", "fortnite", "call of duty", "league of legends", "wow", "pokemon",
    "board games", "chess", "poker", "casino", "betting", "movies", "cinema",
    "tv show", "netflix", "disney", "marvel", "star wars", "harry potter",
    # Technology & programming
    "technology", "programming", "coding", "software", "javascript", "python", "java",
    "react", "angular", "vue", "node.js", "html", "css", "git", "github",
    "artificial intelligence", "machine learning", "blockchain", "cryptocurrency",
    "bitcoin", "ethereum", "startup", "tech", "internet", "website", "app development",
    # Business & finance
    "business", "finance", "stocks", "investing", "trading", "stock market", "wall street",
    "crypto", "money", "wealth", "salary", "income", "mortgage", "loan", "debt",
    "banking", "credit", "retirement", "401k", "forex", "economics",
    "entrepreneur", "venture capital", "ipo", "merger", "acquisition",
    # Education & academics
    "education", "school", "university", "college", "student", "teacher", "professor",
    "homework", "exam", "test", "grade", "study", "learning", "course", "class",
    "math", "algebra", "calculus", "physics", "chemistry", "biology", "history",
    "geography", "literature", "essay", "research", "thesis", "dissertation",
    # Health & fitness (nutrition is cooking, so it is not listed)
    "exercise", "workout", "gym", "fitness", "weight loss", "muscle", "cardio",
    "yoga", "pilates", "running", "swimming", "cycling", "training", "bodybuilding",
    "medical", "doctor", "medicine", "hospital", "surgery", "therapy", "medication",
    "disease", "illness", "symptoms", "treatment", "diagnosis",
    # Travel & transportation
    "travel", "vacation", "holiday", "trip", "flight", "airline", "hotel", "resort",
    "tourism", "passport", "visa", "cruise", "beach", "mountain", "city", "country",
    "car", "vehicle", "driving", "traffic", "public transport", "subway", "train",
    "airplane", "airport", "transportation", "commute",
    # Relationships & social
    "relationships", "dating", "boyfriend", "girlfriend", "husband", "wife", "marriage",
    "wedding", "divorce", "family", "parents", "children", "kids", "baby",
    "friendship", "social", "party", "event", "celebration",
    # News & current events
    "news", "current events", "breaking news", "report", "journalism", "media",
    "newspaper", "magazine", "reporter", "correspondent", "interview", "headlines",
    # Shopping & consumer products
    "shopping", "clothes", "fashion", "shoes", "electronics", "phone", "computer",
    "house", "apartment", "furniture", "decor", "makeup", "cosmetics",
    "perfume", "jewelry", "accessories", "retail", "mall", "store",
    # Weather & environment
    "weather", "climate", "temperature", "rain", "snow", "storm", "hurricane",
    "tornado", "flood", "drought", "environment", "pollution", "carbon footprint",
    # Everything else
    "cars", "automotive", "real estate", "property", "rent", "insurance",
    "pets", "animals", "dogs", "cats", "gardening", "plants", "flowers", "lawn",
    "books", "reading", "writing", "art", "painting", "music", "instruments",
    "hobbies", "crafts", "diy", "woodworking", "knitting", "sewing",
)


def _count_matches(lowered: str, phrases: Iterable[str]) -> int:
    return sum(1 for p in phrases if p in lowered)


def _contains_any(lowered: str, phrases: Iterable[str]) -> bool:
    return any(p in lowered for p in phrases)


def is_developer_question(message: str) -> bool:
    return _contains_any(message.lower(), DEVELOPER_PHRASES)


def is_identity_question(message: str) -> bool:
    return _contains_any(message.lower(), IDENTITY_PHRASES)


def is_gratitude_or_compliment(message: str) -> bool:
    """Gratitude wins only if it outweighs cooking vocabulary two to one."""
    lowered = message.lower()
    if not _contains_any(lowered, GRATITUDE_PHRASES):
        return False
    cooking_count = _count_matches(lowered, GRATITUDE_COOKING_KEYWORDS)
    if cooking_count == 0:
        return True
    gratitude_count = _count_matches(lowered, GRATITUDE_PHRASES)
    return gratitude_count >= 2 * cooking_count


def is_off_topic(message: str) -> bool:
    lowered = message.lower()
    if _contains_any(lowered, COOKING_KEYWORDS):
        return False
    return _contains_any(lowered, OFF_TOPIC_KEYWORDS)


def classify(message: str) -> Classification:
    """First matching classifier wins, in fixed priority order."""
    if is_developer_question(message):
        return Classification.DEVELOPER
    if is_identity_question(message):
        return Classification.IDENTITY
    if is_gratitude_or_compliment(message):
        return Classification.GRATITUDE
    if is_off_topic(message):
        return Classification.OFF_TOPIC
    return Classification.ON_TOPIC

# tests/unit/test_prompts_replies.py
from cookmate.core.models import UserProfile
from cookmate.core.prompts import (
    CHAT_SYSTEM_PROMPT,
    build_chat_system_prompt,
    build_recipe_details_prompt,
    build_suggest_ingredients_prompt,
    youtube_search_url,
)
from cookmate.core.replies import (
    COOKING_SUGGESTIONS,
    GRATITUDE_DEFAULT,
    OFFLINE_GENERIC,
    clean_gratitude_reply,
    off_topic_reply,
    offline_reply,
)


class FirstChoice:
    def choice(self, seq):
        return seq[0]


def test_chat_prompt_without_profile_is_unchanged():
    assert build_chat_system_prompt(None) == CHAT_SYSTEM_PROMPT
    assert build_chat_system_prompt(UserProfile()) == CHAT_SYSTEM_PROMPT


def test_chat_prompt_carries_personalisation():
    prompt = build_chat_system_prompt(UserProfile(is_vegan=True, allergies=["peanuts", "shrimp"], age=40))
    assert "**User Personalization Context:**" in prompt
    assert "User is Vegan." in prompt
    assert "User is allergic to: peanuts, shrimp." in prompt
    assert "User's age: 40." in prompt


def test_details_prompt():
    prompt = build_recipe_details_prompt("Beef Stew", UserProfile(disliked_ingredients=["celery"]))
    assert '"title": "Beef Stew"' in prompt
    assert "User dislikes: celery - avoid these ingredients" in prompt
    assert "{notes}" not in prompt


def test_suggest_prompt():
    prompt = build_suggest_ingredients_prompt(["chicken", "rice"])
    assert prompt.startswith("I have these ingredients: chicken, rice.")
    assert "Personalization notes" not in prompt


def test_youtube_url_is_encoded():
    assert youtube_search_url("Beef Stew recipe tutorial") == (
        "https://www.youtube.com/results?search_query=Beef+Stew+recipe+tutorial"
    )


def test_off_topic_reply_quotes_a_snippet():
    msg = "Can you tell me who won the big game last night?"
    reply = off_topic_reply(msg, FirstChoice())
    assert '"Can you tell me who won the bi..."' in reply
    assert reply.endswith(COOKING_SUGGESTIONS[0])


def test_clean_gratitude_reply():
    assert clean_gratitude_reply("You're welcome! Enjoy the recipe.") == "You're welcome! Enjoy the cooking."
    assert clean_gratitude_reply("ok") == GRATITUDE_DEFAULT
    assert clean_gratitude_reply('Sure thing {"recipes": []}') == GRATITUDE_DEFAULT
    assert clean_gratitude_reply(None) == GRATITUDE_DEFAULT


def test_offline_reply():
    assert "(chicken, rice)" in offline_reply({"rice", "chicken"})
    assert offline_reply([]) == OFFLINE_GENERIC

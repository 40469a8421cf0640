# tests/unit/test_intents.py
import pytest

from cookmate.core.intents import (
    classify,
    is_developer_question,
    is_gratitude_or_compliment,
    is_identity_question,
    is_off_topic,
)
from cookmate.core.models import Classification


def test_cooking_keyword_overrides_off_topic():
    assert is_off_topic("What do you think about politics and chicken?") is False
    assert is_off_topic("Who will win the election?") is True


def test_pure_thanks_is_gratitude():
    assert is_gratitude_or_compliment("Thanks so much, you're the best!") is True


def test_thanks_with_a_cooking_request_is_not_gratitude():
    msg = "Thanks, can you help me cook chicken and rice and pasta?"
    assert is_gratitude_or_compliment(msg) is False
    assert classify(msg) is Classification.ON_TOPIC


def test_containment_is_substring_based():
    # "thanks" inside "thanksgiving" still counts, but the recipe keyword balances it
    assert is_gratitude_or_compliment("thanksgiving recipe ideas") is False


@pytest.mark.parametrize("msg,expected", [
    ("Who made this app?", Classification.DEVELOPER),
    ("Is John Mark the developer?", Classification.DEVELOPER),
    ("Who are you?", Classification.IDENTITY),
    ("Amazing, thank you!", Classification.GRATITUDE),
    ("What's the weather tomorrow?", Classification.OFF_TOPIC),
    ("How do I make adobo?", Classification.ON_TOPIC),
])
def test_classify(msg, expected):
    assert classify(msg) is expected


def test_developer_checked_before_identity():
    msg = "Who are you and who made you?"
    assert is_identity_question(msg) and is_developer_question(msg)
    assert classify(msg) is Classification.DEVELOPER

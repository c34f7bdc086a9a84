"""Tests for keyword intent classification and canned replies."""

import pytest

from kisan_saathi.models.chat_session import Intent
from kisan_saathi.services.intent import (
    INTENT_RULES,
    QUICK_ACTIONS,
    RESPONSES,
    classify,
    get_quick_action_prompt,
    respond,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("What's the weather like tomorrow?", Intent.WEATHER),
        ("Current onion price?", Intent.MARKET_PRICE),
        ("Which market is best?", Intent.MARKET_PRICE),
        ("Best crop for kharif", Intent.CROP_PLANNING),
        ("When should I plant wheat", Intent.CROP_PLANNING),
        ("My soil is sandy", Intent.SOIL_HEALTH),
        ("Aphids are a pest on my okra", Intent.PEST_DISEASE),
        ("Leaf disease on tomato", Intent.PEST_DISEASE),
        ("How much fertilizer for paddy?", Intent.FERTILIZER),
        ("Hello there", Intent.UNKNOWN),
    ],
)
def test_classify_single_keyword(text: str, expected: Intent) -> None:
    assert classify(text) == expected


def test_classify_is_case_insensitive() -> None:
    assert classify("WEATHER UPDATE") == Intent.WEATHER
    assert classify("Soil Test") == Intent.SOIL_HEALTH


def test_crop_beats_soil() -> None:
    """Earlier rules win when several keywords are present."""
    assert classify("Which crop suits my soil?") == Intent.CROP_PLANNING


def test_weather_beats_everything() -> None:
    assert classify("weather impact on market price of crop") == Intent.WEATHER


def test_price_beats_fertilizer() -> None:
    assert classify("fertilizer price") == Intent.MARKET_PRICE


def test_substring_match_inside_words() -> None:
    """'planting' contains 'plant' and 'pesticide' contains 'pest'."""
    assert classify("planting season") == Intent.CROP_PLANNING
    assert classify("which pesticide") == Intent.PEST_DISEASE


def test_rule_table_order() -> None:
    assert [intent for _, intent in INTENT_RULES] == [
        Intent.WEATHER,
        Intent.MARKET_PRICE,
        Intent.CROP_PLANNING,
        Intent.SOIL_HEALTH,
        Intent.PEST_DISEASE,
        Intent.FERTILIZER,
    ]


def test_every_intent_has_a_response() -> None:
    assert set(RESPONSES) == set(Intent)


def test_respond_uses_intent_template() -> None:
    assert respond("weather please") == RESPONSES[Intent.WEATHER]
    assert "NPK" in respond("fertilizer dose")
    assert "more specific details" in respond("hi")


def test_respond_is_deterministic() -> None:
    assert respond("soil pH") == respond("soil pH")


def test_quick_action_prompts_route_to_expected_intents() -> None:
    expected = {
        "weather": Intent.WEATHER,
        "crops": Intent.CROP_PLANNING,
        "prices": Intent.MARKET_PRICE,
        "soil": Intent.SOIL_HEALTH,
    }
    assert [a.id for a in QUICK_ACTIONS] == list(expected)
    for action_id, intent in expected.items():
        assert classify(get_quick_action_prompt(action_id)) == intent


def test_unknown_quick_action() -> None:
    assert get_quick_action_prompt("irrigation") is None

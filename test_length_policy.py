"""Tests for the AI length budget"""
from ghostwriter.length_policy import LengthSetting, ResponseLengthPolicy, describe_budget

policy = ResponseLengthPolicy()


def test_fixed_settings():
    assert policy.resolve(LengthSetting.SHORT).max_tokens == 40
    assert policy.resolve(LengthSetting.SHORT, opener=True).max_tokens == 30
    assert policy.resolve(LengthSetting.SHORT).word_hint == "one sentence"
    assert policy.resolve(LengthSetting.MEDIUM).max_tokens == 150
    assert policy.resolve(LengthSetting.MEDIUM, opener=True).max_tokens == 120
    assert policy.resolve(LengthSetting.LONG).max_tokens == 250
    assert policy.resolve(LengthSetting.LONG, opener=True).max_tokens == 200
    assert policy.resolve(LengthSetting.LONG).word_hint == "~150"


def test_match_follows_human_words():
    budget = policy.resolve(LengthSetting.MATCH, last_human_word_count=42)
    assert budget.word_hint == "approximately 42"
    assert budget.max_tokens == 150


def test_match_without_human_input_uses_medium():
    assert policy.resolve("match", 0) == policy.resolve(LengthSetting.MEDIUM)
    assert policy.resolve("match", None, opener=True) == policy.resolve("medium", opener=True)


def test_string_and_unknown_settings():
    assert policy.resolve("LONG") == policy.resolve(LengthSetting.LONG)
    assert policy.resolve("enormous") == policy.resolve(LengthSetting.MEDIUM)


def test_describe_budget():
    budget = policy.resolve(LengthSetting.MATCH, 12)
    assert "12 words" in describe_budget(LengthSetting.MATCH, budget, 12)
    assert "medium" in describe_budget("match", policy.resolve("match"), 0)
    assert "short" in describe_budget("short", policy.resolve("short"))

"""Tests for prompt construction and genres"""
from ghostwriter.genres import FREE_WRITING, GENRE_PROMPTS, get_genres, is_free_writing, is_known_genre
from ghostwriter.length_policy import LengthSetting, ResponseLengthPolicy
from ghostwriter.prompts import CONTINUATION_TEMPERATURE, OPENER_TEMPERATURE, build_request

policy = ResponseLengthPolicy()


def test_opener_uses_genre_template():
    request = build_request("horror", policy.resolve(LengthSetting.SHORT, opener=True))
    assert request.user_prompt == GENRE_PROMPTS["horror"]
    assert request.temperature == OPENER_TEMPERATURE
    assert request.max_tokens == 30
    assert "one sentence" in request.system_prompt
    assert "opening" in request.system_prompt


def test_continuation_includes_story():
    story = "The ship drifted. Nobody answered the radio."
    request = build_request("scifi", policy.resolve(LengthSetting.LONG), story + "\u00a0")
    assert request.temperature == CONTINUATION_TEMPERATURE
    assert request.max_tokens == 250
    assert request.user_prompt.endswith(story)
    assert "scifi" in request.user_prompt
    assert "continue the story" in request.system_prompt


def test_genres():
    genres = get_genres()
    assert genres[-1] == FREE_WRITING
    assert "hardboiled" in genres
    assert is_known_genre("solarpunk")
    assert is_known_genre(FREE_WRITING)
    assert not is_known_genre("opera")
    assert is_free_writing("freewriting")

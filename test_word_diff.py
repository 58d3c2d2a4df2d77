"""Tests for measuring what the human added during a turn"""
from ghostwriter.word_diff import WordDiffEngine

engine = WordDiffEngine()


def test_append_is_the_addition():
    before = "The rain fell on the city. "
    after = "The rain fell on the city. She lit a cigarette and waited."
    assert engine.diff(before, after) == "She lit a cigarette and waited."
    assert engine.measure(before, after).word_count == 6


def test_prepend_is_the_addition():
    assert engine.diff("the end.", "It was nearly the end.") == "It was nearly"


def test_no_growth_is_empty():
    contribution = engine.measure("Some story text", "Some story text")
    assert contribution.is_empty
    assert contribution.text == ""


def test_deleting_text_is_empty():
    assert engine.measure("Some story text", "Some story").is_empty


def test_whitespace_only_typing_is_empty():
    contribution = engine.measure("Story. ", "Story.    \n\t")
    assert contribution.is_empty


def test_interior_edit_counts_whole_text():
    before = "alpha omega"
    after = "alpha beta gamma omega"
    assert engine.diff(before, after) == after
    assert engine.measure(before, after).word_count == 4


def test_empty_baseline():
    contribution = engine.measure("", "  Once upon a time  ")
    assert contribution.text == "Once upon a time"
    assert contribution.word_count == 4


def test_count_words():
    assert WordDiffEngine.count_words("") == 0
    assert WordDiffEngine.count_words("one  two\nthree") == 3


def test_simple_append_and_deletion():
    assert engine.diff("Hello", "Hello world") == "world"
    assert WordDiffEngine.count_words("Hello world") == 2
    assert engine.diff("Hello world", "Hello") == ""

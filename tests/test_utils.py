"""Tests for lineedit.utils -- classification, word scanning and widths."""

from __future__ import annotations

import pytest

from lineedit.utils import (
    common_prefix,
    is_punctuation_char,
    is_word_char,
    next_grapheme_end,
    previous_grapheme_start,
    visible_width,
    word_backward,
    word_forward,
)


class TestClassification:
    def test_letters_and_digits_are_word_chars(self) -> None:
        for ch in "aZ09é":
            assert is_word_char(ch)

    def test_punctuation_and_space_are_not_word_chars(self) -> None:
        for ch in " ,.-_!\t":
            assert not is_word_char(ch)

    def test_punctuation_includes_symbols(self) -> None:
        assert is_punctuation_char(",")
        assert is_punctuation_char("+")
        assert not is_punctuation_char(" ")
        assert not is_punctuation_char("a")


class TestWordForward:
    """Forward scans return the end of the next word, or None."""

    def test_from_word_start_skips_word_and_attached_punctuation(self) -> None:
        assert word_forward("ab, cd", 0) == 3

    def test_from_whitespace_skips_to_end_of_next_word(self) -> None:
        assert word_forward("ab, cd", 3) == 6

    def test_plain_words(self) -> None:
        assert word_forward("one two", 0) == 3
        assert word_forward("one two", 3) == 7

    def test_at_end_is_no_movement(self) -> None:
        assert word_forward("ab, cd", 6) is None

    def test_trailing_non_word_chars_reach_end(self) -> None:
        assert word_forward("ab  ", 2) == 4

    def test_empty_text(self) -> None:
        assert word_forward("", 0) is None


class TestWordBackward:
    def test_from_end_goes_to_word_start(self) -> None:
        assert word_backward("one two", 7) == 4

    def test_skips_trailing_non_word_chars(self) -> None:
        assert word_backward("one two  ", 9) == 4

    def test_from_inside_word(self) -> None:
        assert word_backward("one two", 6) == 4

    def test_at_start_is_no_movement(self) -> None:
        assert word_backward("one", 0) is None

    def test_leading_non_word_only_goes_to_zero(self) -> None:
        assert word_backward("  ", 2) == 0


class TestGraphemes:
    def test_ascii_steps_one(self) -> None:
        assert previous_grapheme_start("abc", 2) == 1
        assert next_grapheme_end("abc", 1) == 2

    def test_combining_sequence_is_one_step(self) -> None:
        text = "éx"
        assert next_grapheme_end(text, 0) == 2
        assert previous_grapheme_start(text, 2) == 0

    def test_bounds(self) -> None:
        assert previous_grapheme_start("abc", 0) == 0
        assert next_grapheme_end("abc", 3) == 3


class TestVisibleWidth:
    def test_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty(self) -> None:
        assert visible_width("") == 0

    def test_wide_characters(self) -> None:
        assert visible_width("日本") == 4

    def test_combining_mark_has_no_width(self) -> None:
        assert visible_width("é") == 1


class TestCommonPrefix:
    @pytest.mark.parametrize(
        ("items", "expected"),
        [
            (["o", "obar"], "o"),
            (["abc", "abd", "ab"], "ab"),
            (["x", "y"], ""),
            ([], ""),
        ],
    )
    def test_common_prefix(self, items: list[str], expected: str) -> None:
        assert common_prefix(items) == expected

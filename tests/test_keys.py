"""Tests for lineedit.keys -- key identifiers and raw input parsing."""

from __future__ import annotations

import pytest

from lineedit.keys import (
    END_OF_INPUT,
    INTERRUPT,
    KeyEvent,
    alt_chord,
    ctrl_char,
    key_event,
    parse_key,
)


class TestChordHelpers:
    def test_ctrl_char(self) -> None:
        assert ctrl_char("A") == "\x01"
        assert ctrl_char("r") == "\x12"

    def test_alt_chord(self) -> None:
        assert alt_chord("b") == "alt+b"
        assert alt_chord("backspace") == "alt+backspace"
        assert alt_chord("ctrl+f") == "ctrl+alt+f"
        assert alt_chord("alt+x") == "alt+x"


class TestParseKey:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1b[C", "right"),
            ("\x1b[D", "left"),
            ("\x1bOH", "home"),
            ("\x1b[4~", "end"),
            ("\x1b[3~", "delete"),
            ("\x1b[1;5C", "ctrl+right"),
            ("\x1b[1;3D", "alt+left"),
        ],
    )
    def test_escape_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\r", "enter"),
            ("\n", "enter"),
            ("\t", "tab"),
            (" ", "space"),
            ("\x7f", "backspace"),
            ("\x08", "backspace"),
            ("\x1b", "escape"),
            ("\x01", "ctrl+a"),
            ("\x12", "ctrl+r"),
            ("a", "a"),
            ("Z", "Z"),
        ],
    )
    def test_single_characters(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("\x1bb", "alt+b"),
            ("\x1bF", "alt+f"),
            ("\x1b\x7f", "alt+backspace"),
            ("\x1b\r", "alt+enter"),
            ("\x1b\x01", "ctrl+alt+a"),
        ],
    )
    def test_meta_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_unknown_input(self) -> None:
        assert parse_key("") is None
        assert parse_key("\x1b[99~") is None


class TestKeyEvent:
    def test_printable_key_carries_char(self) -> None:
        assert key_event("x") == KeyEvent("x", "x")

    def test_control_key_carries_control_char(self) -> None:
        assert key_event("\x01") == KeyEvent("ctrl+a", "\x01")

    def test_meta_key_carries_letter(self) -> None:
        assert key_event("\x1bb") == KeyEvent("alt+b", "b")

    def test_navigation_key_has_no_char(self) -> None:
        assert key_event("\x1b[A") == KeyEvent("up")

    def test_interrupt(self) -> None:
        assert INTERRUPT.interrupted
        assert not key_event("a").interrupted

    def test_end_of_input(self) -> None:
        assert END_OF_INPUT.end_of_input
        assert not END_OF_INPUT.interrupted
        assert not INTERRUPT.end_of_input

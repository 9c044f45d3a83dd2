"""Tests for lineedit.keybindings -- the immutable chord table."""

from __future__ import annotations

import dataclasses

import pytest

from lineedit.keybindings import (
    DEFAULT_KEYBINDINGS,
    DEFAULT_KEYMAP,
    EDITOR_COMMANDS,
    Binding,
    KeybindingTable,
)


# ---------------------------------------------------------------------------
# Default table
# ---------------------------------------------------------------------------


class TestDefaultKeybindings:
    """DEFAULT_KEYBINDINGS covers the Emacs chords."""

    def test_every_binding_names_a_known_command(self) -> None:
        for binding in DEFAULT_KEYBINDINGS:
            assert binding.command in EDITOR_COMMANDS

    def test_every_command_has_a_chord(self) -> None:
        bound = {b.command for b in DEFAULT_KEYBINDINGS}
        assert bound == set(EDITOR_COMMANDS)

    @pytest.mark.parametrize(
        ("key", "command"),
        [
            ("ctrl+a", "home"),
            ("ctrl+e", "end"),
            ("ctrl+b", "left"),
            ("ctrl+f", "right"),
            ("ctrl+p", "historyPrevious"),
            ("ctrl+n", "historyNext"),
            ("ctrl+k", "killToEndOfLine"),
            ("ctrl+u", "killToStartOfLine"),
            ("ctrl+w", "killWordBackward"),
            ("ctrl+y", "yank"),
            ("ctrl+d", "deleteChar"),
            ("ctrl+l", "refresh"),
            ("ctrl+r", "reverseSearch"),
            ("ctrl+g", "abort"),
            ("ctrl+q", "quotedInsert"),
            ("alt+b", "wordBackward"),
            ("alt+f", "wordForward"),
            ("alt+d", "killWordForward"),
            ("alt+backspace", "killWordBackward"),
            ("enter", "done"),
            ("tab", "tabOrComplete"),
            ("up", "historyPrevious"),
            ("down", "historyNext"),
        ],
    )
    def test_default_chord(self, key: str, command: str) -> None:
        assert DEFAULT_KEYMAP.lookup(key) == command

    def test_unbound_key(self) -> None:
        assert DEFAULT_KEYMAP.lookup("x") is None
        assert DEFAULT_KEYMAP.lookup("ctrl+z") is None


class TestKeybindingTable:
    def test_first_match_wins(self) -> None:
        table = KeybindingTable((Binding("ctrl+x", "home"), Binding("ctrl+x", "end")))
        assert table.lookup("ctrl+x") == "home"

    def test_table_is_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_KEYMAP.bindings = ()  # type: ignore[misc]


class TestKeybindingTableFromConfig:
    def test_empty_config_returns_default(self) -> None:
        assert KeybindingTable.from_config({}) is DEFAULT_KEYMAP
        assert KeybindingTable.from_config(None) is DEFAULT_KEYMAP

    def test_override_replaces_command_chords(self) -> None:
        table = KeybindingTable.from_config({"home": ["ctrl+x", "home"]})
        assert table.lookup("ctrl+x") == "home"
        assert table.lookup("home") == "home"
        assert table.lookup("ctrl+a") is None

    def test_override_takes_precedence_over_other_commands(self) -> None:
        table = KeybindingTable.from_config({"yank": "ctrl+a"})
        assert table.lookup("ctrl+a") == "yank"
        assert table.lookup("ctrl+e") == "end"

    def test_unknown_command_raises(self) -> None:
        with pytest.raises(ValueError):
            KeybindingTable.from_config({"teleport": "ctrl+t"})

    def test_defaults_untouched(self) -> None:
        KeybindingTable.from_config({"home": "ctrl+x"})
        assert DEFAULT_KEYMAP.lookup("ctrl+a") == "home"

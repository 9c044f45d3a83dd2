"""Key chord to editor command bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping, NamedTuple, get_args

from lineedit.keys import KeyId

EditorCommand = Literal[
    # Cursor movement
    "home",
    "end",
    "left",
    "right",
    "wordBackward",
    "wordForward",
    # History
    "historyPrevious",
    "historyNext",
    "reverseSearch",
    # Deletion and kill/yank
    "backspace",
    "deleteChar",
    "killToEndOfLine",
    "killToStartOfLine",
    "killWordForward",
    "killWordBackward",
    "yank",
    # Text input
    "done",
    "tabOrComplete",
    "quotedInsert",
    # Screen
    "refresh",
    "abort",
]

EDITOR_COMMANDS: frozenset[str] = frozenset(get_args(EditorCommand))

KeybindingsConfig = Mapping[str, KeyId | list[KeyId]]


class Binding(NamedTuple):
    key: KeyId
    command: EditorCommand


DEFAULT_KEYBINDINGS: tuple[Binding, ...] = (
    Binding("home", "home"),
    Binding("end", "end"),
    Binding("left", "left"),
    Binding("right", "right"),
    Binding("up", "historyPrevious"),
    Binding("down", "historyNext"),
    Binding("enter", "done"),
    Binding("backspace", "backspace"),
    Binding("delete", "deleteChar"),
    Binding("tab", "tabOrComplete"),
    # Emacs keys
    Binding("ctrl+a", "home"),
    Binding("ctrl+e", "end"),
    Binding("ctrl+b", "left"),
    Binding("ctrl+f", "right"),
    Binding("ctrl+p", "historyPrevious"),
    Binding("ctrl+n", "historyNext"),
    Binding("ctrl+k", "killToEndOfLine"),
    Binding("ctrl+u", "killToStartOfLine"),
    Binding("ctrl+w", "killWordBackward"),
    Binding("ctrl+y", "yank"),
    Binding("ctrl+d", "deleteChar"),
    Binding("ctrl+l", "refresh"),
    Binding("ctrl+r", "reverseSearch"),
    Binding("ctrl+g", "abort"),
    Binding("alt+b", "wordBackward"),
    Binding("alt+f", "wordForward"),
    Binding("alt+d", "killWordForward"),
    Binding("alt+backspace", "killWordBackward"),
    Binding("ctrl+left", "wordBackward"),
    Binding("ctrl+right", "wordForward"),
    # quote
    Binding("ctrl+q", "quotedInsert"),
)


@dataclass(frozen=True)
class KeybindingTable:
    """Ordered, immutable list of bindings; the first match for a chord wins."""

    bindings: tuple[Binding, ...] = DEFAULT_KEYBINDINGS

    def lookup(self, key: KeyId) -> EditorCommand | None:
        for binding in self.bindings:
            if binding.key == key:
                return binding.command
        return None

    @classmethod
    def from_config(cls, config: KeybindingsConfig | None) -> KeybindingTable:
        """Build a table where *config* replaces the chords of the commands it names.

        Configured bindings come first so they take precedence over any default
        binding for the same chord.

        Raises:
            ValueError: if *config* names an unknown command.
        """
        if not config:
            return DEFAULT_KEYMAP

        overrides: list[Binding] = []
        for command, keys in config.items():
            if command not in EDITOR_COMMANDS:
                raise ValueError(f"Unknown editor command: {command!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            overrides.extend(Binding(key, command) for key in key_array)  # type: ignore[arg-type]

        defaults = [b for b in DEFAULT_KEYBINDINGS if b.command not in config]
        return cls(tuple(overrides + defaults))


DEFAULT_KEYMAP = KeybindingTable()

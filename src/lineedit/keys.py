"""Key events and parsing of raw terminal input into key identifiers.

Key identifiers are plain strings such as ``"a"``, ``"ctrl+a"``,
``"alt+b"``, ``"up"`` or ``"alt+backspace"``. The editor's binding table is
keyed by these identifiers; ``parse_key`` turns raw terminal input into one.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str


# ---------------------------------------------------------------------------
# Key events
# ---------------------------------------------------------------------------

INTERRUPT_KEY: KeyId = "interrupt"
PASTE_KEY: KeyId = "paste"
END_OF_INPUT_KEY: KeyId = "eof"


@dataclass(frozen=True)
class KeyEvent:
    """One key press as delivered by a terminal.

    ``key`` is the chord identifier used for binding lookup; ``char`` is the
    character the key would insert (empty for pure navigation keys). For a
    bracketed paste ``key`` is ``"paste"`` and ``char`` holds the whole text.
    """

    key: KeyId
    char: str = ""

    @property
    def interrupted(self) -> bool:
        return self.key == INTERRUPT_KEY

    @property
    def end_of_input(self) -> bool:
        return self.key == END_OF_INPUT_KEY


# Returned by a terminal's blocking read when the user interrupts (Ctrl+C).
INTERRUPT = KeyEvent(INTERRUPT_KEY)

# Returned once the input stream is closed or can no longer be read.
END_OF_INPUT = KeyEvent(END_OF_INPUT_KEY)


# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
}

LEGACY_CTRL_SEQUENCES: dict[str, str] = {
    "\x1b[1;5A": "up",
    "\x1b[1;5B": "down",
    "\x1b[1;5C": "right",
    "\x1b[1;5D": "left",
    "\x1b[1;5H": "home",
    "\x1b[1;5F": "end",
    "\x1b[3;5~": "delete",
}

LEGACY_ALT_SEQUENCES: dict[str, str] = {
    "\x1b[1;3A": "up",
    "\x1b[1;3B": "down",
    "\x1b[1;3C": "right",
    "\x1b[1;3D": "left",
    "\x1b[1;3H": "home",
    "\x1b[1;3F": "end",
    "\x1b[3;3~": "delete",
}

# ---------------------------------------------------------------------------
# Chord helpers
# ---------------------------------------------------------------------------


def ctrl_char(letter: str) -> str:
    """Character a terminal sends for Ctrl + *letter* (``'A'`` -> ``'\\x01'``)."""
    return chr(ord(letter.upper()) - ord("A") + 1)


def alt_chord(key: KeyId) -> KeyId:
    """Add the alt modifier to *key*, keeping the ``ctrl+alt+`` ordering."""
    if "alt+" in key:
        return key
    if key.startswith("ctrl+"):
        return "ctrl+alt+" + key[len("ctrl+") :]
    return "alt+" + key


# ---------------------------------------------------------------------------
# parse_key -- determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse raw terminal input and return the key identifier, or ``None``."""
    if not data:
        return None

    for seq_dict, mod_prefix in [
        (LEGACY_CTRL_SEQUENCES, "ctrl+"),
        (LEGACY_ALT_SEQUENCES, "alt+"),
        (LEGACY_KEY_SEQUENCES, ""),
    ]:
        if data in seq_dict:
            return mod_prefix + seq_dict[data]

    # --- Simple single-byte keys ---
    if data == "\x1b":
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x1b":
            return "alt+escape"
        if ch == "\r" or ch == "\n":
            return "alt+enter"
        if ch == "\t":
            return "alt+tab"
        if ch == " ":
            return "alt+space"
        if ch == "\x7f" or ch == "\x08":
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isprintable():
            return "alt+" + ch.lower()

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


def key_event(data: str) -> KeyEvent:
    """Build the :class:`KeyEvent` for one complete raw input sequence.

    Unknown escape sequences produce an event with an empty ``char`` so they
    are neither bound nor inserted.
    """
    key = parse_key(data) or ""
    if len(data) == 1:
        return KeyEvent(key, data)
    if len(data) == 2 and data[0] == "\x1b" and key.startswith("alt+"):
        return KeyEvent(key, data[1])
    return KeyEvent(key)

"""Editable character sequence with a cursor index."""

from __future__ import annotations


class TextBuffer:
    """The text being edited plus the cursor position.

    Positions are character offsets into ``text``, never screen columns.
    The cursor always satisfies ``0 <= cursor <= length``.
    """

    def __init__(self, text: str = "") -> None:
        self._chars: list[str] = list(text)
        self._cursor: int = len(self._chars)

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def length(self) -> int:
        return len(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, pos: int) -> None:
        if not 0 <= pos <= len(self._chars):
            raise IndexError(f"cursor {pos} outside [0, {len(self._chars)}]")
        self._cursor = pos

    def insert(self, pos: int, text: str) -> None:
        """Insert *text* before position *pos*. The cursor is not moved."""
        if not 0 <= pos <= len(self._chars):
            raise IndexError(f"insert position {pos} outside [0, {len(self._chars)}]")
        self._chars[pos:pos] = list(text)

    def remove_range(self, pos: int, length: int) -> str:
        """Remove *length* characters starting at *pos* and return them.

        The cursor is clamped to the new length.
        """
        if length < 0 or not 0 <= pos <= len(self._chars) or pos + length > len(self._chars):
            raise IndexError(
                f"range [{pos}, {pos + length}) outside [0, {len(self._chars)}]"
            )
        removed = "".join(self._chars[pos : pos + length])
        del self._chars[pos : pos + length]
        self._cursor = min(self._cursor, len(self._chars))
        return removed

    def set_all(self, text: str) -> None:
        """Replace the whole content and move the cursor to the end."""
        self._chars = list(text)
        self._cursor = len(self._chars)

    def __str__(self) -> str:
        return self.text

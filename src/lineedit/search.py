"""Incremental reverse search state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SearchDirection = Literal["none", "reverse"]

SEARCH_PROMPT_FMT = "(reverse-i-search)`{}': "


@dataclass
class SearchState:
    """One reverse-search episode.

    ``match_at`` is the buffer offset of the last in-line match, ``None``
    when unset. ``last_term`` survives between episodes so an empty search
    can re-run the previous one.
    """

    direction: SearchDirection = "none"
    term: str = ""
    match_at: int | None = None
    last_term: str = ""

    @property
    def active(self) -> bool:
        return self.direction != "none"

    @property
    def prompt(self) -> str:
        return SEARCH_PROMPT_FMT.format(self.term)

    def begin(self) -> None:
        if self.term:
            self.last_term = self.term
        self.direction = "reverse"
        self.term = ""
        self.match_at = None

    def end(self) -> None:
        self.direction = "none"

    def matches_at(self, text: str, cursor: int) -> bool:
        """Whether the term still matches the text under the cursor."""
        return cursor < len(text) and text.startswith(self.term, cursor)

    def find_in_line(self, text: str, cursor: int) -> int | None:
        """Offset of the nearest occurrence of the term at or before the cursor.

        With the cursor at the end the whole line is searched. With the cursor
        on the previous match only strictly earlier occurrences count, so
        repeating the search walks backwards through the line.
        """
        if cursor == len(text):
            p = text.rfind(self.term)
            return p if p != -1 else None

        start = cursor - 1 if cursor == self.match_at else cursor
        if start < 0:
            return None
        # The match must start at or before ``start`` but may run past it
        p = text.rfind(self.term, 0, start + len(self.term))
        return p if p != -1 else None

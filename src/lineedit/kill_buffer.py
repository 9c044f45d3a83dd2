"""Single-entry buffer for Emacs-style kill/yank operations."""

from __future__ import annotations


class KillBuffer:
    """Holds the most recently killed (deleted) text.

    Consecutive invocations of the same kill command accumulate into the
    buffer instead of replacing it, so killing two words in a row yanks
    both back.
    """

    def __init__(self) -> None:
        self._text: str = ""

    def push(self, text: str, *, prepend: bool, accumulate: bool = False) -> None:
        """Store killed text.

        Args:
            text: The killed text.
            prepend: When accumulating, put *text* in front (backward kills)
                instead of after (forward kills).
            accumulate: Merge with the current content instead of replacing it.
        """
        if accumulate:
            self._text = text + self._text if prepend else self._text + text
        else:
            self._text = text

    def peek(self) -> str:
        """The text a yank would insert."""
        return self._text

"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``lineedit.terminal.Terminal`` protocol without performing any real I/O.
Keys are scripted up front; output is both recorded verbatim and applied to
an emulated screen grid so tests can assert on what the user would see.
"""

from __future__ import annotations

from collections import deque

from lineedit.keys import END_OF_INPUT, INTERRUPT, PASTE_KEY, KeyEvent, key_event
from lineedit.utils import visible_width


class VirtualTerminal:
    """In-memory terminal with a scripted keyboard and a character grid.

    The grid follows xterm's wrapping rules: writing into the last column
    leaves the cursor there with a pending wrap, and the next printable
    character moves to the following row first. A double-width character
    takes two cells and wraps early when only the last column is left.
    Zero-width characters join the cell before them. Writing below the last
    row scrolls the grid up.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    """

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self._rows = rows
        self._columns = columns
        self._grid: list[list[str]] = [[" "] * columns for _ in range(rows)]
        self._row = 0
        self._col = 0
        self._pending_wrap = False
        self._keys: deque[KeyEvent] = deque()
        self._buffer: list[str] = []
        self.started = False
        self.start_count = 0
        self.stop_count = 0
        self.clear_count = 0
        self.scroll_count = 0

    # -- Terminal protocol: properties --------------------------------------

    @property
    def window_width(self) -> int:
        return self._columns

    @property
    def buffer_height(self) -> int:
        return self._rows

    @property
    def cursor_top(self) -> int:
        return self._row

    # -- Terminal protocol: lifecycle ---------------------------------------

    def start(self) -> None:
        self.started = True
        self.start_count += 1

    def stop(self) -> None:
        self.started = False
        self.stop_count += 1

    # -- Terminal protocol: input -------------------------------------------

    def read_key(self) -> KeyEvent:
        """Return the next scripted key.

        Raises ``RuntimeError`` when the script runs out, so a test that
        forgets to finish the edit fails instead of hanging.
        """
        if not self._keys:
            raise RuntimeError("No more scripted input")
        return self._keys.popleft()

    # -- Terminal protocol: output ------------------------------------------

    def write(self, text: str) -> None:
        self._buffer.append(text)
        for ch in text:
            self._put(ch)

    def set_cursor_position(self, col: int, row: int) -> None:
        if not 0 <= col < self._columns or not 0 <= row < self._rows:
            raise ValueError(f"cursor position ({col}, {row}) outside the screen")
        self._col = col
        self._row = row
        self._pending_wrap = False

    def clear_screen(self) -> None:
        self.clear_count += 1
        self._grid = [[" "] * self._columns for _ in range(self._rows)]
        self._row = 0
        self._col = 0
        self._pending_wrap = False

    # -- Screen emulation ---------------------------------------------------

    def _put(self, ch: str) -> None:
        if ch == "\n":
            # Output is in cooked form: newline returns the carriage too
            self._col = 0
            self._pending_wrap = False
            self._line_feed()
            return
        if ch == "\r":
            self._col = 0
            self._pending_wrap = False
            return

        width = visible_width(ch)
        if width == 0:
            col = self._col if self._pending_wrap else self._col - 1
            if col >= 0:
                self._grid[self._row][col] += ch
            return

        if width > 1 and not self._pending_wrap and self._col + width > self._columns:
            self._grid[self._row][self._col] = " "
            self._pending_wrap = True

        if self._pending_wrap:
            self._col = 0
            self._pending_wrap = False
            self._line_feed()

        row = self._grid[self._row]
        if row[self._col] == "" and self._col > 0:
            # Overwriting the right half of a wide character erases it
            row[self._col - 1] = " "
        row[self._col] = ch
        for i in range(1, width):
            row[self._col + i] = ""
        last = self._col + width - 1
        if last + 1 < self._columns and row[last + 1] == "":
            row[last + 1] = " "

        if last == self._columns - 1:
            self._col = last
            self._pending_wrap = True
        else:
            self._col = last + 1

    def _line_feed(self) -> None:
        if self._row == self._rows - 1:
            self._grid.pop(0)
            self._grid.append([" "] * self._columns)
            self.scroll_count += 1
        else:
            self._row += 1

    # -- Test helpers: input ------------------------------------------------

    def send(self, *data: str) -> None:
        """Queue raw key sequences, one key per argument (``"\\x1b[A"`` is Up)."""
        for d in data:
            self._keys.append(key_event(d))

    def type_text(self, text: str) -> None:
        """Queue every character of *text* as its own key press."""
        for ch in text:
            self._keys.append(key_event(ch))

    def interrupt(self) -> None:
        self._keys.append(INTERRUPT)

    def end_input(self) -> None:
        """Queue the end of the input stream."""
        self._keys.append(END_OF_INPUT)

    def paste(self, text: str) -> None:
        self._keys.append(KeyEvent(PASTE_KEY, text))

    @property
    def pending_keys(self) -> int:
        return len(self._keys)

    # -- Test helpers: output -----------------------------------------------

    @property
    def output(self) -> str:
        """Return everything written to the terminal as a single string."""
        return "".join(self._buffer)

    def clear_buffer(self) -> None:
        """Discard all recorded output."""
        self._buffer.clear()

    @property
    def cursor(self) -> tuple[int, int]:
        """Cursor as ``(col, row)``."""
        return self._col, self._row

    def line(self, row: int) -> str:
        """Screen row *row* with trailing blanks removed."""
        return "".join(self._grid[row]).rstrip()

    def screen(self) -> list[str]:
        return [self.line(r) for r in range(self._rows)]

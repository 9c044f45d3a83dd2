"""Display form of the edit buffer and its placement on the terminal.

The module-level functions are pure: they map buffer text to its rendered
form and buffer offsets to screen coordinates. :class:`LineRenderer` uses
them to draw the prompt and text on a :class:`~lineedit.terminal.Terminal`
and keep the terminal cursor on the buffer cursor across line wraps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import grapheme

from lineedit.utils import visible_width

if TYPE_CHECKING:
    from lineedit.terminal import Terminal
    from lineedit.text_buffer import TextBuffer

TAB_WIDTH = 4

# Code points below this are shown in caret form (^A for 0x01), except tab.
_CARET_LIMIT = 26


# ---------------------------------------------------------------------------
# Pure rendering functions
# ---------------------------------------------------------------------------


def render_char(c: str) -> str:
    """Display form of a single buffer character."""
    code = ord(c)
    if code < _CARET_LIMIT:
        if c == "\t":
            return " " * TAB_WIDTH
        return "^" + chr(code + ord("A") - 1)
    return c


def compute_rendered(text: str) -> str:
    """Render *text*: control characters in caret form, tabs as spaces."""
    return "".join(render_char(c) for c in text)


def text_to_render_pos(text: str, pos: int) -> int:
    """Offset into the rendered line that corresponds to buffer offset *pos*."""
    p = 0
    for c in text[:pos]:
        code = ord(c)
        if code < _CARET_LIMIT:
            p += TAB_WIDTH if c == "\t" else 2
        else:
            p += 1
    return p


def screen_cells(text: str, window_width: int) -> int:
    """Cells *text* advances the cursor by when written from column 0.

    A double-width character that does not fit in the last column of a row
    wraps to the next row first, leaving that column blank, so it costs the
    skipped cell as well.
    """
    if text.isascii() and text.isprintable():
        return len(text)
    cells = 0
    for g in grapheme.graphemes(text):
        width = visible_width(g)
        col = cells % window_width
        if width > 1 and col + width > window_width:
            cells += window_width - col
        cells += width
    return cells


def line_count(prompt: str, rendered: str, window_width: int) -> int:
    """Number of line wraps the prompt plus *rendered* text causes."""
    return screen_cells(prompt + rendered, window_width) // window_width


def screen_position(
    home_row: int, offset: int, window_width: int, buffer_height: int
) -> tuple[int, int]:
    """Screen ``(row, column)`` for a column *offset* from the prompt start.

    The row is clamped to the last row of the terminal buffer.
    """
    row = home_row + offset // window_width
    col = offset % window_width
    if row >= buffer_height:
        row = buffer_height - 1
    return row, col


# ---------------------------------------------------------------------------
# LineRenderer
# ---------------------------------------------------------------------------


class LineRenderer:
    """Draws a prompt and the rendered buffer, tracking where it sits on screen.

    ``home_row`` is the row the prompt starts on. It is recomputed after every
    full draw because writing past the bottom of the terminal scrolls it up.
    ``max_rendered`` is the widest prompt-plus-text drawn so far; shorter
    redraws pad up to it to erase leftovers.
    """

    def __init__(self, terminal: Terminal, buffer: TextBuffer) -> None:
        self._terminal = terminal
        self._buffer = buffer
        self.prompt: str = ""
        self.rendered: str = ""
        self.max_rendered: int = 0
        self.home_row: int = 0

    @property
    def line_count(self) -> int:
        return line_count(self.prompt, self.rendered, self._terminal.window_width)

    def begin(self, prompt: str) -> None:
        """Start drawing a new line at the terminal's current row."""
        self.prompt = prompt
        self.rendered = ""
        self.reset_line()

    def reset_line(self) -> None:
        """Forget previous draws; the next one starts on the current row."""
        self.max_rendered = 0
        self.home_row = self._terminal.cursor_top

    def compute(self) -> None:
        """Recompute the rendered line from the buffer."""
        self.rendered = compute_rendered(self._buffer.text)

    def screen_offset(self, pos: int) -> int:
        """Cells from the prompt start to where buffer offset *pos* is shown."""
        width = self._terminal.window_width
        rpos = text_to_render_pos(self._buffer.text, pos)
        prefix = self.prompt + self.rendered[:rpos]
        following = next(grapheme.graphemes(self.rendered[rpos:]), "")
        # A wide character pushed to the next row takes the cursor with it
        return screen_cells(prefix + following, width) - visible_width(following)

    def total_cells(self) -> int:
        return screen_cells(self.prompt + self.rendered, self._terminal.window_width)

    # -- drawing ------------------------------------------------------------

    def render(self) -> None:
        """Write prompt and text from the current terminal position."""
        term = self._terminal
        term.write(self.prompt)
        term.write(self.rendered)

        total = self.total_cells()
        widest = max(total, self.max_rendered)
        if total < self.max_rendered:
            term.write(" " * (self.max_rendered - total))
        self.max_rendered = total

        # Force the wrap when the text ends exactly on the last column
        term.write(" ")

        self.update_home_row(widest)

    def render_from(self, pos: int) -> None:
        """Rewrite the text from buffer offset *pos* onwards.

        The terminal cursor must already be at *pos*. Only valid when the edit
        did not change the number of wrapped lines.
        """
        term = self._terminal
        rpos = text_to_render_pos(self._buffer.text, pos)
        term.write(self.rendered[rpos:])

        total = self.total_cells()
        if total > self.max_rendered:
            self.max_rendered = total
        elif total < self.max_rendered:
            term.write(" " * (self.max_rendered - total))

    def render_after(self, pos: int) -> None:
        """Redraw from *pos* and leave the cursor there."""
        self.force_cursor(pos)
        self.render_from(pos)
        self.force_cursor(pos)

    def redraw(self) -> None:
        """Redraw the whole line from the home row and restore the cursor."""
        self._terminal.set_cursor_position(0, self.home_row)
        self.render()
        self.force_cursor(self._buffer.cursor)

    # -- cursor -------------------------------------------------------------

    def update_home_row(self, screen_pos: int) -> None:
        """Derive the home row from the cursor row after writing *screen_pos* columns."""
        term = self._terminal
        lines = 1 + screen_pos // term.window_width
        self.home_row = max(term.cursor_top - (lines - 1), 0)

    def force_cursor(self, pos: int) -> None:
        """Move the buffer cursor to *pos* and the terminal cursor onto it."""
        term = self._terminal
        self._buffer.cursor = pos
        row, col = screen_position(
            self.home_row, self.screen_offset(pos), term.window_width, term.buffer_height
        )
        term.set_cursor_position(col, row)

    def update_cursor(self, pos: int) -> None:
        if self._buffer.cursor == pos:
            return
        self.force_cursor(pos)

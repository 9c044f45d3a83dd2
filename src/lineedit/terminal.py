"""Terminal abstraction for key-at-a-time editing.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that puts the controlling terminal in raw mode, reads and
decodes key sequences, and positions the cursor with ANSI escape sequences.
"""

from __future__ import annotations

import codecs
import logging
import os
import re
import select
import sys
import termios
import tty
from collections import deque
from typing import Protocol, TextIO

from lineedit.keys import END_OF_INPUT, INTERRUPT, PASTE_KEY, KeyEvent, key_event
from lineedit.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_CURSOR_POSITION_FMT = "\x1b[{};{}H"
_CURSOR_POSITION_QUERY = "\x1b[6n"

_CURSOR_POSITION_REPORT_RE = re.compile(r"\x1b\[(\d+);(\d+)R")

# Seconds to wait for the rest of an escape sequence before treating ESC as a key
_ESCAPE_TIMEOUT = 0.05
# Seconds to wait for the terminal to answer a cursor position query
_REPORT_TIMEOUT = 0.5

_CTRL_C = "\x03"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface the line editor needs from a terminal."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_key(self) -> KeyEvent:
        """Block until a key is pressed.

        Returns :data:`~lineedit.keys.INTERRUPT` when the user interrupts.
        and :data:`~lineedit.keys.END_OF_INPUT` once input is exhausted.
        """
        ...

    @property
    def window_width(self) -> int: ...

    @property
    def buffer_height(self) -> int: ...

    @property
    def cursor_top(self) -> int: ...

    def set_cursor_position(self, col: int, row: int) -> None: ...

    def write(self, text: str) -> None: ...

    def clear_screen(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's stdin/stdout.

    ``start`` switches stdin to raw mode (so Ctrl+C arrives as a key and is
    reported as an interrupt instead of raising) and enables bracketed paste;
    ``stop`` restores the previous terminal attributes.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._original_termios: list | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: deque[KeyEvent] = deque()
        self._last_row: int = 0
        self._write_log_path: str = os.environ.get("LINEEDIT_WRITE_LOG", "")

        self._stdin_buffer = StdinBuffer()
        self._stdin_buffer.on_data(self._on_data)
        self._stdin_buffer.on_paste(self._on_paste)

    # -- properties ---------------------------------------------------------

    @property
    def window_width(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns or 80
        except (ValueError, OSError):
            return 80

    @property
    def buffer_height(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).lines or 24
        except (ValueError, OSError):
            return 24

    @property
    def cursor_top(self) -> int:
        """Current cursor row, asked from the terminal with a position report."""
        fd = self._stdin.fileno()
        self._raw_write(_CURSOR_POSITION_QUERY)

        response = ""
        while True:
            ready, _, _ = select.select([fd], [], [], _REPORT_TIMEOUT)
            if not ready:
                logger.debug("No cursor position report, assuming row %d", self._last_row)
                if response:
                    self._stdin_buffer.process(response)
                return self._last_row

            raw = os.read(fd, 64)
            if not raw:
                return self._last_row
            response += self._decoder.decode(raw)

            match = _CURSOR_POSITION_REPORT_RE.search(response)
            if match:
                # Keys typed while waiting for the report are kept for read_key
                extra = response[: match.start()] + response[match.end() :]
                if extra:
                    self._stdin_buffer.process(extra)
                self._last_row = int(match.group(1)) - 1
                return self._last_row

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode and bracketed paste."""
        fd = self._stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        self._raw_write(_BRACKETED_PASTE_ENABLE)

    def stop(self) -> None:
        """Restore terminal state."""
        self._raw_write(_BRACKETED_PASTE_DISABLE)
        self._stdin_buffer.clear()

        if self._original_termios is not None:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyEvent:
        while not self._pending:
            timeout = _ESCAPE_TIMEOUT if self._stdin_buffer.pending else None
            try:
                self._fill(timeout)
            except KeyboardInterrupt:
                return INTERRUPT
        return self._pending.popleft()

    def _fill(self, timeout: float | None) -> None:
        """Read whatever input is available, waiting up to *timeout* seconds."""
        fd = self._stdin.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            for sequence in self._stdin_buffer.flush():
                self._on_data(sequence)
            return

        try:
            raw = os.read(fd, 4096)
        except OSError as exc:
            logger.debug("Reading the terminal failed: %s", exc)
            raw = b""
        if not raw:
            for sequence in self._stdin_buffer.flush():
                self._on_data(sequence)
            self._pending.append(END_OF_INPUT)
            return
        self._stdin_buffer.process(self._decoder.decode(raw))

    def _on_data(self, data: str) -> None:
        if data == _CTRL_C:
            self._pending.append(INTERRUPT)
        else:
            self._pending.append(key_event(data))

    def _on_paste(self, data: str) -> None:
        text = data.replace("\r\n", "").replace("\r", "").replace("\n", "")
        if text:
            self._pending.append(KeyEvent(PASTE_KEY, text))

    # -- output -------------------------------------------------------------

    def write(self, text: str) -> None:
        """Write *text*; newlines also return the carriage in raw mode."""
        data = text.replace("\n", "\r\n")
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8", newline="") as f:
                    f.write(data)
            except OSError:
                pass

    def set_cursor_position(self, col: int, row: int) -> None:
        self._last_row = row
        self._raw_write(_CURSOR_POSITION_FMT.format(row + 1, col + 1))

    def clear_screen(self) -> None:
        self._last_row = 0
        self._raw_write(_CLEAR_SCREEN)

    def _raw_write(self, data: str) -> None:
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except OSError:
            pass

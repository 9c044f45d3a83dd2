"""Single-line editor with Emacs keys, history, reverse search and completion.

The editor reads one key at a time from a :class:`~lineedit.terminal.Terminal`,
edits a :class:`~lineedit.text_buffer.TextBuffer` and redraws only what
changed. Long lines wrap across terminal rows; the renderer keeps track of
the row the prompt starts on so the cursor can be placed anywhere in the
wrapped text.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from lineedit.config import EditorConfig, load_config, history_path
from lineedit.history import FileLineStore, History, LineStore
from lineedit.keybindings import EditorCommand, KeybindingTable
from lineedit.keys import PASTE_KEY, KeyEvent, alt_chord
from lineedit.kill_buffer import KillBuffer
from lineedit.render import LineRenderer
from lineedit.search import SearchState
from lineedit.terminal import ProcessTerminal, Terminal
from lineedit.text_buffer import TextBuffer
from lineedit.utils import (
    common_prefix,
    next_grapheme_end,
    previous_grapheme_start,
    word_backward,
    word_forward,
)

logger = logging.getLogger(__name__)


class Completion(NamedTuple):
    """Result of an autocomplete request.

    ``result`` holds the text to insert after the cursor for each candidate,
    e.g. ``"oString"`` when completing ``"T"`` to ``"ToString"``. ``prefix``
    is shown in front of every candidate when several are listed.
    """

    prefix: str
    result: list[str]


AutocompleteHandler = Callable[[str, int], Completion | None]


class LineEditor:
    """Interactive line editor.

    Args:
        name: History name; entries persist in ``<history dir>/<name>.history``.
            ``None`` keeps history in memory only.
        history_size: Number of entries the history holds.
        terminal: Terminal to edit on; defaults to the process terminal.
        config: Settings; defaults to :func:`~lineedit.config.load_config`.
        store: Explicit history store, overriding the one derived from *name*.
    """

    def __init__(
        self,
        name: str | None,
        history_size: int | None = None,
        *,
        terminal: Terminal | None = None,
        config: EditorConfig | None = None,
        store: LineStore | None = None,
    ) -> None:
        self._config = config or load_config()
        size = history_size if history_size is not None else self._config.history_size
        if size < 1:
            raise ValueError(f"history_size must be at least 1, got {size}")

        if store is None and name is not None:
            path = history_path(name, self._config)
            if path is not None:
                store = FileLineStore(path)

        self._terminal: Terminal = terminal or ProcessTerminal()
        self._keymap: KeybindingTable = KeybindingTable.from_config(self._config.keybindings)
        self._history = History(size, store)
        self._buffer = TextBuffer()
        self._renderer = LineRenderer(self._terminal, self._buffer)
        self._kill_buffer = KillBuffer()
        self._search = SearchState()

        self.prompt: str = ""
        self.eof: bool = False
        self.autocomplete: AutocompleteHandler | None = None
        self.tab_at_start_completes: bool = self._config.tab_at_start_completes

        self._done: bool = False
        self._quote_next: bool = False
        self._last_command: EditorCommand | None = None

        self._commands: dict[EditorCommand, Callable[[], None]] = {
            "home": self._cmd_home,
            "end": self._cmd_end,
            "left": self._cmd_left,
            "right": self._cmd_right,
            "wordBackward": self._cmd_word_backward,
            "wordForward": self._cmd_word_forward,
            "historyPrevious": self._cmd_history_previous,
            "historyNext": self._cmd_history_next,
            "reverseSearch": self._cmd_reverse_search,
            "backspace": self._cmd_backspace,
            "deleteChar": self._cmd_delete_char,
            "killToEndOfLine": self._cmd_kill_to_end_of_line,
            "killToStartOfLine": self._cmd_kill_to_start_of_line,
            "killWordForward": self._cmd_kill_word_forward,
            "killWordBackward": self._cmd_kill_word_backward,
            "yank": self._cmd_yank,
            "done": self._cmd_done,
            "tabOrComplete": self._cmd_tab_or_complete,
            "quotedInsert": self._cmd_quoted_insert,
            "refresh": self._cmd_refresh,
            "abort": self._cmd_abort,
        }

    # -- public state -------------------------------------------------------

    @property
    def history(self) -> History:
        return self._history

    @property
    def kill_buffer(self) -> KillBuffer:
        return self._kill_buffer

    @property
    def keymap(self) -> KeybindingTable:
        return self._keymap

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    # -- session ------------------------------------------------------------

    def edit(self, prompt: str, initial: str = "") -> str:
        """Show *prompt*, let the user edit *initial* and return the result.

        Returns an empty string both for an empty submission and for
        end-of-input (delete on an empty line); :attr:`eof` tells them apart.
        When the input stream closes mid-line the text typed so far is
        returned and :attr:`eof` is set as well.
        """
        self._terminal.start()
        try:
            return self._run(prompt, initial)
        finally:
            self._terminal.stop()

    def _run(self, prompt: str, initial: str) -> str:
        self.prompt = prompt
        self.eof = False
        self._done = False
        self._quote_next = False
        self._last_command = None
        self._search.end()

        self._history.cursor_to_end()
        self._history.append(initial)

        self._renderer.begin(prompt)
        self._init_text(initial)

        while not self._done:
            event = self._read_chord()
            if event.interrupted:
                self._recover_from_interrupt()
                continue
            if event.end_of_input:
                logger.debug("Input stream closed, ending edit")
                self.eof = True
                break
            self._dispatch(event)

        self._finish_line()

        result = self._buffer.text
        if result:
            self._history.accept(result)
            self._history.save()
        else:
            self._history.remove_last()
        return result

    def _read_chord(self) -> KeyEvent:
        """Read one key; Escape followed by a key reads as an alt chord."""
        event = self._terminal.read_key()
        if event.key != "escape":
            return event
        follow = self._terminal.read_key()
        if follow.interrupted or follow.end_of_input:
            return follow
        return KeyEvent(alt_chord(follow.key), follow.char)

    def _dispatch(self, event: KeyEvent) -> None:
        if self._quote_next:
            self._quote_next = False
            if event.char:
                self._last_command = None
                self._handle_char(event.char)
            return

        if event.key == PASTE_KEY:
            self._last_command = None
            if self._search.active:
                for c in event.char:
                    self._search_append(c)
            else:
                self._insert_text_at_cursor(event.char)
            return

        command = self._keymap.lookup(event.key)
        if command is None:
            if event.char and event.char.isprintable():
                self._last_command = None
                self._handle_char(event.char)
            return

        self._commands[command]()
        self._last_command = command

        if self._search.active and command != "reverseSearch":
            self._search.end()
            self._set_prompt(self.prompt)

    def _recover_from_interrupt(self) -> None:
        logger.debug("Edit interrupted, starting over on a fresh line")
        self._search.end()
        self._quote_next = False
        self._last_command = None

        self._finish_line()
        self._history.cursor_to_end()
        self._history.remove_last()
        self._history.append("")

        self._renderer.begin(self.prompt)
        self._init_text("")

    def _finish_line(self) -> None:
        """Put the terminal cursor after the text and move to the next line."""
        self._renderer.force_cursor(self._buffer.length)
        self._terminal.write("\n")

    # -- text and prompt ----------------------------------------------------

    def _init_text(self, text: str) -> None:
        self._buffer.set_all(text)
        self._renderer.compute()
        self._renderer.render()
        self._renderer.force_cursor(self._buffer.length)

    def _set_text(self, text: str) -> None:
        self._terminal.set_cursor_position(0, self._renderer.home_row)
        self._init_text(text)

    def _set_prompt(self, prompt: str) -> None:
        self._renderer.prompt = prompt
        self._renderer.redraw()

    def _handle_char(self, c: str) -> None:
        if self._search.active:
            self._search_append(c)
        else:
            self._insert_text_at_cursor(c)

    def _insert_text_at_cursor(self, s: str) -> None:
        if not s:
            return
        renderer = self._renderer
        cursor = self._buffer.cursor
        prev_lines = renderer.line_count

        self._buffer.insert(cursor, s)
        renderer.compute()
        if prev_lines != renderer.line_count:
            self._terminal.set_cursor_position(0, renderer.home_row)
            renderer.render()
            renderer.force_cursor(cursor + len(s))
        else:
            renderer.render_from(cursor)
            renderer.force_cursor(cursor + len(s))
            renderer.update_home_row(renderer.screen_offset(self._buffer.cursor))

    def _delete_range(self, pos: int, length: int) -> str:
        """Remove text and redraw, leaving the cursor at *pos*."""
        renderer = self._renderer
        prev_lines = renderer.line_count

        removed = self._buffer.remove_range(pos, length)
        renderer.compute()
        if prev_lines != renderer.line_count:
            self._terminal.set_cursor_position(0, renderer.home_row)
            renderer.render()
            renderer.force_cursor(pos)
        else:
            renderer.render_after(pos)
        return removed

    # -- commands: movement -------------------------------------------------

    def _cmd_home(self) -> None:
        self._renderer.update_cursor(0)

    def _cmd_end(self) -> None:
        self._renderer.update_cursor(self._buffer.length)

    def _cmd_left(self) -> None:
        cursor = self._buffer.cursor
        if cursor == 0:
            return
        self._renderer.update_cursor(previous_grapheme_start(self._buffer.text, cursor))

    def _cmd_right(self) -> None:
        cursor = self._buffer.cursor
        if cursor == self._buffer.length:
            return
        self._renderer.update_cursor(next_grapheme_end(self._buffer.text, cursor))

    def _cmd_word_backward(self) -> None:
        p = word_backward(self._buffer.text, self._buffer.cursor)
        if p is None:
            return
        self._renderer.update_cursor(p)

    def _cmd_word_forward(self) -> None:
        p = word_forward(self._buffer.text, self._buffer.cursor)
        if p is None:
            return
        self._renderer.update_cursor(p)

    # -- commands: editing --------------------------------------------------

    def _cmd_backspace(self) -> None:
        cursor = self._buffer.cursor
        if cursor == 0:
            return
        start = previous_grapheme_start(self._buffer.text, cursor)
        self._delete_range(start, cursor - start)

    def _cmd_delete_char(self) -> None:
        # Delete on an empty line signals end of input
        if self._buffer.length == 0:
            self._done = True
            self.eof = True
            return

        cursor = self._buffer.cursor
        if cursor == self._buffer.length:
            return
        end = next_grapheme_end(self._buffer.text, cursor)
        self._delete_range(cursor, end - cursor)

    def _cmd_kill_word_forward(self) -> None:
        cursor = self._buffer.cursor
        pos = word_forward(self._buffer.text, cursor)
        if pos is None:
            return
        killed = self._delete_range(cursor, pos - cursor)
        self._kill_buffer.push(
            killed, prepend=False, accumulate=self._last_command == "killWordForward"
        )

    def _cmd_kill_word_backward(self) -> None:
        cursor = self._buffer.cursor
        pos = word_backward(self._buffer.text, cursor)
        if pos is None:
            return
        killed = self._delete_range(pos, cursor - pos)
        self._kill_buffer.push(
            killed, prepend=True, accumulate=self._last_command == "killWordBackward"
        )

    def _cmd_kill_to_end_of_line(self) -> None:
        cursor = self._buffer.cursor
        if cursor == self._buffer.length:
            return
        killed = self._delete_range(cursor, self._buffer.length - cursor)
        self._kill_buffer.push(
            killed, prepend=False, accumulate=self._last_command == "killToEndOfLine"
        )

    def _cmd_kill_to_start_of_line(self) -> None:
        cursor = self._buffer.cursor
        if cursor == 0:
            return
        killed = self._delete_range(0, cursor)
        self._kill_buffer.push(
            killed, prepend=True, accumulate=self._last_command == "killToStartOfLine"
        )

    def _cmd_yank(self) -> None:
        self._insert_text_at_cursor(self._kill_buffer.peek())

    def _cmd_quoted_insert(self) -> None:
        self._quote_next = True

    def _cmd_done(self) -> None:
        self._done = True

    def _cmd_abort(self) -> None:
        pass

    def _cmd_refresh(self) -> None:
        self._terminal.clear_screen()
        self._renderer.max_rendered = 0
        self._renderer.render()
        self._renderer.force_cursor(self._buffer.cursor)

    # -- commands: completion -----------------------------------------------

    def _cmd_tab_or_complete(self) -> None:
        if self.autocomplete is None:
            self._handle_char("\t")
            return

        text = self._buffer.text
        cursor = self._buffer.cursor
        # Tab only completes once something other than whitespace precedes the cursor
        if not self.tab_at_start_completes and not text[:cursor].strip():
            self._handle_char("\t")
            return

        completion = self.autocomplete(text, cursor)
        if completion is None or not completion.result:
            return

        if len(completion.result) == 1:
            self._insert_text_at_cursor(completion.result[0])
            return

        prefix = common_prefix(completion.result)
        if prefix:
            self._insert_text_at_cursor(prefix)

        self._show_candidates(completion)

    def _show_candidates(self, completion: Completion) -> None:
        """List completion candidates below the line, then redraw it."""
        cursor = self._buffer.cursor
        self._finish_line()
        self._terminal.write(
            "".join(f"{completion.prefix}{s} " for s in completion.result)
        )
        self._terminal.write("\n")
        self._renderer.reset_line()
        self._renderer.render()
        self._renderer.force_cursor(cursor)

    # -- commands: history --------------------------------------------------

    def _cmd_history_previous(self) -> None:
        if not self._history.previous_available():
            return
        self._history.update(self._buffer.text)
        self._set_text(self._history.previous() or "")

    def _cmd_history_next(self) -> None:
        if not self._history.next_available():
            return
        self._history.update(self._buffer.text)
        self._set_text(self._history.next() or "")

    # -- reverse search -----------------------------------------------------

    def _cmd_reverse_search(self) -> None:
        search = self._search
        if not search.active:
            search.begin()
            self._set_prompt(search.prompt)
            return

        if not search.term:
            if search.last_term:
                search.term = search.last_term
                self._set_prompt(search.prompt)
                self._reverse_search()
            return

        self._reverse_search()

    def _search_append(self, c: str) -> None:
        search = self._search
        search.term += c
        self._set_prompt(search.prompt)

        # Stay put while the longer term still matches under the cursor
        if search.matches_at(self._buffer.text, self._buffer.cursor):
            return

        self._reverse_search()

    def _reverse_search(self) -> None:
        """Move to the previous match in the line, falling back to older history."""
        search = self._search
        while True:
            p = search.find_in_line(self._buffer.text, self._buffer.cursor)
            if p is not None:
                search.match_at = p
                self._renderer.force_cursor(p)
                return

            self._history.update(self._buffer.text)
            entry = self._history.search_backward(search.term)
            if entry is None:
                return
            search.match_at = None
            self._set_text(entry)

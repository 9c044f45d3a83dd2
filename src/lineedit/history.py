"""Fixed-capacity line history with bash-like editing of recalled entries.

Entries live in a circular array. Appending to a full history overwrites
the oldest entry. A browse cursor walks the entries; edits made to a recalled
entry are written back with :meth:`History.update` before moving on, so the
in-progress line participates in history like any other entry once it has
been appended.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Backing stores
# ---------------------------------------------------------------------------


class LineStore(Protocol):
    """Persistent newline-delimited storage for history entries."""

    def load(self) -> list[str]: ...

    def save(self, lines: Iterable[str]) -> None: ...


class FileLineStore:
    """Stores history entries one per line in a text file.

    A missing or unreadable file loads as empty history and a failed write is
    logged and dropped, so persistence problems never interrupt editing.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[str]:
        try:
            with self.path.open(encoding="utf-8") as f:
                return [line.rstrip("\r\n") for line in f]
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read history file %s: %s", self.path, e)
            return []

    def save(self, lines: Iterable[str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.path, e)


# ---------------------------------------------------------------------------
# History ring
# ---------------------------------------------------------------------------


class History:
    """Circular history of ``capacity`` entries with a browse cursor.

    ``head`` is the next slot to write, ``tail`` the slot of the oldest valid
    entry and ``count`` the number of valid entries. The browse cursor is kept
    as a logical index from the oldest entry; index ``count`` is the position
    just past the newest entry (where the next append lands).
    """

    def __init__(self, capacity: int = 10, store: LineStore | None = None) -> None:
        if capacity < 1:
            raise ValueError(f"history capacity must be at least 1, got {capacity}")

        self._entries: list[str | None] = [None] * capacity
        self._head: int = 0
        self._count: int = 0
        self._index: int = 0
        self._store = store

        if store is not None:
            for line in store.load():
                if line:
                    self.append(line)

    # -- bookkeeping --------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self._entries)

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    @property
    def head(self) -> int:
        return self._head

    @property
    def tail(self) -> int:
        return (self._head - self._count) % self.capacity

    @property
    def cursor(self) -> int:
        """Slot index the browse cursor points at."""
        return self._slot(self._index)

    def _slot(self, index: int) -> int:
        return (self.tail + index) % self.capacity

    def entries(self) -> list[str]:
        """Valid entries, oldest first."""
        return [self._entries[self._slot(i)] or "" for i in range(self._count)]

    def current(self) -> str | None:
        """Entry under the browse cursor, or ``None`` past the newest entry."""
        if self._index >= self._count:
            return None
        return self._entries[self._slot(self._index)]

    # -- mutation -----------------------------------------------------------

    def append(self, s: str) -> None:
        """Write *s* at ``head``, overwriting the oldest entry when full.

        A cursor sitting past or on the newest entry moves onto the appended
        one; any other cursor keeps pointing at the same entry.
        """
        follows = self._index >= self._count - 1

        self._entries[self._head] = s
        self._head = (self._head + 1) % self.capacity
        if self._count < self.capacity:
            self._count += 1
        elif not follows:
            # oldest entry was overwritten, every index shifts down by one
            self._index = max(self._index - 1, 0)

        if follows:
            self._index = self._count - 1

    def update(self, s: str) -> None:
        """Overwrite the entry under the browse cursor with *s*."""
        if self._index < self._count:
            self._entries[self._slot(self._index)] = s

    def remove_last(self) -> None:
        """Rewind ``head`` by one slot, discarding the newest entry."""
        if self._count == 0:
            return
        self._head = (self._head - 1) % self.capacity
        self._entries[self._head] = None
        self._count -= 1
        self._index = min(self._index, self._count)

    def accept(self, s: str) -> None:
        """Replace the newest (provisional) entry with the committed text."""
        if self._count == 0:
            self.append(s)
            return
        self._entries[(self._head - 1) % self.capacity] = s

    # -- browsing -----------------------------------------------------------

    def previous_available(self) -> bool:
        return self._count > 0 and self._index > 0

    def next_available(self) -> bool:
        return self._count > 0 and self._index < self._count - 1

    def previous(self) -> str | None:
        """Move the cursor one entry back and return it, or ``None`` at the oldest."""
        if not self.previous_available():
            return None
        self._index -= 1
        return self._entries[self._slot(self._index)]

    def next(self) -> str | None:
        """Move the cursor one entry forward and return it, or ``None`` at the newest."""
        if not self.next_available():
            return None
        self._index += 1
        return self._entries[self._slot(self._index)]

    def cursor_to_end(self) -> None:
        """Park the cursor just past the newest entry, unless history is empty."""
        if self._count == 0:
            return
        self._index = self._count

    def search_backward(self, term: str) -> str | None:
        """Find the nearest earlier entry containing *term*.

        The entry under the cursor is skipped. On a match the cursor moves to
        it; when the oldest entry has been checked without success the cursor
        stays put and ``None`` is returned.
        """
        for i in range(min(self._index, self._count) - 1, -1, -1):
            entry = self._entries[self._slot(i)]
            if entry is not None and term in entry:
                self._index = i
                return entry
        return None

    # -- persistence --------------------------------------------------------

    def save(self) -> None:
        """Write all entries, oldest first, to the backing store (if any)."""
        if self._store is None:
            return
        self._store.save(self.entries())

"""Text utilities: character classification, word scanning, width measurement.

Word scanning works on character offsets into the edit buffer; width
measurement works on terminal columns of already rendered text.
"""

from __future__ import annotations

import os
import unicodedata
from typing import Sequence

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Character classification
# ---------------------------------------------------------------------------

def is_word_char(char: str) -> bool:
    """Return ``True`` for letters and decimal digits."""
    return char.isalpha() or char.isdecimal()


def is_punctuation_char(char: str) -> bool:
    """Return ``True`` for Unicode punctuation and symbol characters."""
    return unicodedata.category(char)[0] in ("P", "S")


# ---------------------------------------------------------------------------
# Word boundaries
# ---------------------------------------------------------------------------

def word_forward(text: str, pos: int) -> int | None:
    """Return the offset one word forward of *pos*, or ``None`` if there is none.

    From a non-word character the scan skips to the next word and then to its
    end. From inside a word it skips to the end of the word and over any
    punctuation directly attached to it.
    """
    n = len(text)
    if pos >= n:
        return None

    i = pos
    if not is_word_char(text[i]):
        while i < n and not is_word_char(text[i]):
            i += 1
        while i < n and is_word_char(text[i]):
            i += 1
    else:
        while i < n and is_word_char(text[i]):
            i += 1
        while i < n and is_punctuation_char(text[i]):
            i += 1

    return i if i != pos else None


def word_backward(text: str, pos: int) -> int | None:
    """Return the start of the word before *pos*, or ``None`` if there is none.

    Trailing non-word characters are skipped first, then the word itself.
    """
    if pos <= 0:
        return None

    i = min(pos, len(text)) - 1
    while i >= 0 and not is_word_char(text[i]):
        i -= 1
    while i >= 0 and is_word_char(text[i]):
        i -= 1
    i += 1

    return i if i != pos else None


# ---------------------------------------------------------------------------
# Grapheme stepping
# ---------------------------------------------------------------------------

def previous_grapheme_start(text: str, pos: int) -> int:
    """Offset of the grapheme cluster that ends at *pos*."""
    if pos <= 0:
        return 0
    clusters = list(grapheme.graphemes(text[:pos]))
    last = clusters[-1] if clusters else None
    return pos - (len(last) if last else 1)


def next_grapheme_end(text: str, pos: int) -> int:
    """Offset just past the grapheme cluster that starts at *pos*."""
    if pos >= len(text):
        return len(text)
    first = next(grapheme.graphemes(text[pos:]), None)
    return pos + (len(first) if first else 1)


# ---------------------------------------------------------------------------
# Display width
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _grapheme_width(g: str) -> int:
    """Terminal column width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        # VS16, ZWJ sequences, skin tones and flags render as emoji
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    if ord(g[0]) >= 0x1F000:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Number of terminal columns *text* occupies when written."""
    if not text:
        return 0
    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    width = sum(_grapheme_width(g) for g in grapheme.graphemes(text))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[text] = width
    return width


# ---------------------------------------------------------------------------
# Completion helpers
# ---------------------------------------------------------------------------

def common_prefix(items: Sequence[str]) -> str:
    """Longest prefix shared by every string in *items*."""
    if not items:
        return ""
    return os.path.commonprefix(list(items))

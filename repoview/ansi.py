"""ANSI-aware text measurement and line shaping utilities.

Clipping, padding and wrapping preserve escape sequences so rows stay aligned
when color codes and wide characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible column count of ``text``, ignoring escape sequences."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept verbatim and do not count toward width. A reset
    is appended when styling was open at the cut point.
    """
    return _clip_ansi(text, max_cols)[0]


def _clip_ansi(text: str, max_cols: int) -> tuple[str, int]:
    """Clip like ``clip_ansi_line`` and also return how many visible source
    characters were consumed. Tabs expand to several columns but count once.
    """
    if max_cols <= 0 or not text:
        return "", 0

    out: list[str] = []
    consumed = 0
    col = 0
    i = 0
    n = len(text)
    styled = False
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                styled = True
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            if styled:
                out.append(RESET)
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        consumed += 1
        i += 1

    return "".join(out), consumed


def pad_ansi_line(text: str, width: int, align: str = "left") -> str:
    """Pad a styled string with spaces to ``width`` visible columns."""
    padding = max(0, width - display_width(text))
    if align == "right":
        return " " * padding + text
    return text + " " * padding


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Wrap a styled line at word boundaries into rows of at most ``width`` columns.

    Words longer than ``width`` are split hard. Escape sequences stay attached
    to the word they precede.
    """
    if width <= 0 or not text:
        return [text]

    rows: list[str] = []
    current = ""
    current_width = 0
    for word in text.split(" "):
        word_width = display_width(word)
        gap = 1 if current else 0
        if current and current_width + gap + word_width > width:
            rows.append(current)
            current = ""
            current_width = 0
            gap = 0
        # current is empty here: an overlong word always flushed it above.
        while word_width > width:
            head, consumed = _clip_ansi(word, width)
            if not consumed:
                break
            rows.append(head)
            word = _drop_visible_prefix(word, consumed)
            word_width = display_width(word)
        current = f"{current}{' ' * gap}{word}"
        current_width += gap + word_width
    rows.append(current)
    return rows


def _drop_visible_prefix(text: str, count: int) -> str:
    """Drop ``count`` visible characters from ``text`` keeping escape sequences."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        if count > 0:
            count -= 1
        else:
            out.append(text[i])
        i += 1
    return "".join(out)


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "clip_ansi_line",
    "pad_ansi_line",
    "wrap_ansi_line",
]

"""Sanitization and Pygments-based syntax highlighting.

Source text becomes a ``CodeBlock``: a Pygments token stream split into
numbered lines. Languages without a grammar degrade to plain text lines.
Terminal control bytes are neutralized to avoid unsafe preview side effects.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from pygments import format as pygments_format
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from ..errors import UnsupportedLanguage

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
GUTTER_SEPARATOR = " │ "

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()

TokenPair = tuple[_TokenType, str]


@dataclass(frozen=True)
class CodeLine:
    """One source line as ``(token_type, text)`` pairs, numbered from 1."""

    number: int
    tokens: tuple[TokenPair, ...]

    @property
    def text(self) -> str:
        return "".join(value for _ttype, value in self.tokens)


@dataclass(frozen=True)
class CodeBlock:
    """Token stream for a whole file, split into numbered lines."""

    language: str
    lines: tuple[CodeLine, ...]
    highlighted: bool
    lexer_name: str | None = None

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def lexer_for_language(language: str) -> Lexer:
    """Find a Pygments lexer by alias, then by ``source.<language>`` filename.

    Lookup is case-insensitive. Raises ``UnsupportedLanguage`` when neither
    matches.
    """
    name = language.strip().lower()
    if not name:
        raise UnsupportedLanguage(language)
    try:
        return get_lexer_by_name(name, stripnl=False)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(f"source.{name}", stripnl=False)
    except ClassNotFound as exc:
        raise UnsupportedLanguage(language) from exc


def split_token_lines(tokens: Iterable[TokenPair]) -> list[tuple[TokenPair, ...]]:
    """Split a token stream at newlines; multi-line tokens are cut into pieces."""
    lines: list[tuple[TokenPair, ...]] = []
    current: list[TokenPair] = []
    for ttype, value in tokens:
        parts = value.split("\n")
        for idx, part in enumerate(parts):
            if idx > 0:
                lines.append(tuple(current))
                current = []
            if part:
                current.append((ttype, part))
    if current:
        lines.append(tuple(current))
    return lines


def highlight_code(source: str, language: str) -> CodeBlock:
    """Tokenize ``source`` for ``language``, falling back to plain text lines."""
    highlighted = True
    try:
        lexer = lexer_for_language(language)
    except UnsupportedLanguage:
        logger.debug("No grammar for %r, rendering plain text", language)
        lexer = TextLexer(stripnl=False)
        highlighted = False
    if isinstance(lexer, TextLexer):
        highlighted = False

    token_lines = split_token_lines(lexer.get_tokens(source))
    return CodeBlock(
        language=language,
        lines=tuple(CodeLine(number=idx, tokens=tokens) for idx, tokens in enumerate(token_lines, start=1)),
        highlighted=highlighted,
        lexer_name=lexer.name if highlighted else None,
    )


def normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("Unknown Pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def formatter_for_style(style: str) -> Terminal256Formatter:
    """Return cached Pygments terminal formatter for style name."""
    style = normalize_style(style)
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def format_code_lines(
    block: CodeBlock,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    line_numbers: bool = True,
    gutter_sgr: str = "\033[2m",
) -> list[str]:
    """Format a code block as terminal rows, optionally with a line-number gutter."""
    formatter = None if no_color or not block.highlighted else formatter_for_style(style)
    width = len(str(len(block.lines))) if block.lines else 1

    rows: list[str] = []
    for line in block.lines:
        if formatter is None:
            body = line.text
        else:
            body = pygments_format(line.tokens, formatter).rstrip("\n")
        if line_numbers:
            gutter = f"{line.number:>{width}}{GUTTER_SEPARATOR}"
            if not no_color:
                gutter = f"{gutter_sgr}{gutter}\033[0m"
            body = gutter + body
        rows.append(body)
    return rows


__all__ = [
    "DEFAULT_STYLE",
    "CodeLine",
    "CodeBlock",
    "sanitize_terminal_text",
    "lexer_for_language",
    "split_token_lines",
    "highlight_code",
    "normalize_style",
    "formatter_for_style",
    "format_code_lines",
]

"""Markdown documents: parse with markdown-it-py, render to HTML or terminal rows.

Raw inline and block HTML is passed through unescaped in both outputs. That is
deliberate and unsafe for untrusted content.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode

from ..ansi import display_width, pad_ansi_line, wrap_ansi_line
from .syntax import DEFAULT_STYLE, format_code_lines, highlight_code

RULE_WIDTH = 40
CODE_INDENT = "    "
QUOTE_PREFIX = "│ "
BULLET = "• "


def create_parser() -> MarkdownIt:
    """CommonMark parser with tables, strikethrough and raw HTML enabled."""
    return MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")


_PARSER = create_parser()


@dataclass(frozen=True)
class Document:
    """Parsed markdown: the token stream plus its syntax tree."""

    source: str
    tokens: tuple[Token, ...] = field(repr=False)
    root: SyntaxTreeNode = field(repr=False, compare=False)

    @property
    def html(self) -> str:
        return _PARSER.renderer.render(list(self.tokens), _PARSER.options, {})

    def headings(self) -> list[tuple[int, str]]:
        """Return ``(level, text)`` for every heading in document order."""
        out: list[tuple[int, str]] = []
        for node in self.root.walk():
            if node.type == "heading" and node.children:
                out.append((int(node.tag[1:]), node.children[0].content))
        return out


def parse_document(source: str) -> Document:
    tokens = _PARSER.parse(source)
    return Document(source=source, tokens=tuple(tokens), root=SyntaxTreeNode(tokens))


class TerminalDocumentRenderer:
    """Render a ``Document`` tree as terminal rows."""

    def __init__(self, width: int = 80, style: str = DEFAULT_STYLE, no_color: bool = False) -> None:
        self.width = max(20, width)
        self.style = style
        self.no_color = no_color

    def _sgr(self, code: str, text: str) -> str:
        if self.no_color or not text:
            return text
        return f"\033[{code}m{text}\033[0m"

    def render(self, document: Document) -> list[str]:
        return self._blocks(document.root.children, self.width)

    def _blocks(self, nodes: list[SyntaxTreeNode], width: int, compact: bool = False) -> list[str]:
        rows: list[str] = []
        for node in nodes:
            block = self._block(node, width)
            if not block:
                continue
            if rows and not compact:
                rows.append("")
            rows.extend(block)
        return rows

    def _block(self, node: SyntaxTreeNode, width: int) -> list[str]:
        kind = node.type
        if kind == "heading":
            level = int(node.tag[1:])
            text = f"{'#' * level} {self._inline_children(node)}"
            return [self._sgr("1;38;5;81" if level <= 2 else "1", row) for row in wrap_ansi_line(text, width)]
        if kind == "paragraph":
            return self._wrap(self._inline_children(node), width)
        if kind in {"bullet_list", "ordered_list"}:
            return self._list(node, width)
        if kind == "blockquote":
            inner = self._blocks(node.children, max(10, width - len(QUOTE_PREFIX)))
            return [self._sgr("2", QUOTE_PREFIX) + row for row in inner]
        if kind in {"fence", "code_block"}:
            language = node.info.strip().split(maxsplit=1)[0] if node.info.strip() else ""
            block = highlight_code(node.content, language)
            rows = format_code_lines(block, style=self.style, no_color=self.no_color, line_numbers=False)
            return [CODE_INDENT + row for row in rows]
        if kind == "hr":
            return [self._sgr("2", "─" * min(RULE_WIDTH, width))]
        if kind == "html_block":
            return node.content.rstrip("\n").split("\n")
        if kind == "table":
            return self._table(node)
        if node.children:
            return self._blocks(node.children, width)
        return node.content.rstrip("\n").split("\n") if node.content else []

    def _wrap(self, text: str, width: int) -> list[str]:
        rows: list[str] = []
        for line in text.split("\n"):
            rows.extend(wrap_ansi_line(line, width))
        return rows

    def _list(self, node: SyntaxTreeNode, width: int) -> list[str]:
        ordered = node.type == "ordered_list"
        start = node.attrs.get("start", 1) if ordered else 1
        number = int(start) if isinstance(start, (int, str)) and str(start).isdigit() else 1
        rows: list[str] = []
        for item in node.children:
            marker = f"{number}. " if ordered else BULLET
            number += 1
            indent = " " * len(marker)
            inner = self._blocks(item.children, max(10, width - len(marker)), compact=True)
            if not inner:
                inner = [""]
            rows.append(self._sgr("38;5;44", marker) + inner[0])
            rows.extend(indent + row if row else row for row in inner[1:])
        return rows

    def _table(self, node: SyntaxTreeNode) -> list[str]:
        header: list[str] | None = None
        body: list[list[str]] = []
        for section in node.children:
            for row in section.children:
                cells = [self._inline_children(cell) for cell in row.children]
                if section.type == "thead" and header is None:
                    header = [self._sgr("1", cell) for cell in cells]
                else:
                    body.append(cells)

        all_rows = ([header] if header is not None else []) + body
        if not all_rows:
            return []
        columns = max(len(row) for row in all_rows)
        widths = [0] * columns
        for row in all_rows:
            for idx, cell in enumerate(row):
                widths[idx] = max(widths[idx], display_width(cell))

        def format_row(row: list[str]) -> str:
            padded = [pad_ansi_line(row[idx] if idx < len(row) else "", widths[idx]) for idx in range(columns)]
            return " │ ".join(padded).rstrip()

        out: list[str] = []
        if header is not None:
            out.append(format_row(header))
            out.append(self._sgr("2", "─┼─".join("─" * w for w in widths)))
        out.extend(format_row(row) for row in body)
        return out

    def _inline_children(self, node: SyntaxTreeNode) -> str:
        return "".join(self._inline(child) for child in node.children)

    def _inline(self, node: SyntaxTreeNode) -> str:
        kind = node.type
        if kind == "inline":
            return self._inline_children(node)
        if kind == "text":
            return node.content
        if kind == "softbreak":
            return " "
        if kind == "hardbreak":
            return "\n"
        if kind == "code_inline":
            return self._sgr("38;5;180", node.content)
        if kind == "strong":
            return self._sgr("1", self._inline_children(node))
        if kind == "em":
            return self._sgr("3", self._inline_children(node))
        if kind == "s":
            return self._sgr("9", self._inline_children(node))
        if kind == "link":
            label = self._inline_children(node)
            href = node.attrs.get("href")
            styled = self._sgr("4;38;5;75", label)
            if isinstance(href, str) and href and href != label:
                return f"{styled} <{href}>"
            return styled
        if kind == "image":
            alt = node.content or self._inline_children(node)
            return self._sgr("2", f"[image: {alt}]")
        if kind == "html_inline":
            return node.content
        if node.children:
            return self._inline_children(node)
        return node.content


__all__ = [
    "Document",
    "TerminalDocumentRenderer",
    "create_parser",
    "parse_document",
]

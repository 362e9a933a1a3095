"""Tests for markdown parsing and terminal document rendering."""

from __future__ import annotations

import unittest

from repoview.ansi import strip_ansi
from repoview.content.markdown import TerminalDocumentRenderer, parse_document

SAMPLE = """# Title

Some **bold** and `code` text.

- one
- two

3. third
4. fourth

> quoted

| a | b |
|---|---|
| 1 | 22 |

```py
x = 1
```

---
"""


class DocumentTests(unittest.TestCase):
    def test_raw_html_passes_through_unescaped(self) -> None:
        doc = parse_document('<div align="center">raw</div>\n\nHi <b>there</b>\n')

        self.assertIn('<div align="center">raw</div>', doc.html)
        self.assertIn("<b>there</b>", doc.html)

    def test_headings_in_document_order(self) -> None:
        doc = parse_document("# One\n\ntext\n\n## Two\n")

        self.assertEqual(doc.headings(), [(1, "One"), (2, "Two")])

    def test_tables_are_enabled(self) -> None:
        doc = parse_document("| a |\n|---|\n| 1 |\n")

        self.assertIn("<table>", doc.html)


class TerminalDocumentRendererTests(unittest.TestCase):
    def test_plain_rendering_of_common_blocks(self) -> None:
        rows = TerminalDocumentRenderer(width=60, no_color=True).render(parse_document(SAMPLE))

        self.assertEqual(rows[0], "# Title")
        self.assertIn("Some bold and code text.", rows)
        self.assertIn("• one", rows)
        self.assertIn("• two", rows)
        self.assertIn("3. third", rows)
        self.assertIn("4. fourth", rows)
        self.assertIn("│ quoted", rows)
        self.assertIn("a │ b", rows)
        self.assertIn("──┼───", rows)
        self.assertIn("1 │ 22", rows)
        self.assertIn("    x = 1", rows)
        self.assertEqual(rows[-1], "─" * 40)

    def test_raw_html_block_is_kept_verbatim(self) -> None:
        rows = TerminalDocumentRenderer(no_color=True).render(parse_document("<p align=center>\n  <img src=x>\n</p>\n"))

        self.assertEqual(rows, ["<p align=center>", "  <img src=x>", "</p>"])

    def test_links_show_target(self) -> None:
        rows = TerminalDocumentRenderer(no_color=True).render(parse_document("[docs](https://deno.land)\n"))

        self.assertEqual(rows, ["docs <https://deno.land>"])

    def test_paragraphs_wrap_to_width(self) -> None:
        text = " ".join(["word"] * 20)
        rows = TerminalDocumentRenderer(width=20, no_color=True).render(parse_document(text + "\n"))

        self.assertGreater(len(rows), 1)
        self.assertTrue(all(len(row) <= 20 for row in rows))

    def test_color_rendering_only_adds_styling(self) -> None:
        doc = parse_document("# Title\n\nSome **bold** text.\n")
        plain = TerminalDocumentRenderer(no_color=True).render(doc)
        colored = TerminalDocumentRenderer(no_color=False).render(doc)

        self.assertNotEqual(plain, colored)
        self.assertEqual([strip_ansi(row) for row in colored], plain)


if __name__ == "__main__":
    unittest.main()

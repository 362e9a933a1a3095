"""Tests for line-command parsing and the scripted interactive session."""

from __future__ import annotations

import unittest

from repoview.errors import ContentFetchError, ListingNotFound
from repoview.navigation.model import NavigationModel
from repoview.runtime import HELP_TEXT, Command, InteractiveSession, parse_command
from repoview.source.listing import build_listing, join_path
from repoview.source.types import DirectoryEntry
from repoview.ui_theme import PLAIN_THEME
from repoview.view import ViewOptions


class StaticSource:
    def __init__(self, name: str = "test/static") -> None:
        self.name = name
        self.tree = {
            (): [DirectoryEntry.directory("src"), DirectoryEntry.file("README.md", 9, "README.md")],
            ("src",): [DirectoryEntry.directory("lib"), DirectoryEntry.file("main.py", 6, "main.py")],
            ("src", "lib"): [DirectoryEntry.file("util.py", 5, "util.py")],
        }
        self.texts = {"README.md": "# Static\n", "main.py": "x = 1\n", "util.py": "pass\n"}
        self.fetch_calls: list[str] = []

    def describe(self) -> str:
        return self.name

    async def list_directory(self, path):
        if path not in self.tree:
            raise ListingNotFound(f"/{join_path(path)} was not found.")
        return build_listing(self.tree[path])

    async def fetch_text(self, entry):
        self.fetch_calls.append(entry.name)
        if entry.name not in self.texts:
            raise ContentFetchError(entry.name)
        return self.texts[entry.name]


class ParseCommandTests(unittest.TestCase):
    def test_navigation_commands(self) -> None:
        self.assertEqual(parse_command("3"), Command("open", index=3))
        self.assertEqual(parse_command(" .. "), Command("up"))
        self.assertEqual(parse_command("/"), Command("root"))
        self.assertEqual(parse_command("b 2"), Command("breadcrumb", index=2))
        self.assertEqual(parse_command("s octo/hello"), Command("search", argument="octo/hello"))

    def test_session_commands(self) -> None:
        self.assertEqual(parse_command("").kind, "redraw")
        self.assertEqual(parse_command("q").kind, "quit")
        self.assertEqual(parse_command("reload").kind, "reload")
        self.assertEqual(parse_command("?").kind, "help")

    def test_unknown_input_is_invalid(self) -> None:
        self.assertEqual(parse_command("b x"), Command("invalid", argument="b x"))
        self.assertEqual(parse_command("s").kind, "invalid")


class InteractiveSessionTests(unittest.IsolatedAsyncioTestCase):
    async def _run(self, lines: list[str], model: NavigationModel, **kwargs) -> tuple[InteractiveSession, list[str]]:
        output: list[str] = []
        pending = iter(lines)

        async def read_line() -> str | None:
            await session.wait_idle()
            return next(pending, None)

        session = InteractiveSession(
            model,
            ViewOptions(width=60, theme=PLAIN_THEME),
            read_line=read_line,
            write=output.append,
            **kwargs,
        )
        await session.run()
        return session, output

    async def test_scripted_navigation(self) -> None:
        source = StaticSource()
        model = NavigationModel(source)

        _session, output = await self._run(["1", "1", "b 0", "q"], model)

        self.assertEqual(model.state.current_path, ("src",))
        self.assertEqual(source.fetch_calls, ["README.md"])
        self.assertIn("root / [0]src / [1]lib", "".join(output))
        self.assertTrue(output[-1].endswith("> "))

    async def test_opening_a_file_renders_preview(self) -> None:
        model = NavigationModel(StaticSource())

        _session, output = await self._run(["1", "2", ""], model)

        self.assertEqual(model.state.selected_file.name, "main.py")
        self.assertIn("1 │ x = 1", output[-1])

    async def test_initial_path_and_up(self) -> None:
        model = NavigationModel(StaticSource())

        await self._run(["..", "q"], model, initial_path=("src", "lib"))

        self.assertEqual(model.state.current_path, ("src",))

    async def test_out_of_range_entry_and_breadcrumb_report_messages(self) -> None:
        model = NavigationModel(StaticSource())

        session, output = await self._run(["9", "b 4", "q"], model)

        self.assertIn("No entry 9.", "".join(output))
        self.assertIn("No breadcrumb 4.", "".join(output))
        self.assertEqual(session.message, "")

    async def test_help_and_unknown_commands(self) -> None:
        model = NavigationModel(StaticSource())

        _session, output = await self._run(["?", "frobnicate"], model)

        text = "".join(output)
        self.assertIn(HELP_TEXT, text)
        self.assertIn("Unknown command: frobnicate", text)

    async def test_search_when_disabled(self) -> None:
        model = NavigationModel(StaticSource())

        _session, output = await self._run(["s octo/hello"], model)

        self.assertIn("Repository search is disabled.", output[-1])

    async def test_search_switches_repository(self) -> None:
        model = NavigationModel(
            StaticSource("denoland/deno"),
            source_factory=lambda identity: StaticSource(str(identity)),
            search_enabled=True,
        )

        _session, output = await self._run(["1", "s octo/hello", ""], model)

        self.assertEqual(model.source.describe(), "octo/hello")
        self.assertEqual(model.state.current_path, ())
        self.assertTrue(output[-1].startswith("octo/hello\n"))

    async def test_clear_screen_prefix(self) -> None:
        model = NavigationModel(StaticSource())

        _session, output = await self._run([""], model, clear_screen=True)

        self.assertTrue(all(chunk.startswith("\033[2J\033[H") for chunk in output))


if __name__ == "__main__":
    unittest.main()

"""Interactive line-command session over a ``NavigationModel``.

Commands are read on the event loop while fetches run as background tasks, so
a slow listing never blocks input. The screen is repainted on every state
change and after every command.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from .navigation.model import NavigationModel
from .navigation.state import NavigationState
from .view import ExplorerView, ViewOptions

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[H"
PROMPT = "> "

HELP_TEXT = (
    "N open entry N · .. up · / root · b N breadcrumb N · "
    "s owner/repo switch repository · r reload · q quit"
)


@dataclass(frozen=True)
class Command:
    kind: str
    argument: str = ""
    index: int | None = None


def parse_command(line: str) -> Command:
    """Parse one input line into a ``Command``.

    Entry numbers are 1-based as shown in the listing; breadcrumb numbers are
    the 0-based indices shown in the breadcrumb bar.
    """
    text = line.strip()
    if not text:
        return Command("redraw")
    if text.isdigit():
        return Command("open", index=int(text))
    if text in {"..", "u", "up"}:
        return Command("up")
    if text == "/":
        return Command("root")
    if text in {"q", "quit", "exit"}:
        return Command("quit")
    if text in {"r", "reload"}:
        return Command("reload")
    if text in {"?", "h", "help"}:
        return Command("help")

    head, _sep, rest = text.partition(" ")
    rest = rest.strip()
    if head == "b" and rest.isdigit():
        return Command("breadcrumb", index=int(rest))
    if head == "s" and rest:
        return Command("search", argument=rest)
    return Command("invalid", argument=text)


async def _read_stdin_line() -> str | None:
    line = await asyncio.to_thread(sys.stdin.readline)
    return line if line else None


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class InteractiveSession:
    """Drive a model from line commands and repaint on every change."""

    def __init__(
        self,
        model: NavigationModel,
        options: ViewOptions | None = None,
        *,
        read_line: Callable[[], Awaitable[str | None]] | None = None,
        write: Callable[[str], None] | None = None,
        clear_screen: bool = False,
        initial_path: tuple[str, ...] = (),
    ) -> None:
        self.model = model
        self.initial_path = initial_path
        self.view = ExplorerView(options)
        self.message = ""
        self._read_line = read_line or _read_stdin_line
        self._write = write or _write_stdout
        self._clear_screen = clear_screen
        self._tasks: set[asyncio.Task[Any]] = set()

    def paint(self, state: NavigationState | None = None) -> None:
        state = state or self.model.state
        parts = [CLEAR_SCREEN] if self._clear_screen else []
        parts.append(self.view.render(state, self.model.source.describe()))
        if self.message:
            parts.append(self.message + "\n")
        parts.append(PROMPT)
        self._write("".join(parts))

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Command failed", exc_info=exc)
            self.message = f"Error: {exc}"
            self.paint()

    async def wait_idle(self) -> None:
        """Wait until every spawned fetch has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def execute(self, command: Command) -> bool:
        """Run one command; returns ``False`` when the session should end."""
        self.message = ""
        state = self.model.state
        kind = command.kind
        if kind == "quit":
            return False
        if kind == "open":
            entries = state.listing.entries
            assert command.index is not None
            if not 1 <= command.index <= len(entries):
                self.message = f"No entry {command.index}."
            else:
                self._spawn(self.model.activate_entry(entries[command.index - 1]))
        elif kind == "up":
            self._spawn(self.model.navigate_up())
        elif kind == "root":
            self._spawn(self.model.navigate_to(()))
        elif kind == "breadcrumb":
            assert command.index is not None
            if not 0 <= command.index < len(state.current_path):
                self.message = f"No breadcrumb {command.index}."
            else:
                self._spawn(self.model.navigate_to_breadcrumb(command.index))
        elif kind == "search":
            if not self.model.search_enabled:
                self.message = "Repository search is disabled."
            else:
                self._spawn(self.model.search(command.argument))
        elif kind == "reload":
            self._spawn(self.model.reload())
        elif kind == "help":
            self.message = HELP_TEXT
        elif kind == "invalid":
            self.message = f"Unknown command: {command.argument} (? for help)"
        self.paint()
        return True

    async def run(self) -> None:
        unsubscribe = self.model.subscribe(self.paint)
        self._spawn(self.model.navigate_to(self.initial_path))
        try:
            while True:
                line = await self._read_line()
                if line is None:
                    break
                if not await self.execute(parse_command(line)):
                    break
        finally:
            unsubscribe()
            for task in list(self._tasks):
                task.cancel()
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


__all__ = ["Command", "InteractiveSession", "parse_command", "HELP_TEXT"]

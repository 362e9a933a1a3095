"""Command-line front door for repoview.

Parses CLI options, builds the content source (GitHub or a local directory),
then either prints one rendered screen or starts the interactive session.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import shutil
import sys
from pathlib import Path

from . import config
from .config import ExplorerConfig
from .errors import InvalidSourceIdentity
from .logs import configure_logging
from .navigation.model import NavigationModel
from .runtime import InteractiveSession
from .source.github import GitHubContentSource, create_client
from .source.listing import join_path, split_path
from .source.local import LocalDirectorySource
from .source.types import SourceIdentity
from .ui_theme import available_theme_names, resolve_theme
from .view import ViewOptions, render_explorer


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repoview",
        description="Browse a GitHub repository or local directory with file previews.",
    )
    parser.add_argument("source", nargs="?", default=None, help="Repository as owner/repo (default from config).")
    parser.add_argument("--local", metavar="DIR", default=None, help="Browse a local directory instead of GitHub.")
    parser.add_argument("--path", default="", help="Directory to open, as a/b/c.")
    parser.add_argument("--open", dest="open_name", metavar="NAME", default=None, help="File in --path to preview.")
    parser.add_argument("--interactive", "-i", action="store_true", help="Start an interactive browsing session.")
    parser.add_argument("--search", action="store_true", help="Allow switching repositories in interactive mode.")
    parser.add_argument("--style", default=None, help="Pygments style name for code previews.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Render width (default: terminal width).")
    parser.add_argument("--api-url", default=None, help="GitHub API base URL.")
    parser.add_argument("--timeout", type=_positive_float, default=None, help="HTTP timeout in seconds.")
    parser.add_argument("--show-hidden", action="store_true", help="Show dotfiles in --local mode.")
    parser.add_argument("--remember", action="store_true", help="Save the given repository as the default.")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")
    return parser


async def render_once(
    model: NavigationModel,
    options: ViewOptions,
    path: tuple[str, ...] = (),
    open_name: str | None = None,
) -> str:
    """Load ``path`` (and optionally one file in it) and render a single screen."""
    await model.navigate_to(path)
    if open_name is not None:
        entry = model.state.listing.find(open_name)
        if entry is None:
            raise SystemExit(f"No entry named {open_name!r} in /{join_path(model.state.current_path)}")
        await model.activate_entry(entry)
    return render_explorer(model.state, model.source.describe(), options)


def _resolve_identity(raw: str | None) -> SourceIdentity:
    if raw is None:
        return config.load_default_source()
    try:
        return SourceIdentity.parse(raw)
    except InvalidSourceIdentity as exc:
        raise SystemExit(exc.detail) from exc


async def run(args: argparse.Namespace) -> None:
    no_color = args.no_color or not sys.stdout.isatty()
    options = ViewOptions(
        width=args.width or _default_render_width(),
        style=args.style or config.load_style(),
        theme=resolve_theme(args.theme or config.load_theme_name(), no_color=no_color),
    )
    try:
        path = split_path(args.path)
    except ValueError as exc:
        raise SystemExit(f"Invalid --path: {exc}") from exc

    async with contextlib.AsyncExitStack() as stack:
        if args.local is not None:
            root = Path(args.local)
            if not root.is_dir():
                raise SystemExit(f"Not a directory: {root}")
            show_hidden = args.show_hidden or config.load_show_hidden()
            model = NavigationModel(LocalDirectorySource(root, show_hidden=show_hidden))
        else:
            identity = _resolve_identity(args.source)
            if args.remember:
                config.save_default_source(identity)
            timeout = args.timeout or config.load_timeout_seconds()
            client = await stack.enter_async_context(create_client(timeout))
            api_url = args.api_url or config.load_api_url()

            def source_factory(target: SourceIdentity) -> GitHubContentSource:
                return GitHubContentSource(target, client, api_url=api_url)

            explorer_config = ExplorerConfig(
                source_identity=identity,
                search_enabled=args.search or config.load_search_enabled(),
            )
            model = NavigationModel.from_config(explorer_config, source_factory)

        if args.interactive:
            session = InteractiveSession(
                model,
                options,
                clear_screen=sys.stdout.isatty(),
                initial_path=path,
            )
            await session.run()
            return
        sys.stdout.write(await render_once(model, options, path, args.open_name))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and browse the requested repository or directory."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or config.load_log_level())

    if args.local is not None and args.source is not None:
        raise SystemExit("Cannot combine owner/repo with --local.")
    if args.local is not None and args.search:
        raise SystemExit("--search only applies to GitHub repositories.")
    if args.local is not None and args.remember:
        raise SystemExit("--remember only applies to GitHub repositories.")
    if args.open_name is not None and args.interactive:
        raise SystemExit("--open cannot be combined with --interactive.")

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run(args))


if __name__ == "__main__":
    main()

"""Console-driven UI loops for Slaytion."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Literal, Sequence, Tuple

from slaytion.data.errors import DataError
from slaytion.data.repositories import StoryRepository
from slaytion.domain.errors import GraphError
from slaytion.domain.story_graph import StoryGraph
from slaytion.presentation.cli import config, render
from slaytion.services import (
    Issue,
    StoryPrompt,
    StorySession,
    format_issue,
    play_session,
    validate_story_graph,
)

logger = logging.getLogger(__name__)

MenuAction = Literal["new_game", "options", "quit"]


class ConsolePresenter:
    """Presentation port that prints to stdout."""

    def show_prompt(self, prompt: StoryPrompt) -> None:
        render.render_prompt(prompt)

    def show_invalid_choice(self, message: str) -> None:
        render.render_invalid_choice(message)

    def show_summary(self, final_score: int) -> None:
        render.render_summary(final_score)


class ConsoleChoiceInput:
    """Input port that reads one-based numbers typed at the console."""

    def __init__(self, read_line: Callable[[str], str] | None = None) -> None:
        self._read_line = read_line

    def read_choice(self, prompt: StoryPrompt) -> int | None:
        read_line = self._read_line or input
        return parse_choice(read_line("Select an option: "))


def parse_choice(raw: str) -> int | None:
    """Map typed one-based input to a zero-based index, or None if not a number."""
    try:
        return int(raw.strip()) - 1
    except ValueError:
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session."""
    args = _parse_args(argv)
    _configure_logging()
    settings = config.load_config()
    repo = StoryRepository(args.story or settings.remembered_story())
    try:
        graph = repo.graph()
    except (DataError, GraphError) as exc:
        print(f"Unable to load story: {exc}", file=sys.stderr)
        return 1

    issues = validate_story_graph(graph)
    errors = [issue for issue in issues if issue.severity == "ERROR"]
    if args.lint:
        return _report_lint(repo, issues)
    for issue in issues:
        if issue.severity != "ERROR":
            logger.warning("Story lint: %s", format_issue(issue))
    if errors:
        for issue in errors:
            print(format_issue(issue), file=sys.stderr)
        return 1

    if args.story is not None:
        settings.last_story = str(args.story.resolve())
        config.save_config(settings)
    render.set_text_display_mode(settings.text_display_mode)
    print("=== Queen of the World ===")
    try:
        _run_main_menu(graph, settings)
    except (EOFError, KeyboardInterrupt):
        print()
    print("Goodbye!")
    return 0


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="slaytion", description="Play a branching Slaytion story.")
    parser.add_argument("--story", type=Path, default=None,
                        help="Story definition JSON file (default: last story played, "
                             "else the bundled sample story)")
    parser.add_argument("--lint", action="store_true",
                        help="Validate the story graph and exit")
    return parser.parse_args(argv)


def _configure_logging() -> None:
    level = logging.DEBUG if render.debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _report_lint(repo: StoryRepository, issues: List[Issue]) -> int:
    print(f"Story: {repo.story_path}")
    for node in repo.all():
        marker = "end" if node.is_terminal else f"{len(node.choices)} choices"
        print(f"  {node.id:<24} {node.score_delta:+d}  {marker}")
    for issue in issues:
        print(format_issue(issue))
    error_count = sum(1 for issue in issues if issue.severity == "ERROR")
    print(
        "Story graph validation summary: "
        f"nodes={len(repo.graph())} errors={error_count} warnings={len(issues) - error_count}"
    )
    return 1 if error_count else 0


def _main_menu_options() -> List[Tuple[str, MenuAction]]:
    return [("New Game", "new_game"), ("Options", "options"), ("Quit", "quit")]


def _run_main_menu(graph: StoryGraph, settings: config.CliSettings) -> None:
    while True:
        action = _main_menu_loop()
        if action == "quit":
            return
        if action == "options":
            _toggle_text_mode(settings)
            continue
        _play_new_game(graph)


def _main_menu_loop() -> MenuAction:
    options = _main_menu_options()
    while True:
        render.render_menu("Main Menu", [label for label, _ in options])
        index = parse_choice(input("Select an option: "))
        if index is not None and 0 <= index < len(options):
            return options[index][1]
        print(f"Invalid selection. Please enter a number between 1 and {len(options)}.")


def _toggle_text_mode(settings: config.CliSettings) -> None:
    mode = settings.toggle_text_mode()
    render.set_text_display_mode(mode)
    config.save_config(settings)
    print(f"Text display mode: {mode}")


def _play_new_game(graph: StoryGraph) -> int:
    session = StorySession(graph)
    return play_session(session, ConsolePresenter(), ConsoleChoiceInput())

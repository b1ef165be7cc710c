"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Sequence

from slaytion.core.types import TextDisplayMode
from slaytion.services.story_session import StoryPrompt

NARRATION_WIDTH = 72

_text_display_mode: TextDisplayMode = "instant"


def debug_enabled() -> bool:
    """Return True only when SLAYTION_DEBUG is explicitly set to '1'."""
    return os.getenv("SLAYTION_DEBUG") == "1"


def set_text_display_mode(mode: str) -> None:
    """Select 'step' (pause after narration) or 'instant' output."""
    global _text_display_mode
    _text_display_mode = "step" if mode == "step" else "instant"


def get_text_display_mode() -> TextDisplayMode:
    return _text_display_mode


def wrap_narration(text: str, width: int = NARRATION_WIDTH) -> list[str]:
    """Wrap narration on word boundaries; words longer than width stay whole."""
    if not text or width <= 0:
        return [text] if text else [""]
    return textwrap.wrap(text, width=width, break_long_words=False, break_on_hyphens=False)


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_story(prompt: StoryPrompt) -> None:
    """Render a node's narration, pausing afterwards in step mode."""
    render_heading("Story")
    if debug_enabled():
        print(f"[{prompt.node_id}]")
    for line in wrap_narration(prompt.text):
        print(line)
    if _text_display_mode == "step" and not prompt.is_terminal:
        input("")


def render_score(score: int) -> None:
    print(f"Current Slaytion: {score}")


def render_choices(choices: Sequence[str]) -> None:
    """Display numbered story choices."""
    if not choices:
        return
    render_heading("Choices")
    for idx, label in enumerate(choices, start=1):
        print(f"{idx}. {label}")


def render_prompt(prompt: StoryPrompt) -> None:
    render_story(prompt)
    if prompt.is_terminal:
        return
    render_score(prompt.score)
    render_choices(prompt.choices)


def render_invalid_choice(message: str) -> None:
    print("Invalid choice, try again!")
    if debug_enabled():
        print(f"({message})")


def render_summary(final_score: int) -> None:
    render_heading("The End")
    print(f"FINAL SLAYTION SCORE: {final_score}")
    print("Thanks for playing Queen!")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")

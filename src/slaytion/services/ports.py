"""Ports the driving loop renders through and reads choices from."""
from __future__ import annotations

from typing import Protocol

from slaytion.services.story_session import StoryPrompt


class PresentationPort(Protocol):
    """Receives render events in the order the session produces them."""

    def show_prompt(self, prompt: StoryPrompt) -> None:
        ...

    def show_invalid_choice(self, message: str) -> None:
        ...

    def show_summary(self, final_score: int) -> None:
        ...


class InputPort(Protocol):
    """Supplies a zero-based choice index, or None for unreadable input."""

    def read_choice(self, prompt: StoryPrompt) -> int | None:
        ...

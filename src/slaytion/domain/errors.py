"""Exceptions raised by the story graph and session state machine."""
from __future__ import annotations

from typing import Sequence


class StoryError(Exception):
    """Base exception for the story engine."""


class GraphError(StoryError):
    """Raised when a story graph violates its build-time invariants."""

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems = list(problems)
        summary = "; ".join(self.problems) if self.problems else "invalid story graph"
        super().__init__(f"Story graph is invalid: {summary}")


class InvalidChoiceError(StoryError):
    """Raised when a choice cannot be applied to the current node."""


class NotFoundError(StoryError, KeyError):
    """Raised when a node id lookup misses."""

    def __str__(self) -> str:
        # KeyError repr-quotes its argument.
        return str(self.args[0]) if self.args else ""


class SessionStateError(StoryError):
    """Raised when session operations are called out of protocol order."""

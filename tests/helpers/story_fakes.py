from __future__ import annotations

from typing import Iterable, List, Tuple

from slaytion.domain.story_graph import StoryGraph, StoryGraphBuilder
from slaytion.services.story_session import StoryPrompt


class RecordingPresenter:
    """Presentation port that keeps every call for later assertions."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, object]] = []

    def show_prompt(self, prompt: StoryPrompt) -> None:
        self.calls.append(("prompt", prompt))

    def show_invalid_choice(self, message: str) -> None:
        self.calls.append(("invalid", message))

    def show_summary(self, final_score: int) -> None:
        self.calls.append(("summary", final_score))

    @property
    def prompts(self) -> List[StoryPrompt]:
        return [payload for kind, payload in self.calls if kind == "prompt"]


class ScriptedInput:
    """Input port that replays a fixed list of choices."""

    def __init__(self, choices: Iterable[int | None]) -> None:
        self._choices = list(choices)
        self.asked = 0

    def read_choice(self, prompt: StoryPrompt) -> int | None:
        self.asked += 1
        if not self._choices:
            raise AssertionError(f"No scripted choice left for node '{prompt.node_id}'")
        return self._choices.pop(0)


def make_loop_graph() -> StoryGraph:
    """Small graph with a cycle: hub -> bonus -> hub, hub -> exit."""
    return (
        StoryGraphBuilder()
        .add_node("hub", "The hub.", 1)
        .add_node("bonus", "A bonus room.", 3)
        .add_node("exit", "The way out.", -1)
        .connect("hub", "Take the bonus.", "bonus")
        .connect("hub", "Leave.", "exit")
        .connect("bonus", "Back to the hub.", "hub")
        .build("hub")
    )

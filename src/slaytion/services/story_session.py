"""Story progression state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from slaytion.core.types import SessionStatus
from slaytion.domain.errors import InvalidChoiceError, SessionStateError
from slaytion.domain.story_graph import StoryGraph, StoryNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StoryPrompt:
    """Data returned to the presentation layer for rendering."""

    node_id: str
    text: str
    score: int
    choices: Tuple[str, ...]
    is_terminal: bool


@dataclass(slots=True)
class StoryEvent:
    """Base class for story events."""


@dataclass(slots=True)
class NodeEnteredEvent(StoryEvent):
    node_id: str
    score_delta: int
    score: int


@dataclass(slots=True)
class SessionEndedEvent(StoryEvent):
    node_id: str
    final_score: int


@dataclass(slots=True)
class AdvanceResult:
    """Result returned after entering a node."""

    prompt: StoryPrompt
    events: List[StoryEvent] = field(default_factory=list)
    final_score: int | None = None

    @property
    def is_over(self) -> bool:
        return self.final_score is not None


class StorySession:
    """One playthrough of a story graph.

    The session starts on the graph's start node with a score of zero.
    ``begin`` enters that node, after which each ``advance`` follows one
    choice. Every node entry, repeats included, adds the node's score delta.
    Failed calls leave the session exactly as they found it.
    """

    def __init__(self, graph: StoryGraph) -> None:
        self._graph = graph
        self._current: StoryNode = graph.start_node
        self._score = 0
        self._status: SessionStatus = "in_progress"
        self._started = False
        self._visits: List[str] = []

    @property
    def graph(self) -> StoryGraph:
        return self._graph

    @property
    def current(self) -> StoryNode:
        return self._current

    @property
    def score(self) -> int:
        return self._score

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status == "ended"

    @property
    def started(self) -> bool:
        return self._started

    @property
    def visits(self) -> Tuple[str, ...]:
        """Node ids in the order they were entered."""
        return tuple(self._visits)

    def begin(self) -> AdvanceResult:
        """Enter the start node and return the opening prompt."""
        if self._started:
            raise SessionStateError("Session has already begun.")
        self._started = True
        return self._enter_node(self._current)

    def current_prompt(self) -> StoryPrompt:
        """Return the view model for the current node."""
        node = self._current
        return StoryPrompt(
            node_id=node.id,
            text=node.text,
            score=self._score,
            choices=tuple(edge.label for edge in node.choices),
            is_terminal=node.is_terminal,
        )

    def advance(self, choice_index: object) -> AdvanceResult:
        """Apply the selected choice and move to its target node."""
        if not self._started:
            raise SessionStateError("Session must begin before choices are made.")
        node = self._current
        if self.is_over:
            raise InvalidChoiceError(f"The story has ended at '{node.id}'; no more choices.")
        # bool is an int subclass but never a valid index.
        if not isinstance(choice_index, int) or isinstance(choice_index, bool):
            logger.debug("Rejected non-integer choice %r at node %s", choice_index, node.id)
            raise InvalidChoiceError(f"Choice must be an integer, got {choice_index!r}.")
        if not 0 <= choice_index < len(node.choices):
            logger.debug(
                "Rejected choice %d at node %s (%d choices)", choice_index, node.id, len(node.choices)
            )
            raise InvalidChoiceError(
                f"Choice index {choice_index} is invalid for node '{node.id}'."
            )
        return self._enter_node(self._graph.follow(node.choices[choice_index]))

    def _enter_node(self, node: StoryNode) -> AdvanceResult:
        """Move to the node, apply its score, then check for the ending."""
        self._current = node
        self._score += node.score_delta
        self._visits.append(node.id)
        events: List[StoryEvent] = [
            NodeEnteredEvent(node_id=node.id, score_delta=node.score_delta, score=self._score)
        ]
        logger.debug("Entered node %s delta=%+d score=%d", node.id, node.score_delta, self._score)
        final_score: int | None = None
        if node.is_terminal:
            self._status = "ended"
            final_score = self._score
            events.append(SessionEndedEvent(node_id=node.id, final_score=final_score))
            logger.debug("Session ended at %s final_score=%d", node.id, final_score)
        return AdvanceResult(prompt=self.current_prompt(), events=events, final_score=final_score)

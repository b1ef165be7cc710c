"""Service layer exports."""

from .story_graph_validator import Issue, format_issue, validate_story_graph
from .story_runner import play_session
from .story_session import (
    AdvanceResult,
    NodeEnteredEvent,
    SessionEndedEvent,
    StoryEvent,
    StoryPrompt,
    StorySession,
)

__all__ = [
    "AdvanceResult",
    "Issue",
    "NodeEnteredEvent",
    "SessionEndedEvent",
    "StoryEvent",
    "StoryPrompt",
    "StorySession",
    "format_issue",
    "play_session",
    "validate_story_graph",
]

"""Domain model exports."""

from .errors import GraphError, InvalidChoiceError, NotFoundError, SessionStateError, StoryError
from .story_graph import Edge, StoryGraph, StoryGraphBuilder, StoryNode

__all__ = [
    "Edge",
    "GraphError",
    "InvalidChoiceError",
    "NotFoundError",
    "SessionStateError",
    "StoryError",
    "StoryGraph",
    "StoryGraphBuilder",
    "StoryNode",
]

"""Repository for story graph definitions."""
from __future__ import annotations

from pathlib import Path

from slaytion.data import paths
from slaytion.data.errors import DataValidationError
from slaytion.data.json_loader import load_json
from slaytion.domain.story_graph import StoryGraph, StoryGraphBuilder, StoryNode


class StoryRepository:
    """Loads a story file, validates its structure and caches the built graph."""

    def __init__(self, story_path: Path | str | None = None) -> None:
        self._story_path = paths.get_story_path(story_path)
        self._graph: StoryGraph | None = None

    @property
    def story_path(self) -> Path:
        return self._story_path

    def graph(self) -> StoryGraph:
        """Return the story graph, loading it on first use."""
        if self._graph is None:
            raw = load_json(self._story_path)
            self._graph = self._build(raw)
        return self._graph

    def all(self) -> list[StoryNode]:
        """Return all nodes sorted deterministically by id."""
        return sorted(self.graph(), key=lambda node: node.id)

    def _build(self, raw: object) -> StoryGraph:
        story = self._require_mapping(raw, f"top level of {self._story_path}")
        start_id = self._require_str(story.get("start"), "story start")
        raw_nodes = story.get("nodes")
        if not isinstance(raw_nodes, list):
            raise DataValidationError("story nodes must be a list.")

        builder = StoryGraphBuilder()
        for index, entry in enumerate(raw_nodes):
            node_ctx = f"story nodes[{index}]"
            node_data = self._require_mapping(entry, node_ctx)
            node_id = self._require_str(node_data.get("id"), f"{node_ctx} id")
            node_ctx = f"story node '{node_id}'"
            text = self._require_str(node_data.get("text"), f"{node_ctx} text")
            score_delta = self._require_int(node_data.get("score_delta", 0), f"{node_ctx} score_delta")
            builder.add_node(node_id, text, score_delta)
            for label, next_node_id in self._parse_choices(node_data.get("choices"), node_ctx):
                builder.connect(node_id, label, next_node_id)
        return builder.build(start_id)

    def _parse_choices(self, raw_choices: object, node_ctx: str) -> list[tuple[str, str]]:
        if raw_choices is None:
            return []
        if not isinstance(raw_choices, list):
            raise DataValidationError(f"{node_ctx} choices must be a list if provided.")
        choices: list[tuple[str, str]] = []
        for index, entry in enumerate(raw_choices):
            choice_ctx = f"{node_ctx} choices[{index}]"
            choice_mapping = self._require_mapping(entry, choice_ctx)
            label = self._require_str(choice_mapping.get("label"), f"{choice_ctx} label")
            next_node = self._require_str(choice_mapping.get("next"), f"{choice_ctx} next")
            choices.append((label, next_node))
        return choices

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise DataValidationError(f"{context} must be an integer.")
        return value

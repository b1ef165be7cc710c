"""Helpers for resolving data file locations."""
from __future__ import annotations

from pathlib import Path

DEFAULT_STORY_FILENAME = "story.json"


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing JSON definition files."""
    if base_path is not None:
        return Path(base_path)
    return get_repo_root() / "data" / "definitions"


def get_story_path(story_path: Path | str | None = None) -> Path:
    """Return an explicit story file path, or the bundled sample story."""
    if story_path is not None:
        return Path(story_path)
    return get_definitions_path() / DEFAULT_STORY_FILENAME

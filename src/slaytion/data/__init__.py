"""Data layer utilities for loading JSON story definitions."""

from .errors import DataError, DataLoadError, DataValidationError
from .paths import get_definitions_path, get_repo_root, get_story_path

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "get_definitions_path",
    "get_repo_root",
    "get_story_path",
]

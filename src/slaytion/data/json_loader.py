"""Low-level JSON helpers for story definitions."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Tuple

from .errors import DataLoadError, DataValidationError


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure.

    Repeated keys inside one object raise DataValidationError instead of
    silently keeping the last value.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Definition file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read definition file: {path}") from exc

    try:
        return json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc


def _reject_duplicate_keys(pairs: List[Tuple[str, object]]) -> dict[str, object]:
    result: dict[str, object] = {}
    for key, value in pairs:
        if key in result:
            raise DataValidationError(f"Duplicate key '{key}' in JSON object.")
        result[key] = value
    return result

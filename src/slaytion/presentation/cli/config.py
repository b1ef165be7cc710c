"""Per-user CLI settings: text display mode and the last story played."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from slaytion.core.types import TextDisplayMode

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CliSettings:
    """Options the CLI keeps between runs."""

    text_display_mode: TextDisplayMode = "instant"
    last_story: str | None = None

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> CliSettings:
        last_story = raw.get("last_story")
        return cls(
            text_display_mode="step" if raw.get("text_display_mode") == "step" else "instant",
            last_story=last_story if isinstance(last_story, str) and last_story else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"text_display_mode": self.text_display_mode}
        if self.last_story:
            payload["last_story"] = self.last_story
        return payload

    def toggle_text_mode(self) -> TextDisplayMode:
        self.text_display_mode = "instant" if self.text_display_mode == "step" else "step"
        return self.text_display_mode

    def remembered_story(self) -> Path | None:
        """Return the last story file if it still exists."""
        if self.last_story is None:
            return None
        path = Path(self.last_story)
        if not path.is_file():
            logger.warning("Remembered story %s is gone; using the bundled story", path)
            return None
        return path


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        return Path(base) / "Slaytion" if base else Path.home() / "Slaytion"
    return Path.home() / ".config" / "slaytion"


def get_default_config_path() -> Path:
    return get_user_data_dir() / "config.json"


def load_config(path: Path | None = None) -> CliSettings:
    """Load settings from disk; anything unreadable yields defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return CliSettings()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return CliSettings()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_path)
        return CliSettings()
    return CliSettings.from_mapping(raw)


def save_config(settings: CliSettings, path: Path | None = None) -> None:
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(settings.to_payload(), indent=2, sort_keys=True), encoding="utf-8")

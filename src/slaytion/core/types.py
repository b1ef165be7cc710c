"""Shared type aliases for the core and domain layers."""
from typing import Literal

SessionStatus = Literal["in_progress", "ended"]
TextDisplayMode = Literal["instant", "step"]

__all__ = ["SessionStatus", "TextDisplayMode"]

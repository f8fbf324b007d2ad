"""Data models for the Watch Trigger module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class WatchEventKind(str, Enum):
    """Kinds of source tree events that trigger a pipeline run."""

    ADDED = "added"
    CHANGED = "changed"
    REMOVED = "removed"


@dataclass(frozen=True)
class WatchEvent:
    """A single file event under the source root."""

    kind: WatchEventKind
    path: Path

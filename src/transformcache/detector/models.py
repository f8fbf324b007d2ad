"""Data models for the Change Detector module."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from transformcache.manifest import Manifest


@dataclass(frozen=True)
class SourceFile:
    """A file discovered under the source root during a scan.

    Attributes:
        path: Absolute path of the file.
        mtime: Modification time in integer milliseconds.
    """

    path: Path
    mtime: int

    @property
    def key(self) -> str:
        """Manifest key for this file."""
        return str(self.path)


@dataclass
class ChangeSet:
    """Result of change detection.

    Attributes:
        changed: Files that are new or whose mtime differs from the manifest.
        unchanged: Source keys whose manifest entry was carried over.
        manifest: Partial new manifest seeded with the unchanged entries.
    """

    changed: list[SourceFile] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    manifest: Manifest = field(default_factory=Manifest)

    @property
    def nothing_changed(self) -> bool:
        """Check if no file needs transforming."""
        return len(self.changed) == 0

"""Change detection by modification-time equality.

A source file is unchanged only when the manifest has an entry for it and the
stored mtime equals the current one. Content is never inspected, so an edit
that keeps the mtime (same clock tick, or a file touched back) is treated as
unchanged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from transformcache.config import DEFAULT_IGNORED_NAMES
from transformcache.detector.exceptions import SourceRootNotFoundError
from transformcache.detector.models import ChangeSet, SourceFile
from transformcache.manifest import Manifest, ManifestEntry

logger = logging.getLogger(__name__)

def mtime_ms(path: Path) -> int:
    """Modification time of a file in integer milliseconds."""
    return path.stat().st_mtime_ns // 1_000_000


def scan_sources(
    root: Path, ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES
) -> list[SourceFile]:
    """Recursively list every file under the source root.

    Args:
        root: Source root directory.
        ignored_names: Base names to skip (OS metadata files).

    Returns:
        Source files sorted by path.

    Raises:
        SourceRootNotFoundError: If the root is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise SourceRootNotFoundError(f"Source directory not found: {root}")

    ignored = frozenset(ignored_names)
    root = root.resolve()
    files: list[SourceFile] = []

    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            if name in ignored:
                continue
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            files.append(SourceFile(path=path, mtime=mtime_ms(path)))

    files.sort(key=lambda f: f.key)
    return files


class ChangeDetector:
    """Detects which source files need transforming."""

    def __init__(
        self, source_root: Path, ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES
    ) -> None:
        """Initialize the change detector.

        Args:
            source_root: Source root directory.
            ignored_names: Base names to skip while scanning.
        """
        self.source_root = Path(source_root)
        self.ignored_names = frozenset(ignored_names)

    def scan(self) -> list[SourceFile]:
        """Scan the source tree."""
        return scan_sources(self.source_root, self.ignored_names)

    def detect(self, previous: Manifest) -> ChangeSet:
        """Partition the current source tree against the previous manifest.

        Args:
            previous: Manifest from the last fully reconciled run.

        Returns:
            ChangeSet with the changed files and a manifest seeded with
            the unchanged entries.
        """
        changes = ChangeSet()

        for source in self.scan():
            entry = previous.get(source.key)
            if entry is not None and entry.mtime == source.mtime:
                changes.unchanged.append(source.key)
                changes.manifest.set(
                    source.key, ManifestEntry(gen=list(entry.gen), mtime=entry.mtime)
                )
            else:
                changes.changed.append(source)

        logger.info(
            "Detected %d changed and %d unchanged source files in %s",
            len(changes.changed),
            len(changes.unchanged),
            self.source_root,
        )
        return changes

"""GarbageCollector - Deletes outputs of sources that left the manifest."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from transformcache.collector.models import CollectionResult, DeletionFailure

if TYPE_CHECKING:
    from transformcache.manifest import Manifest

logger = logging.getLogger(__name__)


def remove_path(path: Path) -> None:
    """Remove a file or directory tree. A missing path is not an error."""
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.is_dir():
        shutil.rmtree(path)


class GarbageCollector:
    """Reconciles generated outputs between two manifests.

    Only outputs of sources that disappeared from the manifest are candidates,
    and a candidate survives when any entry of the new manifest still declares
    it.
    """

    def removed_sources(self, previous: Manifest, current: Manifest) -> list[str]:
        """Sources present in the previous manifest but absent from the current one."""
        return [source for source in previous if source not in current]

    def stale_outputs(self, previous: Manifest, current: Manifest) -> list[str]:
        """Outputs to delete, de-duplicated in declaration order.

        Args:
            previous: Manifest from the last reconciled run.
            current: Fully settled manifest of this run.

        Returns:
            Generated paths of removed sources that no live entry declares.
        """
        live = current.generated_paths()
        stale: dict[str, None] = {}
        for source in self.removed_sources(previous, current):
            entry = previous.get(source)
            for path in entry.gen:
                if path not in live:
                    stale[path] = None
        return list(stale)

    def collect(self, previous: Manifest, current: Manifest) -> CollectionResult:
        """Delete stale outputs.

        Each deletion is attempted independently. Failures are logged and
        reported in the result; they do not stop the remaining deletions.

        Args:
            previous: Manifest from the last reconciled run.
            current: Fully settled manifest of this run.

        Returns:
            What was removed and what could not be.
        """
        result = CollectionResult(removed_sources=self.removed_sources(previous, current))

        for path in self.stale_outputs(previous, current):
            logger.info("Removing outdated generated file %s", path)
            try:
                remove_path(Path(path))
            except OSError as e:
                logger.warning("Could not remove outdated generated file %s: %s", path, e)
                result.failures.append(DeletionFailure(path=path, error=str(e)))
            else:
                result.removed.append(path)

        return result

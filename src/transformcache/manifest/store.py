"""ManifestStore - Loads and persists the manifest, owns the destination tree."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from typing import TYPE_CHECKING

from pydantic import ValidationError

from transformcache.manifest.exceptions import ManifestCorruptError
from transformcache.manifest.models import Manifest, ManifestFileSchema

if TYPE_CHECKING:
    from transformcache.config import ProjectPaths

logger = logging.getLogger(__name__)


class ManifestStore:
    """Reads and writes the persisted manifest for one project.

    The manifest is always written as a whole. A missing manifest means the
    destination tree cannot be trusted, so it is cleared before an empty
    manifest is handed out.
    """

    def __init__(self, paths: ProjectPaths) -> None:
        """Initialize the Manifest Store.

        Args:
            paths: Project paths (manifest file and destination tree).
        """
        self.paths = paths

    def read(self) -> Manifest | None:
        """Read the persisted manifest.

        Returns:
            The manifest, or None if no manifest file exists.

        Raises:
            ManifestCorruptError: If the file exists but is not a valid manifest.
            OSError: If the file cannot be read.
        """
        path = self.paths.manifest
        if not path.exists():
            return None

        with open(path, "rb") as f:
            raw = f.read()

        try:
            data = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ManifestCorruptError(f"Manifest at {path} is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ManifestCorruptError(f"Manifest at {path} is not valid JSON: {e}") from e

        try:
            schema = ManifestFileSchema.model_validate(data)
        except ValidationError as e:
            raise ManifestCorruptError(f"Manifest at {path} has an invalid structure: {e}") from e

        return Manifest.from_dict(schema.model_dump())

    def load(self) -> Manifest:
        """Load the persisted manifest, clearing the destination if it is absent.

        Returns:
            The persisted manifest, or an empty one if none exists.

        Raises:
            ManifestCorruptError: If the file exists but is not a valid manifest.
            OSError: If the file cannot be read or the destination cannot be cleared.
        """
        manifest = self.read()
        if manifest is not None:
            logger.info("Manifest found at %s (%d entries)", self.paths.manifest, len(manifest))
            return manifest

        logger.info("Manifest not found at %s", self.paths.manifest)
        self.clear_destination()
        return Manifest()

    def save(self, manifest: Manifest) -> None:
        """Write the manifest, replacing any previous file atomically.

        Args:
            manifest: The fully reconciled manifest.

        Raises:
            OSError: If the file cannot be written.
        """
        path = self.paths.manifest
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing manifest to %s (%d entries)", path, len(manifest))

        fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(manifest.to_dict(), f, indent=2)
                f.write("\n")
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

    def discard(self) -> None:
        """Delete the persisted manifest file, if any."""
        logger.info("Removing manifest %s", self.paths.manifest)
        self.paths.manifest.unlink(missing_ok=True)

    def clear_destination(self) -> None:
        """Remove the entire destination tree. The manifest file is left alone."""
        dst = self.paths.dst
        logger.info("Cleaning generated artifacts %s", dst)
        if dst.is_symlink() or dst.is_file():
            dst.unlink()
        elif dst.exists():
            shutil.rmtree(dst)

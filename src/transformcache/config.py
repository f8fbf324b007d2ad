"""Configuration loading for transformcache projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "transform.yaml"

DEFAULT_SOURCE_DIR = "src"
DEFAULT_DESTINATION_DIR = "app"
DEFAULT_BUILD_DIR = "build"
DEFAULT_MANIFEST_NAME = ".transform.lock"

# OS metadata files never treated as sources
DEFAULT_IGNORED_NAMES = frozenset({".DS_Store", "Thumbs.db"})


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class ProjectPaths:
    """Absolute paths used by a single project.

    Attributes:
        root: Project root supplied by the host.
        src: Source tree scanned for changes.
        dst: Destination tree holding generated outputs.
        build: Build-output directory holding the manifest.
        manifest: The persisted manifest file.
    """

    root: Path
    src: Path
    dst: Path
    build: Path
    manifest: Path


@dataclass
class TransformConfig:
    """transformcache project configuration.

    Directory names are resolved relative to `root_path`.
    """

    root_path: Path
    source_dir: str = DEFAULT_SOURCE_DIR
    destination_dir: str = DEFAULT_DESTINATION_DIR
    build_dir: str = DEFAULT_BUILD_DIR
    manifest_name: str = DEFAULT_MANIFEST_NAME
    ignored_names: frozenset[str] = field(default_factory=lambda: DEFAULT_IGNORED_NAMES)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> TransformConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.
            root_path: Project root directory.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        for key in ("source", "destination", "build"):
            if key in data and not isinstance(data[key], str):
                raise ConfigError(f"'{key}' must be a string, got {type(data[key]).__name__}")

        ignore = data.get("ignore")
        if ignore is None:
            ignored_names = DEFAULT_IGNORED_NAMES
        elif isinstance(ignore, list) and all(isinstance(name, str) for name in ignore):
            ignored_names = DEFAULT_IGNORED_NAMES | frozenset(ignore)
        else:
            raise ConfigError("'ignore' must be a list of file names")

        return cls(
            root_path=root_path,
            source_dir=data.get("source", DEFAULT_SOURCE_DIR),
            destination_dir=data.get("destination", DEFAULT_DESTINATION_DIR),
            build_dir=data.get("build", DEFAULT_BUILD_DIR),
            ignored_names=ignored_names,
        )

    @property
    def paths(self) -> ProjectPaths:
        """Absolute project paths derived from the configured directory names."""
        root = self.root_path.resolve()
        build = root / self.build_dir
        return ProjectPaths(
            root=root,
            src=root / self.source_dir,
            dst=root / self.destination_dir,
            build=build,
            manifest=build / self.manifest_name,
        )


def load_config(
    project_dir: Path | str,
    source_dir: str | None = None,
    destination_dir: str | None = None,
) -> TransformConfig:
    """Load configuration for a project.

    Reads `transform.yaml` from the project root when present. Explicit
    arguments override values from the file.

    Args:
        project_dir: Project root directory.
        source_dir: Source subdirectory name override.
        destination_dir: Destination subdirectory name override.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If the config file is invalid.
    """
    project_dir = Path(project_dir)
    config_path = project_dir / CONFIG_FILENAME

    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ConfigError(
                    f"Configuration must be a YAML mapping, got {type(loaded).__name__}"
                )
            data = loaded

    if source_dir is not None:
        data["source"] = source_dir
    if destination_dir is not None:
        data["destination"] = destination_dir

    return TransformConfig.from_dict(data, project_dir)

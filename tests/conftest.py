"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from transformcache.config import ProjectPaths, TransformConfig

# 2024-01-01T00:00:00Z in milliseconds
BASE_MTIME_MS = 1_704_067_200_000


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


def set_mtime(path: Path, mtime_ms: int) -> None:
    """Set both atime and mtime of a file, in milliseconds."""
    ns = mtime_ms * 1_000_000
    os.utime(path, ns=(ns, ns))


# Shared fixtures


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a project root with an empty source tree."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def config(project_dir: Path) -> TransformConfig:
    """Default configuration for the project."""
    return TransformConfig(root_path=project_dir)


@pytest.fixture
def paths(config: TransformConfig) -> ProjectPaths:
    """Resolved project paths."""
    return config.paths


@pytest.fixture
def write_source(paths: ProjectPaths) -> Callable[..., Path]:
    """Write a file under the source root with an explicit mtime."""

    def _write(relative: str, content: str = "content", mtime_ms: int = BASE_MTIME_MS) -> Path:
        path = paths.src / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        set_mtime(path, mtime_ms)
        return path

    return _write


@pytest.fixture
def base_mtime() -> int:
    """Reference mtime in milliseconds used by write_source."""
    return BASE_MTIME_MS


@pytest.fixture
def touch() -> Callable[[Path, int], None]:
    """Set a file's mtime in milliseconds."""
    return set_mtime

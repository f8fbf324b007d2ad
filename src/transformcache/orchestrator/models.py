"""Data models for the Orchestrator module."""

from __future__ import annotations

from dataclasses import dataclass, field

from transformcache.manifest import Manifest


@dataclass
class OrchestrationResult:
    """Result of transforming a change set.

    Attributes:
        manifest: New manifest: unchanged entries plus one entry per processed file.
        processed: Source keys a handler claimed.
        skipped: Source keys no handler claimed.
    """

    manifest: Manifest
    processed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

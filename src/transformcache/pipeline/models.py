"""Data models for the Pipeline module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from transformcache.collector import CollectionResult
from transformcache.detector import ChangeSet
from transformcache.manifest import Manifest
from transformcache.orchestrator import OrchestrationResult


class PipelineStage(str, Enum):
    """Named stages of a pipeline run, in execution order."""

    LOAD = "load"
    DETECT = "detect"
    TRANSFORM = "transform"
    COLLECT = "collect"
    SAVE = "save"


@dataclass
class PipelineResult:
    """Result of a complete pipeline run.

    Attributes:
        previous: Manifest loaded at the start of the run.
        manifest: Reconciled manifest persisted at the end of the run.
        changes: Change detection result.
        orchestration: Transform results.
        collection: Garbage collection results.
        duration: Wall-clock seconds the run took, excluding time spent
                  waiting for an earlier run.
    """

    previous: Manifest
    manifest: Manifest
    changes: ChangeSet
    orchestration: OrchestrationResult
    collection: CollectionResult
    duration: float = 0.0

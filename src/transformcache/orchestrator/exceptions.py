"""Exceptions for the Orchestrator module."""

from __future__ import annotations

from pathlib import Path


class OrchestratorError(Exception):
    """Base exception for orchestrator errors."""


class TransformFailure(OrchestratorError):
    """A per-file transform invocation failed."""

    def __init__(self, source: Path, cause: BaseException) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"Transform failed for {source}: {cause}")

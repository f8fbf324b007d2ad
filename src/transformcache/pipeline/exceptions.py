"""Exceptions for the Pipeline module."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from transformcache.pipeline.models import PipelineStage


class PipelineError(Exception):
    """Base exception for pipeline errors."""


class PipelineStageError(PipelineError):
    """A pipeline stage failed; the remaining stages were skipped."""

    def __init__(self, stage: PipelineStage, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Pipeline failed at stage '{stage.value}': {cause}")

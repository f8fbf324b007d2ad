"""Pipeline - load, detect, transform, collect and save as one serialized run."""

from transformcache.pipeline.exceptions import PipelineError, PipelineStageError
from transformcache.pipeline.models import PipelineResult, PipelineStage
from transformcache.pipeline.pipeline import Pipeline

__all__ = [
    "Pipeline",
    "PipelineError",
    "PipelineResult",
    "PipelineStage",
    "PipelineStageError",
]

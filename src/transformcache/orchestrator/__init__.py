"""Orchestrator - Fans out the transform over changed files and builds the new manifest."""

from transformcache.orchestrator.exceptions import OrchestratorError, TransformFailure
from transformcache.orchestrator.models import OrchestrationResult
from transformcache.orchestrator.orchestrator import TransformCapability, TransformOrchestrator

__all__ = [
    "OrchestrationResult",
    "OrchestratorError",
    "TransformCapability",
    "TransformFailure",
    "TransformOrchestrator",
]

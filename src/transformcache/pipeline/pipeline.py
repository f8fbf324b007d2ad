"""Pipeline - Drives one incremental run from manifest load to manifest save."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from transformcache.pipeline.exceptions import PipelineStageError
from transformcache.pipeline.models import PipelineResult, PipelineStage

if TYPE_CHECKING:
    from transformcache.collector import GarbageCollector
    from transformcache.detector import ChangeDetector
    from transformcache.manifest import ManifestStore
    from transformcache.orchestrator import TransformOrchestrator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Pipeline:
    """Runs load -> detect -> transform -> collect -> save.

    The manifest file and the destination tree are shared by every run, so
    runs are serialized: a run requested while another is in flight waits for
    it and then starts from scratch against the manifest it saved.
    """

    def __init__(
        self,
        store: ManifestStore,
        detector: ChangeDetector,
        orchestrator: TransformOrchestrator,
        collector: GarbageCollector,
    ) -> None:
        """Initialize the pipeline.

        Args:
            store: Manifest Store for the project.
            detector: Change Detector for the source tree.
            orchestrator: Transform Orchestrator.
            collector: Garbage Collector.
        """
        self.store = store
        self.detector = detector
        self.orchestrator = orchestrator
        self.collector = collector
        self._lock = threading.Lock()

    def _stage(self, stage: PipelineStage, func: Callable[[], T]) -> T:
        logger.debug("Pipeline stage %s", stage.value)
        try:
            return func()
        except Exception as e:
            logger.error("Pipeline stage %s failed: %s", stage.value, e)
            raise PipelineStageError(stage, e) from e

    def run(self) -> PipelineResult:
        """Run the pipeline once.

        Returns:
            Results of every stage.

        Raises:
            PipelineStageError: If any stage fails. Nothing is saved in that case.
        """
        with self._lock:
            started = time.monotonic()

            previous = self._stage(PipelineStage.LOAD, self.store.load)
            changes = self._stage(PipelineStage.DETECT, lambda: self.detector.detect(previous))
            orchestration = self._stage(
                PipelineStage.TRANSFORM, lambda: self.orchestrator.run(changes)
            )
            manifest = orchestration.manifest
            collection = self._stage(
                PipelineStage.COLLECT, lambda: self.collector.collect(previous, manifest)
            )
            self._stage(PipelineStage.SAVE, lambda: self.store.save(manifest))

            result = PipelineResult(
                previous=previous,
                manifest=manifest,
                changes=changes,
                orchestration=orchestration,
                collection=collection,
                duration=time.monotonic() - started,
            )

        logger.info(
            "Pipeline run complete in %.2fs: %d processed, %d unchanged, %d removed",
            result.duration,
            len(orchestration.processed),
            len(changes.unchanged),
            len(collection.removed),
        )
        return result

    def clean(self) -> None:
        """Remove the destination tree, waiting for any in-flight run."""
        with self._lock:
            self.store.clear_destination()

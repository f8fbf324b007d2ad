"""TransformOrchestrator - Runs the transform for every changed file concurrently."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING

from tqdm import tqdm

from transformcache.manifest import ManifestEntry
from transformcache.orchestrator.exceptions import TransformFailure
from transformcache.orchestrator.models import OrchestrationResult
from transformcache.transforms import TransformResult

if TYPE_CHECKING:
    from transformcache.detector import ChangeSet, SourceFile

logger = logging.getLogger(__name__)

TransformCapability = Callable[[Path], TransformResult]


class TransformOrchestrator:
    """Invokes the transform capability once per changed file.

    All invocations are submitted together, one worker per file, and the
    orchestrator waits for every one of them. Invocations must not depend on
    each other's side effects; they complete in any order.
    """

    def __init__(self, transform: TransformCapability, show_progress: bool = False) -> None:
        """Initialize the orchestrator.

        Args:
            transform: Per-file transform capability.
            show_progress: Whether to display a progress bar.
        """
        self.transform = transform
        self.show_progress = show_progress

    def run(self, changes: ChangeSet) -> OrchestrationResult:
        """Transform the changed files and complete the change set's manifest.

        The change set's manifest is only updated once every invocation has
        succeeded. Outputs already written by other invocations are left on
        disk when one fails.

        Args:
            changes: Result of change detection.

        Returns:
            The completed manifest and which files were processed or skipped.

        Raises:
            TransformFailure: If any invocation fails.
        """
        if changes.nothing_changed:
            return OrchestrationResult(manifest=changes.manifest)

        results: dict[str, tuple[SourceFile, TransformResult]] = {}
        first_error: tuple[SourceFile, Exception] | None = None

        with ThreadPoolExecutor(max_workers=len(changes.changed)) as executor:
            future_to_source = {
                executor.submit(self.transform, source.path): source
                for source in changes.changed
            }

            with tqdm(
                total=len(future_to_source),
                desc="Transform",
                unit="file",
                disable=not self.show_progress,
            ) as pbar:
                for future in as_completed(future_to_source):
                    source = future_to_source[future]
                    try:
                        result = future.result()
                        results[source.key] = (source, result)
                    except Exception as e:
                        if first_error is None:
                            first_error = (source, e)
                        logger.error("Failed to transform %s: %s", source.path, e)
                    finally:
                        pbar.update(1)

        if first_error is not None:
            failed, cause = first_error
            raise TransformFailure(failed.path, cause) from cause

        outcome = OrchestrationResult(manifest=changes.manifest)
        for key in sorted(results):
            source, result = results[key]
            if not result.processed:
                outcome.skipped.append(key)
                continue
            changes.manifest.set(key, ManifestEntry(gen=list(result.outputs), mtime=source.mtime))
            outcome.processed.append(key)

        logger.info(
            "Transformed %d files (%d skipped)", len(outcome.processed), len(outcome.skipped)
        )
        return outcome

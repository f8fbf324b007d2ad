"""Unit tests for the Transform Orchestrator."""

import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from transformcache.detector import ChangeSet, SourceFile
from transformcache.manifest import Manifest, ManifestEntry
from transformcache.orchestrator import TransformFailure, TransformOrchestrator
from transformcache.transforms import TransformResult


def _changes(*names: str, mtime: int = 1000) -> ChangeSet:
    return ChangeSet(changed=[SourceFile(path=Path("/p/src") / n, mtime=mtime) for n in names])


def _copying(path: Path) -> TransformResult:
    return TransformResult(processed=True, outputs=[f"/p/app/{path.name}"])


@pytest.mark.unit
class TestTransformOrchestrator:
    """Tests for TransformOrchestrator.run."""

    def test_nothing_changed_skips_transform(self) -> None:
        transform = MagicMock()
        seeded = Manifest()
        seeded.set("/p/src/a.txt", ManifestEntry(gen=["/p/app/a.txt"], mtime=1))

        result = TransformOrchestrator(transform).run(ChangeSet(manifest=seeded))

        transform.assert_not_called()
        assert result.manifest is seeded
        assert result.processed == []

    def test_invokes_transform_once_per_changed_file(self) -> None:
        transform = MagicMock(side_effect=_copying)

        TransformOrchestrator(transform).run(_changes("a.txt", "b.txt", "c.txt"))

        assert transform.call_count == 3
        called = sorted(call.args[0] for call in transform.call_args_list)
        assert called == [Path("/p/src/a.txt"), Path("/p/src/b.txt"), Path("/p/src/c.txt")]

    def test_processed_file_gets_entry_with_source_mtime(self) -> None:
        result = TransformOrchestrator(_copying).run(_changes("a.txt", mtime=4242))

        assert result.manifest.get("/p/src/a.txt") == ManifestEntry(
            gen=["/p/app/a.txt"], mtime=4242
        )
        assert result.processed == ["/p/src/a.txt"]

    def test_unprocessed_file_gets_no_entry(self) -> None:
        def transform(path: Path) -> TransformResult:
            if path.suffix == ".md":
                return TransformResult(processed=False)
            return _copying(path)

        result = TransformOrchestrator(transform).run(_changes("a.txt", "README.md"))

        assert "/p/src/README.md" not in result.manifest
        assert result.skipped == ["/p/src/README.md"]
        assert result.processed == ["/p/src/a.txt"]

    def test_keeps_unchanged_entries(self) -> None:
        changes = _changes("a.txt")
        changes.manifest.set("/p/src/old.txt", ManifestEntry(gen=["/p/app/old.txt"], mtime=1))
        changes.unchanged.append("/p/src/old.txt")

        result = TransformOrchestrator(_copying).run(changes)

        assert set(result.manifest) == {"/p/src/a.txt", "/p/src/old.txt"}

    def test_invocations_run_concurrently(self) -> None:
        barrier = threading.Barrier(3, timeout=5)

        def transform(path: Path) -> TransformResult:
            barrier.wait()
            return _copying(path)

        result = TransformOrchestrator(transform).run(_changes("a", "b", "c"))

        assert len(result.processed) == 3

    def test_failure_raises_and_leaves_manifest_untouched(self) -> None:
        def transform(path: Path) -> TransformResult:
            if path.name == "bad.txt":
                raise PermissionError("denied")
            return _copying(path)

        changes = _changes("a.txt", "bad.txt", "c.txt")

        with pytest.raises(TransformFailure) as exc_info:
            TransformOrchestrator(transform).run(changes)

        assert exc_info.value.source == Path("/p/src/bad.txt")
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert len(changes.manifest) == 0

    def test_failure_waits_for_other_invocations(self) -> None:
        finished = threading.Event()

        def transform(path: Path) -> TransformResult:
            if path.name == "bad.txt":
                raise OSError("disk full")
            finished.wait(timeout=0.2)
            finished.set()
            return _copying(path)

        with pytest.raises(TransformFailure):
            TransformOrchestrator(transform).run(_changes("slow.txt", "bad.txt"))

        assert finished.is_set()

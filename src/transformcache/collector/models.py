"""Data models for the Garbage Collector module."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DeletionFailure:
    """A stale output that could not be removed.

    Attributes:
        path: The generated path.
        error: Why the removal failed.
    """

    path: str
    error: str


@dataclass
class CollectionResult:
    """Result of a garbage collection pass.

    Attributes:
        removed_sources: Sources present in the previous manifest but not the new one.
        removed: Stale outputs that were deleted (or were already gone).
        failures: Stale outputs that could not be deleted.
    """

    removed_sources: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    failures: list[DeletionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if every stale output was removed."""
        return not self.failures

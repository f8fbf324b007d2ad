"""Data models for the transform capability."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from transformcache.config import ProjectPaths


@dataclass
class TransformContext:
    """Mutable per-file context handed to each transform handler.

    A handler that claims the file sets `processed` and appends the paths it
    generated to `gen`. A handler that declines leaves the context untouched.

    Attributes:
        src: Absolute source path.
        paths: Project paths (source root, destination root, ...).
        gen: Generated output paths accumulated so far.
        processed: Whether a handler has claimed the file.
    """

    src: Path
    paths: ProjectPaths
    gen: list[str] = field(default_factory=list)
    processed: bool = False


@dataclass
class TransformResult:
    """Outcome of transforming one source file.

    Attributes:
        processed: Whether any handler claimed the file.
        outputs: Generated output paths declared by the handler.
    """

    processed: bool
    outputs: list[str] = field(default_factory=list)

    @classmethod
    def from_context(cls, context: TransformContext) -> TransformResult:
        """Fold a finished context into a result."""
        return cls(processed=context.processed, outputs=list(context.gen))

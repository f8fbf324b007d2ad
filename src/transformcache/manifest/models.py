"""Data models for the Manifest Store.

The manifest maps each processed source file (canonical absolute path) to the
outputs its transform declared and the source mtime at processing time.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, RootModel, StrictInt


@dataclass
class ManifestEntry:
    """Cached processing record for one source file.

    Attributes:
        gen: Generated output paths, in the order the transform declared them.
        mtime: Source modification time in integer milliseconds.
    """

    gen: list[str]
    mtime: int

    @classmethod
    def from_dict(cls, data: dict) -> ManifestEntry:
        """Create from dictionary."""
        return cls(gen=list(data["gen"]), mtime=data["mtime"])

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"gen": list(self.gen), "mtime": self.mtime}


@dataclass
class Manifest:
    """Mapping from source path to ManifestEntry."""

    entries: dict[str, ManifestEntry] = field(default_factory=dict)

    def __contains__(self, source: object) -> bool:
        return source in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def get(self, source: str) -> ManifestEntry | None:
        """Get the entry for a source path, or None."""
        return self.entries.get(source)

    def set(self, source: str, entry: ManifestEntry) -> None:
        """Add or overwrite the entry for a source path."""
        self.entries[source] = entry

    def generated_paths(self) -> set[str]:
        """Union of generated paths across all entries."""
        return {path for entry in self.entries.values() for path in entry.gen}

    @classmethod
    def from_dict(cls, data: dict) -> Manifest:
        """Create from the on-disk dictionary format."""
        return cls(
            entries={source: ManifestEntry.from_dict(entry) for source, entry in data.items()}
        )

    def to_dict(self) -> dict:
        """Convert to the on-disk dictionary format."""
        return {source: entry.to_dict() for source, entry in self.entries.items()}


# On-disk schema


class EntrySchema(BaseModel):
    """Schema for a single manifest entry as stored on disk."""

    model_config = ConfigDict(extra="ignore")

    gen: list[str]
    mtime: StrictInt


class ManifestFileSchema(RootModel[dict[str, EntrySchema]]):
    """Schema for the whole manifest file."""

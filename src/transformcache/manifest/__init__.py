"""Manifest Store - Persisted mapping of source files to their generated outputs."""

from transformcache.manifest.exceptions import ManifestCorruptError, ManifestError
from transformcache.manifest.models import Manifest, ManifestEntry
from transformcache.manifest.store import ManifestStore

__all__ = [
    "Manifest",
    "ManifestCorruptError",
    "ManifestEntry",
    "ManifestError",
    "ManifestStore",
]

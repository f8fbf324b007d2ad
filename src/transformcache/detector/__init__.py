"""Change Detector - Partitions the source tree into changed and unchanged files."""

from transformcache.detector.detector import ChangeDetector, scan_sources
from transformcache.detector.exceptions import DetectorError, SourceRootNotFoundError
from transformcache.detector.models import ChangeSet, SourceFile

__all__ = [
    "ChangeDetector",
    "ChangeSet",
    "DetectorError",
    "SourceFile",
    "SourceRootNotFoundError",
    "scan_sources",
]

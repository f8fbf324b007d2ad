"""Garbage Collector - Removes generated outputs no live source produces."""

from transformcache.collector.collector import GarbageCollector, remove_path
from transformcache.collector.models import CollectionResult, DeletionFailure

__all__ = [
    "CollectionResult",
    "DeletionFailure",
    "GarbageCollector",
    "remove_path",
]

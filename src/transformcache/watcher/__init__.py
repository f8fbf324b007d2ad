"""Watch Trigger - Emits file events from the source tree."""

from transformcache.watcher.models import WatchEvent, WatchEventKind
from transformcache.watcher.watcher import SourceEventHandler, SourceWatcher

__all__ = [
    "SourceEventHandler",
    "SourceWatcher",
    "WatchEvent",
    "WatchEventKind",
]

"""SourceWatcher - watchdog based file events for the source tree.

Every file event is forwarded as it arrives. There is no debouncing or
coalescing; serializing the runs those events trigger is up to the callback.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from watchdog.events import (
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from transformcache.config import DEFAULT_IGNORED_NAMES
from transformcache.watcher.models import WatchEvent, WatchEventKind

logger = logging.getLogger(__name__)

EventCallback = Callable[[WatchEvent], None]


class SourceEventHandler(FileSystemEventHandler):
    """Maps watchdog file events to WatchEvents. Directory events are ignored."""

    def __init__(
        self,
        on_event: EventCallback,
        ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES,
    ) -> None:
        super().__init__()
        self.on_event = on_event
        self.ignored_names = frozenset(ignored_names)

    def _emit(self, kind: WatchEventKind, path: str | bytes) -> None:
        if isinstance(path, bytes):
            path = path.decode()
        file_path = Path(path)
        if file_path.name in self.ignored_names:
            return
        self.on_event(WatchEvent(kind=kind, path=file_path))

    def on_created(self, event: FileSystemEvent) -> None:
        if isinstance(event, DirCreatedEvent):
            return
        self._emit(WatchEventKind.ADDED, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if isinstance(event, DirModifiedEvent):
            return
        self._emit(WatchEventKind.CHANGED, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if isinstance(event, DirDeletedEvent):
            return
        self._emit(WatchEventKind.REMOVED, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if isinstance(event, DirMovedEvent):
            return
        self._emit(WatchEventKind.REMOVED, event.src_path)
        self._emit(WatchEventKind.ADDED, event.dest_path)


class SourceWatcher:
    """Lifecycle wrapper around a watchdog observer for one source root.

    The owning process is responsible for calling stop() on shutdown.
    """

    def __init__(
        self,
        source_root: Path,
        on_event: EventCallback,
        ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES,
    ) -> None:
        """Initialize the watcher.

        Args:
            source_root: Directory to watch recursively.
            on_event: Called from the observer thread for every file event.
            ignored_names: Base names whose events are dropped.
        """
        self.source_root = Path(source_root)
        self.handler = SourceEventHandler(on_event, ignored_names)
        self._observer: Observer | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Check whether the observer is watching."""
        return self._observer is not None

    def start(self) -> None:
        """Start watching. Calling start() on a running watcher does nothing."""
        with self._lock:
            if self._observer is not None:
                return
            observer = Observer()
            observer.schedule(self.handler, str(self.source_root), recursive=True)
            observer.start()
            self._observer = observer
        logger.info("Watching %s for changes", self.source_root)

    def stop(self) -> None:
        """Stop watching and release the observer.

        A pipeline run already triggered by an event is not cancelled.
        """
        with self._lock:
            observer, self._observer = self._observer, None
        if observer is None:
            return
        logger.info("Stopping watcher...")
        observer.stop()
        if observer.is_alive() and threading.current_thread() is not observer:
            observer.join()

"""TransformPlugin - Wires the incremental pipeline into a host build tool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from transformcache.collector import GarbageCollector
from transformcache.detector import ChangeDetector
from transformcache.manifest import ManifestStore
from transformcache.orchestrator import TransformOrchestrator
from transformcache.pipeline import Pipeline, PipelineResult
from transformcache.transforms import COPY_HANDLER_PRIORITY, CopyHandler, HandlerChain
from transformcache.watcher import SourceWatcher, WatchEvent

if TYPE_CHECKING:
    from transformcache.config import TransformConfig
    from transformcache.hooks import BuildEvent, HostHooks

logger = logging.getLogger(__name__)

LIFECYCLE_PRIORITY = 100


class TransformPlugin:
    """Owns the pipeline for one project and exposes the host entry points.

    The plugin works standalone through run()/clean()/start_watcher(), or
    inside a host through register(), which attaches it to the host's
    pre-construct, pre-compile, post-clean and transform-file hook points.
    """

    def __init__(self, config: TransformConfig, show_progress: bool = False) -> None:
        """Initialize the plugin.

        Args:
            config: Project configuration.
            show_progress: Whether the orchestrator shows a progress bar.
        """
        self.config = config
        self.paths = config.paths
        self.copy_handler = CopyHandler()
        self.chain = HandlerChain(self.paths)
        self.chain.register(self.copy_handler, COPY_HANDLER_PRIORITY)

        self.store = ManifestStore(self.paths)
        self.detector = ChangeDetector(self.paths.src, config.ignored_names)
        self.orchestrator = TransformOrchestrator(self.chain, show_progress=show_progress)
        self.collector = GarbageCollector()
        self.pipeline = Pipeline(self.store, self.detector, self.orchestrator, self.collector)
        self.watcher: SourceWatcher | None = None

    # --- Host integration ---

    def register(self, hooks: HostHooks) -> None:
        """Attach to a host's hook points.

        From then on, files are transformed through the host's transform-file
        hook point, so handlers other plugins register there join the chain.
        Handlers already on the chain, the copy handler included, move there
        with their priorities.
        """
        hooks.pre_construct.register(self.handle_pre_construct, LIFECYCLE_PRIORITY)
        hooks.pre_compile.register(self.handle_pre_compile, LIFECYCLE_PRIORITY)
        hooks.post_clean.register(self.handle_post_clean)
        self.chain.attach(hooks.transform_file)

    def handle_pre_construct(self, event: BuildEvent) -> None:
        if event.liveview:
            logger.info("Detected LiveView. Starting watcher...")
            self.start_watcher()

    def handle_pre_compile(self, event: BuildEvent) -> None:
        self.run()

    def handle_post_clean(self, event: BuildEvent) -> None:
        self.clean()

    # --- Entry points ---

    def run(self) -> PipelineResult:
        """Run the pipeline once.

        Raises:
            PipelineStageError: If any stage fails.
        """
        return self.pipeline.run()

    def clean(self) -> None:
        """Remove the destination tree."""
        self.pipeline.clean()

    def start_watcher(self) -> SourceWatcher:
        """Start re-running the pipeline on source tree events."""
        if self.watcher is None:
            self.watcher = SourceWatcher(
                self.paths.src, self._on_watch_event, self.config.ignored_names
            )
        self.watcher.start()
        return self.watcher

    def stop_watcher(self) -> None:
        """Stop the watcher, if running."""
        if self.watcher is not None:
            self.watcher.stop()

    def shutdown(self) -> None:
        """Release resources held by the plugin. Safe to call more than once."""
        self.stop_watcher()

    def _on_watch_event(self, event: WatchEvent) -> None:
        logger.info("%s was %s", event.path, event.kind.value)
        # The watch callback is the entry point of this run; report and keep watching.
        try:
            self.pipeline.run()
        except Exception:
            logger.exception("Pipeline run triggered by %s failed", event.path)

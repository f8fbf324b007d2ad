"""Handler chain - Tries transform handlers in priority order until one claims the file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from transformcache.hooks import DEFAULT_PRIORITY, HookPoint
from transformcache.transforms.models import TransformContext, TransformResult

if TYPE_CHECKING:
    from transformcache.config import ProjectPaths
    from transformcache.hooks import HookCallback

logger = logging.getLogger(__name__)


def _claimed(context: TransformContext) -> bool:
    return context.processed


class HandlerChain:
    """Pluggable per-file transform capability.

    Handlers are registered on a `transform.file` hook point. For each file a
    fresh context is passed down the chain; handlers after the first one that
    marks the context processed are not invoked.
    """

    def __init__(
        self,
        paths: ProjectPaths,
        hook: HookPoint[TransformContext] | None = None,
    ) -> None:
        """Initialize the handler chain.

        Args:
            paths: Project paths copied into every context.
            hook: Hook point holding the handlers. A private one is created
                  when not given.
        """
        self.paths = paths
        self.hook = hook if hook is not None else HookPoint("transform.file")

    def register(
        self, handler: HookCallback[TransformContext], priority: int = DEFAULT_PRIORITY
    ) -> HookCallback[TransformContext]:
        """Register a handler. Lower priority values are tried first."""
        return self.hook.register(handler, priority)

    def attach(self, hook: HookPoint[TransformContext]) -> None:
        """Move the chain onto another hook point.

        Handlers registered so far are re-registered on `hook` with their
        priorities, so they keep taking part in the chain.
        """
        if hook is self.hook:
            return
        for registration in self.hook.registrations:
            hook.register(registration.callback, registration.priority)
        self.hook = hook

    def transform(self, src: Path) -> TransformResult:
        """Run the chain for one source file.

        Args:
            src: Absolute source path.

        Returns:
            Whether a handler claimed the file and the outputs it declared.

        Raises:
            HookError: If a handler raises.
        """
        context = TransformContext(src=Path(src), paths=self.paths)
        self.hook.invoke(context, stop_when=_claimed)
        if not context.processed:
            logger.debug("No handler claimed %s", src)
        return TransformResult.from_context(context)

    __call__ = transform

"""Copy handler - Copies a source file as is into the destination tree."""

from __future__ import annotations

import logging
import shutil

from transformcache.transforms.models import TransformContext

logger = logging.getLogger(__name__)

# Runs after any more specific handler
COPY_HANDLER_PRIORITY = 10000


class CopyHandler:
    """Catch-all handler that mirrors the source file under the destination root."""

    def __call__(self, context: TransformContext) -> None:
        if context.processed:
            return

        relative = context.src.relative_to(context.paths.src.resolve())
        dst = context.paths.dst / relative
        logger.info("Copying source file as is %s -> %s", context.src, dst)

        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(context.src, dst)

        context.processed = True
        context.gen.append(str(dst))

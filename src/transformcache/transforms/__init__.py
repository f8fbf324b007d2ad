"""Transforms - Pluggable per-file transform capability and the default copy handler."""

from transformcache.transforms.chain import HandlerChain
from transformcache.transforms.copy import COPY_HANDLER_PRIORITY, CopyHandler
from transformcache.transforms.models import TransformContext, TransformResult

__all__ = [
    "COPY_HANDLER_PRIORITY",
    "CopyHandler",
    "HandlerChain",
    "TransformContext",
    "TransformResult",
]

"""Host hook points with priority-ordered callbacks.

Each hook point has a name, a payload type and an ordered list of registered
callbacks. A callback signals failure by raising, which stops the invocation
and surfaces as a HookError chained to the original exception.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from transformcache.transforms.models import TransformContext

P = TypeVar("P")

DEFAULT_PRIORITY = 1000

HookCallback = Callable[[P], None]


class HookError(Exception):
    """A registered hook callback failed."""

    def __init__(self, hook: str, callback: Callable, cause: BaseException) -> None:
        self.hook = hook
        self.callback = callback
        self.cause = cause
        name = getattr(callback, "__qualname__", repr(callback))
        super().__init__(f"Hook '{hook}' callback {name} failed: {cause}")


@dataclass(frozen=True)
class Registration(Generic[P]):
    """A callback registered on a hook point."""

    priority: int
    sequence: int
    callback: HookCallback[P]


class HookPoint(Generic[P]):
    """A named hook point with a declared payload type.

    Callbacks run in ascending priority; callbacks with equal priority run in
    registration order.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._registrations: list[Registration[P]] = []
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<HookPoint {self.name} callbacks={len(self._registrations)}>"

    def __len__(self) -> int:
        return len(self._registrations)

    def register(
        self, callback: HookCallback[P], priority: int = DEFAULT_PRIORITY
    ) -> HookCallback[P]:
        """Register a callback.

        Args:
            callback: Called with the payload on each invocation.
            priority: Lower values run first.

        Returns:
            The callback, so this can be used as a decorator.
        """
        with self._lock:
            self._registrations.append(
                Registration(priority=priority, sequence=next(self._sequence), callback=callback)
            )
            self._registrations.sort(key=lambda r: (r.priority, r.sequence))
        return callback

    @property
    def registrations(self) -> list[Registration[P]]:
        """Registrations in invocation order."""
        with self._lock:
            return list(self._registrations)

    @property
    def callbacks(self) -> list[HookCallback[P]]:
        """Registered callbacks in invocation order."""
        with self._lock:
            return [r.callback for r in self._registrations]

    def invoke(self, payload: P, stop_when: Callable[[P], bool] | None = None) -> int:
        """Invoke the registered callbacks with a payload.

        Args:
            payload: Passed to every callback.
            stop_when: Checked before each callback; once it returns True the
                remaining callbacks are skipped.

        Returns:
            Number of callbacks invoked.

        Raises:
            HookError: If a callback raises.
        """
        invoked = 0
        for callback in self.callbacks:
            if stop_when is not None and stop_when(payload):
                break
            try:
                callback(payload)
            except HookError:
                raise
            except Exception as e:
                raise HookError(self.name, callback, e) from e
            invoked += 1
        return invoked


@dataclass(frozen=True)
class BuildEvent:
    """Payload for host build lifecycle hooks.

    Attributes:
        project_dir: Project root supplied by the host.
        liveview: Whether the host build runs in live-reload mode.
    """

    project_dir: Path
    liveview: bool = False


@dataclass
class HostHooks:
    """The hook points a host build tool exposes to transformcache."""

    pre_construct: HookPoint[BuildEvent] = field(
        default_factory=lambda: HookPoint("build.pre.construct")
    )
    pre_compile: HookPoint[BuildEvent] = field(
        default_factory=lambda: HookPoint("build.pre.compile")
    )
    post_clean: HookPoint[BuildEvent] = field(default_factory=lambda: HookPoint("clean.post"))
    transform_file: HookPoint[TransformContext] = field(
        default_factory=lambda: HookPoint("transform.file")
    )

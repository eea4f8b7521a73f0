"""
simplecache — Storage Events

Explicit, ordered interceptor chain used by storage adapters.

Every public adapter operation fires a "<operation>.pre" event before the
adapter does its work and a "<operation>.post" event afterwards. Listeners
receive the same HookEvent instance and may rewrite `params` (pre) or
`result` (post). Listeners run synchronously, highest priority first; ties
run in the order they were attached.

Plugins that wrap values symmetrically attach their pre listeners at
`priority` and their post listeners at `-priority`, so the plugin that ran
first on the way in runs last on the way out.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .adapter import AbstractAdapter

logger = logging.getLogger(__name__)

Listener = Callable[["HookEvent"], None]


@dataclass
class HookEvent:
    """Parameter bag for a single adapter operation."""

    name: str
    storage: AbstractAdapter
    params: dict[str, Any] = field(default_factory=dict)
    result: Any = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        """Skip remaining listeners (and, on a pre event, the operation itself)."""
        self.propagation_stopped = True

    @property
    def is_pre(self) -> bool:
        return self.name.endswith(".pre")

    @property
    def is_post(self) -> bool:
        return self.name.endswith(".post")


@dataclass(frozen=True)
class ListenerHandle:
    """Returned by InterceptorChain.attach(); pass it to detach()."""

    event_name: str
    priority: int
    sequence: int
    listener: Listener


class InterceptorChain:
    """Priority-ordered registry of listeners keyed by event name."""

    def __init__(self, owner_id: str | None = None) -> None:
        # adapter_id of the owning adapter; a fresh id for standalone chains
        self.owner_id = owner_id or uuid.uuid4().hex
        self._listeners: dict[str, list[ListenerHandle]] = {}
        self._sequence = itertools.count()

    def attach(self, event_name: str, listener: Listener, priority: int = 1) -> ListenerHandle:
        """
        Register a listener for an event.

        Args:
            event_name: Event name, e.g. "set_item.pre"
            listener: Callable receiving the HookEvent
            priority: Higher runs earlier

        Returns:
            Handle identifying this registration
        """
        handle = ListenerHandle(event_name, priority, next(self._sequence), listener)
        handles = self._listeners.setdefault(event_name, [])
        handles.append(handle)
        handles.sort(key=lambda h: (-h.priority, h.sequence))
        logger.debug("Attached listener to %s (priority %d)", event_name, priority)
        return handle

    def detach(self, handle: ListenerHandle) -> bool:
        """Remove a registration. Returns False if it was not attached."""
        handles = self._listeners.get(handle.event_name, [])
        if handle not in handles:
            return False
        handles.remove(handle)
        if not handles:
            del self._listeners[handle.event_name]
        return True

    def listeners(self, event_name: str) -> list[Listener]:
        """Listeners for an event in invocation order."""
        return [h.listener for h in self._listeners.get(event_name, [])]

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def trigger(self, event: HookEvent) -> HookEvent:
        """Invoke listeners for `event.name` in order, stopping if asked to."""
        for listener in self.listeners(event.name):
            listener(event)
            if event.propagation_stopped:
                break
        return event

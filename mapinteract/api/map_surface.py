"""Public map-surface boundary contracts."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


class MapEvent(Protocol):
    """Opaque map event payload boundary contract."""


class MapBehavior(Protocol):
    """Opaque attachable map behavior (drawing tool, modify tool, ...)."""


MapEventHandler = Callable[[MapEvent], None]


@runtime_checkable
class MapSurface(Protocol):
    """Host map capability consumed by the interaction handler."""

    def attach(self, behavior: MapBehavior) -> None:
        """Attach a behavior to the map."""

    def detach(self, behavior: MapBehavior) -> None:
        """Detach a previously attached behavior."""

    def subscribe(self, event_type: str, handler: MapEventHandler) -> None:
        """Subscribe handler to a named map event."""

    def unsubscribe(self, event_type: str, handler: MapEventHandler) -> None:
        """Unsubscribe handler from a named map event."""

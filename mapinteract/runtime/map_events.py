"""Map event fan-out to the active interaction."""

from __future__ import annotations

import logging
from collections.abc import Callable

from mapinteract.api.interactions import InteractionDefinition
from mapinteract.api.map_surface import MapEvent, MapEventHandler, MapSurface
from mapinteract.runtime.errors import log_callback_failure

_LOG = logging.getLogger("mapinteract.map_events")

ActiveResolver = Callable[[], tuple[str | None, InteractionDefinition | None]]


class RuntimeMapEventMultiplexer:
    """One surface subscription per event type, dispatched to the active interaction."""

    def __init__(self, surface: MapSurface, active: ActiveResolver) -> None:
        self._surface = surface
        self._active = active
        self._listeners: dict[str, MapEventHandler] = {}
        self._blocked = False

    @property
    def blocked(self) -> bool:
        return self._blocked

    def block(self) -> None:
        """Suppress all dispatch without unsubscribing."""
        self._blocked = True

    def unblock(self) -> None:
        self._blocked = False

    def listened_event_types(self) -> tuple[str, ...]:
        """Return currently armed event types."""
        return tuple(self._listeners)

    def add_listener(self, event_type: str) -> None:
        """Arm (or re-arm) the surface listener for one event type."""
        self.remove_listener(event_type)

        def _dispatch(event: MapEvent) -> None:
            self._dispatch(event_type, event)

        self._listeners[event_type] = _dispatch
        self._surface.subscribe(event_type, _dispatch)

    def remove_listener(self, event_type: str) -> None:
        listener = self._listeners.pop(event_type, None)
        if listener is not None:
            self._surface.unsubscribe(event_type, listener)

    def remove_all_listeners(self) -> None:
        for event_type in tuple(self._listeners):
            self.remove_listener(event_type)

    def _dispatch(self, event_type: str, event: MapEvent) -> None:
        if self._blocked:
            return
        name, definition = self._active()
        if name is None or definition is None:
            return
        handler = definition.map_handlers.get(event_type)
        if handler is None:
            return
        try:
            handler(event)
        except Exception:  # pylint: disable=broad-exception-caught
            log_callback_failure(
                _LOG,
                "map_handler_failed",
                interaction=name,
                event_type=event_type,
            )


MapEventMultiplexer = RuntimeMapEventMultiplexer

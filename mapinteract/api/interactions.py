"""Public interaction-handler API contracts."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from mapinteract.api.map_surface import MapBehavior, MapEventHandler, MapSurface
from mapinteract.api.ui_binding import UiBinding, UiBindingOptions, UiElement

if TYPE_CHECKING:
    from mapinteract.runtime.config import InteractionConfig

Continuation = Callable[[], None]

StartCallback = Callable[[object | None], None]
EndCallback = Callable[[object | None, bool], object]
RestartCallback = Callable[[object | None], bool | None]
CancelStartCallback = Callable[[], None]
ClearCallback = Callable[[], None]
CheckInterruptCallback = Callable[[Continuation, Continuation], None]

# Hook signatures: (event, name) -> veto, (event, name, cancel), (), (name, end_result, error)
StartHook = Callable[[object | None, str], bool | None]
EndHook = Callable[[object | None, str, bool], None]
ClearHook = Callable[[], None]
UpdateHook = Callable[[str, object, str | None], None]


@dataclass(frozen=True, slots=True)
class InteractionDefinition:
    """Lifecycle callbacks for one named interaction.

    ``start`` and ``end`` are required. ``restart`` runs before ``start`` when
    the interaction is already active and may return ``False`` to skip it.
    ``check_interrupt`` receives ``(confirm, cancel)`` and must eventually call
    exactly one of them. ``map_handlers`` maps armed map event types to
    handlers, and ``map_behavior`` is attached to the map surface while the
    interaction is active. ``save_on_interrupt`` turns a confirmed interrupt
    into a normal (non-cancelled) end.
    """

    start: StartCallback
    end: EndCallback
    restart: RestartCallback | None = None
    cancel_start: CancelStartCallback | None = None
    clear: ClearCallback | None = None
    check_interrupt: CheckInterruptCallback | None = None
    map_handlers: Mapping[str, MapEventHandler] = field(default_factory=dict)
    map_behavior: MapBehavior | None = None
    save_on_interrupt: bool = False


@runtime_checkable
class InteractionHandler(Protocol):
    """Public interaction lifecycle contract."""

    @property
    def active_interaction(self) -> str | None:
        """Return active interaction name."""

    def is_active(self) -> bool:
        """Return whether any interaction is active."""

    def add_interaction(
        self, name: str, interaction: InteractionDefinition
    ) -> InteractionDefinition | None:
        """Register/replace interaction and return the replaced one."""

    def remove_interaction(self, name: str) -> None:
        """Remove interaction, interrupting it first when active."""

    def lookup(self, name: str) -> InteractionDefinition | None:
        """Return registered interaction."""

    def on_interaction_start(self, hook: StartHook | None) -> None:
        """Set pre-start veto hook."""

    def on_interaction_end(self, hook: EndHook | None) -> None:
        """Set post-end hook."""

    def on_clear(self, hook: ClearHook | None) -> None:
        """Set clear hook."""

    def on_update(self, hook: UpdateHook | None) -> None:
        """Set post-update hook."""

    def start_interaction(self, name: str, event: object | None = None) -> None:
        """Start or restart interaction."""

    def end_interaction(
        self,
        event: object | None = None,
        cancel: bool = False,
        suppress_clear: bool = False,
        suppress_update: bool = False,
    ) -> str | None:
        """End active interaction and return last error message."""

    def clear_interaction(self) -> None:
        """Run clear hooks for active interaction."""

    def interrupt(
        self,
        event: object | None = None,
        on_interrupt: Continuation | None = None,
        on_cancel: Continuation | None = None,
    ) -> None:
        """Interrupt active interaction."""

    def add_map_listener(self, event_type: str) -> None:
        """Arm map listener for event type."""

    def remove_map_listener(self, event_type: str) -> None:
        """Disarm map listener for event type."""

    def remove_all_map_listeners(self) -> None:
        """Disarm all map listeners."""

    def disable_map_interactions(self) -> None:
        """Block map dispatch."""

    def enable_map_interactions(self) -> None:
        """Unblock map dispatch."""

    def bind_ui_elements(
        self,
        elements: UiElement | Iterable[UiElement],
        options: UiBindingOptions | None = None,
    ) -> UiBinding:
        """Bind UI elements to start/interrupt interactions."""

    def unbind_ui_elements(self, binding: UiBinding) -> None:
        """Detach a UI binding."""


def create_interaction_handler(
    surface: MapSurface,
    *,
    config: InteractionConfig | None = None,
) -> InteractionHandler:
    """Create default interaction handler implementation."""
    from mapinteract.runtime.interaction_handler import RuntimeInteractionHandler

    return RuntimeInteractionHandler(surface, config=config)

"""Public UI-element binding contracts."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mapinteract.api.interactions import InteractionHandler


@runtime_checkable
class UiEvent(Protocol):
    """UI event surface needed to halt default element behavior."""

    def prevent_default(self) -> None:
        """Suppress the element's default behavior."""

    def stop_propagation(self) -> None:
        """Stop event propagation to parents."""


UiListener = Callable[[UiEvent], None]


@runtime_checkable
class UiElement(Protocol):
    """Element capable of emitting named events."""

    @property
    def value(self) -> str | None:
        """Return interaction name carried by this element."""

    def add_event_listener(self, event: str, listener: UiListener) -> None:
        """Attach listener for event name."""

    def remove_event_listener(self, event: str, listener: UiListener) -> None:
        """Detach listener for event name."""

    def click(self) -> None:
        """Re-trigger the element's click behavior."""


ValueFunction = Callable[[UiElement], str | None]


def element_value(element: UiElement) -> str | None:
    """Default value function: read ``element.value``."""
    return element.value


@dataclass(frozen=True, slots=True)
class UiBindingOptions:
    """Options for binding elements to interaction handling."""

    event: str = "click"
    value_function: str | ValueFunction = element_value
    always: Callable[[], None] | None = None
    interrupt_only: bool = False
    on_interrupt: Callable[[], None] | None = None


@dataclass(frozen=True, slots=True)
class UiBinding:
    """Opaque binding token returned by ``bind_ui_elements``."""

    elements: tuple[UiElement, ...]
    event: str
    listeners: tuple[UiListener, ...]


class UiBinder(Protocol):
    """Public UI binding contract."""

    def bind_ui_elements(
        self,
        elements: UiElement | Iterable[UiElement],
        options: UiBindingOptions | None = None,
    ) -> UiBinding:
        """Bind elements to start/interrupt interactions."""

    def unbind_ui_elements(self, binding: UiBinding) -> None:
        """Detach a previous binding."""


def create_ui_binder(handler: InteractionHandler) -> UiBinder:
    """Create default UI binder over an interaction handler."""
    from mapinteract.runtime.ui_binding import RuntimeUiBinder

    return RuntimeUiBinder(handler)

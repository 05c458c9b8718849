"""Glue turning UI element events into interaction start/interrupt calls."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from mapinteract.api.ui_binding import UiBinding, UiBindingOptions, UiElement, UiEvent
from mapinteract.runtime.errors import guarded_call

if TYPE_CHECKING:
    from mapinteract.api.interactions import InteractionHandler

_LOG = logging.getLogger("mapinteract.ui_binding")


class RuntimeUiBinder:
    """Bind UI elements to an interaction handler."""

    def __init__(self, handler: InteractionHandler) -> None:
        self._handler = handler

    def bind_ui_elements(
        self,
        elements: UiElement | Iterable[UiElement],
        options: UiBindingOptions | None = None,
    ) -> UiBinding:
        """Attach one listener to every element and return the binding token.

        Regular bindings start the interaction named by the element's value.
        ``interrupt_only`` bindings only interrupt, for cancel buttons and the
        like.
        """
        resolved = options if options is not None else UiBindingOptions()
        targets = _normalize_elements(elements)

        def _listener_for(element: UiElement) -> Callable[[UiEvent], None]:
            def _listener(event: UiEvent) -> None:
                if resolved.always is not None:
                    guarded_call(_LOG, "ui_always_callback_failed", resolved.always)
                if resolved.interrupt_only:
                    self._interrupt_listener(element, resolved, event)
                else:
                    self._start_listener(element, resolved, event)

            return _listener

        listeners = tuple(_listener_for(element) for element in targets)
        for element, listener in zip(targets, listeners, strict=True):
            element.add_event_listener(resolved.event, listener)
        return UiBinding(elements=targets, event=resolved.event, listeners=listeners)

    def unbind_ui_elements(self, binding: UiBinding) -> None:
        """Detach a binding's listeners from its elements."""
        for element, listener in zip(binding.elements, binding.listeners, strict=True):
            element.remove_event_listener(binding.event, listener)

    def _start_listener(self, element: UiElement, options: UiBindingOptions, event: UiEvent) -> None:
        value_function = options.value_function
        if isinstance(value_function, str):
            name: str | None = value_function
        else:
            name, error = guarded_call(_LOG, "ui_value_function_failed", value_function, element)
            if error is not None:
                return
        if name is None:
            return
        self._handler.start_interaction(name, event)

    def _interrupt_listener(
        self, element: UiElement, options: UiBindingOptions, event: UiEvent
    ) -> None:
        active = self._handler.active_interaction
        interaction = self._handler.lookup(active) if active is not None else None
        will_check_interrupt = interaction is not None and interaction.check_interrupt is not None
        if will_check_interrupt:
            # Halt default behavior while the interruption is being confirmed.
            event.prevent_default()
            event.stop_propagation()

        def _on_interrupt() -> None:
            if options.on_interrupt is not None:
                options.on_interrupt()
            if will_check_interrupt:
                element.click()

        self._handler.interrupt(event, _on_interrupt)


def _normalize_elements(elements: UiElement | Iterable[UiElement]) -> tuple[UiElement, ...]:
    if isinstance(elements, UiElement):
        return (elements,)
    return tuple(elements)


UiBinder = RuntimeUiBinder

"""Interaction lifecycle state machine."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import partial

from mapinteract.api.interactions import (
    ClearHook,
    Continuation,
    EndHook,
    InteractionDefinition,
    StartHook,
    UpdateHook,
)
from mapinteract.api.map_surface import MapSurface
from mapinteract.api.ui_binding import UiBinding, UiBindingOptions, UiElement
from mapinteract.runtime.config import InteractionConfig, load_interaction_config
from mapinteract.runtime.errors import StepErrors, guarded_call, log_callback_failure
from mapinteract.runtime.map_events import RuntimeMapEventMultiplexer
from mapinteract.runtime.registry import RuntimeInteractionRegistry
from mapinteract.runtime.ui_binding import RuntimeUiBinder

_LOG = logging.getLogger("mapinteract.interactions")


class RuntimeInteractionHandler:
    """Groups map interactions that have on/off state, such as edit modes.

    At most one registered interaction is active at a time. Starting another
    one interrupts the active interaction first; interactions that define
    ``check_interrupt`` may confirm or cancel that interruption, possibly
    later. Restarting the active interaction does not interrupt it.
    Callback failures are logged and never raised to callers.
    """

    def __init__(self, surface: MapSurface, *, config: InteractionConfig | None = None) -> None:
        self._surface = surface
        self._config = config if config is not None else load_interaction_config()
        self._registry = RuntimeInteractionRegistry()
        self._map_events = RuntimeMapEventMultiplexer(surface, self._active_entry)
        self._ui = RuntimeUiBinder(self)
        self._active: str | None = None
        self._start_hook: StartHook | None = None
        self._end_hook: EndHook | None = None
        self._clear_hook: ClearHook | None = None
        self._update_hook: UpdateHook | None = None

    @property
    def surface(self) -> MapSurface:
        return self._surface

    @property
    def active_interaction(self) -> str | None:
        return self._active

    @property
    def map_interactions_blocked(self) -> bool:
        return self._map_events.blocked

    def is_active(self) -> bool:
        return self._active is not None

    # Registration

    def add_interaction(
        self, name: str, interaction: InteractionDefinition
    ) -> InteractionDefinition | None:
        """Register or replace an interaction. Returns the replaced definition."""
        return self._registry.add(name, interaction)

    def remove_interaction(self, name: str) -> None:
        """Remove an interaction. An active interaction is interrupted first."""
        if name not in self._registry:
            return None
        if self._active is not None and self._active == name:
            self.interrupt(None, partial(self.remove_interaction, name))
            return None
        self._registry.remove(name)
        return None

    def lookup(self, name: str) -> InteractionDefinition | None:
        return self._registry.lookup(name)

    def registered_interactions(self) -> tuple[str, ...]:
        return self._registry.names()

    # Generic hooks

    def on_interaction_start(self, hook: StartHook | None) -> None:
        """Set hook run before any start. Returning exactly ``False`` vetoes the start."""
        self._start_hook = hook

    def on_interaction_end(self, hook: EndHook | None) -> None:
        self._end_hook = hook

    def on_clear(self, hook: ClearHook | None) -> None:
        self._clear_hook = hook

    def on_update(self, hook: UpdateHook | None) -> None:
        """Set hook run last on every end with ``(name, end_result, error)``."""
        self._update_hook = hook

    # Lifecycle

    def start_interaction(self, name: str, event: object | None = None) -> None:
        """Start an interaction, interrupting a different active one first.

        The start is retried from the interrupt's confirm continuation, so a
        gated interrupt may delay or cancel it. Unknown names are ignored
        after the pre-start hook has run.
        """
        restart = False
        if self._active is not None:
            restart = name == self._active
            if not restart:
                self.interrupt(
                    event,
                    partial(self.start_interaction, name, event),
                    partial(self._cancel_start, name),
                )
                return

        if self._start_hook is not None:
            veto, error = guarded_call(
                _LOG,
                "interaction_start_hook_failed",
                self._start_hook,
                event,
                name,
                fields={"interaction": name},
            )
            if error is not None:
                return
            if veto is False:
                if not restart:
                    self.interrupt(event)
                return

        interaction = self._registry.lookup(name)
        if interaction is None:
            return

        # Set before start() so re-entrant calls see the new active interaction.
        self._active = name
        try:
            if not restart or interaction.restart is None or interaction.restart(event) is not False:
                interaction.start(event)
        except Exception:  # pylint: disable=broad-exception-caught
            log_callback_failure(_LOG, "interaction_start_failed", interaction=name, restart=restart)
            self._active = None
            # A restarted interaction already had its behavior attached.
            if restart and interaction.map_behavior is not None:
                guarded_call(
                    _LOG,
                    "interaction_detach_failed",
                    self._surface.detach,
                    interaction.map_behavior,
                    fields={"interaction": name},
                )
            return

        if not restart and interaction.map_behavior is not None and self._active == name:
            guarded_call(
                _LOG,
                "interaction_attach_failed",
                self._surface.attach,
                interaction.map_behavior,
                fields={"interaction": name},
            )
        self._trace("interaction_started", interaction=name, restart=restart)

    def end_interaction(
        self,
        event: object | None = None,
        cancel: bool = False,
        suppress_clear: bool = False,
        suppress_update: bool = False,
    ) -> str | None:
        """End the active interaction.

        Every step runs even if an earlier one failed. Returns the last error
        message, or ``None``.
        """
        name = self._active
        if name is None:
            return None
        interaction = self._registry.lookup(name)
        errors = StepErrors(_LOG, "interaction_end_step_failed", interaction=name)
        end_result: object = None

        with errors.step("end"):
            if interaction is not None:
                end_result = interaction.end(event, cancel)
        with errors.step("detach"):
            if interaction is not None and interaction.map_behavior is not None:
                self._surface.detach(interaction.map_behavior)
        if not suppress_clear:
            # Must run while the interaction is still marked active.
            with errors.step("clear"):
                self._run_clear()
        with errors.step("end_hook"):
            if self._end_hook is not None:
                self._end_hook(event, name, cancel)

        self._active = None
        self._map_events.unblock()

        if not suppress_update and self._update_hook is not None:
            with errors.step("update_hook"):
                self._update_hook(name, end_result, errors.last)

        self._trace("interaction_ended", interaction=name, cancel=cancel, error=errors.last)
        return errors.last

    def clear_interaction(self) -> None:
        """Run the clear hook and the active interaction's ``clear`` callback."""
        try:
            self._run_clear()
        except Exception:  # pylint: disable=broad-exception-caught
            log_callback_failure(_LOG, "interaction_clear_failed", interaction=self._active)

    def interrupt(
        self,
        event: object | None = None,
        on_interrupt: Continuation | None = None,
        on_cancel: Continuation | None = None,
    ) -> None:
        """Interrupt the active interaction.

        Without ``check_interrupt`` the interaction ends immediately (not
        cancelled) and ``on_interrupt`` runs. Otherwise ``check_interrupt`` is
        handed confirm/cancel continuations; confirm ends the interaction as
        cancelled unless ``save_on_interrupt`` is set.
        """
        name = self._active
        interaction = self._registry.lookup(name)
        if interaction is None or interaction.check_interrupt is None:
            self.end_interaction(event)
            self._run_continuation(on_interrupt, "interaction_on_interrupt_failed", name)
            return

        cancel_on_confirm = not interaction.save_on_interrupt
        settled: list[str] = []

        def _settle(outcome: str) -> bool:
            if settled:
                _LOG.warning(
                    "interaction_interrupt_already_settled",
                    extra={"interaction": name, "outcome": outcome, "settled": settled[0]},
                )
                return False
            settled.append(outcome)
            return True

        def _confirm() -> None:
            if not _settle("confirm"):
                return
            self._trace("interaction_interrupt_confirmed", interaction=name)
            self.end_interaction(event, cancel_on_confirm)
            self._run_continuation(on_interrupt, "interaction_on_interrupt_failed", name)

        def _cancel() -> None:
            if not _settle("cancel"):
                return
            self._trace("interaction_interrupt_cancelled", interaction=name)
            self._run_continuation(on_cancel, "interaction_on_cancel_failed", name)

        guarded_call(
            _LOG,
            "interaction_check_interrupt_failed",
            interaction.check_interrupt,
            _confirm,
            _cancel,
            fields={"interaction": name},
        )

    # Map listeners

    def add_map_listener(self, event_type: str) -> None:
        """Arm a map listener. Only armed event types reach ``map_handlers``."""
        self._map_events.add_listener(event_type)

    def remove_map_listener(self, event_type: str) -> None:
        self._map_events.remove_listener(event_type)

    def remove_all_map_listeners(self) -> None:
        self._map_events.remove_all_listeners()

    def listened_event_types(self) -> tuple[str, ...]:
        return self._map_events.listened_event_types()

    def disable_map_interactions(self) -> None:
        """Temporarily block map dispatch; cleared again by any end."""
        self._map_events.block()

    def enable_map_interactions(self) -> None:
        self._map_events.unblock()

    # UI elements

    def bind_ui_elements(
        self,
        elements: UiElement | Iterable[UiElement],
        options: UiBindingOptions | None = None,
    ) -> UiBinding:
        """Bind elements so their events start or interrupt interactions."""
        return self._ui.bind_ui_elements(elements, options)

    def unbind_ui_elements(self, binding: UiBinding) -> None:
        self._ui.unbind_ui_elements(binding)

    def _cancel_start(self, name: str) -> None:
        interaction = self._registry.lookup(name)
        if interaction is None or interaction.cancel_start is None:
            return
        guarded_call(
            _LOG,
            "interaction_cancel_start_failed",
            interaction.cancel_start,
            fields={"interaction": name},
        )

    def _run_clear(self) -> None:
        if self._clear_hook is not None:
            self._clear_hook()
        interaction = self._registry.lookup(self._active)
        if interaction is not None and interaction.clear is not None:
            interaction.clear()

    def _run_continuation(
        self, continuation: Continuation | None, message: str, name: str | None
    ) -> None:
        if continuation is None:
            return
        guarded_call(_LOG, message, continuation, fields={"interaction": name})

    def _active_entry(self) -> tuple[str | None, InteractionDefinition | None]:
        return self._active, self._registry.lookup(self._active)

    def _trace(self, message: str, **fields: object) -> None:
        if self._config.trace_transitions:
            _LOG.debug(message, extra=fields)


InteractionHandler = RuntimeInteractionHandler

"""Qt button adapters satisfying the UI element contract."""

from __future__ import annotations

import logging

from mapinteract.api.ui_binding import UiListener

try:
    from PyQt6.QtWidgets import QAbstractButton
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for Qt bindings. Install extra 'mapinteract[qt]'.") from exc

_LOG = logging.getLogger("mapinteract.qt")

INTERACTION_PROPERTY = "interaction"


class QtUiEvent:
    """UI event passed to listeners for Qt signal emissions.

    Qt signals have no default action to cancel, so the flags are only
    recorded for callers that want to inspect them.
    """

    def __init__(self, signal_name: str, checked: bool | None = None) -> None:
        self.signal_name = signal_name
        self.checked = checked
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class QtButtonElement:
    """Wrap a ``QAbstractButton`` as a bindable UI element.

    ``"click"`` listens on ``clicked`` and ``"toggle"`` on ``toggled``. The
    element value is the ``interaction`` dynamic property, falling back to the
    object name.
    """

    _SIGNALS = {"click": "clicked", "toggle": "toggled"}

    def __init__(self, button: QAbstractButton) -> None:
        self._button = button
        self._slots: dict[tuple[str, int], object] = {}

    @property
    def button(self) -> QAbstractButton:
        return self._button

    @property
    def value(self) -> str | None:
        raw = self._button.property(INTERACTION_PROPERTY)
        if raw:
            return str(raw)
        return self._button.objectName() or None

    def add_event_listener(self, event: str, listener: UiListener) -> None:
        signal_name = self._signal_name(event)

        def _slot(checked: bool = False) -> None:
            listener(QtUiEvent(signal_name, checked))

        getattr(self._button, signal_name).connect(_slot)
        self._slots[(event, id(listener))] = _slot

    def remove_event_listener(self, event: str, listener: UiListener) -> None:
        slot = self._slots.pop((event, id(listener)), None)
        if slot is None:
            return
        try:
            getattr(self._button, self._signal_name(event)).disconnect(slot)
        except TypeError:
            _LOG.debug("qt_slot_already_disconnected", exc_info=True)

    def click(self) -> None:
        self._button.click()

    def _signal_name(self, event: str) -> str:
        signal_name = self._SIGNALS.get(event.strip().lower())
        if signal_name is None:
            raise ValueError(f"unsupported Qt element event: {event}")
        return signal_name


def wrap_buttons(*buttons: QAbstractButton) -> tuple[QtButtonElement, ...]:
    """Wrap several buttons for ``bind_ui_elements``."""
    return tuple(QtButtonElement(button) for button in buttons)

"""Optional PyQt6 adapters."""

from mapinteract.qt.confirm import qt_confirm_interrupt
from mapinteract.qt.elements import QtButtonElement, QtUiEvent, wrap_buttons

__all__ = [
    "QtButtonElement",
    "QtUiEvent",
    "qt_confirm_interrupt",
    "wrap_buttons",
]

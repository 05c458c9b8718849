"""Qt dialog gating for interaction interrupts."""

from __future__ import annotations

from mapinteract.api.interactions import CheckInterruptCallback, Continuation

try:
    from PyQt6.QtWidgets import QMessageBox, QWidget
except Exception as exc:  # pragma: no cover
    raise RuntimeError("PyQt6 is required for Qt bindings. Install extra 'mapinteract[qt]'.") from exc


def qt_confirm_interrupt(
    owner: QWidget | None,
    title: str,
    text: str = "Discard unsaved changes?",
) -> CheckInterruptCallback:
    """Return a ``check_interrupt`` callback asking the user with a Yes/No box."""

    def _check_interrupt(confirm: Continuation, cancel: Continuation) -> None:
        answer = QMessageBox.question(
            owner,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if answer == QMessageBox.StandardButton.Yes:
            confirm()
        else:
            cancel()

    return _check_interrupt

from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from mapinteract.qt import QtButtonElement, QtUiEvent, qt_confirm_interrupt  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


def test_confirm_interrupt_yes_confirms(monkeypatch) -> None:
    outcomes: list[str] = []
    monkeypatch.setattr(
        QtWidgets.QMessageBox,
        "question",
        staticmethod(lambda *args: QtWidgets.QMessageBox.StandardButton.Yes),
    )

    qt_confirm_interrupt(None, "Edit")(lambda: outcomes.append("confirm"), lambda: outcomes.append("cancel"))

    assert outcomes == ["confirm"]


def test_confirm_interrupt_no_cancels(monkeypatch) -> None:
    outcomes: list[str] = []
    asked: list[tuple] = []

    def _question(*args):
        asked.append(args)
        return QtWidgets.QMessageBox.StandardButton.No

    monkeypatch.setattr(QtWidgets.QMessageBox, "question", staticmethod(_question))

    qt_confirm_interrupt(None, "Edit", "Discard edits?")(
        lambda: outcomes.append("confirm"), lambda: outcomes.append("cancel")
    )

    assert outcomes == ["cancel"]
    assert asked[0][1:3] == ("Edit", "Discard edits?")


def test_confirm_interrupt_gates_handler(monkeypatch, handler, recorder, make_interaction) -> None:
    monkeypatch.setattr(
        QtWidgets.QMessageBox,
        "question",
        staticmethod(lambda *args: QtWidgets.QMessageBox.StandardButton.No),
    )
    handler.add_interaction("edit", make_interaction("edit", check_interrupt=qt_confirm_interrupt(None, "Edit")))
    handler.add_interaction("draw", make_interaction("draw", with_cancel_start=True))
    handler.start_interaction("edit")

    handler.start_interaction("draw")

    assert handler.active_interaction == "edit"
    assert ("draw", "cancel_start") in recorder.names()


def test_button_element_value_and_click(qapp, handler, make_interaction) -> None:
    handler.add_interaction("draw", make_interaction("draw"))
    button = QtWidgets.QPushButton("Draw")
    button.setObjectName("fallback")
    button.setProperty("interaction", "draw")
    element = QtButtonElement(button)
    assert element.value == "draw"

    binding = handler.bind_ui_elements(element)
    button.click()
    assert handler.active_interaction == "draw"

    handler.end_interaction()
    handler.unbind_ui_elements(binding)
    button.click()
    assert not handler.is_active()


def test_button_element_object_name_fallback_and_toggle(qapp) -> None:
    button = QtWidgets.QPushButton("Edit")
    button.setObjectName("edit")
    button.setCheckable(True)
    element = QtButtonElement(button)
    events: list[QtUiEvent] = []

    element.add_event_listener("toggle", events.append)
    button.toggle()

    assert element.value == "edit"
    assert events[0].signal_name == "toggled"
    assert events[0].checked is True


def test_button_element_rejects_unknown_event(qapp) -> None:
    element = QtButtonElement(QtWidgets.QPushButton())
    with pytest.raises(ValueError):
        element.add_event_listener("hover", lambda event: None)

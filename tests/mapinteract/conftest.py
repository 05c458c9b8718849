from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import pytest

from mapinteract.api.interactions import InteractionDefinition
from mapinteract.runtime.config import InteractionConfig
from mapinteract.runtime.interaction_handler import InteractionHandler


@dataclass(frozen=True, slots=True)
class FakeBehavior:
    name: str


class FakeMapSurface:
    def __init__(self) -> None:
        self.attached: list[object] = []
        self.calls: list[tuple[str, object]] = []
        self.handlers: dict[str, list[Callable[[object], None]]] = {}

    def attach(self, behavior: object) -> None:
        self.calls.append(("attach", behavior))
        self.attached.append(behavior)

    def detach(self, behavior: object) -> None:
        self.calls.append(("detach", behavior))
        if behavior in self.attached:
            self.attached.remove(behavior)

    def subscribe(self, event_type: str, handler: Callable[[object], None]) -> None:
        self.handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: str, handler: Callable[[object], None]) -> None:
        self.handlers[event_type].remove(handler)
        if not self.handlers[event_type]:
            del self.handlers[event_type]

    def emit(self, event_type: str, event: object) -> None:
        for handler in tuple(self.handlers.get(event_type, ())):
            handler(event)


class FakeUiEvent:
    def __init__(self) -> None:
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class FakeElement:
    def __init__(self, value: str | None = None) -> None:
        self.value = value
        self.listeners: dict[str, list[Callable[[object], None]]] = {}
        self.clicks = 0

    def add_event_listener(self, event: str, listener: Callable[[object], None]) -> None:
        self.listeners.setdefault(event, []).append(listener)

    def remove_event_listener(self, event: str, listener: Callable[[object], None]) -> None:
        self.listeners[event].remove(listener)

    def click(self) -> None:
        self.clicks += 1
        self.emit("click", FakeUiEvent())

    def emit(self, event: str, ui_event: object) -> None:
        for listener in tuple(self.listeners.get(event, ())):
            listener(ui_event)


class CallRecorder:
    """Collects ``(interaction, callback, args)`` tuples in call order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple]] = []

    def record(self, name: str, callback: str, *args: object) -> None:
        self.calls.append((name, callback, args))

    def names(self) -> list[tuple[str, str]]:
        return [(name, callback) for name, callback, _ in self.calls]

    def of(self, name: str, callback: str) -> list[tuple]:
        return [args for n, c, args in self.calls if n == name and c == callback]


@pytest.fixture
def surface() -> FakeMapSurface:
    return FakeMapSurface()


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def handler(surface: FakeMapSurface) -> InteractionHandler:
    return InteractionHandler(surface, config=InteractionConfig())


@pytest.fixture
def make_interaction(recorder: CallRecorder):
    def _make(
        name: str,
        *,
        end_result: object = None,
        with_restart: bool = False,
        restart_result: bool | None = None,
        with_cancel_start: bool = False,
        with_clear: bool = False,
        check_interrupt: Callable[[Callable[[], None], Callable[[], None]], None] | None = None,
        map_handlers: dict[str, Callable[[object], None]] | None = None,
        behavior: object | None = None,
        save_on_interrupt: bool = False,
        start_error: Exception | None = None,
        end_error: Exception | None = None,
    ) -> InteractionDefinition:
        def _start(event: object) -> None:
            recorder.record(name, "start", event)
            if start_error is not None:
                raise start_error

        def _end(event: object, cancel: bool) -> object:
            recorder.record(name, "end", event, cancel)
            if end_error is not None:
                raise end_error
            return end_result

        def _restart(event: object) -> bool | None:
            recorder.record(name, "restart", event)
            return restart_result

        def _cancel_start() -> None:
            recorder.record(name, "cancel_start")

        def _clear() -> None:
            recorder.record(name, "clear")

        return InteractionDefinition(
            start=_start,
            end=_end,
            restart=_restart if with_restart else None,
            cancel_start=_cancel_start if with_cancel_start else None,
            clear=_clear if with_clear else None,
            check_interrupt=check_interrupt,
            map_handlers=map_handlers or {},
            map_behavior=behavior,
            save_on_interrupt=save_on_interrupt,
        )

    return _make


@pytest.fixture
def make_element():
    return FakeElement


@pytest.fixture
def make_ui_event():
    return FakeUiEvent


@pytest.fixture
def make_behavior():
    return FakeBehavior

from __future__ import annotations

from mapinteract import InteractionDefinition, create_interaction_handler
from mapinteract.api import InteractionHandler, MapSurface, UiElement, create_ui_binder
from mapinteract.runtime.config import InteractionConfig


def test_create_interaction_handler_returns_public_contract(surface) -> None:
    handler = create_interaction_handler(surface, config=InteractionConfig())

    assert isinstance(handler, InteractionHandler)
    assert isinstance(surface, MapSurface)
    assert handler.active_interaction is None


def test_create_interaction_handler_loads_env_config(monkeypatch, surface) -> None:
    monkeypatch.setenv("MAPINTERACT_TRACE_TRANSITIONS", "1")

    handler = create_interaction_handler(surface)
    handler.add_interaction(
        "draw", InteractionDefinition(start=lambda event: None, end=lambda event, cancel: None)
    )
    handler.start_interaction("draw")

    assert handler.active_interaction == "draw"


def test_definition_defaults() -> None:
    definition = InteractionDefinition(start=lambda event: None, end=lambda event, cancel: None)

    assert definition.restart is None
    assert definition.cancel_start is None
    assert definition.clear is None
    assert definition.check_interrupt is None
    assert dict(definition.map_handlers) == {}
    assert definition.map_behavior is None
    assert definition.save_on_interrupt is False


def test_ui_binder_factory_and_element_contract(handler, make_element) -> None:
    binder = create_ui_binder(handler)
    element = make_element("draw")

    assert isinstance(element, UiElement)
    binding = binder.bind_ui_elements(element)
    assert binding.elements == (element,)
    assert binding.event == "click"

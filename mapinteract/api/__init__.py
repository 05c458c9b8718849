"""Public interaction API contracts."""

from mapinteract.api.interactions import (
    CheckInterruptCallback,
    ClearHook,
    Continuation,
    EndHook,
    InteractionDefinition,
    InteractionHandler,
    StartHook,
    UpdateHook,
    create_interaction_handler,
)
from mapinteract.api.logging import LoggingConfig
from mapinteract.api.map_surface import MapBehavior, MapEvent, MapEventHandler, MapSurface
from mapinteract.api.ui_binding import (
    UiBinder,
    UiBinding,
    UiBindingOptions,
    UiElement,
    UiEvent,
    UiListener,
    create_ui_binder,
    element_value,
)

__all__ = [
    "CheckInterruptCallback",
    "ClearHook",
    "Continuation",
    "EndHook",
    "InteractionDefinition",
    "InteractionHandler",
    "LoggingConfig",
    "MapBehavior",
    "MapEvent",
    "MapEventHandler",
    "MapSurface",
    "StartHook",
    "UiBinder",
    "UiBinding",
    "UiBindingOptions",
    "UiElement",
    "UiEvent",
    "UiListener",
    "UpdateHook",
    "create_interaction_handler",
    "create_ui_binder",
    "element_value",
]

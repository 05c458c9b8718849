"""Map interaction lifecycle coordination."""

from mapinteract.api import (
    InteractionDefinition,
    InteractionHandler,
    MapSurface,
    UiBindingOptions,
    create_interaction_handler,
)

__all__ = [
    "InteractionDefinition",
    "InteractionHandler",
    "MapSurface",
    "UiBindingOptions",
    "create_interaction_handler",
]

"""Interaction runtime modules."""

from mapinteract.api.interactions import InteractionDefinition
from mapinteract.runtime.config import InteractionConfig, load_interaction_config
from mapinteract.runtime.interaction_handler import InteractionHandler
from mapinteract.runtime.logging import (
    configure_logging,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from mapinteract.runtime.map_events import MapEventMultiplexer
from mapinteract.runtime.registry import InteractionRegistry
from mapinteract.runtime.ui_binding import UiBinder

__all__ = [
    "InteractionConfig",
    "InteractionDefinition",
    "InteractionHandler",
    "InteractionRegistry",
    "MapEventMultiplexer",
    "UiBinder",
    "configure_logging",
    "get_logger",
    "load_interaction_config",
    "setup_logging",
    "shutdown_logging",
]

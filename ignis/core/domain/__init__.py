"""
Domain models shared across the framework.
"""

from .events import (
    CONFIG_MISSING,
    CONFIG_MODIFIED,
    CONFIG_SET,
    ConfigEvent,
    Event,
    EventPriority,
    MissingEnvEvent,
)

__all__ = [
    "Event",
    "EventPriority",
    "ConfigEvent",
    "MissingEnvEvent",
    "CONFIG_SET",
    "CONFIG_MODIFIED",
    "CONFIG_MISSING",
]

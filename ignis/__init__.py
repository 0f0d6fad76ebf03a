"""
Ignis - application bootstrapping micro-framework.

Extensions attach behavior to the application class, initializers run once
per instance, startup actions are sequenced into a single awaitable
completion, and a hierarchical config store resolves environment variables.
"""

__version__ = "0.1.0"

# Public API exports
from .application.app import Ignis
from .application.registry import ExtensionRegistry, get_registry, reset_registry
from .application.sequencer import SequencerState, StartupStep
from .core.domain.events import ConfigEvent, Event, EventPriority, MissingEnvEvent
from .core.exceptions import (
    BindError,
    ConfigConflictError,
    ConfigNotDefinedError,
    IgnisError,
    InvalidArgumentError,
    MissingEnvarError,
)
from .extensions import config as _config_extension

# Every application gets a config store
Ignis.register_extension(_config_extension)

__all__ = [
    "Ignis",
    "ExtensionRegistry",
    "get_registry",
    "reset_registry",
    "SequencerState",
    "StartupStep",
    "Event",
    "EventPriority",
    "ConfigEvent",
    "MissingEnvEvent",
    "IgnisError",
    "InvalidArgumentError",
    "ConfigNotDefinedError",
    "ConfigConflictError",
    "MissingEnvarError",
    "BindError",
]

"""
Application layer: the Ignis class, the extension registry and the startup
sequencer.
"""

from .app import Ignis
from .registry import ExtensionRegistry, get_registry, reset_registry
from .sequencer import SequencerState, StartupSequencer, StartupStep

__all__ = [
    "Ignis",
    "ExtensionRegistry",
    "get_registry",
    "reset_registry",
    "SequencerState",
    "StartupSequencer",
    "StartupStep",
]

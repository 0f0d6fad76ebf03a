"""
Core interfaces defining the framework's collaborator contracts.
"""

from .messaging import IEventEmitter
from .network import IListener, IModuleLoader, ListenCallback

__all__ = [
    "IEventEmitter",
    "IListener",
    "IModuleLoader",
    "ListenCallback",
]

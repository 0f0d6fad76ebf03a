"""
Core services shared by application instances.
"""

from .event_bus import EventEmitter, EventSubscription

__all__ = [
    "EventEmitter",
    "EventSubscription",
]

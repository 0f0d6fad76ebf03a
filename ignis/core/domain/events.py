"""
Event domain models for the application event bus.

This module defines the envelope delivered to subscribers together with the
payloads emitted by the configuration store.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class EventPriority(IntEnum):
    """Subscriber priority levels for delivery order."""
    LOW = 1
    NORMAL = 2
    HIGH = 3
    CRITICAL = 4


@dataclass(frozen=True)
class Event:
    """
    Immutable envelope handed to every subscriber of an emitted event.
    """

    name: str
    """Event name, e.g. ``config.set``."""

    data: Any = None
    """Event payload."""

    priority: EventPriority = EventPriority.NORMAL
    """Priority of the subscription that received the event."""

    timestamp: float = field(default_factory=time.time)
    """Unix timestamp when event was created."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    """Unique event identifier."""

    source: Optional[str] = None
    """Component that emitted the event."""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Event name cannot be empty")

        if not isinstance(self.priority, EventPriority):
            raise ValueError("Priority must be an EventPriority enum value")

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary representation.

        Returns:
            Dictionary representation of the event
        """
        return {
            'name': self.name,
            'data': self.data,
            'priority': self.priority.name,
            'timestamp': self.timestamp,
            'event_id': self.event_id,
            'source': self.source,
        }


@dataclass(frozen=True)
class ConfigEvent:
    """Payload of ``config.set`` and ``config.modified``."""
    kind: str
    key: str
    value: Any


@dataclass(frozen=True)
class MissingEnvEvent:
    """Payload of ``config.missing``."""
    name: str
    description: str


# Event names emitted by the configuration store
CONFIG_SET = 'config.set'
CONFIG_MODIFIED = 'config.modified'
CONFIG_MISSING = 'config.missing'

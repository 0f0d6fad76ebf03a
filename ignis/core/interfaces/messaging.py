"""
Messaging interfaces for the per-instance event emitter.

These interfaces define the publish-subscribe contract that application
instances and extensions rely on.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from ..domain.events import Event, EventPriority


class IEventEmitter(ABC):
    """Interface for synchronous event emitters."""

    @abstractmethod
    def on(self, event_name: str, handler: Callable[[Event], Any],
           priority: EventPriority = EventPriority.NORMAL) -> str:
        """
        Subscribe to events with the given name.

        Args:
            event_name: Name of events to subscribe to (supports wildcards)
            handler: Function called with each matching event
            priority: Delivery priority relative to other subscribers

        Returns:
            Subscription ID for unsubscribing
        """
        pass

    @abstractmethod
    def off(self, subscription_id: str) -> bool:
        """
        Remove a subscription.

        Args:
            subscription_id: ID returned by ``on``

        Returns:
            True if a subscription was removed
        """
        pass

    @abstractmethod
    def emit(self, event_name: str, data: Any = None,
             source: Optional[str] = None) -> int:
        """
        Deliver an event to the current subscribers before returning.

        Args:
            event_name: Name of the event
            data: Event payload
            source: Component emitting the event

        Returns:
            Number of handlers that received the event
        """
        pass

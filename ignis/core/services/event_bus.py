"""
Synchronous event emitter used by application instances.

Every Ignis application is an emitter. Events are delivered within the call
that emits them, to the subscribers registered at that moment; there is no
queue and no replay for late subscribers.
"""

import fnmatch
import logging
import time
import uuid
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import InvalidArgumentError
from ..domain.events import Event, EventPriority
from ..interfaces.messaging import IEventEmitter

logger = logging.getLogger(__name__)


class EventSubscription:
    """Represents an event subscription."""

    def __init__(self, subscription_id: str, event_pattern: str,
                 handler: Callable[[Event], Any], priority: EventPriority,
                 sequence: int = 0, once: bool = False):
        self.subscription_id = subscription_id
        self.event_pattern = event_pattern
        self.handler = handler
        self.priority = priority
        self.sequence = sequence
        self.once = once
        self.created_at = time.time()
        self.call_count = 0
        self.last_called: Optional[float] = None


class EventEmitter(IEventEmitter):
    """
    In-process publish/subscribe channel.

    Supports exact names and glob patterns (``config.*``). Subscribers with a
    higher priority are called first; equal priorities keep subscription
    order. Handler exceptions propagate to whoever emitted the event.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[str, List[EventSubscription]] = defaultdict(list)
        self._wildcard_subscriptions: List[EventSubscription] = []
        self._sequence = 0

    def on(self, event_name: str, handler: Callable[[Event], Any],
           priority: EventPriority = EventPriority.NORMAL) -> str:
        """Subscribe to events with the given name pattern."""
        return self._subscribe(event_name, handler, priority, once=False)

    def once(self, event_name: str, handler: Callable[[Event], Any],
             priority: EventPriority = EventPriority.NORMAL) -> str:
        """Subscribe for a single delivery only."""
        return self._subscribe(event_name, handler, priority, once=True)

    def off(self, subscription_id: str) -> bool:
        """Unsubscribe using subscription ID."""
        for event_name, subscriptions in self._subscriptions.items():
            for i, subscription in enumerate(subscriptions):
                if subscription.subscription_id == subscription_id:
                    subscriptions.pop(i)
                    logger.debug(f"Removed subscription {subscription_id} for '{event_name}'")
                    return True

        for i, subscription in enumerate(self._wildcard_subscriptions):
            if subscription.subscription_id == subscription_id:
                self._wildcard_subscriptions.pop(i)
                logger.debug(f"Removed wildcard subscription {subscription_id}")
                return True

        return False

    def emit(self, event_name: str, data: Any = None,
             source: Optional[str] = None) -> int:
        """Deliver an event to every matching subscriber."""
        matching = self._matching_subscriptions(event_name)

        for subscription in matching:
            if subscription.once:
                self.off(subscription.subscription_id)

            event = Event(
                name=event_name,
                data=data,
                priority=subscription.priority,
                source=source
            )
            subscription.call_count += 1
            subscription.last_called = time.time()
            subscription.handler(event)

        return len(matching)

    def listener_count(self, event_name: str) -> int:
        """Number of subscriptions that would receive the named event."""
        return len(self._matching_subscriptions(event_name))

    def remove_all_listeners(self) -> None:
        """Drop every subscription."""
        self._subscriptions.clear()
        self._wildcard_subscriptions.clear()

    def _subscribe(self, event_name: str, handler: Callable[[Event], Any],
                   priority: EventPriority, once: bool) -> str:
        if not callable(handler):
            raise InvalidArgumentError("Event handler must be callable")

        subscription_id = str(uuid.uuid4())
        self._sequence += 1
        subscription = EventSubscription(
            subscription_id=subscription_id,
            event_pattern=event_name,
            handler=handler,
            priority=priority,
            sequence=self._sequence,
            once=once
        )

        if '*' in event_name or '?' in event_name:
            self._wildcard_subscriptions.append(subscription)
        else:
            self._subscriptions[event_name].append(subscription)

        logger.debug(f"Added subscription for '{event_name}' (ID: {subscription_id})")
        return subscription_id

    def _matching_subscriptions(self, event_name: str) -> List[EventSubscription]:
        matching = list(self._subscriptions.get(event_name, ()))
        matching.extend(
            subscription for subscription in self._wildcard_subscriptions
            if fnmatch.fnmatchcase(event_name, subscription.event_pattern)
        )

        matching.sort(key=lambda s: (-s.priority.value, s.sequence))
        return matching

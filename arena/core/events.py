"""
Typed event bus for decoupled battle narration.

The battle core publishes what happened; presenters, sound cues and
achievement trackers subscribe. Event types are Enum members so that
subscribers never match on raw strings.

Usage:
    class BattleEvent(Enum):
        DAMAGE_DEALT = auto()

    bus = EventBus()
    bus.subscribe(BattleEvent.DAMAGE_DEALT, on_damage)
    bus.publish(BattleEvent.DAMAGE_DEALT, target="boss", amount=40)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    A published event.

    Attributes:
        type: The event type (Enum member)
        data: Keyword payload given to publish()
        consumed: Set by a handler to stop lower-priority handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop propagation to the remaining handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        """Read a payload value."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any
    one_shot: bool

    def resolve(self) -> EventHandler | None:
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe dispatcher.

    Features:
    - Priority ordering (higher first, ties keep subscription order)
    - Optional weak references so dead listeners drop out by themselves
    - One-shot handlers
    - Consumption stops propagation
    - Events published from inside a handler are queued, not nested
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Register a handler for an event type.

        Args:
            event_type: Enum member to listen for
            handler: Callback receiving the Event
            priority: Higher priority handlers run first
            one_shot: Drop the handler after its first call
            weak: Hold the handler weakly (bound methods via WeakMethod)
        """
        if weak:
            target: Any = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            target = handler

        subscriptions = self._subscriptions.setdefault(event_type, [])
        position = len(subscriptions)
        for index, existing in enumerate(subscriptions):
            if priority > existing.priority:
                position = index
                break
        subscriptions.insert(position, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        subscriptions = self._subscriptions.get(event_type)
        if not subscriptions:
            return
        self._subscriptions[event_type] = [
            sub for sub in subscriptions if sub.resolve() != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event built from keyword data.

        Returns:
            The Event, so callers can inspect `consumed`
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        """Publish an already constructed event."""
        if self._dispatching:
            self._queue.append(event)
            return
        self._dispatch(event)

    def has_subscribers(self, event_type: Enum) -> bool:
        """Check whether anything is listening for an event type."""
        return bool(self._subscriptions.get(event_type))

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop handlers for one event type, or all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        self._dispatching = True
        try:
            self._deliver(event)
            while self._queue:
                self._deliver(self._queue.pop(0))
        finally:
            self._dispatching = False

    def _deliver(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        stale: list[_Subscription] = []
        for sub in list(subscriptions):
            handler = sub.resolve()
            if handler is None:
                stale.append(sub)
                continue

            try:
                handler(event)
            except Exception:
                # Log but keep dispatching
                logger.exception("Error in event handler for %s", event.type)

            if sub.one_shot:
                stale.append(sub)
            if event.consumed:
                break

        for sub in stale:
            if sub in subscriptions:
                subscriptions.remove(sub)

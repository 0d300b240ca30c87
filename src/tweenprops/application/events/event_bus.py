"""
Event Bus System

Provides publish/subscribe for domain events. Every model object owns one
bus; ancestors subscribe to their children's buses and re-publish.

Delivery is synchronous and in registration order. A handler that raises is
not contained: the exception reaches whoever triggered the publish.
"""
from typing import Dict, List, Callable, Optional, Tuple

from tweenprops.application.events.events import DomainEvent, EventHandler
from tweenprops.utils.message import Log
from tweenprops.utils.settings import app_settings


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.

    Usage:
        bus = EventBus()
        bus.subscribe("change:name", handle_rename)
        bus.publish(ChangeEvent(name="change:name", field_name="name", ...))
    """

    def __init__(self, max_listeners: Optional[int] = None):
        """
        Initialize event bus

        Args:
            max_listeners: Handlers per event name before a leak warning is
                logged. None reads the "max_listeners" setting; 0 disables.
        """
        self._subscribers: Dict[str, List[Callable[[DomainEvent], None]]] = {}
        if max_listeners is None:
            max_listeners = app_settings.get("max_listeners", 0)
        self._max_listeners = max_listeners
        self._warned: set = set()

    def subscribe(self, event_name: str, handler: Callable[[DomainEvent], None]) -> None:
        """
        Subscribe to events of a specific name.

        Registering the same handler twice for one name is a no-op.

        Args:
            event_name: Name of the event (e.g., "change:keyframe:value")
            handler: Function to call when event is published
                Must accept DomainEvent as parameter
        """
        handlers = self._subscribers.setdefault(event_name, [])
        if handler in handlers:
            return
        handlers.append(handler)

        if (self._max_listeners and len(handlers) > self._max_listeners
                and event_name not in self._warned):
            self._warned.add(event_name)
            Log.warning(
                f"EventBus: {len(handlers)} handlers registered for '{event_name}' "
                f"(max {self._max_listeners}); possible subscription leak"
            )

    def unsubscribe(self, event_name: str, handler: Callable[[DomainEvent], None]) -> None:
        """
        Unsubscribe from events of a specific name.

        Args:
            event_name: Name of the event
            handler: Handler function to remove
        """
        handlers = self._subscribers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._subscribers[event_name]

    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers of event.name.

        Handlers run over a snapshot, so subscribing or unsubscribing from
        inside a handler only affects later publishes.
        """
        handlers = list(self._subscribers.get(event.name, ()))
        if app_settings.get("log_events"):
            Log.debug(f"EventBus: '{event.name}' -> {len(handlers)} handler(s)")

        for handler in handlers:
            handler(event)

    # on/off/emit spelling
    on = subscribe
    off = unsubscribe
    emit = publish

    def get_subscriber_count(self, event_name: str) -> int:
        """Get number of subscribers for an event name."""
        return len(self._subscribers.get(event_name, []))

    def event_names(self) -> List[str]:
        """Event names that currently have at least one subscriber."""
        return list(self._subscribers)

    def clear(self) -> None:
        """Drop every subscriber."""
        self._subscribers.clear()


class Observable:
    """
    Base for model objects that own an EventBus.

    The bus is composed, not inherited: on/off/emit delegate to it.
    """

    def __init__(self):
        self._events = EventBus()

    @property
    def events(self) -> EventBus:
        return self._events

    def on(self, event_name: str, handler: EventHandler) -> None:
        self._events.subscribe(event_name, handler)

    def off(self, event_name: str, handler: EventHandler) -> None:
        self._events.unsubscribe(event_name, handler)

    def emit(self, event: DomainEvent) -> None:
        self._events.publish(event)


def bubble_event(event_name: str, target: Observable) -> EventHandler:
    """
    Build a handler that re-emits whatever it receives on `target`
    under `event_name`.
    """
    def handler(event: DomainEvent) -> None:
        target.emit(event.bubble(event_name, target))
    return handler


class Subscriptions:
    """
    Handlers one object registered on other objects.

    Lets an owner drop exactly its own handlers from a child without
    touching anybody else's.
    """

    def __init__(self):
        self._entries: List[Tuple[Observable, str, EventHandler]] = []

    def add(self, emitter: Observable, event_name: str, handler: EventHandler) -> None:
        emitter.on(event_name, handler)
        self._entries.append((emitter, event_name, handler))

    def bubble(self, emitter: Observable, mapping: Dict[str, str], target: Observable) -> None:
        """Subscribe target to every source -> bubbled name pair in mapping."""
        for source_name, bubbled_name in mapping.items():
            self.add(emitter, source_name, bubble_event(bubbled_name, target))

    def clear(self, emitter: Optional[Observable] = None) -> int:
        """
        Unsubscribe every recorded handler (or only those on `emitter`).

        Returns:
            Number of handlers removed
        """
        kept = []
        removed = 0
        for entry in self._entries:
            entry_emitter, event_name, handler = entry
            if emitter is None or entry_emitter is emitter:
                entry_emitter.off(event_name, handler)
                removed += 1
            else:
                kept.append(entry)
        self._entries = kept
        return removed

    def __len__(self) -> int:
        return len(self._entries)

"""
Events module.

Usage:
    from tweenprops.application.events import EventBus, ChangeEvent

    bus = EventBus()
    bus.subscribe("change:name", handler)
    bus.publish(ChangeEvent(name="change:name", field_name="name"))
"""
from tweenprops.application.events.events import (
    DomainEvent,
    ChangeEvent,
    EventHandler,
)
from tweenprops.application.events.event_bus import (
    EventBus,
    Observable,
    Subscriptions,
    bubble_event,
)

__all__ = [
    'DomainEvent',
    'ChangeEvent',
    'EventHandler',
    'EventBus',
    'Observable',
    'Subscriptions',
    'bubble_event',
]

"""
Domain Events

Events raised by the model objects (Keyframe, Keyframes, Prop, Props).

An event raised deep in the tree is re-published by every ancestor under a
new name. Each re-published copy keeps the original payload and points back
to the event it was forwarded from through `origin`, so a listener at any
level can walk `path` to see which objects the change travelled through.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional


@dataclass
class DomainEvent:
    """Base class for all domain events"""
    name: str = "DomainEvent"
    source: Any = None
    data: Dict[str, Any] = field(default_factory=dict)
    origin: Optional["DomainEvent"] = None

    def bubble(self, name: str, source: Any) -> "DomainEvent":
        """
        Copy of this event re-published under `name` by `source`.

        Subclass fields (old/new values etc.) are carried over unchanged.
        """
        return replace(self, name=name, source=source, data=dict(self.data), origin=self)

    @property
    def root(self) -> "DomainEvent":
        """The event as it was first raised."""
        event = self
        while event.origin is not None:
            event = event.origin
        return event

    @property
    def path(self) -> List[Any]:
        """Emitting objects, innermost first."""
        chain = []
        event = self
        while event is not None:
            chain.append(event.source)
            event = event.origin
        chain.reverse()
        return chain


@dataclass
class ChangeEvent(DomainEvent):
    """
    Raised after a validated setter changed a field.

    Published twice per change: once as "change" and once as
    "change:<field_name>".
    """
    field_name: str = ""
    old_value: Any = None
    new_value: Any = None


EventHandler = Callable[[DomainEvent], None]

"""
Props collection

Doubly-linked list of Prop objects for one animated object. The list owns
the links: it is the only writer of each prop's _next, _prev and _list.

Events:
    add, remove, change:list    membership / order of props
    change:prop, change:prop:name, change:prop:keyframes
                                re-emitted from a member prop's own changes
    change:keyframes:list, change:keyframe, change:keyframe:time,
    change:keyframe:value, change:keyframe:ease, add:keyframe, remove:keyframe
                                re-emitted from a member prop unchanged
"""
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Union

from tweenprops.application.events.event_bus import Observable, Subscriptions
from tweenprops.application.events.events import DomainEvent
from tweenprops.application.validation import MalformedObjectError
from tweenprops.domain.entities.prop import KeyframesInput, Prop


class Props(Observable):
    """
    Props - ordered, name-unique linked list of Prop.
    """

    EVENTS = (
        'add',
        'remove',
        'change:list',
        'change:prop',
        'change:prop:name',
        'change:prop:keyframes',
        'change:keyframes:list',
        'change:keyframe',
        'change:keyframe:time',
        'change:keyframe:value',
        'change:keyframe:ease',
        'add:keyframe',
        'remove:keyframe',
    )

    # Prop event -> event re-emitted by the list
    PROP_EVENTS = {
        'change': 'change:prop',
        'change:name': 'change:prop:name',
        'change:keyframes': 'change:prop:keyframes',
        'change:keyframes:list': 'change:keyframes:list',
        'change:keyframe': 'change:keyframe',
        'change:keyframe:time': 'change:keyframe:time',
        'change:keyframe:value': 'change:keyframe:value',
        'change:keyframe:ease': 'change:keyframe:ease',
        'add:keyframe': 'add:keyframe',
        'remove:keyframe': 'remove:keyframe',
    }

    def __init__(self, data: Optional[Mapping] = None):
        super().__init__()
        self._head: Optional[Prop] = None
        self._tail: Optional[Prop] = None
        self._length = 0
        self._subscriptions = Subscriptions()

        if data is not None:
            if not isinstance(data, Mapping):
                raise MalformedObjectError(f"expected a mapping, got {type(data).__name__}", "props")
            for name, keyframes in data.items():
                self.add(Prop.from_object({name: keyframes}))

    @property
    def first(self) -> Optional[Prop]:
        return self._head

    @property
    def last(self) -> Optional[Prop]:
        return self._tail

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Prop]:
        prop = self._head
        while prop is not None:
            following = prop.next()
            yield prop
            prop = following

    def __contains__(self, item) -> bool:
        if isinstance(item, Prop):
            return item.list is self
        return self.get(item) is not None

    def get(self, name: str) -> Optional[Prop]:
        for prop in self:
            if prop.name == name:
                return prop
        return None

    def add(self, prop_or_name: Union[Prop, str], keyframes: KeyframesInput = None) -> Prop:
        """
        Append a prop.

        Args:
            prop_or_name: A Prop, or the name for a new one
            keyframes: Keyframes for a new prop

        Returns:
            The appended prop

        Raises:
            ValueError: If a prop with that name is already in the list, or
                the prop belongs to another list
        """
        prop = prop_or_name if isinstance(prop_or_name, Prop) else Prop(prop_or_name, keyframes)

        if prop.list is not None:
            raise ValueError(f"{prop!r} already belongs to a Props list")
        if self.get(prop.name) is not None:
            raise ValueError(f"a prop named {prop.name!r} already exists")

        prop._list = self
        prop._prev = self._tail
        prop._next = None
        if self._tail is not None:
            self._tail._next = prop
        else:
            self._head = prop
        self._tail = prop
        self._length += 1

        self._subscriptions.bubble(prop, self.PROP_EVENTS, self)

        self.emit(DomainEvent(name='add', source=self, data={"prop": prop, "name": prop.name}))
        self._emit_list_change()
        return prop

    def remove(self, prop_or_name: Union[Prop, str]) -> Prop:
        """
        Unlink a prop.

        Raises:
            KeyError: If the prop is not in this list
        """
        if isinstance(prop_or_name, Prop):
            prop = prop_or_name if prop_or_name.list is self else None
        else:
            prop = self.get(prop_or_name)
        if prop is None:
            raise KeyError(f"no prop {prop_or_name!r}")

        if prop._prev is not None:
            prop._prev._next = prop._next
        else:
            self._head = prop._next
        if prop._next is not None:
            prop._next._prev = prop._prev
        else:
            self._tail = prop._prev
        prop._next = prop._prev = prop._list = None
        self._length -= 1

        self._subscriptions.clear(prop)

        self.emit(DomainEvent(name='remove', source=self, data={"prop": prop, "name": prop.name}))
        self._emit_list_change()
        return prop

    def _emit_list_change(self) -> None:
        self.emit(DomainEvent(name='change:list', source=self, data={"names": [p.name for p in self]}))

    def to_object(self) -> Dict[str, Dict[str, Any]]:
        result = {}
        for prop in self:
            result.update(prop.to_object())
        return result

    @classmethod
    def from_object(cls, obj: Any) -> "Props":
        """
        Create from {name: raw keyframes, ...}.

        Raises:
            MalformedObjectError: If obj or any of its values is not a mapping
        """
        return cls(obj)

    def destroy(self) -> None:
        """Destroy every member prop and drop all listeners."""
        self._subscriptions.clear()
        for prop in self:
            prop.destroy()
        self._events.clear()

    def __repr__(self) -> str:
        return f"Props({[p.name for p in self]!r})"

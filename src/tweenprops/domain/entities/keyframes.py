"""
Keyframes collection

Ordered, time-unique collection of Keyframe objects for one property.

Raw forms accepted by the constructor:

    {"0.1s": {"value": 10, "ease": None}, "0.3s": {"value": 100, "ease": "Power3.easeOut"}}
    [{"time": "0.1s", "value": 10}, {"time": 0.3, "value": 100, "ease": "Power3.easeOut"}]

Events:
    add, remove             a keyframe was inserted / taken out
    change:list             membership or order changed
    change, change:time,
    change:value,
    change:ease             re-emitted from the member keyframes
"""
import bisect
import math
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Union, TYPE_CHECKING

from tweenprops.application.events.event_bus import Observable, Subscriptions
from tweenprops.application.events.events import DomainEvent
from tweenprops.application.validation import MalformedObjectError
from tweenprops.domain.entities.keyframe import Keyframe
from tweenprops.domain.value_objects.time_key import TimeKey, parse_time

if TYPE_CHECKING:
    from tweenprops.domain.entities.prop import Prop


class Keyframes(Observable):
    """
    Keyframes - ordered mapping of time -> Keyframe.

    Adding a keyframe at a time that is already taken replaces the keyframe
    there. Moving a keyframe onto an occupied time removes the one it lands on.
    """

    EVENTS = (
        'change',
        'change:list',
        'change:time',
        'change:value',
        'change:ease',
        'add',
        'remove',
    )

    # keyframe event -> event re-emitted by the collection
    KEYFRAME_EVENTS = {
        'change': 'change',
        'change:time': 'change:time',
        'change:value': 'change:value',
        'change:ease': 'change:ease',
    }

    def __init__(self, data: Union[None, Mapping, list, tuple, "Keyframes"] = None):
        """
        Initialize keyframes.

        Args:
            data: Raw mapping, sequence, another Keyframes (copied) or None

        Raises:
            MalformedObjectError: If data has none of the accepted shapes
        """
        super().__init__()
        self._keyframes: List[Keyframe] = []
        self._subscriptions = Subscriptions()
        self._owner: Optional["Prop"] = None

        if data is None:
            return

        if isinstance(data, Keyframes):
            data = data.to_object()

        if isinstance(data, Mapping):
            for time, raw in data.items():
                self.add(Keyframe.from_object(time, raw))
        elif isinstance(data, (list, tuple)):
            for item in data:
                self.add(self._coerce_item(item))
        else:
            raise MalformedObjectError(
                f"expected a mapping or a sequence, got {type(data).__name__}", "keyframes"
            )

    @staticmethod
    def _coerce_item(item: Any) -> Keyframe:
        if isinstance(item, Keyframe):
            return item
        if isinstance(item, Mapping) and "time" in item:
            return Keyframe(item["time"], item.get("value"), item.get("ease"))
        raise MalformedObjectError(
            "sequence items must be Keyframe objects or mappings with a 'time' key", "keyframes"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def owner(self) -> Optional["Prop"]:
        """The Prop this collection belongs to (set by the Prop)."""
        return self._owner

    def get(self, time: TimeKey) -> Optional[Keyframe]:
        """Keyframe at the given time, or None."""
        seconds = parse_time(time)
        for keyframe in self._keyframes:
            if math.isclose(keyframe.time, seconds, rel_tol=0.0, abs_tol=1e-9):
                return keyframe
        return None

    def at(self, index: int) -> Keyframe:
        return self._keyframes[index]

    def times(self) -> List[float]:
        return [keyframe.time for keyframe in self._keyframes]

    def first(self) -> Optional[Keyframe]:
        return self._keyframes[0] if self._keyframes else None

    def last(self) -> Optional[Keyframe]:
        return self._keyframes[-1] if self._keyframes else None

    def __len__(self) -> int:
        return len(self._keyframes)

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(list(self._keyframes))

    def __contains__(self, item) -> bool:
        if isinstance(item, Keyframe):
            return any(keyframe is item for keyframe in self._keyframes)
        try:
            return self.get(item) is not None
        except MalformedObjectError:
            return False

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, time_or_keyframe: Union[TimeKey, Keyframe], value: Any = None,
            ease: Optional[str] = None) -> Keyframe:
        """
        Insert a keyframe.

        Args:
            time_or_keyframe: A Keyframe, or the time for a new one
            value: Value for a new keyframe
            ease: Ease for a new keyframe

        Returns:
            The inserted keyframe

        Raises:
            ValueError: If the keyframe already belongs to another collection
        """
        if isinstance(time_or_keyframe, Keyframe):
            keyframe = time_or_keyframe
        else:
            keyframe = Keyframe(time_or_keyframe, value, ease)

        if keyframe.collection is self:
            return keyframe
        if keyframe.collection is not None:
            raise ValueError(f"{keyframe!r} already belongs to another Keyframes")

        existing = self.get(keyframe.time)
        if existing is not None:
            self._detach(existing)

        bisect.insort(self._keyframes, keyframe, key=lambda k: k.time)
        keyframe._collection = self
        self._subscriptions.bubble(keyframe, self.KEYFRAME_EVENTS, self)
        self._subscriptions.add(keyframe, 'change:time', self._on_time_changed)

        self.emit(DomainEvent(name='add', source=self, data=self._keyframe_data(keyframe)))
        self._emit_list_change()
        return keyframe

    def remove(self, keyframe_or_time: Union[Keyframe, TimeKey]) -> Keyframe:
        """
        Remove a keyframe (by identity or by time).

        Raises:
            KeyError: If there is no such keyframe
        """
        if isinstance(keyframe_or_time, Keyframe):
            keyframe = keyframe_or_time if keyframe_or_time in self else None
        else:
            keyframe = self.get(keyframe_or_time)

        if keyframe is None:
            raise KeyError(f"no keyframe {keyframe_or_time!r}")

        self._detach(keyframe)
        self._emit_list_change()
        return keyframe

    def clear(self) -> None:
        """Remove every keyframe; emits one "remove" each and a single "change:list"."""
        if not self._keyframes:
            return
        for keyframe in list(self._keyframes):
            self._detach(keyframe)
        self._emit_list_change()

    def _detach(self, keyframe: Keyframe) -> None:
        self._keyframes.remove(keyframe)
        self._subscriptions.clear(keyframe)
        keyframe._collection = None
        self.emit(DomainEvent(name='remove', source=self, data=self._keyframe_data(keyframe)))

    def _on_time_changed(self, event: DomainEvent) -> None:
        moved = event.source
        for other in list(self._keyframes):
            if other is not moved and math.isclose(other.time, moved.time, rel_tol=0.0, abs_tol=1e-9):
                self._detach(other)
        self._keyframes.sort(key=lambda k: k.time)
        self._emit_list_change()

    def _emit_list_change(self) -> None:
        self.emit(DomainEvent(name='change:list', source=self, data={"times": self.times()}))

    @staticmethod
    def _keyframe_data(keyframe: Keyframe) -> Dict[str, Any]:
        return {
            "time": keyframe.time,
            "value": keyframe.value,
            "ease": keyframe.ease,
            "keyframe": keyframe,
        }

    # ------------------------------------------------------------------
    # Serialization / teardown
    # ------------------------------------------------------------------

    def to_object(self) -> Dict[str, Dict[str, Any]]:
        """Raw mapping form, e.g. {"0.1s": {"value": 10, "ease": None}}"""
        return {keyframe.time_key: keyframe.to_object() for keyframe in self._keyframes}

    def destroy(self) -> None:
        """Drop every handler on this collection and on its keyframes."""
        self._subscriptions.clear()
        self._events.clear()

    def __repr__(self) -> str:
        return f"Keyframes({self.to_object()!r})"

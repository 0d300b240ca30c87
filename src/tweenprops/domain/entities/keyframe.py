"""
Keyframe entity

A single time/value/ease triple. Setting any of the three emits "change"
and "change:<field>"; time and ease are validated first.
"""
from collections.abc import Mapping
from typing import Any, Dict, Optional, TYPE_CHECKING

from tweenprops.application.events.event_bus import Observable
from tweenprops.application.validation import (
    CustomValidator,
    MalformedObjectError,
    RequiredValidator,
    TypeValidator,
    validated_property,
)
from tweenprops.domain.value_objects.time_key import TimeKey, format_time, parse_time

if TYPE_CHECKING:
    from tweenprops.domain.entities.keyframes import Keyframes


def _is_time_key(value) -> bool:
    try:
        parse_time(value)
    except MalformedObjectError:
        return False
    return True


TIME_RULES = [
    RequiredValidator(),
    CustomValidator(_is_time_key, "must be a number of seconds or a string like '0.5s'"),
    CustomValidator(lambda v: parse_time(v) >= 0, "must not be negative"),
]

EASE_RULES = [
    TypeValidator(str),
    CustomValidator(lambda v: bool(v.strip()), "cannot be blank"),
]


def _set_time(keyframe: "Keyframe", value: TimeKey) -> None:
    keyframe._time = parse_time(value)


class Keyframe(Observable):
    """
    Keyframe - a value at a point in time with an optional ease name.

    Attributes:
        time: Position in seconds (accepts "0.5s" / "500ms" style strings)
        value: Any value; not validated
        ease: Ease name such as "Power3.easeOut", or None
    """

    EVENTS = (
        'change',
        'change:time',
        'change:value',
        'change:ease',
    )

    time = validated_property("time", TIME_RULES, setter=_set_time, doc="Time in seconds")
    value = validated_property("value", doc="Keyframe value")
    ease = validated_property("ease", EASE_RULES, doc="Ease name or None")

    def __init__(self, time: TimeKey, value: Any = None, ease: Optional[str] = None):
        super().__init__()
        self._time: Optional[float] = None
        self._value: Any = None
        self._ease: Optional[str] = None
        self._collection: Optional["Keyframes"] = None

        self.time = time
        self.value = value
        self.ease = ease

    @property
    def collection(self) -> Optional["Keyframes"]:
        """The Keyframes holding this keyframe, if any."""
        return self._collection

    @property
    def time_key(self) -> str:
        return format_time(self._time)

    def event_data(self) -> Dict[str, Any]:
        return {"time": self._time, "keyframe": self}

    def to_object(self) -> Dict[str, Any]:
        return {"value": self._value, "ease": self._ease}

    @classmethod
    def from_object(cls, time: TimeKey, raw: Mapping) -> "Keyframe":
        """
        Create from the serialized {"value": ..., "ease": ...} shape.

        Raises:
            MalformedObjectError: If raw is not a mapping
        """
        if not isinstance(raw, Mapping):
            raise MalformedObjectError(
                f"keyframe at {time!r} must be a mapping, got {type(raw).__name__}", "keyframes"
            )
        return cls(time, raw.get("value"), raw.get("ease"))

    def destroy(self) -> None:
        self._events.clear()

    def __repr__(self) -> str:
        return f"Keyframe(time={self.time_key!r}, value={self._value!r}, ease={self._ease!r})"

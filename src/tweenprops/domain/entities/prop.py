"""
Prop entity

A single animatable property: a name plus the Keyframes that animate it.

    {
        "x": {
            "0.1s": {"value": 10,  "ease": None},
            "0.2s": {"value": 0,   "ease": None},
            "0.3s": {"value": 100, "ease": "Power3.easeOut"},
        }
    }

Everything the owned Keyframes emits is re-emitted on the Prop under a
keyframe-prefixed name (see KEYFRAMES_EVENTS), so a listener on the Prop, or
on the Props list holding it, hears every change below it.
"""
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from tweenprops.application.events.event_bus import Observable, Subscriptions
from tweenprops.application.validation import (
    MalformedObjectError,
    PatternValidator,
    RequiredValidator,
    TypeValidator,
    validated_property,
)
from tweenprops.domain.entities.keyframes import Keyframes
from tweenprops.utils.message import Log

if TYPE_CHECKING:
    from tweenprops.domain.entities.props import Props


NAME_RULES = [
    RequiredValidator("is required", strip=False),
    TypeValidator(str, "must be a string"),
    PatternValidator(r"^\D*$", "must not contain digits"),
]

CSS_TRANSFORMS = frozenset({
    'x', 'y', 'z',
    'rotation', 'rotationZ', 'rotationX', 'rotationY',
    'skewX', 'skewY',
    'scale', 'scaleX', 'scaleY',
})

KeyframesInput = Union[None, Keyframes, Mapping, list, tuple]


def _set_keyframes(prop: "Prop", keyframes: KeyframesInput) -> None:
    if not isinstance(keyframes, Keyframes):
        keyframes = Keyframes(keyframes)
    elif keyframes.owner is not None and keyframes.owner is not prop:
        raise ValueError(f"{keyframes!r} is already owned by {keyframes.owner!r}")

    previous = prop._keyframes
    if previous is not None:
        prop._subscriptions.clear(previous)
        # Re-assigning the owned instance keeps its contents
        if previous is not keyframes:
            previous.clear()
            previous._owner = None

    keyframes._owner = prop
    prop._keyframes = keyframes
    prop.setup_bubble_events()


class Prop(Observable):
    """
    Prop - one animatable property of an object.

    Attributes:
        name: Property name; non-empty, no digits (e.g. "x", "rotation")
        keyframes: Owned Keyframes; assigning raw data wraps it first. A
            Keyframes owned by another prop is refused; pass Keyframes(other)
            to copy it instead.

    The _next/_prev/_list links are written by the Props list that holds
    this prop. The prop only reads them.
    """

    EVENTS = (
        'change',
        'change:name',
        'change:keyframes',
        'change:keyframes:list',
        'change:keyframe',
        'change:keyframe:time',
        'change:keyframe:value',
        'change:keyframe:ease',
        'add:keyframe',
        'remove:keyframe',
    )

    # Keyframes event -> event re-emitted by the prop
    KEYFRAMES_EVENTS = {
        'change:list': 'change:keyframes:list',
        'change': 'change:keyframe',
        'change:time': 'change:keyframe:time',
        'change:value': 'change:keyframe:value',
        'change:ease': 'change:keyframe:ease',
        'add': 'add:keyframe',
        'remove': 'remove:keyframe',
    }

    name = validated_property("name", NAME_RULES, doc="Property name")
    keyframes = validated_property("keyframes", setter=_set_keyframes, doc="Owned Keyframes")

    def __init__(self, name: str, keyframes: KeyframesInput = None):
        """
        Initialize prop.

        Args:
            name: Property name
            keyframes: Keyframes instance, raw mapping/sequence, or None for empty

        Raises:
            ValidationError: If name is invalid
            MalformedObjectError: If keyframes cannot be coerced
            ValueError: If keyframes is owned by another prop
        """
        super().__init__()
        self._name: Optional[str] = None
        self._keyframes: Optional[Keyframes] = None
        self._subscriptions = Subscriptions()
        self._next: Optional["Prop"] = None
        self._prev: Optional["Prop"] = None
        self._list: Optional["Props"] = None

        self.name = name
        self.keyframes = keyframes

    def next(self) -> Optional["Prop"]:
        """Next prop in the owning list"""
        return self._next

    def prev(self) -> Optional["Prop"]:
        """Previous prop in the owning list"""
        return self._prev

    @property
    def list(self) -> Optional["Props"]:
        """The Props list this prop was added to"""
        return self._list

    def setup_bubble_events(self) -> None:
        """
        (Re)subscribe to the owned keyframes.

        Handlers this prop attached earlier are removed first, so calling
        this repeatedly never stacks them.
        """
        if not isinstance(self._keyframes, Keyframes):
            return
        self._subscriptions.clear(self._keyframes)
        self._subscriptions.bubble(self._keyframes, self.KEYFRAMES_EVENTS, self)
        Log.debug(f"Prop '{self._name}': bubbling {len(self.KEYFRAMES_EVENTS)} keyframe events")

    def to_object(self) -> Dict[str, Dict[str, Any]]:
        """
        Serializable form.

        Example:
            {"x": {"10.5s": {"value": 100, "ease": "Power2.easeOut"}}}
        """
        keyframes = self._keyframes.to_object() if self._keyframes is not None else {}
        return {self._name: keyframes}

    def is_css_transform(self) -> bool:
        """Whether this prop is one of the CSS transform properties"""
        return self._name in CSS_TRANSFORMS

    def destroy(self) -> None:
        """
        Remove every listener on this prop and every handler it put on its keyframes.
        """
        self._subscriptions.clear()
        self._events.clear()
        if self._keyframes is not None and self._keyframes.owner is self:
            self._keyframes._owner = None
        Log.debug(f"Prop '{self._name}': destroyed")

    @classmethod
    def from_object(cls, obj: Any) -> "Prop":
        """
        Create a Prop from its serialized form.

        Args:
            obj: Mapping of {name: raw keyframes mapping}; the first key is used

        Raises:
            MalformedObjectError: If obj is not a mapping, is empty, or any
                value is not a mapping
        """
        if not isinstance(obj, Mapping):
            raise MalformedObjectError(f"expected a mapping, got {type(obj).__name__}", "prop")

        if len(obj) == 0:
            raise MalformedObjectError("mapping is empty", "prop")

        for key, value in obj.items():
            if not isinstance(value, Mapping):
                raise MalformedObjectError(
                    f"keyframes for {key!r} must be a mapping, got {type(value).__name__}", "prop"
                )

        name = next(iter(obj))
        return cls(name, obj[name])

    def __repr__(self) -> str:
        count = len(self._keyframes) if self._keyframes is not None else 0
        return f"Prop(name={self._name!r}, keyframes={count})"

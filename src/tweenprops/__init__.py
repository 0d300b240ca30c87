"""
tweenprops - observable, validated animation properties.

Structure:
    application/
        events/         - EventBus, domain events, bubbling helpers
        validation/     - Validators and validated setter combinators
    domain/
        entities/       - Keyframe, Keyframes, Prop, Props
        value_objects/  - Time key parsing/formatting
    utils/              - Logging, paths, settings

Usage:
    from tweenprops import Prop

    prop = Prop("x", {"0.1s": {"value": 10, "ease": None}})
    prop.on("change:keyframe:value", handler)
    prop.keyframes.get("0.1s").value = 20
"""
from tweenprops.utils.settings import app_settings

app_settings.apply_logging()

from tweenprops.application.events import ChangeEvent, DomainEvent, EventBus  # noqa: E402
from tweenprops.application.validation import MalformedObjectError, ValidationError  # noqa: E402
from tweenprops.domain.entities import CSS_TRANSFORMS, Keyframe, Keyframes, Prop, Props  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    'ChangeEvent',
    'DomainEvent',
    'EventBus',
    'MalformedObjectError',
    'ValidationError',
    'CSS_TRANSFORMS',
    'Keyframe',
    'Keyframes',
    'Prop',
    'Props',
    'app_settings',
]

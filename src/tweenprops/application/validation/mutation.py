"""
Validated, change-emitting setters.

Two combinators wrap a plain setter function `setter(instance, value)`:

    with_validation(rules, setter, field_name)
        runs the rules first and raises ValidationError without calling
        the setter if any of them fails.

    with_change_event(field_name, setter, getter)
        calls the setter, then emits "change" and "change:<field_name>"
        on the instance, both carrying a ChangeEvent with old/new values.

validated_property() composes both into a property. The instance must
provide emit(); if it also provides event_data(), its result is merged into
every ChangeEvent's data.
"""
import functools
from typing import Any, Callable, List, Optional

from tweenprops.application.events.events import ChangeEvent
from tweenprops.application.validation.validation_framework import Validator, validate_field

Setter = Callable[[Any, Any], None]
Getter = Callable[[Any], Any]


def with_validation(rules: List[Validator], setter: Setter, field_name: str = "") -> Setter:
    @functools.wraps(setter)
    def validated_setter(instance, value):
        validate_field(field_name, value, rules).raise_if_invalid()
        setter(instance, value)
    return validated_setter


def with_change_event(field_name: str, setter: Setter, getter: Getter) -> Setter:
    @functools.wraps(setter)
    def emitting_setter(instance, value):
        old_value = getter(instance)
        setter(instance, value)
        new_value = getter(instance)

        data = {}
        event_data = getattr(instance, "event_data", None)
        if event_data is not None:
            data.update(event_data())
        data[field_name] = new_value

        for event_name in ("change", f"change:{field_name}"):
            instance.emit(ChangeEvent(
                name=event_name,
                source=instance,
                data=dict(data),
                field_name=field_name,
                old_value=old_value,
                new_value=new_value,
            ))
    return emitting_setter


def validated_property(
    field_name: str,
    rules: Optional[List[Validator]] = None,
    setter: Optional[Setter] = None,
    doc: Optional[str] = None,
) -> property:
    """
    Build a property backed by `_<field_name>`.

    Args:
        field_name: Public name, also used in event names and error messages
        rules: Validators run before the setter (none if omitted)
        setter: Custom setter; defaults to plain assignment to the backing attribute
        doc: Property docstring
    """
    attr = f"_{field_name}"

    def getter(instance):
        return getattr(instance, attr, None)

    def assign(instance, value):
        setattr(instance, attr, value)

    fset = setter or assign
    if rules:
        fset = with_validation(rules, fset, field_name)
    fset = with_change_event(field_name, fset, getter)
    return property(getter, fset, doc=doc)

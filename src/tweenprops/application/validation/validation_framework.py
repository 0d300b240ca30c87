"""
Validation Framework

Rules gate the model's setters: a value is checked against an ordered list
of validators and the setter only runs if every one of them passes.

Usage:
    NAME_RULES = [
        RequiredValidator(strip=False),
        TypeValidator(str, "must be a string"),
        PatternValidator(r'^\\D*$', "must not contain digits"),
    ]
    validate_field("name", value, NAME_RULES).raise_if_invalid()

    # Anything expressible as a predicate
    CustomValidator(lambda v: bool(v.strip()), "cannot be blank")
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Type, Union
import re


# =============================================================================
# Exceptions
# =============================================================================

class ValidationError(Exception):
    """
    A rule rejected a value.

    Raised by validated setters before any state changes.
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.message = message
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}" if field_name else message)


class MalformedObjectError(ValidationError):
    """
    Raw (serialized) data does not have the expected shape.
    """


# =============================================================================
# Validation Result
# =============================================================================

@dataclass
class ValidationResult:
    """
    Outcome of running one or more validators.

    Attributes:
        valid: False once any error was added
        errors: Messages of the failed rules, in rule order
        field_name: Field the value was checked for
    """
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    field_name: Optional[str] = None

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.valid = False

    def merge(self, other: 'ValidationResult') -> None:
        self.valid = self.valid and other.valid
        self.errors.extend(other.errors)

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying every collected message."""
        if not self.valid:
            raise ValidationError("; ".join(self.errors), self.field_name)


# =============================================================================
# Validators
# =============================================================================

class Validator(ABC):
    """
    One rule.

    Every validator except RequiredValidator lets None through, so
    optional fields only need RequiredValidator left out.
    """

    @abstractmethod
    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        pass


class RequiredValidator(Validator):
    """
    Rejects None and the empty string.

    With strip=True (the default) whitespace-only strings count as empty.
    """

    def __init__(self, message: str = "is required", strip: bool = True):
        self.message = message
        self.strip = strip

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            result.add_error(self.message)
        elif isinstance(value, str) and (value.strip() if self.strip else value) == "":
            result.add_error(self.message)
        return result


class PatternValidator(Validator):
    """
    Requires a string matching `pattern` (re.match, so anchored at the start).
    """

    def __init__(self, pattern: str, message: Optional[str] = None):
        self.compiled = re.compile(pattern)
        self.message = message or f"does not match pattern: {pattern}"

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None:
            return result
        if not isinstance(value, str):
            result.add_error(f"must be a string, got {type(value).__name__}")
        elif not self.compiled.match(value):
            result.add_error(self.message)
        return result


class TypeValidator(Validator):
    """
    Requires isinstance(value, expected_type).
    """

    def __init__(self, expected_type: Union[Type, tuple], message: Optional[str] = None):
        self.expected_type = expected_type
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is None or isinstance(value, self.expected_type):
            return result

        types = self.expected_type if isinstance(self.expected_type, tuple) else (self.expected_type,)
        expected = " or ".join(t.__name__ for t in types)
        result.add_error(self.message or f"must be {expected}, got {type(value).__name__}")
        return result


class CustomValidator(Validator):
    """
    Wraps a predicate.

    Usage:
        CustomValidator(lambda v: parse_time(v) >= 0, "must not be negative")
    """

    def __init__(self, func: Callable[[Any], bool], message: str = "validation failed"):
        self.func = func
        self.message = message

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        if value is not None and not self.func(value):
            result.add_error(self.message)
        return result


class All(Validator):
    """
    AND of several validators.

    With stop_on_first_error, later validators only ever see values every
    earlier one accepted.
    """

    def __init__(self, *validators: Validator, stop_on_first_error: bool = False):
        self.validators = validators
        self.stop_on_first_error = stop_on_first_error

    def validate(self, value: Any, field_name: str = "") -> ValidationResult:
        result = ValidationResult(field_name=field_name)
        for validator in self.validators:
            sub_result = validator.validate(value, field_name)
            result.merge(sub_result)
            if self.stop_on_first_error and not sub_result.valid:
                break
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def validate(
    value: Any,
    validators: Union[Validator, List[Validator]],
    field_name: str = "",
    stop_on_first_error: bool = True,
) -> ValidationResult:
    """
    Validate a value against one validator or a list of them.

    A list stops at the first failing rule by default, so a rule may assume
    the ones before it held (e.g. that the value is a str).
    """
    if isinstance(validators, Validator):
        return validators.validate(value, field_name)
    return All(*validators, stop_on_first_error=stop_on_first_error).validate(value, field_name)


def validate_field(
    field_name: str,
    value: Any,
    validators: Union[Validator, List[Validator]],
) -> ValidationResult:
    """validate() with the field name first, as setters call it."""
    return validate(value, validators, field_name)

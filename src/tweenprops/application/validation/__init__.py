"""
Validation module.

Key Components:
- ValidationResult: Result container with errors
- Validator: Base class for validators
- Validators: Required, Pattern, Type, Custom, All
- validate() / validate_field(): Convenience functions for validation chains
- with_validation() / with_change_event() / validated_property(): setter combinators
"""
from .validation_framework import (
    ValidationResult,
    Validator,
    ValidationError,
    MalformedObjectError,
    # Common validators
    RequiredValidator,
    PatternValidator,
    TypeValidator,
    CustomValidator,
    # Convenience functions
    validate,
    validate_field,
    # Composable validators
    All,
)
from .mutation import (
    with_validation,
    with_change_event,
    validated_property,
)

__all__ = [
    'ValidationResult',
    'Validator',
    'ValidationError',
    'MalformedObjectError',
    'RequiredValidator',
    'PatternValidator',
    'TypeValidator',
    'CustomValidator',
    'validate',
    'validate_field',
    'All',
    'with_validation',
    'with_change_event',
    'validated_property',
]

"""Exception types for the adaptive_form engine.

Validation failures are not exceptions: they are ordinary data returned in a
ValidationResult and exposed through the controller's per-field accessors.
The exceptions here signal programmer errors (bad form configuration, a
field type with no renderer) and controller lifecycle misuse. They are raised
immediately and never caught inside the package.
"""

from typing import List, Tuple

from adaptive_form.types import FieldType


class AdaptiveFormError(Exception):
    """Base class for all adaptive_form errors."""


class ConfigurationError(AdaptiveFormError):
    """Raised for programmer errors in form or registry configuration."""


class UnregisteredFieldTypeError(ConfigurationError):
    """Raised when no renderer builder exists for a field's type.

    Attributes:
        field_type: The field type that has no builder
        field_id: ID of the field whose renderer was requested
    """

    def __init__(self, field_type: FieldType, field_id: str):
        self.field_type = field_type
        self.field_id = field_id
        super().__init__(
            f"No builder registered for field type '{field_type.name}' "
            f"(field '{field_id}'). Use FieldWidgetFactory.register() to register one."
        )


class DuplicateFieldIdError(ConfigurationError):
    """Raised when two fields of one FormConfig share the same id.

    Attributes:
        field_id: The duplicated field id
    """

    def __init__(self, field_id: str):
        self.field_id = field_id
        super().__init__(f"Duplicate field id '{field_id}' in form configuration")


class InvalidFormConfigError(ConfigurationError):
    """Raised when a declarative form configuration fails schema validation.

    Attributes:
        errors: List of (path, message) pairs, one per schema violation.
            The path uses dot notation (e.g., "fields.0.options"); the root
            of the document is the empty string.
    """

    def __init__(self, errors: List[Tuple[str, str]]):
        self.errors = errors
        details = "; ".join(
            f"{path}: {message}" if path else message for path, message in errors
        )
        super().__init__(f"Invalid form configuration: {details}")


class ControllerDisposedError(AdaptiveFormError):
    """Raised when a FormController is used after dispose()."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call {operation}() on a disposed FormController")


class ReentrantMutationError(AdaptiveFormError):
    """Raised when a change listener mutates the controller that notified it.

    Listeners may read controller state while a notification is delivered,
    but must not call set_value(), validate(), submit(), reset() or clear().
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Cannot call {operation}() while change listeners are being notified"
        )


__all__ = [
    "AdaptiveFormError",
    "ConfigurationError",
    "UnregisteredFieldTypeError",
    "DuplicateFieldIdError",
    "InvalidFormConfigError",
    "ControllerDisposedError",
    "ReentrantMutationError",
]

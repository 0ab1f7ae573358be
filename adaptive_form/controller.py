"""FormController: state and validation engine for one form instance.

The controller owns the current value and current error messages of every
field of a FormConfig. Renderers read and write values through it and
subscribe to its change notifications; the application validates and
submits through it.

State is tracked along two dimensions:
- whether the form has been validated at least once (set by validate(),
  cleared only by reset()); with validate_on_change enabled, set_value()
  re-validates the changed field only after this first validation
- per field, whether it currently has errors

Every mutating operation (set_value, validate, reset, clear, and submit via
validate) emits exactly one ChangeEvent after the new state is in place.

Usage:
    >>> from adaptive_form.fields import TextFieldConfig
    >>> from adaptive_form.form_config import FormConfig
    >>> from adaptive_form.validators import FieldValidator
    >>> config = FormConfig(fields=[
    ...     TextFieldConfig(id="name", label="Name", is_required=True,
    ...                     validators=[FieldValidator.min_length(3)]),
    ... ])
    >>> controller = FormController(config)
    >>> controller.set_value("name", "ab")
    >>> controller.validate().errors["name"]
    ('Must be at least 3 characters',)
    >>> controller.set_value("name", "abcd")
    >>> controller.submit(lambda values: print(dict(values)))
    {'name': 'abcd'}
    True
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from adaptive_form.errors import ControllerDisposedError, ReentrantMutationError
from adaptive_form.events import ChangeEvent, ChangeListener, ChangeNotifier
from adaptive_form.form_config import FormConfig
from adaptive_form.types import ChangeType
from adaptive_form.validation import ValidationResult
from adaptive_form.validators import REQUIRED_MESSAGE, is_blank

logger = logging.getLogger(__name__)


SubmitCallback = Callable[[Mapping[str, Any]], None]


class FormController:
    """Holds the values and errors of one form and runs its validation.

    The controller keeps a shared, read-only reference to its FormConfig and
    exclusively owns its value and error maps. It is single-threaded: callers
    that share one controller between threads must synchronise access.

    Attributes:
        config: The form configuration this controller manages

    Note:
        is_valid reflects the errors as of the last mutation. set_value()
        drops the changed field's errors without re-checking the rest of the
        form, so call validate() before relying on is_valid.
    """

    def __init__(self, config: FormConfig):
        """Create a controller seeded with the config's initial values.

        Args:
            config: Form configuration to manage
        """
        self.config = config
        self._values: Dict[str, Any] = {}
        self._errors: Dict[str, List[str]] = {}
        self._has_validated = False
        self._disposed = False
        self._notifier = ChangeNotifier()
        self._seed_initial_values()

    def _seed_initial_values(self) -> None:
        for form_field in self.config.fields:
            if form_field.initial_value is not None:
                self._values[form_field.id] = form_field.initial_value

    def _ensure_active(self, operation: str) -> None:
        if self._disposed:
            raise ControllerDisposedError(operation)

    def _ensure_mutable(self, operation: str) -> None:
        self._ensure_active(operation)
        if self._notifier.notifying:
            raise ReentrantMutationError(operation)

    def _notify(self, change_type: ChangeType, field_id: Optional[str] = None) -> None:
        self._notifier.notify(ChangeEvent(change_type, field_id))

    # Listeners

    def add_listener(self, listener: ChangeListener) -> None:
        """Subscribe to change notifications."""
        self._ensure_active("add_listener")
        self._notifier.add_listener(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Unsubscribe from change notifications."""
        self._ensure_active("remove_listener")
        self._notifier.remove_listener(listener)

    # Values

    @property
    def values(self) -> Mapping[str, Any]:
        """Read-only snapshot of all current values."""
        self._ensure_active("values")
        return MappingProxyType(dict(self._values))

    def get_value(self, field_id: str, default: Any = None) -> Any:
        """Return the current value of a field, or default if it has none."""
        self._ensure_active("get_value")
        return self._values.get(field_id, default)

    def set_value(self, field_id: str, value: Any) -> None:
        """Set the value of a field.

        Drops the field's current errors. If the form validates on change
        and has been validated before, the field is re-validated on its own.
        Ids that are not in the config are stored but never validated.

        Args:
            field_id: ID of the field to update
            value: New value
        """
        self._ensure_mutable("set_value")
        self._values[field_id] = value
        self._errors.pop(field_id, None)

        if self.config.validate_on_change and self._has_validated:
            self._validate_field(field_id)

        self._notify(ChangeType.VALUE_CHANGED, field_id)

    # Validation

    def _validate_field(self, field_id: str) -> None:
        form_field = self.config.get_field_by_id(field_id)
        if form_field is None:
            return

        value = self._values.get(field_id)
        errors: List[str] = []

        if form_field.is_required and is_blank(value):
            errors.append(REQUIRED_MESSAGE)

        for validator in form_field.validators:
            error = validator.validate(value)
            if error is not None:
                errors.append(error)

        if errors:
            self._errors[field_id] = errors
        else:
            self._errors.pop(field_id, None)

    def validate(self) -> ValidationResult:
        """Validate every field in declared order.

        Returns:
            Snapshot of the outcome; later changes to the controller do not
            affect it
        """
        self._ensure_mutable("validate")
        self._has_validated = True
        self._errors.clear()

        for form_field in self.config.fields:
            self._validate_field(form_field.id)

        result = ValidationResult(is_valid=not self._errors, errors=self._errors)
        logger.debug(
            "Validated %d fields: %s",
            len(self.config),
            "valid" if result.is_valid else f"errors in {list(result.errors)}",
        )
        self._notify(ChangeType.VALIDATED)
        return result

    @property
    def is_valid(self) -> bool:
        """Whether the error map is empty; see the class note on staleness."""
        self._ensure_active("is_valid")
        return not self._errors

    @property
    def has_validated(self) -> bool:
        """Whether validate() has run since construction or the last reset()."""
        self._ensure_active("has_validated")
        return self._has_validated

    @property
    def errors(self) -> Mapping[str, List[str]]:
        """Read-only snapshot of the current errors by field id."""
        self._ensure_active("errors")
        return MappingProxyType({k: list(v) for k, v in self._errors.items()})

    def get_field_error(self, field_id: str) -> Optional[str]:
        """Return the first error message of a field, or None."""
        self._ensure_active("get_field_error")
        errors = self._errors.get(field_id)
        return errors[0] if errors else None

    def get_field_errors(self, field_id: str) -> List[str]:
        """Return all error messages of a field (empty if none)."""
        self._ensure_active("get_field_errors")
        return list(self._errors.get(field_id, []))

    def has_field_error(self, field_id: str) -> bool:
        self._ensure_active("has_field_error")
        return bool(self._errors.get(field_id))

    # Submission and lifecycle

    def submit(self, on_submit: SubmitCallback) -> bool:
        """Validate the form and hand its values to on_submit if valid.

        Args:
            on_submit: Called once with a read-only snapshot of the values,
                only when validation passes

        Returns:
            True if the form was valid and on_submit was called, False otherwise
        """
        result = self.validate()
        if not result.is_valid:
            logger.debug("Submit rejected: %d field(s) invalid", len(result.errors))
            return False
        on_submit(MappingProxyType(dict(self._values)))
        return True

    def reset(self) -> None:
        """Restore initial values, drop all errors and the validated flag."""
        self._ensure_mutable("reset")
        self._values.clear()
        self._errors.clear()
        self._has_validated = False
        self._seed_initial_values()
        self._notify(ChangeType.RESET)

    def clear(self) -> None:
        """Remove all values and errors.

        Initial values are not restored and the validated flag is kept.
        """
        self._ensure_mutable("clear")
        self._values.clear()
        self._errors.clear()
        self._notify(ChangeType.CLEARED)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Release values, errors and listeners.

        Every later operation raises ControllerDisposedError. Disposing
        twice is a no-op.
        """
        if self._disposed:
            return
        if self._notifier.notifying:
            raise ReentrantMutationError("dispose")
        self._values.clear()
        self._errors.clear()
        self._notifier.clear()
        self._disposed = True
        logger.debug("Disposed controller for form with fields %s", self.config.field_ids)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self._values)} values, {len(self._errors)} errors"
        return f"FormController({state})"


__all__ = [
    "FormController",
    "SubmitCallback",
]

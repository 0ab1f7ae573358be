"""adaptive_form: configuration-driven form state and validation engine.

adaptive_form provides:
- Field configurations (text, radio, date, custom) declared as data
- Validators (required, email, minimum length, pattern, custom)
- A form controller that holds values and errors, validates, notifies
  observers and gates submission
- A renderer registry mapping field types to renderer builders, with
  headless built-in bindings

Basic usage:
    >>> from adaptive_form import FieldValidator, FormConfig, FormController, TextFieldConfig
    >>> config = FormConfig(fields=[
    ...     TextFieldConfig(id="email", label="Email", is_required=True,
    ...                     validators=[FieldValidator.email()]),
    ... ])
    >>> controller = FormController(config)
    >>> controller.validate().is_valid
    False
    >>> controller.get_field_error("email")
    'This field is required'
"""

__version__ = "0.1.0"
__author__ = "Adaptive Form Team"

# Version info
VERSION = (0, 1, 0)

# Core exports
from adaptive_form.bindings import (
    DateFieldBinding,
    FieldBinding,
    RadioFieldBinding,
    TextFieldBinding,
)
from adaptive_form.controller import FormController
from adaptive_form.errors import (
    AdaptiveFormError,
    ConfigurationError,
    ControllerDisposedError,
    DuplicateFieldIdError,
    InvalidFormConfigError,
    ReentrantMutationError,
    UnregisteredFieldTypeError,
)
from adaptive_form.events import ChangeEvent, ChangeNotifier
from adaptive_form.fields import (
    DateFieldConfig,
    FormField,
    RadioFieldConfig,
    RadioOption,
    TextFieldConfig,
)
from adaptive_form.form_config import FormConfig
from adaptive_form.registry import FieldWidgetFactory
from adaptive_form.types import Axis, ChangeType, FieldType
from adaptive_form.validation import ValidationResult
from adaptive_form.validators import (
    CallableValidator,
    EmailValidator,
    FieldValidator,
    MinLengthValidator,
    PatternValidator,
    RequiredValidator,
)

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "FieldType",
    "Axis",
    "ChangeType",
    "FieldValidator",
    "RequiredValidator",
    "EmailValidator",
    "MinLengthValidator",
    "PatternValidator",
    "CallableValidator",
    "ValidationResult",
    "FormField",
    "TextFieldConfig",
    "RadioOption",
    "RadioFieldConfig",
    "DateFieldConfig",
    "FormConfig",
    "ChangeEvent",
    "ChangeNotifier",
    "FormController",
    "FieldBinding",
    "TextFieldBinding",
    "RadioFieldBinding",
    "DateFieldBinding",
    "FieldWidgetFactory",
    "AdaptiveFormError",
    "ConfigurationError",
    "UnregisteredFieldTypeError",
    "DuplicateFieldIdError",
    "InvalidFormConfigError",
    "ControllerDisposedError",
    "ReentrantMutationError",
]

"""Field configuration models for the adaptive_form engine.

A field configuration describes one field of a form: its id, label,
required-ness, initial value and validators. Variants add attributes that
only renderers care about (text hints, radio options, date bounds); the
controller treats every variant alike and only reads the common attributes.

Built-in variants:
- TextFieldConfig: single or multi-line text input
- RadioFieldConfig: single choice from a list of RadioOption
- DateFieldConfig: date selection with optional bounds

Custom variants subclass FormField and set a custom field_type:

    >>> from dataclasses import dataclass
    >>> @dataclass(frozen=True)
    ... class SliderFieldConfig(FormField):
    ...     field_type = FieldType.custom("slider")
    ...     minimum: float = 0.0
    ...     maximum: float = 1.0
    >>> SliderFieldConfig(id="volume", label="Volume").field_type
    FieldType('slider')
"""

from dataclasses import dataclass, fields as dataclass_fields
from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union

from dateutil import parser as date_parser

from adaptive_form.errors import ConfigurationError
from adaptive_form.types import Axis, FieldType
from adaptive_form.validators import (
    FieldValidator,
    ValidatorFactory,
    validator_from_dict,
)


DEFAULT_DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[date, datetime, str]


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Normalize a date-like value to a date.

    Accepts date and datetime objects and ISO-8601 strings
    (e.g., "2024-01-15" or "2024-01-15T10:30:00Z"). datetime values are
    truncated to their date.

    Raises:
        ValueError: If a string cannot be parsed as an ISO-8601 date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date_parser.isoparse(value).date()
    raise ValueError(f"Expected a date or ISO-8601 string, got {type(value).__name__}")


@dataclass(frozen=True)
class FormField:
    """Base class for all field configurations.

    Attributes:
        id: Unique key of the field within its form; used for value storage
        label: Display label (opaque to the engine)
        is_required: Whether the field must have a non-blank value
        initial_value: Value seeded into the controller on construction and reset
        validators: Validators run in order on every validation of this field

    Subclasses must define the class attribute field_type.
    """
    field_type: ClassVar[FieldType]

    id: str
    label: str
    is_required: bool = False
    initial_value: Any = None
    validators: Tuple[FieldValidator, ...] = ()

    def __post_init__(self):
        """Validate the id and freeze the validator sequence."""
        if getattr(type(self), "field_type", None) is None:
            raise TypeError(f"{type(self).__name__} must define a field_type class attribute")
        if not isinstance(self.id, str) or not self.id:
            raise ValueError("Field id must be a non-empty string")
        if not isinstance(self.validators, tuple):
            object.__setattr__(self, "validators", tuple(self.validators))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization.

        Variant attributes are included under their attribute names. None
        values are omitted unless the attribute defaults to something else.
        """
        result: Dict[str, Any] = {
            "type": self.field_type.name,
            "id": self.id,
            "label": self.label,
            "isRequired": self.is_required,
        }
        if self.initial_value is not None:
            result["initialValue"] = self._attribute_to_dict(self.initial_value)
        if self.validators:
            result["validators"] = [v.to_dict() for v in self.validators]
        for attr in dataclass_fields(self):
            if attr.name in _COMMON_ATTRIBUTES:
                continue
            value = getattr(self, attr.name)
            if value is None and attr.default is None:
                continue
            result[attr.name] = self._attribute_to_dict(value)
        return result

    @staticmethod
    def _attribute_to_dict(value: Any) -> Any:
        if isinstance(value, Axis):
            return value.value
        if isinstance(value, FieldType):
            return value.name
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, tuple):
            return [v.to_dict() if hasattr(v, "to_dict") else v for v in value]
        return value

    def __str__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, label={self.label!r}, type={self.field_type})"


_COMMON_ATTRIBUTES = frozenset({"id", "label", "is_required", "initial_value", "validators"})


@dataclass(frozen=True)
class TextFieldConfig(FormField):
    """Configuration for a text input field.

    Attributes:
        max_length: Maximum number of characters the renderer accepts
        max_lines: Number of visible lines; 1 for single-line input, None for unlimited
        obscure_text: Whether to mask the input (password fields)
        hint_text: Placeholder shown while the field is empty

    Examples:
        >>> from adaptive_form.validators import FieldValidator
        >>> email = TextFieldConfig(
        ...     id="email",
        ...     label="Email Address",
        ...     is_required=True,
        ...     validators=[FieldValidator.email()],
        ... )
        >>> email.field_type
        FieldType('text')
    """
    field_type = FieldType.TEXT

    max_length: Optional[int] = None
    max_lines: Optional[int] = 1
    obscure_text: bool = False
    hint_text: Optional[str] = None


@dataclass(frozen=True)
class RadioOption:
    """A single option of a radio button group.

    Attributes:
        value: Value stored in the controller when this option is selected
        label: Display label
        description: Optional subtitle
    """
    value: str
    label: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {"value": self.value, "label": self.label}
        if self.description is not None:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RadioOption":
        """Create RadioOption from dict."""
        return cls(value=data["value"], label=data["label"], description=data.get("description"))


@dataclass(frozen=True)
class RadioFieldConfig(FormField):
    """Configuration for a single-choice radio button field.

    Attributes:
        options: Available options, in display order
        direction: Layout direction of the option group
    """
    field_type = FieldType.RADIO

    options: Tuple[RadioOption, ...] = ()
    direction: Axis = Axis.VERTICAL

    def __post_init__(self):
        super().__post_init__()
        options = tuple(
            RadioOption.from_dict(o) if isinstance(o, Mapping) else o for o in self.options
        )
        object.__setattr__(self, "options", options)
        if isinstance(self.direction, str):
            object.__setattr__(self, "direction", Axis(self.direction))

    @property
    def option_values(self) -> List[str]:
        return [option.value for option in self.options]

    def get_option(self, value: Any) -> Optional[RadioOption]:
        """Return the option with the given value, or None."""
        for option in self.options:
            if option.value == value:
                return option
        return None


@dataclass(frozen=True)
class DateFieldConfig(FormField):
    """Configuration for a date picker field.

    Date attributes accept date/datetime objects or ISO-8601 strings and are
    stored as dates.

    Attributes:
        min_date: Earliest selectable date
        max_date: Latest selectable date
        display_format: strftime format used to display the selected date
        initial_picker_date: Date the picker opens on when the field is empty

    Examples:
        >>> dob = DateFieldConfig(id="dob", label="Date of Birth", min_date="1900-01-01")
        >>> dob.min_date
        datetime.date(1900, 1, 1)
        >>> dob.format_date(dob.min_date)
        '1900-01-01'
    """
    field_type = FieldType.DATE

    min_date: Optional[date] = None
    max_date: Optional[date] = None
    display_format: Optional[str] = None
    initial_picker_date: Optional[date] = None

    def __post_init__(self):
        super().__post_init__()
        for name in ("min_date", "max_date", "initial_picker_date"):
            object.__setattr__(self, name, parse_date(getattr(self, name)))
        if self.initial_value is not None:
            object.__setattr__(self, "initial_value", parse_date(self.initial_value))
        if self.min_date and self.max_date and self.min_date > self.max_date:
            raise ValueError(
                f"min_date {self.min_date.isoformat()} is after max_date {self.max_date.isoformat()}"
            )

    @property
    def effective_display_format(self) -> str:
        return self.display_format or DEFAULT_DATE_FORMAT

    def format_date(self, value: Optional[DateLike]) -> str:
        """Format a date for display; returns "" for None."""
        parsed = parse_date(value)
        if parsed is None:
            return ""
        return parsed.strftime(self.effective_display_format)

    def in_range(self, value: date) -> bool:
        """Check whether a date lies within min_date/max_date (inclusive)."""
        if self.min_date is not None and value < self.min_date:
            return False
        if self.max_date is not None and value > self.max_date:
            return False
        return True


BUILTIN_FIELD_TYPES: Dict[str, Type[FormField]] = {
    FieldType.TEXT.name: TextFieldConfig,
    FieldType.RADIO.name: RadioFieldConfig,
    FieldType.DATE.name: DateFieldConfig,
}


def field_from_dict(
    data: Mapping[str, Any],
    field_types: Optional[Mapping[str, Type[FormField]]] = None,
    validator_types: Optional[Mapping[str, ValidatorFactory]] = None,
) -> FormField:
    """Create a field configuration from its declarative form.

    Common keys use camelCase ("isRequired", "initialValue"); variant
    attributes use their attribute names ("options", "min_date").

    Args:
        data: Field document with "type", "id" and "label" keys
        field_types: Extra field config classes by type name; these take
            precedence over the built-ins of the same name
        validator_types: Extra validator factories by type name

    Returns:
        The constructed field configuration

    Raises:
        ConfigurationError: If the field type is unknown or an attribute is invalid

    Examples:
        >>> f = field_from_dict({"type": "text", "id": "name", "label": "Name", "isRequired": True})
        >>> (f.id, f.is_required)
        ('name', True)
    """
    classes: Dict[str, Type[FormField]] = dict(BUILTIN_FIELD_TYPES)
    if field_types:
        classes.update(field_types)

    kind = data["type"]
    config_class = classes.get(kind)
    if config_class is None:
        raise ConfigurationError(
            f"Unknown field type '{kind}'. Known types: {', '.join(sorted(classes))}"
        )

    validators: Sequence[FieldValidator] = [
        validator_from_dict(v, validator_types) for v in data.get("validators", [])
    ]
    variant_attributes = {
        attr.name for attr in dataclass_fields(config_class)
    } - _COMMON_ATTRIBUTES
    extra = {key: value for key, value in data.items() if key in variant_attributes}
    unknown = set(data) - variant_attributes - _DOCUMENT_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown attributes for {kind} field '{data['id']}': {', '.join(sorted(unknown))}"
        )

    try:
        return config_class(
            id=data["id"],
            label=data["label"],
            is_required=data.get("isRequired", False),
            initial_value=data.get("initialValue"),
            validators=tuple(validators),
            **extra,
        )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid {kind} field '{data['id']}': {exc}") from exc


_DOCUMENT_KEYS = frozenset({"type", "id", "label", "isRequired", "initialValue", "validators"})


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "parse_date",
    "FormField",
    "TextFieldConfig",
    "RadioOption",
    "RadioFieldConfig",
    "DateFieldConfig",
    "BUILTIN_FIELD_TYPES",
    "field_from_dict",
]

"""Form configuration for the adaptive_form engine.

A FormConfig is the ordered list of field configurations of one form plus
form-level settings. It is immutable: a controller holds a shared reference
to it and never changes it.

Forms can also be declared as plain data (dicts or JSON documents). Such
documents are checked against FORM_CONFIG_SCHEMA (JSON Schema Draft 7)
before any field is built, so a malformed document fails with every schema
violation listed at once instead of on the first bad key.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from jsonschema import Draft7Validator

from adaptive_form.errors import DuplicateFieldIdError, InvalidFormConfigError
from adaptive_form.fields import FormField, field_from_dict
from adaptive_form.validators import ValidatorFactory

logger = logging.getLogger(__name__)


VALIDATOR_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "minLength": 1},
        "message": {"type": "string"},
    },
    "required": ["type"],
    "allOf": [
        {
            "if": {"properties": {"type": {"const": "min_length"}}, "required": ["type"]},
            "then": {
                "properties": {"length": {"type": "integer", "minimum": 0}},
                "required": ["length"],
            },
        },
        {
            "if": {"properties": {"type": {"const": "pattern"}}, "required": ["type"]},
            "then": {
                "properties": {"pattern": {"type": "string"}},
                "required": ["pattern"],
            },
        },
    ],
}

RADIO_OPTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "value": {"type": "string"},
        "label": {"type": "string"},
        "description": {"type": "string"},
    },
    "required": ["value", "label"],
    "additionalProperties": False,
}

FIELD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "minLength": 1},
        "id": {"type": "string", "minLength": 1},
        "label": {"type": "string"},
        "isRequired": {"type": "boolean"},
        "validators": {"type": "array", "items": VALIDATOR_SCHEMA},
    },
    "required": ["type", "id", "label"],
    "allOf": [
        {
            "if": {"properties": {"type": {"const": "radio"}}, "required": ["type"]},
            "then": {
                "properties": {
                    "options": {"type": "array", "items": RADIO_OPTION_SCHEMA},
                    "direction": {"enum": ["horizontal", "vertical"]},
                },
            },
        },
        {
            "if": {"properties": {"type": {"const": "date"}}, "required": ["type"]},
            "then": {
                "properties": {
                    "min_date": {"type": "string"},
                    "max_date": {"type": "string"},
                    "initial_picker_date": {"type": "string"},
                    "display_format": {"type": "string"},
                    "initialValue": {"type": "string"},
                },
            },
        },
        {
            "if": {"properties": {"type": {"const": "text"}}, "required": ["type"]},
            "then": {
                "properties": {
                    "max_length": {"type": ["integer", "null"], "minimum": 1},
                    "max_lines": {"type": ["integer", "null"], "minimum": 1},
                    "obscure_text": {"type": "boolean"},
                    "hint_text": {"type": "string"},
                },
            },
        },
    ],
}

FORM_CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "fields": {"type": "array", "items": FIELD_SCHEMA},
        "submitButtonText": {"type": ["string", "null"]},
        "validateOnChange": {"type": "boolean"},
    },
    "required": ["fields"],
    "additionalProperties": False,
}

_SCHEMA_VALIDATOR = Draft7Validator(FORM_CONFIG_SCHEMA)


@dataclass(frozen=True)
class FormConfig:
    """Configuration for an entire form.

    Attributes:
        fields: Field configurations in display and validation order
        submit_button_text: Label of the submit button; None means the
            renderer shows no automatic submit button
        validate_on_change: Whether set_value() re-validates the changed
            field once the form has been validated at least once

    Raises:
        DuplicateFieldIdError: If two fields share an id

    Examples:
        >>> from adaptive_form.fields import TextFieldConfig, DateFieldConfig
        >>> config = FormConfig(
        ...     fields=[
        ...         TextFieldConfig(id="name", label="Full Name", is_required=True),
        ...         DateFieldConfig(id="dob", label="Date of Birth"),
        ...     ],
        ...     submit_button_text="Submit",
        ... )
        >>> config.field_ids
        ['name', 'dob']
        >>> config.get_field_by_id("missing") is None
        True
    """
    fields: Tuple[FormField, ...]
    submit_button_text: Optional[str] = None
    validate_on_change: bool = False
    _index: Dict[str, FormField] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        """Freeze the field sequence and index fields by id."""
        fields = tuple(self.fields)
        object.__setattr__(self, "fields", fields)
        index: Dict[str, FormField] = {}
        for form_field in fields:
            if form_field.id in index:
                raise DuplicateFieldIdError(form_field.id)
            index[form_field.id] = form_field
        object.__setattr__(self, "_index", index)

    def get_field_by_id(self, field_id: str) -> Optional[FormField]:
        """Return the field configuration with the given id, or None."""
        return self._index.get(field_id)

    @property
    def field_ids(self) -> List[str]:
        return [form_field.id for form_field in self.fields]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._index

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a declarative form config document."""
        result: Dict[str, Any] = {
            "fields": [form_field.to_dict() for form_field in self.fields],
            "validateOnChange": self.validate_on_change,
        }
        if self.submit_button_text is not None:
            result["submitButtonText"] = self.submit_button_text
        return result

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        field_types: Optional[Mapping[str, Type[FormField]]] = None,
        validator_types: Optional[Mapping[str, ValidatorFactory]] = None,
    ) -> "FormConfig":
        """Create a FormConfig from a declarative document.

        Args:
            data: Form config document (see FORM_CONFIG_SCHEMA)
            field_types: Extra field config classes by type name
            validator_types: Extra validator factories by type name

        Returns:
            New FormConfig

        Raises:
            InvalidFormConfigError: If the document violates the schema
            ConfigurationError: If a field or validator cannot be built

        Examples:
            >>> config = FormConfig.from_dict({
            ...     "fields": [
            ...         {"type": "text", "id": "email", "label": "Email",
            ...          "validators": [{"type": "email"}]},
            ...     ],
            ...     "validateOnChange": True,
            ... })
            >>> config.validate_on_change
            True
        """
        errors = collect_schema_errors(data)
        if errors:
            raise InvalidFormConfigError(errors)

        fields: Sequence[FormField] = [
            field_from_dict(item, field_types, validator_types) for item in data["fields"]
        ]
        config = cls(
            fields=tuple(fields),
            submit_button_text=data.get("submitButtonText"),
            validate_on_change=data.get("validateOnChange", False),
        )
        logger.debug("Loaded form config with %d fields: %s", len(config), config.field_ids)
        return config

    @classmethod
    def from_json(
        cls,
        text: str,
        field_types: Optional[Mapping[str, Type[FormField]]] = None,
        validator_types: Optional[Mapping[str, ValidatorFactory]] = None,
    ) -> "FormConfig":
        """Create a FormConfig from a JSON document.

        Raises:
            InvalidFormConfigError: If the text is not valid JSON or violates the schema
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidFormConfigError([("", f"Malformed JSON: {exc}")]) from exc
        return cls.from_dict(data, field_types, validator_types)

    def __str__(self) -> str:
        return f"FormConfig(fields: {len(self.fields)})"


def collect_schema_errors(data: Any) -> List[Tuple[str, str]]:
    """Check a form config document against FORM_CONFIG_SCHEMA.

    Returns:
        List of (path, message) pairs ordered by path; empty if the document is valid
    """
    errors = sorted(_SCHEMA_VALIDATOR.iter_errors(data), key=lambda e: list(map(str, e.path)))
    return [(".".join(str(p) for p in error.path), error.message) for error in errors]


__all__ = [
    "FORM_CONFIG_SCHEMA",
    "FormConfig",
    "collect_schema_errors",
]

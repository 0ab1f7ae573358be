"""Core type definitions for the adaptive_form engine.

This module defines the small value types shared across the package:
- FieldType: Open enumeration identifying the kind of a form field
- Axis: Layout direction hint for option-based fields
- ChangeType: Kinds of change notification emitted by a form controller

Built-in field types are singleton constants; custom field types are created
with FieldType.custom() and need no change to the engine, only a registry
entry for their renderer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Union


@dataclass(frozen=True)
class FieldType:
    """Identifier for the kind of a form field.

    Two FieldType instances are equal iff their names are equal, so a custom
    type can be recreated anywhere with the same name and still match.

    Attributes:
        name: Type tag (e.g., "text", "slider")

    Examples:
        >>> FieldType.TEXT
        FieldType('text')
        >>> FieldType.custom("slider") == FieldType.custom("slider")
        True
        >>> FieldType.custom("slider").is_builtin
        False
    """
    name: str

    TEXT: ClassVar["FieldType"]
    RADIO: ClassVar["FieldType"]
    DATE: ClassVar["FieldType"]
    BUILTIN_NAMES: ClassVar[FrozenSet[str]] = frozenset({"text", "radio", "date"})

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("FieldType name must be a non-empty string")

    @classmethod
    def custom(cls, name: str) -> "FieldType":
        """Create a custom field type with the given name."""
        return cls(name)

    @classmethod
    def of(cls, value: Union["FieldType", str]) -> "FieldType":
        """Coerce a FieldType or a bare type name to a FieldType."""
        if isinstance(value, FieldType):
            return value
        return cls(value)

    @property
    def is_builtin(self) -> bool:
        """Whether this is one of the text/radio/date types."""
        return self.name in self.BUILTIN_NAMES

    def __repr__(self) -> str:
        return f"FieldType({self.name!r})"

    def __str__(self) -> str:
        return self.name


FieldType.TEXT = FieldType("text")
FieldType.RADIO = FieldType("radio")
FieldType.DATE = FieldType("date")


class Axis(str, Enum):
    """Layout direction for radio button groups."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ChangeType(str, Enum):
    """Kinds of change notification emitted by FormController.

    Every mutating controller operation emits exactly one notification of
    the matching kind.
    """
    VALUE_CHANGED = "value_changed"
    VALIDATED = "validated"
    RESET = "reset"
    CLEARED = "cleared"


__all__ = [
    "FieldType",
    "Axis",
    "ChangeType",
]

"""Validation result type for the adaptive_form engine.

A ValidationResult is the immutable outcome of one full validation pass over
a form: an overall pass/fail flag plus the error messages of every failing
field, in the order the field's checks ran.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a form.

    Attributes:
        is_valid: Whether every field passed validation
        errors: Read-only mapping of field id to its error messages. Only
            failing fields appear; each message tuple is non-empty.

    Examples:
        >>> result = ValidationResult.failure({"name": ["This field is required"]})
        >>> result.is_valid
        False
        >>> result.get_field_error("name")
        'This field is required'
        >>> ValidationResult.success().errors
        mappingproxy({})
    """
    is_valid: bool
    errors: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        """Freeze the error mapping and drop fields without messages."""
        frozen = {
            field_id: tuple(messages)
            for field_id, messages in self.errors.items()
            if messages
        }
        object.__setattr__(self, "errors", MappingProxyType(frozen))

    @classmethod
    def success(cls) -> "ValidationResult":
        """Create a passing result with no errors."""
        return cls(is_valid=True, errors={})

    @classmethod
    def failure(cls, errors: Mapping[str, Sequence[str]]) -> "ValidationResult":
        """Create a failing result with the given per-field errors."""
        return cls(is_valid=False, errors={k: tuple(v) for k, v in errors.items()})

    def get_field_error(self, field_id: str) -> Optional[str]:
        """Return the first error message for a field, or None."""
        messages = self.errors.get(field_id)
        return messages[0] if messages else None

    def get_field_errors(self, field_id: str) -> List[str]:
        """Return all error messages for a field (empty if it passed)."""
        return list(self.errors.get(field_id, ()))

    def has_field_error(self, field_id: str) -> bool:
        return bool(self.errors.get(field_id))

    @property
    def error_count(self) -> int:
        """Total number of error messages across all fields."""
        return sum(len(messages) for messages in self.errors.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": {field_id: list(messages) for field_id, messages in self.errors.items()},
        }

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={len(self.errors)} fields)"


__all__ = [
    "ValidationResult",
]

"""Field validators for the adaptive_form engine.

A validator is a pure function from a field's current value to an optional
error message: validate() returns the message when the value fails and None
when it passes. Validators never raise for bad input and have no side
effects, so the controller can run every validator of a field in order and
collect every failure.

Built-in validators:
- RequiredValidator: value must be present and non-blank
- EmailValidator: value must look like an email address
- MinLengthValidator: string form of the value must reach a minimum length
- PatternValidator: string form of the value must contain a regex match
- CallableValidator: wraps an arbitrary predicate

Only RequiredValidator fails on absent values. The other built-ins pass on
None and on values whose string form is empty, leaving presence to
RequiredValidator or the field's is_required flag.

Custom validators subclass FieldValidator and implement validate().
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Pattern, Union

from typing_extensions import NotRequired, TypedDict

from adaptive_form.errors import ConfigurationError


REQUIRED_MESSAGE = "This field is required"
EMAIL_MESSAGE = "Please enter a valid email address"
PATTERN_MESSAGE = "Invalid format"

EMAIL_REGEX = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def is_blank(value: Any) -> bool:
    """Check whether a value counts as missing for required-ness.

    None, strings that are empty after stripping whitespace, and empty
    lists/tuples/sets are blank. Everything else, including 0 and False,
    is a value.

    Examples:
        >>> is_blank("   ")
        True
        >>> is_blank(0)
        False
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def _is_empty(value: Any) -> bool:
    # Non-required validators skip values that render to an empty string
    return value is None or str(value) == ""


class ValidatorDict(TypedDict):
    """Declarative form of a validator, as used in form config documents."""
    type: str
    message: NotRequired[str]
    length: NotRequired[int]
    pattern: NotRequired[str]


class FieldValidator(ABC):
    """Base class for field validators.

    Subclasses implement validate(), returning an error message when the
    value fails and None when it passes.

    Examples:
        >>> class EvenValidator(FieldValidator):
        ...     def validate(self, value):
        ...         return None if value % 2 == 0 else "Must be even"
        >>> EvenValidator().validate(3)
        'Must be even'
    """

    @abstractmethod
    def validate(self, value: Any) -> Optional[str]:
        """Validate a field value.

        Args:
            value: The field's current value (None when absent)

        Returns:
            Error message if validation fails, None if it passes
        """

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization.

        Raises:
            ConfigurationError: For validators with no declarative form
        """
        raise ConfigurationError(
            f"{type(self).__name__} cannot be serialized to a form config document"
        )

    @staticmethod
    def required(message: str = REQUIRED_MESSAGE) -> "RequiredValidator":
        return RequiredValidator(message)

    @staticmethod
    def email(message: str = EMAIL_MESSAGE) -> "EmailValidator":
        return EmailValidator(message)

    @staticmethod
    def min_length(length: int, message: Optional[str] = None) -> "MinLengthValidator":
        return MinLengthValidator(length, message)

    @staticmethod
    def pattern(
        pattern: Union[str, Pattern[str]], message: str = PATTERN_MESSAGE
    ) -> "PatternValidator":
        return PatternValidator(pattern, message)

    @staticmethod
    def custom(predicate: Callable[[Any], bool], message: str) -> "CallableValidator":
        return CallableValidator(predicate, message)


@dataclass(frozen=True)
class RequiredValidator(FieldValidator):
    """Fails when the value is None, blank text, or an empty collection.

    Examples:
        >>> RequiredValidator("Name is required").validate("")
        'Name is required'
        >>> RequiredValidator().validate(False) is None
        True
    """
    message: str = REQUIRED_MESSAGE

    def validate(self, value: Any) -> Optional[str]:
        if is_blank(value):
            return self.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "required", "message": self.message}


@dataclass(frozen=True)
class EmailValidator(FieldValidator):
    """Fails when a non-empty value is not a plausible email address."""
    message: str = EMAIL_MESSAGE

    def validate(self, value: Any) -> Optional[str]:
        if _is_empty(value):
            return None
        if not EMAIL_REGEX.fullmatch(str(value)):
            return self.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "email", "message": self.message}


@dataclass(frozen=True)
class MinLengthValidator(FieldValidator):
    """Fails when the string form of a non-empty value is too short.

    Attributes:
        length: Minimum number of characters
        message: Error message; defaults to "Must be at least {length} characters"
    """
    length: int
    message: Optional[str] = None

    def __post_init__(self):
        if self.length < 0:
            raise ValueError("Minimum length must not be negative")
        if self.message is None:
            object.__setattr__(
                self, "message", f"Must be at least {self.length} characters"
            )

    def validate(self, value: Any) -> Optional[str]:
        if _is_empty(value):
            return None
        if len(str(value)) < self.length:
            return self.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "min_length", "length": self.length, "message": self.message}


@dataclass(frozen=True)
class PatternValidator(FieldValidator):
    """Fails when the string form of a non-empty value contains no regex match.

    The pattern is searched, not fully matched: anchor it with ^ and $ to
    require the whole value to match.

    Attributes:
        pattern: Compiled regular expression (strings are compiled on construction)
        message: Error message
    """
    pattern: Pattern[str]
    message: str = PATTERN_MESSAGE

    def __post_init__(self):
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(self.pattern))

    def validate(self, value: Any) -> Optional[str]:
        if _is_empty(value):
            return None
        if self.pattern.search(str(value)) is None:
            return self.message
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "pattern", "pattern": self.pattern.pattern, "message": self.message}


@dataclass(frozen=True, eq=False)
class CallableValidator(FieldValidator):
    """Adapts a plain predicate into a validator.

    The predicate receives the raw value (including None) and returns a
    truthy result when the value is acceptable.

    Instances compare and hash by identity.

    Examples:
        >>> positive = CallableValidator(lambda v: v is None or v > 0, "Must be positive")
        >>> positive.validate(-1)
        'Must be positive'
    """
    predicate: Callable[[Any], bool]
    message: str = "Invalid value"

    def validate(self, value: Any) -> Optional[str]:
        if self.predicate(value):
            return None
        return self.message


ValidatorFactory = Callable[..., FieldValidator]

BUILTIN_VALIDATOR_FACTORIES: Dict[str, ValidatorFactory] = {
    "required": RequiredValidator,
    "email": EmailValidator,
    "min_length": MinLengthValidator,
    "pattern": PatternValidator,
}


def validator_from_dict(
    data: Union[ValidatorDict, Mapping[str, Any]],
    validator_types: Optional[Mapping[str, ValidatorFactory]] = None,
) -> FieldValidator:
    """Create a validator from its declarative form.

    Every key except "type" is passed to the factory as a keyword argument,
    so {"type": "min_length", "length": 3} becomes MinLengthValidator(length=3).

    Args:
        data: Validator document with a "type" key
        validator_types: Extra factories by type name; these take precedence
            over the built-ins of the same name

    Returns:
        The constructed validator

    Raises:
        ConfigurationError: If the type is unknown or the arguments don't fit

    Examples:
        >>> validator_from_dict({"type": "min_length", "length": 3}).validate("ab")
        'Must be at least 3 characters'
    """
    factories: Dict[str, ValidatorFactory] = dict(BUILTIN_VALIDATOR_FACTORIES)
    if validator_types:
        factories.update(validator_types)

    kind = data["type"]
    factory = factories.get(kind)
    if factory is None:
        raise ConfigurationError(
            f"Unknown validator type '{kind}'. Known types: {', '.join(sorted(factories))}"
        )

    kwargs = {key: value for key, value in data.items() if key != "type"}
    try:
        return factory(**kwargs)
    except (TypeError, ValueError, re.error) as exc:
        raise ConfigurationError(f"Invalid arguments for validator '{kind}': {exc}") from exc


__all__ = [
    "REQUIRED_MESSAGE",
    "EMAIL_MESSAGE",
    "PATTERN_MESSAGE",
    "EMAIL_REGEX",
    "is_blank",
    "ValidatorDict",
    "FieldValidator",
    "RequiredValidator",
    "EmailValidator",
    "MinLengthValidator",
    "PatternValidator",
    "CallableValidator",
    "ValidatorFactory",
    "BUILTIN_VALIDATOR_FACTORIES",
    "validator_from_dict",
]

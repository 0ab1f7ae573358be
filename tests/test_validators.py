"""Unit tests for field validators.

Tests cover:
- Required validation of absent, blank and empty-collection values
- Email format validation
- Minimum length validation and its default message
- Pattern validation with search semantics
- Custom validators (subclass and callable)
- Building validators from declarative documents
"""

import re

import pytest

from adaptive_form.errors import ConfigurationError
from adaptive_form.fields import TextFieldConfig
from adaptive_form.validators import (
    CallableValidator,
    EmailValidator,
    FieldValidator,
    MinLengthValidator,
    PatternValidator,
    RequiredValidator,
    is_blank,
    validator_from_dict,
)


class TestIsBlank:
    """Test the shared blank-value check."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n", [], (), set()])
    def test_blank_values(self, value):
        """Should treat absence, whitespace and empty collections as blank."""
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["0", 0, False, 0.0, ["a"], "x", {"k": "v"}])
    def test_non_blank_values(self, value):
        """Should treat 0, False and non-empty values as present."""
        assert is_blank(value) is False


class TestRequiredValidator:
    """Test RequiredValidator."""

    def test_fails_on_empty_values(self):
        """Should return its message for None, empty string and empty list."""
        validator = FieldValidator.required("Required")
        assert validator.validate(None) == "Required"
        assert validator.validate("") == "Required"
        assert validator.validate("   ") == "Required"
        assert validator.validate([]) == "Required"

    def test_passes_on_values(self):
        """Should pass for text, zero and False."""
        validator = RequiredValidator()
        assert validator.validate("value") is None
        assert validator.validate(0) is None
        assert validator.validate(False) is None

    def test_default_message(self):
        """Should use the standard required message by default."""
        assert RequiredValidator().validate(None) == "This field is required"


class TestEmailValidator:
    """Test EmailValidator."""

    def test_valid_email(self):
        """Should pass a well-formed address."""
        assert FieldValidator.email("Invalid email").validate("a@b.com") is None
        assert EmailValidator().validate("first.last+tag@sub.example.org") is None

    def test_invalid_email(self):
        """Should fail with the configured message."""
        validator = FieldValidator.email("Invalid email")
        assert validator.validate("not-an-email") == "Invalid email"
        assert validator.validate("a@b") == "Invalid email"
        assert validator.validate("a@b.c") == "Invalid email"

    def test_trailing_newline_is_rejected(self):
        """Should not accept an address followed by a newline."""
        assert EmailValidator().validate("a@b.com\n") == EmailValidator().message

    def test_absent_and_empty_pass(self):
        """Should leave presence checks to the required validator."""
        validator = EmailValidator()
        assert validator.validate(None) is None
        assert validator.validate("") is None


class TestMinLengthValidator:
    """Test MinLengthValidator."""

    def test_boundary(self):
        """Should fail below the minimum and pass at it."""
        validator = FieldValidator.min_length(5)
        assert validator.validate("abcd") == "Must be at least 5 characters"
        assert validator.validate("abcde") is None

    def test_custom_message(self):
        """Should use a custom message when given."""
        validator = FieldValidator.min_length(5, "Too short")
        assert validator.validate("abc") == "Too short"
        assert validator.validate("abcdef") is None

    def test_absent_and_empty_pass(self):
        """Should pass on None and empty string."""
        validator = MinLengthValidator(5)
        assert validator.validate(None) is None
        assert validator.validate("") is None

    def test_uses_string_form(self):
        """Should measure the string form of non-string values."""
        assert MinLengthValidator(3).validate(12) == "Must be at least 3 characters"
        assert MinLengthValidator(3).validate(123) is None

    def test_negative_length_rejected(self):
        """Should reject a negative minimum."""
        with pytest.raises(ValueError):
            MinLengthValidator(-1)


class TestPatternValidator:
    """Test PatternValidator."""

    def test_anchored_pattern(self):
        """Should apply anchors supplied in the pattern."""
        validator = FieldValidator.pattern(r"^\d+$", "Only numbers allowed")
        assert validator.validate("12345") is None
        assert validator.validate("12a45") == "Only numbers allowed"

    def test_unanchored_pattern_searches(self):
        """Should pass when the value merely contains a match."""
        validator = PatternValidator(r"\d")
        assert validator.validate("abc1") is None
        assert validator.validate("abc") == "Invalid format"

    def test_accepts_compiled_pattern(self):
        """Should accept a precompiled regex."""
        validator = PatternValidator(re.compile(r"^[a-z]+$", re.IGNORECASE))
        assert validator.validate("ABC") is None

    def test_absent_and_empty_pass(self):
        """Should pass on None and empty string."""
        validator = PatternValidator(r"^\d+$")
        assert validator.validate(None) is None
        assert validator.validate("") is None


class TestCustomValidators:
    """Test user-defined validators."""

    def test_subclass(self):
        """Should support FieldValidator subclasses."""

        class UppercaseValidator(FieldValidator):
            def validate(self, value):
                if value and value != value.upper():
                    return "Must be uppercase"
                return None

        validator = UppercaseValidator()
        assert validator.validate("abc") == "Must be uppercase"
        assert validator.validate("ABC") is None

    def test_callable(self):
        """Should wrap a predicate."""
        validator = FieldValidator.custom(lambda v: v is None or v > 0, "Must be positive")
        assert isinstance(validator, CallableValidator)
        assert validator.validate(-1) == "Must be positive"
        assert validator.validate(3) is None
        assert validator.validate(None) is None

    def test_callable_equality_by_identity(self):
        """Should not treat different predicates with one message as equal."""
        positive = FieldValidator.custom(lambda v: v > 0, "Invalid")
        negative = FieldValidator.custom(lambda v: v < 0, "Invalid")
        assert positive != negative
        assert positive == positive
        assert len({positive, negative}) == 2

        first = TextFieldConfig(id="n", label="N", validators=[positive])
        second = TextFieldConfig(id="n", label="N", validators=[negative])
        assert first != second

    def test_abstract_base_cannot_be_instantiated(self):
        """Should require validate() to be implemented."""
        with pytest.raises(TypeError):
            FieldValidator()


class TestValidatorFromDict:
    """Test declarative validator loading."""

    def test_builtin_types(self):
        """Should build each built-in validator."""
        assert validator_from_dict({"type": "required"}) == RequiredValidator()
        assert validator_from_dict({"type": "email", "message": "Bad"}) == EmailValidator("Bad")
        assert validator_from_dict({"type": "min_length", "length": 3}) == MinLengthValidator(3)
        pattern = validator_from_dict({"type": "pattern", "pattern": r"^\d+$"})
        assert pattern.validate("12") is None
        assert pattern.validate("x") == "Invalid format"

    def test_to_dict_inverse(self):
        """Should rebuild an equal validator from to_dict()."""
        for validator in (
            RequiredValidator("Needed"),
            EmailValidator(),
            MinLengthValidator(4),
        ):
            assert validator_from_dict(validator.to_dict()) == validator

    def test_callable_validator_has_no_document_form(self):
        """Should refuse to serialize an opaque predicate."""
        with pytest.raises(ConfigurationError):
            CallableValidator(bool, "Nope").to_dict()

    def test_custom_factory(self):
        """Should use caller-supplied factories."""
        factories = {"positive": lambda message="Must be positive": CallableValidator(
            lambda v: v is None or v > 0, message
        )}
        validator = validator_from_dict({"type": "positive"}, factories)
        assert validator.validate(-5) == "Must be positive"

    def test_unknown_type(self):
        """Should raise ConfigurationError for unknown types."""
        with pytest.raises(ConfigurationError, match="Unknown validator type 'luhn'"):
            validator_from_dict({"type": "luhn"})

    def test_bad_arguments(self):
        """Should raise ConfigurationError for arguments the factory rejects."""
        with pytest.raises(ConfigurationError):
            validator_from_dict({"type": "min_length"})
        with pytest.raises(ConfigurationError):
            validator_from_dict({"type": "pattern", "pattern": "("})

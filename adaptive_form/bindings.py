"""Headless field bindings: the built-in renderer handles.

A binding connects one field configuration to one FormController and
exposes what an interactive control needs: the current value, the first
error message, the text to display, and variant-specific input operations.
A UI toolkit wraps a binding in its own widget; the binding itself draws
nothing.

Built-in bindings:
- TextFieldBinding: free text entry
- RadioFieldBinding: selection of one of the configured options
- DateFieldBinding: date picking within the configured bounds
"""

from datetime import date
from typing import Any, List, Optional

from adaptive_form.controller import FormController
from adaptive_form.fields import (
    DateFieldConfig,
    DateLike,
    FormField,
    RadioFieldConfig,
    RadioOption,
    TextFieldConfig,
    parse_date,
)


DEFAULT_FIRST_DATE = date(1900, 1, 1)
DEFAULT_LAST_DATE = date(2100, 1, 1)


class FieldBinding:
    """Binds a field configuration to a controller.

    Attributes:
        config: The bound field configuration
        controller: The controller holding the field's value and errors
    """

    def __init__(self, config: FormField, controller: FormController):
        self.config = config
        self.controller = controller

    @property
    def field_id(self) -> str:
        return self.config.id

    @property
    def label(self) -> str:
        return self.config.label

    @property
    def value(self) -> Any:
        return self.controller.get_value(self.config.id)

    def set_value(self, value: Any) -> None:
        self.controller.set_value(self.config.id, value)

    @property
    def error(self) -> Optional[str]:
        """First error message of the field, or None."""
        return self.controller.get_field_error(self.config.id)

    @property
    def errors(self) -> List[str]:
        return self.controller.get_field_errors(self.config.id)

    @property
    def has_error(self) -> bool:
        return self.controller.has_field_error(self.config.id)

    @property
    def display_text(self) -> str:
        """Text shown for the current value; empty when there is none."""
        value = self.value
        return "" if value is None else str(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field_id={self.config.id!r})"


class TextFieldBinding(FieldBinding):
    """Binding for TextFieldConfig."""

    config: TextFieldConfig

    def set_text(self, text: str) -> None:
        """Store text typed by the user."""
        self.set_value(text)


class RadioFieldBinding(FieldBinding):
    """Binding for RadioFieldConfig.

    Only configured option values can be selected.
    """

    config: RadioFieldConfig

    @property
    def options(self) -> List[RadioOption]:
        return list(self.config.options)

    @property
    def selected_option(self) -> Optional[RadioOption]:
        """The option matching the current value, or None."""
        return self.config.get_option(self.value)

    def is_selected(self, option: RadioOption) -> bool:
        return self.value == option.value

    def select(self, value: str) -> None:
        """Select the option with the given value.

        Raises:
            ValueError: If no option has this value
        """
        if self.config.get_option(value) is None:
            raise ValueError(
                f"'{value}' is not an option of field '{self.config.id}'. "
                f"Options: {', '.join(self.config.option_values)}"
            )
        self.set_value(value)

    @property
    def display_text(self) -> str:
        option = self.selected_option
        return option.label if option is not None else super().display_text


class DateFieldBinding(FieldBinding):
    """Binding for DateFieldConfig.

    Without configured bounds the picker spans DEFAULT_FIRST_DATE to
    DEFAULT_LAST_DATE.
    """

    config: DateFieldConfig

    @property
    def first_date(self) -> date:
        return self.config.min_date or DEFAULT_FIRST_DATE

    @property
    def last_date(self) -> date:
        return self.config.max_date or DEFAULT_LAST_DATE

    @property
    def selected_date(self) -> Optional[date]:
        return parse_date(self.value)

    def picker_initial_date(self, today: Optional[date] = None) -> date:
        """Date the picker should open on.

        The current value if set, else the configured initial_picker_date,
        else today; clamped into [first_date, last_date].

        Args:
            today: Reference date used when nothing else applies (defaults to date.today())
        """
        initial = self.selected_date or self.config.initial_picker_date or today or date.today()
        if initial < self.first_date:
            return self.first_date
        if initial > self.last_date:
            return self.last_date
        return initial

    def pick(self, value: DateLike) -> None:
        """Store a date chosen in the picker.

        Args:
            value: date, datetime or ISO-8601 string

        Raises:
            ValueError: If the date cannot be parsed or lies outside the bounds
        """
        picked = parse_date(value)
        if picked is None:
            raise ValueError("A date must be picked")
        if not (self.first_date <= picked <= self.last_date):
            raise ValueError(
                f"{picked.isoformat()} is outside the selectable range "
                f"{self.first_date.isoformat()} to {self.last_date.isoformat()}"
            )
        self.set_value(picked)

    @property
    def display_text(self) -> str:
        return self.config.format_date(self.selected_date)


__all__ = [
    "DEFAULT_FIRST_DATE",
    "DEFAULT_LAST_DATE",
    "FieldBinding",
    "TextFieldBinding",
    "RadioFieldBinding",
    "DateFieldBinding",
]

"""Renderer registry for the adaptive_form engine.

FieldWidgetFactory maps field types to builders. A builder takes a field
configuration and a FormController and returns a renderer handle. The
built-in text, radio and date types resolve to the headless bindings in
adaptive_form.bindings; custom types, and overrides of the built-ins, are
registered per factory instance.

The factory is an ordinary object rather than a module-level global: each
application (or test) creates its own, and clear_registry() drops the
custom registrations without touching other instances.

Usage:
    >>> from adaptive_form.controller import FormController
    >>> from adaptive_form.fields import TextFieldConfig
    >>> from adaptive_form.form_config import FormConfig
    >>> config = FormConfig(fields=[TextFieldConfig(id="name", label="Name")])
    >>> factory = FieldWidgetFactory()
    >>> factory.build(config.fields[0], FormController(config))
    TextFieldBinding(field_id='name')
"""

import logging
from typing import Any, Callable, Dict, List, Union

from adaptive_form.bindings import DateFieldBinding, RadioFieldBinding, TextFieldBinding
from adaptive_form.controller import FormController
from adaptive_form.errors import UnregisteredFieldTypeError
from adaptive_form.fields import FormField
from adaptive_form.types import FieldType

logger = logging.getLogger(__name__)


FieldBuilder = Callable[[FormField, FormController], Any]
"""Type alias for renderer builders: (field, controller) -> renderer handle."""


BUILTIN_BUILDERS: Dict[FieldType, FieldBuilder] = {
    FieldType.TEXT: TextFieldBinding,
    FieldType.RADIO: RadioFieldBinding,
    FieldType.DATE: DateFieldBinding,
}


class FieldWidgetFactory:
    """Registry of renderer builders keyed by field type.

    Lookup order for build():
    1. A builder registered on this factory for the field's type
    2. The built-in builder for text, radio and date fields

    Field types can be given as FieldType values or as bare type names.
    """

    def __init__(self):
        """Initialize factory with no custom registrations."""
        self._custom_builders: Dict[FieldType, FieldBuilder] = {}

    def register(self, field_type: Union[FieldType, str], builder: FieldBuilder) -> None:
        """Register a builder for a field type.

        Registering a built-in type overrides the built-in builder;
        registering a type twice replaces the earlier builder.

        Args:
            field_type: Field type the builder handles
            builder: Callable (field, controller) -> renderer handle
        """
        field_type = FieldType.of(field_type)
        if field_type in BUILTIN_BUILDERS:
            logger.warning("Overriding built-in builder for field type '%s'", field_type.name)
        elif field_type in self._custom_builders:
            logger.debug("Replacing builder for field type '%s'", field_type.name)
        self._custom_builders[field_type] = builder
        logger.debug("Registered builder for field type '%s'", field_type.name)

    def unregister(self, field_type: Union[FieldType, str]) -> None:
        """Remove the custom builder for a field type, if any.

        A built-in type falls back to its built-in builder.
        """
        self._custom_builders.pop(FieldType.of(field_type), None)

    def is_registered(self, field_type: Union[FieldType, str]) -> bool:
        """Whether a custom builder is registered for the field type.

        Built-in builders don't count; see can_build().
        """
        return FieldType.of(field_type) in self._custom_builders

    def can_build(self, field_type: Union[FieldType, str]) -> bool:
        """Whether build() would find a builder for the field type."""
        field_type = FieldType.of(field_type)
        return field_type in self._custom_builders or field_type in BUILTIN_BUILDERS

    def clear_registry(self) -> None:
        """Remove all custom registrations; built-ins stay available."""
        self._custom_builders.clear()

    @property
    def registered_types(self) -> List[FieldType]:
        return list(self._custom_builders)

    def build(self, field: FormField, controller: FormController) -> Any:
        """Build the renderer for a field.

        Args:
            field: Field configuration to render
            controller: Controller the renderer reads from and writes to

        Returns:
            Whatever the matching builder returns

        Raises:
            UnregisteredFieldTypeError: If neither a custom nor a built-in
                builder handles the field's type
        """
        field_type = field.field_type
        builder = self._custom_builders.get(field_type)
        if builder is None:
            builder = BUILTIN_BUILDERS.get(field_type)
        if builder is None:
            raise UnregisteredFieldTypeError(field_type, field.id)
        return builder(field, controller)

    def build_all(self, controller: FormController) -> List[Any]:
        """Build renderers for every field of the controller's form, in order.

        Raises:
            UnregisteredFieldTypeError: On the first field without a builder
        """
        return [self.build(field, controller) for field in controller.config.fields]


__all__ = [
    "FieldBuilder",
    "BUILTIN_BUILDERS",
    "FieldWidgetFactory",
]

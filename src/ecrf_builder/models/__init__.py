"""
Modelos de datos del constructor de formularios.

Este módulo contiene todos los modelos Pydantic del documento.
"""

from ecrf_builder.models.base import (
    DocumentModel,
    TimestampedModel,
    generate_group_name,
    generate_id,
    generate_timestamp,
    normalize_control_type,
)
from ecrf_builder.models.controls import (
    BaseControl,
    CheckboxControl,
    CheckboxOptions,
    ChoiceOptions,
    Column,
    ColumnsControl,
    Container,
    Control,
    ControlOptions,
    DatePickerControl,
    DatePickerOptions,
    ListBoxControl,
    ListBoxOptions,
    MultiSelectControl,
    MultiSelectOptions,
    NumberInputControl,
    NumberInputOptions,
    OptionItem,
    RadioControl,
    RadioOptions,
    SelectButtonControl,
    SelectButtonOptions,
    SelectControl,
    SelectOptions,
    TextAreaControl,
    TextAreaOptions,
    TextInputControl,
    TextInputOptions,
    TimePickerControl,
    TimePickerOptions,
)
from ecrf_builder.models.form import Form, SavedFormMetadata

__all__ = [
    # Clases base
    "DocumentModel",
    "TimestampedModel",
    "generate_id",
    "generate_group_name",
    "generate_timestamp",
    "normalize_control_type",
    # Opciones
    "OptionItem",
    "ControlOptions",
    "ChoiceOptions",
    "TextInputOptions",
    "TextAreaOptions",
    "CheckboxOptions",
    "RadioOptions",
    "DatePickerOptions",
    "TimePickerOptions",
    "NumberInputOptions",
    "SelectOptions",
    "MultiSelectOptions",
    "ListBoxOptions",
    "SelectButtonOptions",
    # Controles
    "BaseControl",
    "Control",
    "TextInputControl",
    "TextAreaControl",
    "CheckboxControl",
    "RadioControl",
    "DatePickerControl",
    "TimePickerControl",
    "NumberInputControl",
    "SelectControl",
    "MultiSelectControl",
    "ListBoxControl",
    "SelectButtonControl",
    "ColumnsControl",
    "Column",
    "Container",
    # Formulario
    "Form",
    "SavedFormMetadata",
]

"""
Catálogo de metadatos de presentación por tipo de control.

Nombre visible, descripción, icono y grupo de la caja de herramientas.
Solo se usa para presentación y títulos por defecto, nunca para la
semántica de los controles.
"""

import re
from dataclasses import dataclass

from ecrf_builder.config import ControlCategory, ControlType


@dataclass(frozen=True)
class TypeMetadata:
    """Metadatos de presentación de un tipo de control."""
    display_name: str
    description: str
    icon: str
    category: ControlCategory


UNKNOWN_ICON = "pi pi-question-circle"

CONTROL_METADATA: dict[ControlType, TypeMetadata] = {
    ControlType.INPUT_TEXT: TypeMetadata(
        "Input Text", "Single-line input text field", "pi pi-pencil", ControlCategory.BASIC,
    ),
    ControlType.TEXT_AREA: TypeMetadata(
        "Text Area", "Multi-line input text field", "pi pi-align-left", ControlCategory.BASIC,
    ),
    ControlType.INPUT_NUMBER: TypeMetadata(
        "Number Input", "Numeric input field", "pi pi-hashtag", ControlCategory.BASIC,
    ),
    ControlType.CHECKBOX: TypeMetadata(
        "Checkbox", "Boolean selection control", "pi pi-check-square", ControlCategory.BASIC,
    ),
    ControlType.RADIO: TypeMetadata(
        "Radio Button", "Single selection from multiple options", "pi pi-circle-on",
        ControlCategory.BASIC,
    ),
    ControlType.SELECT: TypeMetadata(
        "Select", "Dropdown single selection", "pi pi-chevron-down", ControlCategory.BASIC,
    ),
    ControlType.SELECT_BUTTON: TypeMetadata(
        "Select Button", "Button group selection", "pi pi-toggle-on", ControlCategory.BASIC,
    ),
    ControlType.DATE_PICKER: TypeMetadata(
        "Date Picker", "Date selection control", "pi pi-calendar", ControlCategory.ADVANCED,
    ),
    ControlType.TIME_PICKER: TypeMetadata(
        "Time Picker", "Time selection control", "pi pi-clock", ControlCategory.ADVANCED,
    ),
    ControlType.MULTISELECT: TypeMetadata(
        "Multiselect", "Dropdown multiple selection", "pi pi-list", ControlCategory.ADVANCED,
    ),
    ControlType.LIST_BOX: TypeMetadata(
        "Listbox", "Visible list of options", "pi pi-list", ControlCategory.ADVANCED,
    ),
    ControlType.COLUMNS: TypeMetadata(
        "Columns", "Multi-column layout container", "pi pi-columns", ControlCategory.LAYOUT,
    ),
}


def format_type_name(type_tag: str) -> str:
    """
    Formatea una etiqueta de tipo para mostrar.

    Ejemplos:
        "InputText" -> "Input Text", "select_button" -> "Select button"
    """
    text = str(type_tag).replace("_", " ")
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", text)
    return text[:1].upper() + text[1:]


def get_metadata(type_tag: str) -> TypeMetadata:
    """Metadatos de un tipo; para tipos desconocidos se derivan del nombre."""
    try:
        return CONTROL_METADATA[ControlType(type_tag)]
    except ValueError:
        return TypeMetadata(
            display_name=format_type_name(type_tag),
            description="",
            icon=UNKNOWN_ICON,
            category=ControlCategory.BASIC,
        )


def get_icon(type_tag: str) -> str:
    """Icono de un tipo de control."""
    return get_metadata(type_tag).icon


def get_display_name(type_tag: str) -> str:
    """Nombre visible de un tipo de control."""
    return get_metadata(type_tag).display_name

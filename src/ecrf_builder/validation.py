"""
Validación estructural de formularios.

Solo lectura: nunca modifica el formulario ni lanza excepciones por
hallazgos; todo se reporta en un ValidationReport.
"""

from collections import Counter
from typing import Sequence

from pydantic import Field

from ecrf_builder.catalog import get_display_name
from ecrf_builder.models import (
    ColumnsControl,
    Control,
    DocumentModel,
    Form,
    ListBoxControl,
    MultiSelectControl,
    NumberInputControl,
    RadioControl,
    SelectButtonControl,
    SelectControl,
    TextInputControl,
)
from ecrf_builder.tree.traversal import collect_ids

# Variantes que requieren al menos una opción
OPTION_REQUIRED_TYPES = (
    RadioControl,
    SelectControl,
    MultiSelectControl,
    ListBoxControl,
    SelectButtonControl,
)


class ValidationReport(DocumentModel):
    """Resultado de validar un formulario."""
    valid: bool
    errors: list[str] = Field(default_factory=list)


def validate(form: Form) -> ValidationReport:
    """
    Valida un formulario completo.

    Reglas:
    - El formulario debe tener título
    - La raíz debe tener al menos un control
    - Reglas por control (recursivas dentro de las columnas)
    - Los IDs de control deben ser únicos en todo el formulario
    """
    errors: list[str] = []

    if not form.title or not form.title.strip():
        errors.append("Form must have a title")

    if not form.container.controls:
        errors.append("Form must have at least one control")

    _validate_controls(form.container.controls, errors)

    counts = Counter(collect_ids(form))
    for control_id, count in counts.items():
        if count > 1:
            errors.append(f"Duplicate control id: {control_id}")

    return ValidationReport(valid=not errors, errors=errors)


def _validate_controls(controls: Sequence[Control], errors: list[str], path: str = "") -> None:
    for control in controls:
        label = control.title or control.type
        control_path = f"{path} > {label}" if path else label

        match control:
            case TextInputControl():
                if not control.title.strip():
                    errors.append(f"{control_path}: Input text must have a title")
            case ColumnsControl():
                if not control.columns:
                    errors.append(
                        f"{control_path}: Columns control must have at least one column"
                    )
                for number, column in enumerate(control.columns, start=1):
                    column_path = f"{control_path} > Column {number}"
                    if column.container is None:
                        errors.append(f"{column_path}: Column missing container")
                    else:
                        _validate_controls(column.container.controls, errors, column_path)
            case NumberInputControl():
                opts = control.options
                if (
                    opts.min_value is not None
                    and opts.max_value is not None
                    and opts.min_value > opts.max_value
                ):
                    errors.append(
                        f"{control_path}: Minimum value cannot exceed maximum value"
                    )
            case _ if isinstance(control, OPTION_REQUIRED_TYPES):
                if not control.options.choices:
                    errors.append(
                        f"{control_path}: {get_display_name(control.type)} "
                        "must have at least one option"
                    )

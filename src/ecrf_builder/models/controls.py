"""
Controles del formulario y contenedores.

Los controles forman una unión cerrada discriminada por el campo `type`.
El control Columns es el único que contiene sub-contenedores, por eso
Column, Container y la unión Control se definen en este mismo módulo.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, model_validator

from ecrf_builder.config import CheckboxMode, HourFormat
from ecrf_builder.models.base import DocumentModel, generate_group_name, generate_id


# ============================================================================
# Opciones de configuración
# ============================================================================

class OptionItem(DocumentModel):
    """Una opción seleccionable (etiqueta + valor)."""
    label: str
    value: Any = None


class ControlOptions(DocumentModel):
    """Opciones comunes a todos los controles."""
    name: str = ""
    required: bool = False
    readonly: bool = False
    disabled: bool = False
    helper_text: Optional[str] = None


class ChoiceOptions(ControlOptions):
    """Opciones de controles con lista de opciones."""
    choices: tuple[OptionItem, ...] = ()


class TextInputOptions(ControlOptions):
    placeholder: Optional[str] = None
    input_type: str = "text"
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    pattern: Optional[str] = None


class TextAreaOptions(ControlOptions):
    rows: int = Field(default=3, ge=1)
    cols: Optional[int] = Field(default=None, ge=1)
    auto_resize: bool = False
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)


class CheckboxOptions(ChoiceOptions):
    mode: CheckboxMode = CheckboxMode.BINARY


class RadioOptions(ChoiceOptions):
    layout: Literal["vertical", "horizontal"] = "vertical"


class DatePickerOptions(ControlOptions):
    date_format: str = "dd/mm/yy"
    show_time: bool = False
    min_date: Optional[str] = None
    max_date: Optional[str] = None


class TimePickerOptions(ControlOptions):
    hour_format: HourFormat = HourFormat.H24
    step_minutes: int = Field(default=1, ge=1, le=60)


class NumberInputOptions(ControlOptions):
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: float = Field(default=1.0, gt=0)
    decimals: Optional[int] = Field(default=None, ge=0)
    mode: Literal["decimal", "currency"] = "decimal"


class SelectOptions(ChoiceOptions):
    placeholder: Optional[str] = None
    filter: bool = False
    show_clear: bool = False


class MultiSelectOptions(ChoiceOptions):
    filter: bool = False
    show_toggle_all: bool = True
    max_selected_labels: Optional[int] = Field(default=None, ge=1)


class ListBoxOptions(ChoiceOptions):
    multiple: bool = False
    checkbox: bool = False
    filter: bool = False


class SelectButtonOptions(ChoiceOptions):
    multiple: bool = False


# ============================================================================
# Controles
# ============================================================================

class BaseControl(DocumentModel):
    """
    Campos comunes de un control.

    El ID se genera al construir si no se especifica y nunca cambia;
    `type` es fijo por variante.
    """

    id: str
    title: str = ""
    options: ControlOptions = Field(default_factory=ControlOptions)
    value: Any = None

    @model_validator(mode="before")
    @classmethod
    def _assign_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            type_field = cls.model_fields.get("type")
            type_tag = data.get("type") or (type_field.default if type_field else "control")
            data = {**data, "id": generate_id(type_tag)}
        return data


class TextInputControl(BaseControl):
    """Campo de texto de una línea."""
    type: Literal["InputText"] = "InputText"
    options: TextInputOptions = Field(default_factory=TextInputOptions)
    value: Optional[str] = None


class TextAreaControl(BaseControl):
    """Campo de texto multilínea."""
    type: Literal["TextArea"] = "TextArea"
    options: TextAreaOptions = Field(default_factory=TextAreaOptions)
    value: Optional[str] = None


class CheckboxControl(BaseControl):
    """Checkbox booleano o grupo de checkboxes."""
    type: Literal["Checkbox"] = "Checkbox"
    options: CheckboxOptions = Field(default_factory=CheckboxOptions)
    value: Union[bool, list[Any], None] = None

    @property
    def is_group(self) -> bool:
        return self.options.mode == CheckboxMode.GROUP


class RadioControl(BaseControl):
    """Grupo de botones de radio (selección única)."""
    type: Literal["Radio"] = "Radio"
    group_name: str = Field(default_factory=generate_group_name)
    options: RadioOptions = Field(default_factory=RadioOptions)


class DatePickerControl(BaseControl):
    """Selector de fecha (valor ISO)."""
    type: Literal["DatePicker"] = "DatePicker"
    options: DatePickerOptions = Field(default_factory=DatePickerOptions)
    value: Optional[str] = None


class TimePickerControl(BaseControl):
    """Selector de hora (valor HH:MM)."""
    type: Literal["TimePicker"] = "TimePicker"
    options: TimePickerOptions = Field(default_factory=TimePickerOptions)
    value: Optional[str] = None


class NumberInputControl(BaseControl):
    """Campo numérico."""
    type: Literal["InputNumber"] = "InputNumber"
    options: NumberInputOptions = Field(default_factory=NumberInputOptions)
    value: Optional[float] = None


class SelectControl(BaseControl):
    """Desplegable de selección única."""
    type: Literal["Select"] = "Select"
    options: SelectOptions = Field(default_factory=SelectOptions)


class MultiSelectControl(BaseControl):
    """Desplegable de selección múltiple."""
    type: Literal["MultiSelect"] = "MultiSelect"
    options: MultiSelectOptions = Field(default_factory=MultiSelectOptions)
    value: list[Any] = Field(default_factory=list)


class ListBoxControl(BaseControl):
    """Lista de opciones visible (simple o múltiple)."""
    type: Literal["ListBox"] = "ListBox"
    options: ListBoxOptions = Field(default_factory=ListBoxOptions)


class SelectButtonControl(BaseControl):
    """Botonera de selección."""
    type: Literal["SelectButton"] = "SelectButton"
    options: SelectButtonOptions = Field(default_factory=SelectButtonOptions)


class Column(DocumentModel):
    """
    Una columna de un control Columns.

    Envuelve exactamente un contenedor. `container` solo puede faltar en
    datos externos mal formados; la validación lo reporta.
    """
    container: Optional["Container"] = None


class ColumnsControl(BaseControl):
    """
    Control de diseño con N columnas.

    La cantidad de columnas se fija al crear el control.
    """
    type: Literal["Columns"] = "Columns"
    title: str = "Columns"
    options: Optional[ControlOptions] = None
    columns: tuple[Column, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.columns)


Control = Annotated[
    Union[
        TextInputControl,
        TextAreaControl,
        CheckboxControl,
        RadioControl,
        DatePickerControl,
        TimePickerControl,
        NumberInputControl,
        SelectControl,
        MultiSelectControl,
        ListBoxControl,
        SelectButtonControl,
        ColumnsControl,
    ],
    Field(discriminator="type"),
]


class Container(DocumentModel):
    """Secuencia ordenada de controles."""
    controls: tuple[Control, ...] = ()

    @property
    def ids(self) -> list[str]:
        return [control.id for control in self.controls]

    def index_of(self, control_id: str) -> int:
        """Posición del control en este contenedor, -1 si no está."""
        for i, control in enumerate(self.controls):
            if control.id == control_id:
                return i
        return -1

    def with_controls(self, controls) -> "Container":
        """Copia del contenedor con otra secuencia de controles."""
        return self.model_copy(update={"controls": tuple(controls)})


Column.model_rebuild()
ColumnsControl.model_rebuild()
Container.model_rebuild()

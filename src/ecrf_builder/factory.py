"""
Fábrica de controles.

Crea controles concretos a partir de una etiqueta de tipo y un dict de
opciones. Ningún otro componente construye controles directamente.

Capas de opciones (de menor a mayor prioridad):
    valores por defecto de la librería < valores por defecto de la variante
    < opciones del llamador
"""

import logging
from typing import Any, Callable, Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from ecrf_builder.catalog import get_display_name
from ecrf_builder.config import (
    BuilderConfig,
    CheckboxMode,
    ControlCategory,
    ControlType,
    get_config,
)
from ecrf_builder.models import (
    CheckboxControl,
    CheckboxOptions,
    Column,
    ColumnsControl,
    Container,
    Control,
    DatePickerControl,
    DatePickerOptions,
    ListBoxControl,
    ListBoxOptions,
    MultiSelectControl,
    MultiSelectOptions,
    NumberInputControl,
    NumberInputOptions,
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
    generate_group_name,
)

logger = logging.getLogger(__name__)

Builder = Callable[[dict], Control]

DEFAULT_CHOICES = (
    {"label": "Option 1", "value": "option1"},
    {"label": "Option 2", "value": "option2"},
)

# Claves aceptadas para la lista de opciones; las específicas de cada
# variante tienen prioridad sobre "choices"
CHOICE_KEYS = (
    "radio_options",
    "select_options",
    "list_options",
    "select_button_options",
    "choices",
)

CONTROL_GROUPS: dict[ControlCategory, list[ControlType]] = {
    ControlCategory.BASIC: [
        ControlType.INPUT_TEXT,
        ControlType.TEXT_AREA,
        ControlType.INPUT_NUMBER,
        ControlType.CHECKBOX,
        ControlType.RADIO,
        ControlType.SELECT,
        ControlType.SELECT_BUTTON,
    ],
    ControlCategory.ADVANCED: [
        ControlType.DATE_PICKER,
        ControlType.TIME_PICKER,
        ControlType.MULTISELECT,
        ControlType.LIST_BOX,
    ],
    ControlCategory.LAYOUT: [ControlType.COLUMNS],
}


def _pop_first(data: dict, *keys: str, default: Any = None) -> Any:
    """Extrae (y elimina) el primer valor presente entre varias claves."""
    found = default
    missing = object()
    for key in keys:
        value = data.pop(key, missing)
        if value is not missing and found is default:
            found = value
    return found


def _coerce_choices(raw) -> list[dict]:
    """Normaliza una lista de opciones (dicts, OptionItem o valores simples)."""
    choices = []
    for item in raw or []:
        if isinstance(item, dict):
            choices.append(item)
        elif hasattr(item, "label"):
            choices.append({"label": item.label, "value": item.value})
        else:
            choices.append({"label": str(item), "value": item})
    return choices


class ControlFactory:
    """
    Crea controles desde una etiqueta de tipo.

    La tabla de despacho tipo -> constructor se arma en el constructor de la
    fábrica; puede inyectarse una tabla propia (útil en tests).
    """

    def __init__(
        self,
        builders: Optional[dict[ControlType, Builder]] = None,
        config: Optional[BuilderConfig] = None,
    ):
        self.config = config or get_config()
        if builders is None:
            builders = self._default_builders()
        self._builders: dict[ControlType, Builder] = dict(builders)

    def _default_builders(self) -> dict[ControlType, Builder]:
        return {
            ControlType.INPUT_TEXT: self._build_text_input,
            ControlType.TEXT_AREA: self._build_text_area,
            ControlType.CHECKBOX: self._build_checkbox,
            ControlType.RADIO: self._build_radio,
            ControlType.DATE_PICKER: self._build_date_picker,
            ControlType.TIME_PICKER: self._build_time_picker,
            ControlType.INPUT_NUMBER: self._build_number_input,
            ControlType.SELECT: self._build_select,
            ControlType.MULTISELECT: self._build_multiselect,
            ControlType.LIST_BOX: self._build_list_box,
            ControlType.SELECT_BUTTON: self._build_select_button,
            ControlType.COLUMNS: self._build_columns,
        }

    # ========================================================================
    # API pública
    # ========================================================================

    def create_control(self, type_tag: str, options: Optional[dict] = None) -> Control:
        """
        Crea un control del tipo indicado.

        Args:
            type_tag: Etiqueta de tipo (ej: "InputText", "Columns")
            options: Opciones del llamador (camelCase o snake_case; las
                claves se normalizan a snake_case)

        Returns:
            Nuevo control con ID único. Un tipo desconocido no es un error:
            se registra una advertencia y se crea un campo de texto.
        """
        caller = {to_snake(k): v for k, v in (options or {}).items() if v is not None}
        merged = {**self._library_defaults(type_tag)}

        builder = None
        try:
            control_type = ControlType(type_tag)
            builder = self._builders.get(control_type)
        except ValueError:
            control_type = None

        if builder is None:
            logger.warning(
                "Tipo de control desconocido: %s, se crea %s",
                type_tag, ControlType.INPUT_TEXT.value,
            )
            merged.update(caller)
            return self._build_text_input(self._coerce_to_text_input(merged))

        merged.update(self._variant_defaults(control_type))
        merged.update(caller)
        return builder(merged)

    def duplicate(self, control: Control) -> Control:
        """
        Duplica un control pasando sus opciones copiadas por la fábrica.

        El duplicado recibe un ID nuevo y se reinicia su valor:
        - variantes de valor único: None
        - multiselect, grupo de checkboxes, listas múltiples: lista vacía
        - radio: además se regenera el nombre de grupo
        - columns: mismas columnas, vacías
        """
        match control:
            case ColumnsControl():
                return self.create_control(
                    ControlType.COLUMNS,
                    {"title": control.title, "column_count": control.column_count},
                )
            case RadioControl():
                group_name = generate_group_name()
                while group_name == control.group_name:
                    group_name = generate_group_name()
                return self.create_control(
                    control.type,
                    {**self._copy_options(control), "group_name": group_name},
                )
            case MultiSelectControl():
                reset_value = []
            case CheckboxControl():
                reset_value = [] if control.is_group else None
            case ListBoxControl() | SelectButtonControl():
                reset_value = [] if control.options.multiple else None
            case _:
                reset_value = None

        duplicated = self.create_control(control.type, self._copy_options(control))
        return duplicated.model_copy(update={"value": reset_value})

    def available_types(self) -> list[ControlType]:
        """Tipos con constructor registrado."""
        return [t for t in ControlType if t in self._builders]

    def control_groups(self) -> dict[ControlCategory, list[ControlType]]:
        """Tipos agrupados por categoría para la caja de herramientas."""
        return {
            category: [t for t in types if t in self._builders]
            for category, types in CONTROL_GROUPS.items()
        }

    # ========================================================================
    # Capas de opciones
    # ========================================================================

    def _library_defaults(self, type_tag: str) -> dict:
        display = get_display_name(type_tag)
        return {"name": display, "title": display, "required": False}

    def _variant_defaults(self, control_type: ControlType) -> dict:
        match control_type:
            case ControlType.RADIO | ControlType.SELECT_BUTTON:
                return {"choices": [dict(c) for c in DEFAULT_CHOICES]}
            case ControlType.CHECKBOX:
                return {"mode": CheckboxMode.BINARY}
            case ControlType.COLUMNS:
                return {
                    "title": "Columns",
                    "column_count": self.config.default_column_count,
                }
            case _:
                return {}

    @staticmethod
    def _coerce_to_text_input(options: dict) -> dict:
        """Conserva solo las opciones que encajan en un campo de texto."""
        coerced = {}
        for key, value in options.items():
            if key in ("id", "title", "value"):
                if isinstance(value, str):
                    coerced[key] = value
                continue
            if key not in TextInputOptions.model_fields:
                continue
            try:
                TextInputOptions.model_validate({key: value})
            except ValidationError:
                logger.debug(
                    "Opción descartada para %s: %s=%r", ControlType.INPUT_TEXT.value, key, value
                )
                continue
            coerced[key] = value
        return coerced

    @staticmethod
    def _copy_options(control: Control) -> dict:
        data = control.options.model_dump() if control.options is not None else {}
        data["title"] = control.title
        return data

    # ========================================================================
    # Constructores por variante
    # ========================================================================

    @staticmethod
    def _split(options: dict) -> tuple[dict, dict]:
        """Separa los campos del control de los de sus opciones."""
        data = dict(options)
        fields = {}
        for key in ("id", "title", "value"):
            if key in data:
                fields[key] = data.pop(key)
        choices = _pop_first(data, *CHOICE_KEYS)
        if choices is not None:
            data["choices"] = _coerce_choices(choices)
        return fields, data

    def _build_text_input(self, options: dict) -> TextInputControl:
        fields, data = self._split(options)
        return TextInputControl(options=TextInputOptions.model_validate(data), **fields)

    def _build_text_area(self, options: dict) -> TextAreaControl:
        fields, data = self._split(options)
        return TextAreaControl(options=TextAreaOptions.model_validate(data), **fields)

    def _build_checkbox(self, options: dict) -> CheckboxControl:
        fields, data = self._split(options)
        return CheckboxControl(options=CheckboxOptions.model_validate(data), **fields)

    def _build_radio(self, options: dict) -> RadioControl:
        fields, data = self._split(options)
        group_name = data.pop("group_name", None)
        if group_name:
            fields["group_name"] = group_name
        return RadioControl(options=RadioOptions.model_validate(data), **fields)

    def _build_date_picker(self, options: dict) -> DatePickerControl:
        fields, data = self._split(options)
        return DatePickerControl(options=DatePickerOptions.model_validate(data), **fields)

    def _build_time_picker(self, options: dict) -> TimePickerControl:
        fields, data = self._split(options)
        return TimePickerControl(options=TimePickerOptions.model_validate(data), **fields)

    def _build_number_input(self, options: dict) -> NumberInputControl:
        fields, data = self._split(options)
        return NumberInputControl(options=NumberInputOptions.model_validate(data), **fields)

    def _build_select(self, options: dict) -> SelectControl:
        fields, data = self._split(options)
        return SelectControl(options=SelectOptions.model_validate(data), **fields)

    def _build_multiselect(self, options: dict) -> MultiSelectControl:
        fields, data = self._split(options)
        if fields.get("value") is None:
            fields.pop("value", None)
        return MultiSelectControl(options=MultiSelectOptions.model_validate(data), **fields)

    def _build_list_box(self, options: dict) -> ListBoxControl:
        fields, data = self._split(options)
        return ListBoxControl(options=ListBoxOptions.model_validate(data), **fields)

    def _build_select_button(self, options: dict) -> SelectButtonControl:
        fields, data = self._split(options)
        return SelectButtonControl(options=SelectButtonOptions.model_validate(data), **fields)

    def _build_columns(self, options: dict) -> ColumnsControl:
        fields, data = self._split(options)
        count = int(data.pop("column_count", self.config.default_column_count))
        if count < 1:
            raise ValueError(f"Cantidad de columnas inválida: {count}")
        fields.pop("value", None)
        columns = tuple(Column(container=Container()) for _ in range(count))
        return ColumnsControl(columns=columns, **fields)

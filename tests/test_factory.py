"""
Tests para la fábrica de controles (factory.py).
"""

import logging

import pytest

from ecrf_builder.catalog import get_display_name
from ecrf_builder.config import BuilderConfig, CheckboxMode, ControlCategory, ControlType
from ecrf_builder.factory import ControlFactory
from ecrf_builder.models import (
    CheckboxControl,
    Column,
    ColumnsControl,
    Container,
    ListBoxControl,
    MultiSelectControl,
    NumberInputControl,
    RadioControl,
    SelectButtonControl,
    SelectControl,
    TextInputControl,
)


class TestCreateControl:
    """Tests para create_control."""

    @pytest.mark.parametrize("control_type", list(ControlType))
    def test_creates_every_type(self, factory, control_type):
        control = factory.create_control(control_type)
        assert control.type == control_type.value
        assert control.title == get_display_name(control_type)

    def test_library_defaults(self, factory):
        control = factory.create_control("InputText")
        assert control.title == "Input Text"
        assert control.options.name == "Input Text"
        assert control.options.required is False

    def test_caller_options_win(self, factory):
        control = factory.create_control(
            "InputText", {"title": "Nombre", "placeholder": "Juan", "required": True}
        )
        assert control.title == "Nombre"
        assert control.options.name == "Input Text"
        assert control.options.placeholder == "Juan"
        assert control.options.required is True

    def test_camel_case_options(self, factory):
        control = factory.create_control("TextArea", {"helperText": "ayuda", "maxLength": 200})
        assert control.options.helper_text == "ayuda"
        assert control.options.max_length == 200

    def test_none_options_ignored(self, factory):
        control = factory.create_control("InputText", {"title": None})
        assert control.title == "Input Text"

    def test_unique_ids(self, factory):
        ids = {factory.create_control("InputText").id for _ in range(200)}
        assert len(ids) == 200

    def test_id_prefix(self, factory):
        assert factory.create_control("DatePicker").id.startswith("date-picker-")

    def test_initial_value(self, factory):
        control = factory.create_control("InputNumber", {"value": 42})
        assert isinstance(control, NumberInputControl)
        assert control.value == 42


class TestChoiceDefaults:
    """Tests para opciones de controles con lista de opciones."""

    def test_radio_default_choices(self, factory):
        radio = factory.create_control("Radio")
        assert [c.value for c in radio.options.choices] == ["option1", "option2"]

    def test_select_button_default_choices(self, factory):
        control = factory.create_control("SelectButton")
        assert len(control.options.choices) == 2

    def test_select_has_no_default_choices(self, factory):
        assert factory.create_control("Select").options.choices == ()

    def test_checkbox_default_mode(self, factory):
        assert factory.create_control("Checkbox").options.mode == CheckboxMode.BINARY

    def test_variant_key_for_choices(self, factory):
        control = factory.create_control(
            "Select", {"selectOptions": [{"label": "A", "value": "a"}]}
        )
        assert isinstance(control, SelectControl)
        assert control.options.choices[0].label == "A"

    def test_radio_options_override_defaults(self, factory):
        radio = factory.create_control("Radio", {"radioOptions": [{"label": "Sí", "value": "y"}]})
        assert [c.value for c in radio.options.choices] == ["y"]

    def test_plain_values_as_choices(self, factory):
        control = factory.create_control("ListBox", {"choices": ["a", "b"]})
        assert [(c.label, c.value) for c in control.options.choices] == [("a", "a"), ("b", "b")]


class TestUnknownType:
    """Tests para tipos desconocidos."""

    def test_unknown_falls_back_to_text_input(self, factory, caplog):
        with caplog.at_level(logging.WARNING, logger="ecrf_builder.factory"):
            control = factory.create_control("Bogus", {"placeholder": "p", "rows": 5})

        assert isinstance(control, TextInputControl)
        assert control.type == "InputText"
        assert control.title == "Bogus"
        assert control.options.placeholder == "p"
        assert "Bogus" in caplog.text

    def test_unknown_type_drops_incompatible_options(self, factory, caplog):
        with caplog.at_level(logging.WARNING, logger="ecrf_builder.factory"):
            control = factory.create_control("Bogus", {
                "value": ["a", "b"],
                "selectOptions": [{"label": "A", "value": "a"}],
                "maxLength": "mucho",
                "placeholder": "p",
            })

        assert isinstance(control, TextInputControl)
        assert control.value is None
        assert control.options.max_length is None
        assert control.options.placeholder == "p"
        assert "Bogus" in caplog.text

    def test_unknown_type_keeps_text_value(self, factory):
        control = factory.create_control("Bogus", {"value": "hola"})
        assert control.value == "hola"

    def test_missing_builder_falls_back(self, caplog):
        factory = ControlFactory(builders={})
        with caplog.at_level(logging.WARNING, logger="ecrf_builder.factory"):
            control = factory.create_control("Radio")
        assert isinstance(control, TextInputControl)
        assert "Radio" in caplog.text

    def test_injected_builder(self):
        factory = ControlFactory(builders={
            ControlType.INPUT_TEXT: lambda options: TextInputControl(id="fixed", title=options["title"]),
        })
        control = factory.create_control("InputText", {"title": "X"})
        assert control.id == "fixed"
        assert control.title == "X"
        assert factory.available_types() == [ControlType.INPUT_TEXT]


class TestColumns:
    """Tests para la creación de Columns."""

    def test_default_count(self, factory):
        control = factory.create_control("Columns")
        assert isinstance(control, ColumnsControl)
        assert control.column_count == 2
        assert all(column.container == Container() for column in control.columns)

    def test_column_count_option(self, factory):
        assert factory.create_control("Columns", {"columnCount": 3}).column_count == 3
        assert factory.create_control("Columns", {"column_count": 4}).column_count == 4

    def test_default_count_from_config(self):
        factory = ControlFactory(config=BuilderConfig(default_column_count=4))
        assert factory.create_control("Columns").column_count == 4

    def test_invalid_count(self, factory):
        with pytest.raises(ValueError):
            factory.create_control("Columns", {"columnCount": 0})


class TestDuplicate:
    """Tests para duplicate."""

    def test_single_value_reset(self, factory):
        original = factory.create_control("InputText", {"title": "Nombre", "value": "Ana"})
        duplicate = factory.duplicate(original)

        assert duplicate.id != original.id
        assert duplicate.title == "Nombre"
        assert duplicate.options == original.options
        assert duplicate.value is None

    def test_radio_group_name_regenerated(self, factory):
        """Duplicar un radio regenera el nombre de grupo y conserva las opciones."""
        radio = factory.create_control("Radio", {"groupName": "g1", "title": "Sexo"})
        assert radio.group_name == "g1"

        duplicate = factory.duplicate(radio)

        assert isinstance(duplicate, RadioControl)
        assert duplicate.id != radio.id
        assert duplicate.group_name != "g1"
        assert duplicate.group_name.startswith("radio-group-")
        assert duplicate.options.choices == radio.options.choices

    def test_multiselect_reset_to_empty_list(self, factory):
        original = factory.create_control("MultiSelect", {"choices": ["a"], "value": ["a"]})
        duplicate = factory.duplicate(original)
        assert isinstance(duplicate, MultiSelectControl)
        assert duplicate.value == []

    def test_checkbox_group_reset_to_empty_list(self, factory):
        original = factory.create_control(
            "Checkbox", {"mode": "group", "choices": ["a", "b"], "value": ["a"]}
        )
        duplicate = factory.duplicate(original)
        assert isinstance(duplicate, CheckboxControl)
        assert duplicate.value == []

    def test_binary_checkbox_reset_to_none(self, factory):
        original = factory.create_control("Checkbox", {"value": True})
        assert factory.duplicate(original).value is None

    def test_multiple_list_reset_to_empty_list(self, factory):
        listbox = factory.create_control("ListBox", {"multiple": True, "value": ["a"]})
        buttons = factory.create_control("SelectButton", {"multiple": True, "value": ["x"]})
        assert isinstance(listbox, ListBoxControl)
        assert isinstance(buttons, SelectButtonControl)
        assert factory.duplicate(listbox).value == []
        assert factory.duplicate(buttons).value == []

    def test_columns_duplicate_is_empty(self, factory):
        columns = factory.create_control("Columns", {"columnCount": 3, "title": "Layout"})
        filled = columns.model_copy(update={
            "columns": (
                Column(container=Container(controls=(factory.create_control("InputText"),))),
                *columns.columns[1:],
            )
        })

        duplicate = factory.duplicate(filled)

        assert isinstance(duplicate, ColumnsControl)
        assert duplicate.id != filled.id
        assert duplicate.title == "Layout"
        assert duplicate.column_count == 3
        assert all(column.container.controls == () for column in duplicate.columns)


class TestTypeGroups:
    """Tests para available_types y control_groups."""

    def test_available_types(self, factory):
        assert factory.available_types() == list(ControlType)

    def test_control_groups(self, factory):
        groups = factory.control_groups()
        assert set(groups) == set(ControlCategory)
        assert groups[ControlCategory.LAYOUT] == [ControlType.COLUMNS]
        assert sum(len(types) for types in groups.values()) == len(ControlType)

"""
Tests para el enrutador de eventos de soltar y las notificaciones.
"""

import logging

import pytest

from ecrf_builder.config import ControlType
from ecrf_builder.drop_router import DropEvent, DropRouter, ToolboxTemplate
from ecrf_builder.models import Form, TextInputControl
from ecrf_builder.notifications import (
    LoggingNotifier,
    Notifier,
    cancelled_message,
    success_message,
)
from ecrf_builder.state import FormStateStore
from ecrf_builder.tree import find_container, find_control


class RecordingNotifier:
    """Notificador que registra los avisos recibidos."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def success(self, message):
        self.messages.append(("success", message))

    def info(self, message):
        self.messages.append(("info", message))

    def error(self, message):
        self.messages.append(("error", message))

    def warn(self, message):
        self.messages.append(("warn", message))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def state(repository, sample_form):
    return FormStateStore(sample_form, repository=repository)


@pytest.fixture
def router(state, notifier):
    return DropRouter(state, notifier)


def toolbox_drop(type_tag, target="main-canvas", index=0, **options) -> DropEvent:
    return DropEvent(
        source_container_id="toolbox-palette",
        target_container_id=target,
        previous_index=0,
        current_index=index,
        payload=ToolboxTemplate(type=type_tag, options=options),
    )


def move_drop(state, control_id, source, target, previous, current) -> DropEvent:
    return DropEvent(source, target, previous, current, find_control(state.form, control_id))


# ============================================================================
# Creación desde la caja de herramientas
# ============================================================================

class TestToolboxDrop:
    """Tests para soltar elementos de la caja de herramientas."""

    def test_creates_and_inserts(self, router, state, notifier):
        control = router.handle_drop(toolbox_drop("InputText", index=1))
        assert state.form.container.ids[1] == control.id
        assert notifier.messages == [("success", "Input text field added successfully")]

    def test_template_options(self, router):
        control = router.handle_drop(toolbox_drop("TextArea", title="Notas", rows=5))
        assert control.title == "Notas"
        assert control.options.rows == 5

    def test_into_column(self, router, state):
        control = router.handle_drop(toolbox_drop("Checkbox", target="column-1-cols"))
        assert find_container(state.form, "column-1-cols").ids == [control.id]

    def test_unknown_type_creates_text_input(self, router, notifier):
        control = router.handle_drop(toolbox_drop("Signature"))
        assert isinstance(control, TextInputControl)
        assert notifier.messages == [("success", "Signature added successfully")]

    def test_invalid_template_options(self, router, state, notifier):
        before = state.form
        assert router.handle_drop(toolbox_drop("TextArea", rows=0)) is None
        assert state.form is before
        assert notifier.messages[0][0] == "error"

    def test_toolbox_source_with_control_payload(self, router, state):
        event = DropEvent("toolbox-basic", "main-canvas", 0, 0, TextInputControl(title="Plantilla"))
        control = router.handle_drop(event)
        assert state.form.container.ids[0] == control.id


class TestConfigureDialog:
    """Tests para el diálogo de configuración."""

    def test_dialog_result_inserted(self, state, notifier):
        def dialog(control):
            return control.model_copy(update={"title": "Configurado"})

        router = DropRouter(state, notifier, dialogs={ControlType.RADIO: dialog})
        control = router.handle_drop(toolbox_drop("Radio"))
        assert find_control(state.form, control.id).title == "Configurado"

    def test_dialog_cancelled(self, state, notifier):
        router = DropRouter(state, notifier, dialogs={ControlType.SELECT: lambda control: None})
        before = state.form

        assert router.handle_drop(toolbox_drop("Select")) is None
        assert state.form is before
        assert not state.can_undo
        assert notifier.messages == [("info", "Select creation cancelled")]

    def test_dialog_only_for_its_type(self, state, notifier):
        router = DropRouter(state, notifier, dialogs={ControlType.SELECT: lambda control: None})
        assert router.handle_drop(toolbox_drop("InputText")) is not None


class TestColumnsDrop:
    """Tests para soltar un control Columns."""

    def test_default_count(self, router, notifier):
        control = router.handle_drop(toolbox_drop("Columns"))
        assert control.column_count == 2
        assert notifier.messages == [("success", "Column with 2 sub-columns created successfully")]

    def test_prompted_count(self, state, notifier):
        router = DropRouter(state, notifier, column_prompt=lambda: 4)
        control = router.handle_drop(toolbox_drop("Columns"))
        assert control.column_count == 4
        assert find_container(state.form, f"column-3-{control.id}") is not None

    def test_prompt_cancelled(self, state, notifier):
        router = DropRouter(state, notifier, column_prompt=lambda: None)
        before = state.form
        assert router.handle_drop(toolbox_drop("Columns")) is None
        assert state.form is before
        assert notifier.messages == [("info", "Column creation cancelled")]

    @pytest.mark.parametrize("count", [0, -2])
    def test_invalid_prompted_count(self, state, notifier, count):
        router = DropRouter(state, notifier, column_prompt=lambda: count)
        before = state.form

        assert router.handle_drop(toolbox_drop("Columns")) is None
        assert state.form is before
        assert not state.can_undo
        level, message = notifier.messages[-1]
        assert level == "error"
        assert str(count) in message

    def test_nesting_limit_warns(self, router, state, notifier):
        inner = router.handle_drop(toolbox_drop("Columns", target="column-0-cols"))
        before = state.form

        result = router.handle_drop(toolbox_drop("Columns", target=f"column-0-{inner.id}"))

        assert result is None
        assert state.form is before
        level, message = notifier.messages[-1]
        assert level == "warn"
        assert "Maximum column nesting level (2)" in message


# ============================================================================
# Movimientos
# ============================================================================

class TestContainerMove:
    """Tests para soltar controles ya existentes."""

    def test_reorder_same_container(self, router, state):
        moved = router.handle_drop(move_drop(state, "name", "main-canvas", "main-canvas", 0, 2))
        assert moved.id == "name"
        assert state.form.container.ids == ["cols", "sex", "name"]

    def test_same_container_with_alias(self, router, state):
        router.handle_drop(move_drop(state, "sex", "form-canvas", "main-canvas", 2, 0))
        assert state.form.container.ids == ["sex", "name", "cols"]

    def test_move_between_containers(self, router, state, notifier):
        moved = router.handle_drop(move_drop(state, "age", "column-0-cols", "column-1-cols", 0, 0))
        assert moved.id == "age"
        assert find_container(state.form, "column-0-cols").ids == []
        assert find_container(state.form, "column-1-cols").ids == ["age"]
        assert notifier.messages == []

    def test_invalid_move_notifies_error(self, router, state, notifier, caplog):
        before = state.form
        with caplog.at_level(logging.WARNING, logger="ecrf_builder.drop_router"):
            result = router.handle_drop(
                move_drop(state, "cols", "main-canvas", "column-0-cols", 1, 0)
            )
        assert result is None
        assert state.form is before
        assert notifier.messages[0][0] == "error"
        assert "cols" in caplog.text

    def test_unknown_target_notifies_error(self, router, notifier):
        event = DropEvent("main-canvas", "column-7-nope", 0, 0, TextInputControl(id="name"))
        assert router.handle_drop(event) is None
        assert notifier.messages[0][0] == "error"


# ============================================================================
# Notificaciones
# ============================================================================

class TestNotifications:
    """Tests para los textos y el notificador por defecto."""

    def test_success_messages(self):
        assert success_message("Radio") == "Radio button field added successfully"
        assert success_message(ControlType.COLUMNS, 3) == "Column with 3 sub-columns created successfully"
        assert success_message("Foo") == "Foo added successfully"

    def test_cancelled_messages(self):
        assert cancelled_message("InputNumber") == "Number input creation cancelled"
        assert cancelled_message("Foo") == "Foo creation cancelled"

    def test_logging_notifier(self, caplog):
        notifier: Notifier = LoggingNotifier()
        with caplog.at_level(logging.INFO, logger="ecrf_builder.notifications"):
            notifier.success("listo")
            notifier.warn("cuidado")
            notifier.error("falló")

        levels = [(record.levelname, record.getMessage()) for record in caplog.records]
        assert levels == [("INFO", "listo"), ("WARNING", "cuidado"), ("ERROR", "falló")]

    def test_router_default_notifier(self, repository, caplog):
        router = DropRouter(FormStateStore(Form(), repository=repository))
        with caplog.at_level(logging.INFO, logger="ecrf_builder.notifications"):
            router.handle_drop(toolbox_drop("DatePicker"))
        assert "Date picker field added successfully" in caplog.text

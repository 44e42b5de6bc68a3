"""
Enrutador de eventos de soltar (drag & drop).

Traduce un evento de la interfaz a una operación sobre el estado:
- desde la caja de herramientas: crear el control (con diálogo de
  configuración opcional) e insertarlo;
- dentro del mismo contenedor: reordenar;
- entre contenedores: mover.

Los errores estructurales y de creación se notifican y no se propagan.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ecrf_builder.config import TOOLBOX_PREFIX, ControlType
from ecrf_builder.exceptions import FormTreeError, NestingLimitError
from ecrf_builder.models import ColumnsControl, Control
from ecrf_builder.notifications import (
    LoggingNotifier,
    Notifier,
    cancelled_message,
    success_message,
)
from ecrf_builder.state import FormStateStore
from ecrf_builder.tree.addressing import canonical_container_id
from ecrf_builder.tree.traversal import find_control

logger = logging.getLogger(__name__)

# Diálogo de configuración: recibe el control recién creado y retorna el
# control configurado, o None si el usuario cancela
ConfigureDialog = Callable[[Control], Optional[Control]]

# Pregunta la cantidad de columnas; None si el usuario cancela
ColumnCountPrompt = Callable[[], Optional[int]]


@dataclass(frozen=True)
class ToolboxTemplate:
    """Elemento de la caja de herramientas: tipo + opciones por defecto."""
    type: str
    options: dict = field(default_factory=dict)


@dataclass(frozen=True)
class DropEvent:
    """Evento de soltar emitido por la interfaz."""
    source_container_id: str
    target_container_id: str
    previous_index: int
    current_index: int
    payload: Union[ToolboxTemplate, Control]

    @property
    def is_toolbox_drop(self) -> bool:
        return (
            isinstance(self.payload, ToolboxTemplate)
            or self.source_container_id.startswith(TOOLBOX_PREFIX)
        )

    @property
    def is_same_container(self) -> bool:
        return (
            canonical_container_id(self.source_container_id)
            == canonical_container_id(self.target_container_id)
        )


class DropRouter:
    """Aplica eventos de soltar sobre un FormStateStore."""

    def __init__(
        self,
        state: FormStateStore,
        notifier: Optional[Notifier] = None,
        dialogs: Optional[dict[ControlType, ConfigureDialog]] = None,
        column_prompt: Optional[ColumnCountPrompt] = None,
    ):
        """
        Args:
            state: Estado del formulario
            notifier: Destino de avisos (default: LoggingNotifier)
            dialogs: Diálogo de configuración por tipo; sin diálogo se
                aceptan los valores por defecto de la fábrica
            column_prompt: Pregunta de cantidad de columnas; sin ella se usa
                la cantidad por defecto
        """
        self.state = state
        self.notifier = notifier or LoggingNotifier()
        self.dialogs = dict(dialogs or {})
        self.column_prompt = column_prompt

    def handle_drop(self, event: DropEvent) -> Optional[Control]:
        """
        Procesa un evento de soltar.

        Returns:
            Control creado o movido; None si se canceló o falló
        """
        logger.debug(
            "Drop: %s -> %s (%s -> %s)",
            event.source_container_id, event.target_container_id,
            event.previous_index, event.current_index,
        )
        try:
            if event.is_toolbox_drop:
                return self._handle_toolbox_drop(event)
            return self._handle_container_move(event)
        except NestingLimitError as e:
            self.notifier.warn(str(e))
        except FormTreeError as e:
            logger.warning("Drop rechazado: %s", e)
            self.notifier.error(str(e))
        except ValueError as e:
            logger.warning("No se pudo crear el control: %s", e)
            self.notifier.error(str(e))
        return None

    # ========================================================================
    # Creación desde la caja de herramientas
    # ========================================================================

    def _handle_toolbox_drop(self, event: DropEvent) -> Optional[Control]:
        template = event.payload
        if not isinstance(template, ToolboxTemplate):
            template = ToolboxTemplate(type=template.type)

        if template.type == ControlType.COLUMNS:
            return self._handle_columns_drop(event, template)

        control = self.state.factory.create_control(template.type, template.options)
        dialog = self._dialog_for(template.type)
        if dialog is not None:
            configured = dialog(control)
            if configured is None:
                self.notifier.info(cancelled_message(template.type))
                return None
            control = configured

        self.state.insert_control(event.target_container_id, control, event.current_index)
        self.notifier.success(success_message(template.type))
        return control

    def _handle_columns_drop(
        self, event: DropEvent, template: ToolboxTemplate
    ) -> Optional[Control]:
        options = dict(template.options)
        if self.column_prompt is not None:
            count = self.column_prompt()
            if count is None:
                self.notifier.info(cancelled_message(ControlType.COLUMNS))
                return None
            options["column_count"] = count

        control = self.state.factory.create_control(ControlType.COLUMNS, options)
        self.state.insert_control(event.target_container_id, control, event.current_index)
        count = control.column_count if isinstance(control, ColumnsControl) else 0
        self.notifier.success(success_message(ControlType.COLUMNS, count))
        return control

    def _dialog_for(self, type_tag: str) -> Optional[ConfigureDialog]:
        try:
            return self.dialogs.get(ControlType(type_tag))
        except ValueError:
            return None

    # ========================================================================
    # Movimiento entre contenedores
    # ========================================================================

    def _handle_container_move(self, event: DropEvent) -> Optional[Control]:
        if event.is_same_container:
            self.state.move_within_container(
                event.target_container_id, event.previous_index, event.current_index
            )
        else:
            self.state.move_control(
                event.payload.id,
                event.source_container_id,
                event.target_container_id,
                event.current_index,
            )
        return find_control(self.state.form, event.payload.id)

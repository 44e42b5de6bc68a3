"""
Notificaciones al usuario.

Contrato mínimo (success/info/error/warn) y los textos de los avisos de
creación de controles.
"""

import logging
from typing import Optional, Protocol

from ecrf_builder.config import ControlType

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Destino de notificaciones (toast, consola, log...)."""

    def success(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def warn(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Notificador por defecto: envía los avisos al log."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def success(self, message: str) -> None:
        self.log.info(message)

    def info(self, message: str) -> None:
        self.log.info(message)

    def error(self, message: str) -> None:
        self.log.error(message)

    def warn(self, message: str) -> None:
        self.log.warning(message)


# ============================================================================
# Textos de los avisos
# ============================================================================

SUCCESS_MESSAGES: dict[ControlType, str] = {
    ControlType.INPUT_TEXT: "Input text field added successfully",
    ControlType.TEXT_AREA: "Text area field added successfully",
    ControlType.CHECKBOX: "Checkbox field added successfully",
    ControlType.RADIO: "Radio button field added successfully",
    ControlType.DATE_PICKER: "Date picker field added successfully",
    ControlType.LIST_BOX: "Listbox field added successfully",
    ControlType.INPUT_NUMBER: "Number input field added successfully",
    ControlType.MULTISELECT: "Multiselect field added successfully",
    ControlType.TIME_PICKER: "Time picker field added successfully",
    ControlType.SELECT: "Select field added successfully",
    ControlType.SELECT_BUTTON: "Select button field added successfully",
    ControlType.COLUMNS: "Column with {count} sub-columns created successfully",
}

CANCELLED_MESSAGES: dict[ControlType, str] = {
    ControlType.INPUT_TEXT: "Input text creation cancelled",
    ControlType.TEXT_AREA: "Text area creation cancelled",
    ControlType.CHECKBOX: "Checkbox creation cancelled",
    ControlType.RADIO: "Radio button creation cancelled",
    ControlType.DATE_PICKER: "Date picker creation cancelled",
    ControlType.LIST_BOX: "Listbox creation cancelled",
    ControlType.INPUT_NUMBER: "Number input creation cancelled",
    ControlType.MULTISELECT: "Multiselect creation cancelled",
    ControlType.TIME_PICKER: "Time picker creation cancelled",
    ControlType.SELECT: "Select creation cancelled",
    ControlType.SELECT_BUTTON: "Select button creation cancelled",
    ControlType.COLUMNS: "Column creation cancelled",
}


def _lookup(messages: dict[ControlType, str], type_tag: str) -> Optional[str]:
    try:
        return messages.get(ControlType(type_tag))
    except ValueError:
        return None


def success_message(type_tag: str, column_count: Optional[int] = None) -> str:
    """Aviso de control creado; los tipos sin texto propio usan uno genérico."""
    message = _lookup(SUCCESS_MESSAGES, type_tag)
    if message is None:
        return f"{type_tag} added successfully"
    return message.format(count=column_count if column_count is not None else "")


def cancelled_message(type_tag: str) -> str:
    """Aviso de creación cancelada."""
    return _lookup(CANCELLED_MESSAGES, type_tag) or f"{type_tag} creation cancelled"

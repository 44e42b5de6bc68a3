"""
Contenedor de estado del formulario.

Mantiene el snapshot vigente, lo valida tras cada mutación exitosa y lo
publica de forma síncrona a los suscriptores. Una mutación que falla no
publica nada y deja el estado intacto.
"""

import logging
from typing import Callable, Iterable, Optional

from ecrf_builder.config import ROOT_CONTAINER_ID, BuilderConfig, get_config
from ecrf_builder.factory import ControlFactory
from ecrf_builder.history import SnapshotHistory
from ecrf_builder.models import Control, Form, SavedFormMetadata
from ecrf_builder.storage import FormRepository, get_repository
from ecrf_builder.tree import operations
from ecrf_builder.validation import ValidationReport, validate

logger = logging.getLogger(__name__)

Subscriber = Callable[[Form], None]


class FormStateStore:
    """Estado central del formulario en edición."""

    def __init__(
        self,
        form: Optional[Form] = None,
        repository: Optional[FormRepository] = None,
        factory: Optional[ControlFactory] = None,
        config: Optional[BuilderConfig] = None,
    ):
        """
        Args:
            form: Formulario inicial (default: formulario nuevo vacío)
            repository: Repositorio para guardar/cargar (default: global)
            factory: Fábrica de controles (default: una nueva)
            config: Configuración (default: global)
        """
        self.config = config or get_config()
        self.factory = factory or ControlFactory(config=self.config)
        self._repository = repository
        self.history: SnapshotHistory[Form] = SnapshotHistory(limit=self.config.history_limit)
        self._subscribers: list[Subscriber] = []
        self._form = form or Form()
        self._validation = validate(self._form)
        self.history.initialize(self._form)

    # ========================================================================
    # Lectura y suscripción
    # ========================================================================

    @property
    def form(self) -> Form:
        """Snapshot vigente."""
        return self._form

    @property
    def validation(self) -> ValidationReport:
        """Resultado de validar el snapshot vigente."""
        return self._validation

    @property
    def repository(self) -> FormRepository:
        if self._repository is None:
            self._repository = get_repository()
        return self._repository

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Registra un suscriptor.

        Returns:
            Función que cancela la suscripción
        """
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def validate(self) -> ValidationReport:
        """Vuelve a validar el snapshot vigente."""
        self._validation = validate(self._form)
        return self._validation

    def _publish(self, form: Form, record_history: bool = True) -> None:
        report = validate(form)
        if record_history:
            self.history.push(self._form)
        self._form = form
        self._validation = report
        for callback in list(self._subscribers):
            try:
                callback(form)
            except Exception:
                # El snapshot ya se publicó; los demás suscriptores lo reciben igual
                logger.exception("Error en suscriptor %r", callback)

    # ========================================================================
    # Mutaciones
    # ========================================================================

    def add_control(
        self,
        type_tag: str,
        container_id: str = ROOT_CONTAINER_ID,
        index: Optional[int] = None,
        options: Optional[dict] = None,
    ) -> Control:
        """Crea un control con la fábrica y lo inserta."""
        control = self.factory.create_control(type_tag, options)
        self.insert_control(container_id, control, index)
        return control

    def insert_control(
        self, container_id: str, control: Control, index: Optional[int] = None
    ) -> None:
        form = operations.insert_control(
            self._form, container_id, control, index,
            max_nesting=self.config.max_column_nesting,
        )
        logger.debug("Control %s insertado en %s", control.id, container_id)
        self._publish(form)

    def move_control(
        self,
        control_id: str,
        source_id: str,
        target_id: str,
        target_index: Optional[int] = None,
    ) -> None:
        form = operations.move_control(
            self._form, control_id, source_id, target_id, target_index,
            max_nesting=self.config.max_column_nesting,
        )
        logger.debug("Control %s movido de %s a %s", control_id, source_id, target_id)
        self._publish(form)

    def move_within_container(
        self, container_id: str, previous_index: int, current_index: int
    ) -> None:
        form = operations.move_within_container(
            self._form, container_id, previous_index, current_index
        )
        self._publish(form)

    def reorder_controls(self, container_id: str, new_order: Iterable[str]) -> None:
        form = operations.reorder_controls(self._form, container_id, new_order)
        self._publish(form)

    def update_control(self, control: Control) -> None:
        """Reemplaza la configuración completa de un control existente."""
        form = operations.replace_control(self._form, control)
        self._publish(form)

    def duplicate_control(self, control_id: str) -> Control:
        form, duplicate = operations.duplicate_control(self._form, control_id, self.factory)
        logger.debug("Control %s duplicado como %s", control_id, duplicate.id)
        self._publish(form)
        return duplicate

    def remove_control(self, control_id: str) -> Control:
        form, removed = operations.remove_control(self._form, control_id)
        logger.debug("Control %s eliminado", control_id)
        self._publish(form)
        return removed

    def update_metadata(self, **updates) -> None:
        """Actualiza título, descripción, estado o versión."""
        self._publish(self._form.with_metadata(**updates))

    def reset_to_new_form(self) -> None:
        """Reemplaza el estado por un formulario nuevo y reinicia el historial."""
        form = Form()
        self.history.initialize(form)
        self._publish(form, record_history=False)

    # ========================================================================
    # Historial
    # ========================================================================

    def undo(self) -> bool:
        """Deshace la última mutación. Retorna False si no había nada."""
        previous = self.history.undo(self._form)
        if previous is None:
            return False
        self._publish(previous, record_history=False)
        return True

    def redo(self) -> bool:
        """Rehace la última mutación deshecha. Retorna False si no había nada."""
        following = self.history.redo(self._form)
        if following is None:
            return False
        self._publish(following, record_history=False)
        return True

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    # ========================================================================
    # Persistencia
    # ========================================================================

    def save_form(self, key: Optional[str] = None) -> str:
        """
        Guarda el formulario vigente.

        El snapshot con timestamp actualizado se republica sin entrada de
        historial.

        Returns:
            Clave usada
        """
        storage_key, saved = self.repository.save(self._form, key)
        self._publish(saved, record_history=False)
        return storage_key

    def load_form(self, key: str) -> bool:
        """
        Carga un formulario guardado.

        Returns:
            True si se cargó; False si no existe o está corrupto (el estado
            no cambia)
        """
        form = self.repository.load(key)
        if form is None:
            return False
        self.history.initialize(form)
        self._publish(form, record_history=False)
        return True

    def saved_forms(self) -> list[SavedFormMetadata]:
        return self.repository.list_forms()

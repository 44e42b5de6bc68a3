"""
Repositorio de formularios sobre un almacén clave-valor.

Cada formulario se guarda como JSON (claves camelCase) bajo la clave
'<prefijo><clave>'.
"""

import json
import logging
import time
from typing import Optional

from pydantic import ValidationError

from ecrf_builder.config import get_config
from ecrf_builder.models import Form, SavedFormMetadata
from ecrf_builder.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class FormRepository:
    """Guarda, carga y lista formularios."""

    def __init__(self, store: KeyValueStore, prefix: Optional[str] = None):
        """
        Args:
            store: Almacén clave-valor
            prefix: Prefijo de claves. Default: config.storage_prefix ("ecrf_")
        """
        self.store = store
        self.prefix = prefix if prefix is not None else get_config().storage_prefix

    def _storage_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def save(self, form: Form, key: Optional[str] = None) -> tuple[str, Form]:
        """
        Guarda un formulario.

        Args:
            form: Formulario a guardar
            key: Clave; por defecto el ID del formulario

        Returns:
            (clave usada, formulario con updated_at actualizado)
        """
        storage_key = key or form.id or f"form_{int(time.time() * 1000)}"
        saved = form.touched()
        if not saved.id:
            saved = saved.model_copy(update={"id": storage_key})
        self.store.set(self._storage_key(storage_key), saved.model_dump_json(by_alias=True))
        logger.info("Formulario guardado: %s", storage_key)
        return storage_key, saved

    def load(self, key: str) -> Optional[Form]:
        """
        Carga un formulario.

        Returns:
            Form o None si la clave no existe o los datos están corruptos
        """
        raw = self.store.get(self._storage_key(key))
        if raw is None:
            logger.warning("Formulario no encontrado: %s", key)
            return None
        try:
            return Form.model_validate_json(raw)
        except ValidationError as e:
            logger.error("Error al cargar formulario %s: %s", key, e)
            return None

    def exists(self, key: str) -> bool:
        return self.store.get(self._storage_key(key)) is not None

    def delete(self, key: str) -> bool:
        """Elimina un formulario. Retorna False si no existía."""
        deleted = self.store.delete(self._storage_key(key))
        if deleted:
            logger.info("Formulario eliminado: %s", key)
        return deleted

    def list_forms(self) -> list[SavedFormMetadata]:
        """
        Lista los formularios guardados, más recientes primero.

        Las entradas corruptas se omiten con una advertencia.
        """
        forms = []
        for storage_key in self.store.keys():
            if not storage_key.startswith(self.prefix):
                continue
            key = storage_key[len(self.prefix):]
            try:
                data = json.loads(self.store.get(storage_key) or "")
                forms.append(SavedFormMetadata.model_validate({**data, "key": key}))
            except (json.JSONDecodeError, TypeError, ValidationError):
                logger.warning("No se pudo leer el formulario de la clave %s", storage_key)

        return sorted(forms, key=lambda f: f.updated_at, reverse=True)

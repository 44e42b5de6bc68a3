"""
Persistencia de formularios.

Un repositorio de formularios sobre almacenes clave-valor intercambiables
(memoria o archivo SQLite).
"""

from typing import Optional

from ecrf_builder.storage.base import KeyValueStore, MemoryStore
from ecrf_builder.storage.repository import FormRepository
from ecrf_builder.storage.sqlite import SQLiteStore


_repository: Optional[FormRepository] = None


def get_repository() -> FormRepository:
    """Retorna el repositorio global (SQLite en el directorio de datos)."""
    global _repository
    if _repository is None:
        _repository = FormRepository(SQLiteStore())
    return _repository


def reset_repository() -> None:
    """Reinicia la instancia global (útil para tests)."""
    global _repository
    _repository = None


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "FormRepository",
    "get_repository",
    "reset_repository",
]

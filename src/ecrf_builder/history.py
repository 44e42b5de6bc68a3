"""
Historial lineal de deshacer/rehacer sobre snapshots completos.

Los snapshots son modelos inmutables, así que se guardan por referencia
(comparten estructura entre sí); no se serializa nada.
"""

from collections import deque
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

DEFAULT_HISTORY_LIMIT = 50


class SnapshotHistory(Generic[T]):
    """
    Pilas de deshacer y rehacer.

    Uso típico:
        history.push(estado_antes_de_mutar)
        anterior = history.undo(estado_actual)
        siguiente = history.redo(anterior)
    """

    def __init__(self, limit: Optional[int] = DEFAULT_HISTORY_LIMIT):
        """
        Args:
            limit: Máximo de snapshots en la pila de deshacer (None = sin límite)
        """
        if limit is not None and limit < 1:
            raise ValueError(f"Límite de historial inválido: {limit}")
        self.limit = limit
        self._undo: deque[T] = deque(maxlen=limit)
        self._redo: list[T] = []
        self._initial: Optional[T] = None

    def initialize(self, state: T) -> None:
        """Vacía ambas pilas y registra el estado inicial."""
        self.reset()
        self._initial = state

    def reset(self) -> None:
        """Vacía ambas pilas."""
        self._undo.clear()
        self._redo.clear()

    def push(self, state: T) -> None:
        """Registra un estado previo a una mutación; invalida el rehacer."""
        self._undo.append(state)
        self._redo.clear()

    def undo(self, current: T) -> Optional[T]:
        """
        Retrocede un paso.

        Args:
            current: Estado vigente (pasa a la pila de rehacer)

        Returns:
            Estado anterior o None si no hay nada que deshacer
        """
        if not self._undo:
            return None
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: T) -> Optional[T]:
        """Avanza un paso; None si no hay nada que rehacer."""
        if not self._redo:
            return None
        self._undo.append(current)
        return self._redo.pop()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def initial_state(self) -> Optional[T]:
        return self._initial

    def debug_info(self) -> dict:
        """Resumen del estado de las pilas."""
        return {
            "undo_size": len(self._undo),
            "redo_size": len(self._redo),
            "limit": self.limit,
            "can_undo": self.can_undo,
            "can_redo": self.can_redo,
        }

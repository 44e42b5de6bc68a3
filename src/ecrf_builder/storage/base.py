"""
Contrato del almacén clave-valor y una implementación en memoria.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Almacén clave-valor de texto (síncrono)."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...

    def keys(self) -> list[str]:
        ...


class MemoryStore:
    """Almacén en memoria (tests y sesiones efímeras)."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)

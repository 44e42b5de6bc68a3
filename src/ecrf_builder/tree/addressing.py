"""
Esquema de identificadores de contenedores.

- Contenedor raíz: "main-canvas" (se aceptan los sinónimos de
  ROOT_CONTAINER_ALIASES).
- Contenedor de una columna: "column-<índice>-<id del control Columns>".
"""

import re
from typing import Optional

from ecrf_builder.config import COLUMN_PREFIX, ROOT_CONTAINER_ALIASES, ROOT_CONTAINER_ID

_COLUMN_ID_RE = re.compile(rf"^{re.escape(COLUMN_PREFIX)}(\d+)-(.+)$")


def is_root_container_id(container_id: Optional[str]) -> bool:
    """True si el ID (o un sinónimo) designa el contenedor raíz."""
    return container_id in ROOT_CONTAINER_ALIASES


def canonical_container_id(container_id: str) -> str:
    """Sustituye los sinónimos de la raíz por el ID canónico."""
    if is_root_container_id(container_id):
        return ROOT_CONTAINER_ID
    return container_id


def column_container_id(index: int, columns_id: str) -> str:
    """ID del contenedor de la columna `index` de un control Columns."""
    return f"{COLUMN_PREFIX}{index}-{columns_id}"


def parse_column_container_id(container_id: str) -> Optional[tuple[int, str]]:
    """
    Descompone un ID de contenedor de columna.

    Returns:
        (índice, id del control Columns) o None si el ID no tiene ese formato
    """
    match = _COLUMN_ID_RE.match(container_id or "")
    if match is None:
        return None
    return int(match.group(1)), match.group(2)

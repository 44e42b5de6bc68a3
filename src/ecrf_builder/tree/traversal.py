"""
Recorridos del árbol del formulario.

No hay índice global: toda búsqueda es un recorrido en profundidad
explícito desde el contenedor raíz. Las funciones aceptan un Form o
directamente un Container (tratado como raíz).
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Union

from ecrf_builder.config import ROOT_CONTAINER_ID
from ecrf_builder.models import ColumnsControl, Container, Control, Form
from ecrf_builder.tree.addressing import canonical_container_id, column_container_id

Root = Union[Form, Container]


@dataclass(frozen=True)
class ControlLocation:
    """Posición de un control dentro del árbol."""
    control: Control
    container_id: str
    index: int
    depth: int


def _root_container(root: Root) -> Container:
    return root.container if isinstance(root, Form) else root


def iter_column_containers(
    control: ColumnsControl, depth: int = 1
) -> Iterator[tuple[str, Container, int]]:
    """Contenedores bajo un control Columns (incluye anidados)."""
    for index, column in enumerate(control.columns):
        if column.container is None:
            continue
        yield from _walk_containers(
            column.container, column_container_id(index, control.id), depth
        )


def _walk_containers(
    container: Container, container_id: str, depth: int
) -> Iterator[tuple[str, Container, int]]:
    yield container_id, container, depth
    for control in container.controls:
        if isinstance(control, ColumnsControl):
            yield from iter_column_containers(control, depth + 1)


def iter_containers(root: Root) -> Iterator[tuple[str, Container, int]]:
    """
    Recorre todos los contenedores en profundidad.

    Yields:
        (id del contenedor, contenedor, nivel de anidamiento); la raíz es nivel 0
    """
    yield from _walk_containers(_root_container(root), ROOT_CONTAINER_ID, 0)


def _walk_controls(
    container: Container, container_id: str, depth: int
) -> Iterator[ControlLocation]:
    for index, control in enumerate(container.controls):
        yield ControlLocation(control, container_id, index, depth)
        if not isinstance(control, ColumnsControl):
            continue
        for col_index, column in enumerate(control.columns):
            if column.container is not None:
                yield from _walk_controls(
                    column.container, column_container_id(col_index, control.id), depth + 1
                )


def iter_controls(root: Root) -> Iterator[ControlLocation]:
    """
    Recorre todos los controles en profundidad (pre-orden): cada Columns
    va seguido del contenido de sus columnas.
    """
    yield from _walk_controls(_root_container(root), ROOT_CONTAINER_ID, 0)


def find_container(root: Root, container_id: str) -> Optional[Container]:
    """Resuelve un ID de contenedor (acepta sinónimos de la raíz)."""
    target = canonical_container_id(container_id)
    for cid, container, _ in iter_containers(root):
        if cid == target:
            return container
    return None


def container_nesting_level(root: Root, container_id: str) -> Optional[int]:
    """Nivel de anidamiento de un contenedor (raíz = 0), None si no existe."""
    target = canonical_container_id(container_id)
    for cid, _, depth in iter_containers(root):
        if cid == target:
            return depth
    return None


def locate_control(root: Root, control_id: str) -> Optional[ControlLocation]:
    """Ubica un control en cualquier nivel del árbol."""
    for location in iter_controls(root):
        if location.control.id == control_id:
            return location
    return None


def find_control(root: Root, control_id: str) -> Optional[Control]:
    location = locate_control(root, control_id)
    return location.control if location else None


def count_controls(root: Root) -> int:
    """Cantidad total de controles, incluidos los anidados en columnas."""
    return sum(1 for _ in iter_controls(root))


def collect_ids(root: Union[Root, Control]) -> list[str]:
    """
    IDs de todos los controles en orden de recorrido.

    Si se pasa un control, se incluye él mismo y su subárbol. Los
    duplicados se conservan para poder detectarlos.
    """
    if isinstance(root, (Form, Container)):
        return [location.control.id for location in iter_controls(root)]
    ids = [root.id]
    if isinstance(root, ColumnsControl):
        for index, column in enumerate(root.columns):
            if column.container is not None:
                ids.extend(
                    location.control.id
                    for location in _walk_controls(
                        column.container, column_container_id(index, root.id), 1
                    )
                )
    return ids


def columns_depth(control: Control) -> int:
    """
    Niveles de Columns que ocupa un control.

    0 para controles simples, 1 para un Columns sin columnas anidadas, etc.
    """
    if not isinstance(control, ColumnsControl):
        return 0
    nested = [
        columns_depth(child)
        for column in control.columns
        if column.container is not None
        for child in column.container.controls
    ]
    return 1 + max(nested, default=0)

"""
Motor de movimiento y reordenamiento.

Funciones puras sobre formularios: cada operación retorna un nuevo Form
que comparte con el original todos los subárboles no modificados (copia
de camino). Si la operación falla se lanza una excepción y el formulario
de entrada sigue intacto.
"""

import logging
from typing import Callable, Iterable, Optional

from ecrf_builder.config import ROOT_CONTAINER_ID, get_config
from ecrf_builder.exceptions import (
    ContainerNotFoundError,
    ControlNotFoundError,
    ControlTypeChangeError,
    DuplicateControlIdError,
    InvalidMoveError,
    NestingLimitError,
)
from ecrf_builder.factory import ControlFactory
from ecrf_builder.models import ColumnsControl, Container, Control, Form
from ecrf_builder.tree.addressing import canonical_container_id, column_container_id
from ecrf_builder.tree.traversal import (
    collect_ids,
    columns_depth,
    container_nesting_level,
    find_container,
    iter_column_containers,
    locate_control,
)

logger = logging.getLogger(__name__)

ContainerUpdate = Callable[[Container], Container]


# ============================================================================
# Copia de camino
# ============================================================================

def _transform(
    container: Container, container_id: str, target_id: str, update: ContainerUpdate
) -> Optional[Container]:
    """
    Aplica `update` al contenedor `target_id` y reconstruye el camino.

    Returns:
        Nuevo contenedor (copiando solo el camino hasta el objetivo) o None
        si el objetivo no está en este subárbol.
    """
    if container_id == target_id:
        return update(container)

    for index, control in enumerate(container.controls):
        if not isinstance(control, ColumnsControl):
            continue
        for col_index, column in enumerate(control.columns):
            if column.container is None:
                continue
            updated = _transform(
                column.container,
                column_container_id(col_index, control.id),
                target_id,
                update,
            )
            if updated is None:
                continue
            columns = list(control.columns)
            columns[col_index] = column.model_copy(update={"container": updated})
            controls = list(container.controls)
            controls[index] = control.model_copy(update={"columns": tuple(columns)})
            return container.with_controls(controls)

    return None


def _update_container(form: Form, container_id: str, update: ContainerUpdate) -> Form:
    target = canonical_container_id(container_id)
    container = _transform(form.container, ROOT_CONTAINER_ID, target, update)
    if container is None:
        raise ContainerNotFoundError(container_id)
    return form.with_container(container)


def _clamp(index: Optional[int], length: int) -> int:
    if index is None:
        return length
    return max(0, min(index, length))


# ============================================================================
# Verificaciones estructurales
# ============================================================================

def _check_unique_ids(form: Form, control: Control) -> None:
    existing = set(collect_ids(form))
    seen = set()
    for control_id in collect_ids(control):
        if control_id in existing or control_id in seen:
            raise DuplicateControlIdError(control_id)
        seen.add(control_id)


def _check_nesting(
    form: Form, container_id: str, control: Control, max_nesting: Optional[int]
) -> None:
    depth = columns_depth(control)
    if depth == 0:
        return
    level = container_nesting_level(form, container_id)
    if level is None:
        raise ContainerNotFoundError(container_id)
    limit = max_nesting if max_nesting is not None else get_config().max_column_nesting
    if level + depth > limit:
        raise NestingLimitError(level + depth, limit)


def _check_not_into_itself(control: Control, container_id: str) -> None:
    if not isinstance(control, ColumnsControl):
        return
    target = canonical_container_id(container_id)
    for cid, _, _ in iter_column_containers(control):
        if cid == target:
            raise InvalidMoveError(
                f"No se puede mover el control {control.id} dentro de sí mismo"
            )


# ============================================================================
# Operaciones
# ============================================================================

def reorder_controls(form: Form, container_id: str, new_order: Iterable[str]) -> Form:
    """
    Reordena un contenedor según la lista de IDs dada.

    Los IDs que no están en el contenedor se ignoran y los controles que
    `new_order` no nombra se descartan: se espera una permutación.
    """
    order = list(new_order)

    def reorder(container: Container) -> Container:
        by_id = {control.id: control for control in container.controls}
        controls = []
        for control_id in order:
            control = by_id.pop(control_id, None)
            if control is not None:
                controls.append(control)
        if by_id:
            logger.debug("Reordenamiento descarta controles: %s", list(by_id))
        return container.with_controls(controls)

    return _update_container(form, container_id, reorder)


def move_within_container(
    form: Form, container_id: str, previous_index: int, current_index: int
) -> Form:
    """
    Mueve un control de una posición a otra dentro del mismo contenedor.

    Calcula el nuevo orden de IDs y lo aplica con `reorder_controls`.
    """
    container = find_container(form, container_id)
    if container is None:
        raise ContainerNotFoundError(container_id)
    order = container.ids
    if order:
        source = _clamp(previous_index, len(order) - 1)
        target = _clamp(current_index, len(order) - 1)
        order.insert(target, order.pop(source))
    return reorder_controls(form, container_id, order)



def insert_control(
    form: Form,
    container_id: str,
    control: Control,
    index: Optional[int] = None,
    max_nesting: Optional[int] = None,
) -> Form:
    """
    Inserta un control en un contenedor.

    Args:
        form: Formulario
        container_id: Contenedor destino (raíz, sinónimo o columna)
        control: Control a insertar (con su subárbol si es Columns)
        index: Posición; None agrega al final, fuera de rango se ajusta
        max_nesting: Límite de anidamiento de columnas (default: config)

    Raises:
        ContainerNotFoundError, DuplicateControlIdError, NestingLimitError
    """
    _check_unique_ids(form, control)
    _check_nesting(form, container_id, control, max_nesting)

    def insert(container: Container) -> Container:
        controls = list(container.controls)
        controls.insert(_clamp(index, len(controls)), control)
        return container.with_controls(controls)

    return _update_container(form, container_id, insert)


def remove_control(form: Form, control_id: str) -> tuple[Form, Control]:
    """
    Elimina un control de cualquier nivel del árbol.

    Returns:
        (nuevo formulario, control eliminado)
    """
    location = locate_control(form, control_id)
    if location is None:
        raise ControlNotFoundError(control_id)

    def remove(container: Container) -> Container:
        return container.with_controls(
            c for i, c in enumerate(container.controls) if i != location.index
        )

    return _update_container(form, location.container_id, remove), location.control


def move_control(
    form: Form,
    control_id: str,
    source_id: str,
    target_id: str,
    target_index: Optional[int] = None,
    max_nesting: Optional[int] = None,
) -> Form:
    """
    Mueve un control entre contenedores de forma atómica.

    Se quita del origen y se inserta en el destino resuelto sobre el árbol
    ya sin el control; el resultado es un único snapshot con ambos cambios.
    """
    removed: list[Control] = []

    def take(container: Container) -> Container:
        index = container.index_of(control_id)
        if index < 0:
            raise ControlNotFoundError(control_id, source_id)
        removed.append(container.controls[index])
        return container.with_controls(
            c for i, c in enumerate(container.controls) if i != index
        )

    without = _update_container(form, source_id, take)
    control = removed[0]
    _check_not_into_itself(control, target_id)
    _check_nesting(without, target_id, control, max_nesting)

    def put(container: Container) -> Container:
        controls = list(container.controls)
        controls.insert(_clamp(target_index, len(controls)), control)
        return container.with_controls(controls)

    return _update_container(without, target_id, put)


def replace_control(form: Form, control: Control) -> Form:
    """
    Reemplaza un control completo (mismo ID).

    El tipo no puede cambiar. Un Columns conserva sus columnas actuales:
    la cantidad de columnas y su contenido no se editan por esta vía.
    """
    location = locate_control(form, control.id)
    if location is None:
        raise ControlNotFoundError(control.id)
    current = location.control
    if current.type != control.type:
        raise ControlTypeChangeError(
            f"El control {control.id} es {current.type}, no puede pasar a {control.type}"
        )
    if isinstance(current, ColumnsControl):
        control = control.model_copy(update={"columns": current.columns})

    def replace(container: Container) -> Container:
        controls = list(container.controls)
        controls[location.index] = control
        return container.with_controls(controls)

    return _update_container(form, location.container_id, replace)


def duplicate_control(
    form: Form, control_id: str, factory: Optional[ControlFactory] = None
) -> tuple[Form, Control]:
    """
    Duplica un control y lo inserta inmediatamente después del original.

    Returns:
        (nuevo formulario, duplicado)
    """
    location = locate_control(form, control_id)
    if location is None:
        raise ControlNotFoundError(control_id)
    factory = factory or ControlFactory()
    duplicate = factory.duplicate(location.control)
    updated = insert_control(
        form, location.container_id, duplicate, location.index + 1
    )
    return updated, duplicate

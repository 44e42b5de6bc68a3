"""
Árbol del documento: direccionamiento, recorridos y operaciones.
"""

from ecrf_builder.tree.addressing import (
    canonical_container_id,
    column_container_id,
    is_root_container_id,
    parse_column_container_id,
)
from ecrf_builder.tree.operations import (
    duplicate_control,
    insert_control,
    move_control,
    move_within_container,
    remove_control,
    reorder_controls,
    replace_control,
)
from ecrf_builder.tree.traversal import (
    ControlLocation,
    collect_ids,
    columns_depth,
    container_nesting_level,
    count_controls,
    find_container,
    find_control,
    iter_containers,
    iter_controls,
    locate_control,
)

__all__ = [
    # Direccionamiento
    "canonical_container_id",
    "column_container_id",
    "is_root_container_id",
    "parse_column_container_id",
    # Recorridos
    "ControlLocation",
    "collect_ids",
    "columns_depth",
    "container_nesting_level",
    "count_controls",
    "find_container",
    "find_control",
    "iter_containers",
    "iter_controls",
    "locate_control",
    # Operaciones
    "duplicate_control",
    "insert_control",
    "move_control",
    "move_within_container",
    "remove_control",
    "reorder_controls",
    "replace_control",
]

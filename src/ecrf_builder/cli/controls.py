"""
Comandos de edición de controles de un formulario guardado.

Cada comando carga el formulario, aplica una operación y lo vuelve a
guardar bajo la misma clave.
"""

from typing import Annotated, Optional

import typer

from ecrf_builder.cli.common import load_state_or_exit, parse_options
from ecrf_builder.cli.theme import ConsoleNotifier, print_error, print_field, print_success
from ecrf_builder.config import ROOT_CONTAINER_ID, TOOLBOX_PREFIX
from ecrf_builder.drop_router import DropEvent, DropRouter, ToolboxTemplate
from ecrf_builder.exceptions import FormTreeError
from ecrf_builder.tree.traversal import find_container, locate_control


def control_add(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
    type_tag: Annotated[str, typer.Argument(help="Tipo de control (ej: InputText, Columns)")],
    container: Annotated[str, typer.Option("--container", "-c", help="Contenedor destino")] = ROOT_CONTAINER_ID,
    index: Annotated[Optional[int], typer.Option("--index", "-i", help="Posición (default: al final)")] = None,
    title: Annotated[Optional[str], typer.Option("--title", "-t", help="Título del control")] = None,
    columns: Annotated[Optional[int], typer.Option("--columns", help="Cantidad de columnas (Columns)")] = None,
    option: Annotated[Optional[list[str]], typer.Option("--option", "-o", help="Opción clave=valor (repetible)")] = None,
) -> None:
    """
    Agrega un control nuevo a un contenedor.

    Ejemplo:
        ecrf add abc123 Radio -t "Sexo" -o 'choices=[{"label":"F","value":"f"}]'
        ecrf add abc123 InputText -c column-0-columns-1a2b3c4d5
    """
    state = load_state_or_exit(key)

    options = parse_options(option)
    if title is not None:
        options["title"] = title
    if columns is not None:
        options["column_count"] = columns

    target = find_container(state.form, container)
    position = index if index is not None else (len(target.controls) if target else 0)

    try:
        router = DropRouter(state, notifier=ConsoleNotifier())
        control = router.handle_drop(DropEvent(
            source_container_id=f"{TOOLBOX_PREFIX}palette",
            target_container_id=container,
            previous_index=0,
            current_index=position,
            payload=ToolboxTemplate(type=type_tag, options=options),
        ))
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if control is None:
        raise typer.Exit(1)

    state.save_form(key)
    print_field("ID", control.id)


def control_move(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
    control_id: Annotated[str, typer.Argument(help="ID del control")],
    target: Annotated[str, typer.Argument(help="Contenedor destino")],
    index: Annotated[Optional[int], typer.Option("--index", "-i", help="Posición (default: al final)")] = None,
) -> None:
    """Mueve un control a otro contenedor (o a otra posición del mismo)."""
    state = load_state_or_exit(key)

    location = locate_control(state.form, control_id)
    if location is None:
        print_error(f"Control '{control_id}' no encontrado.")
        raise typer.Exit(1)

    target_container = find_container(state.form, target)
    if index is None:
        index = len(target_container.controls) if target_container else 0

    router = DropRouter(state, notifier=ConsoleNotifier())
    moved = router.handle_drop(DropEvent(
        source_container_id=location.container_id,
        target_container_id=target,
        previous_index=location.index,
        current_index=index,
        payload=location.control,
    ))
    if moved is None:
        raise typer.Exit(1)

    state.save_form(key)
    print_success(f"Control {control_id} movido a {target}")


def control_reorder(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
    container: Annotated[str, typer.Argument(help="Contenedor a reordenar")],
    order: Annotated[list[str], typer.Argument(help="IDs en el nuevo orden")],
) -> None:
    """
    Reordena los controles de un contenedor.

    Los IDs que no pertenecen al contenedor se ignoran; los controles no
    nombrados se descartan.
    """
    state = load_state_or_exit(key)
    try:
        state.reorder_controls(container, order)
    except FormTreeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    state.save_form(key)
    print_success(f"Contenedor {container} reordenado")


def control_duplicate(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
    control_id: Annotated[str, typer.Argument(help="ID del control")],
) -> None:
    """Duplica un control y lo inserta a continuación del original."""
    state = load_state_or_exit(key)
    try:
        duplicate = state.duplicate_control(control_id)
    except FormTreeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    state.save_form(key)
    print_success("Control duplicado")
    print_field("ID", duplicate.id)


def control_delete(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
    control_id: Annotated[str, typer.Argument(help="ID del control")],
) -> None:
    """Elimina un control (y su contenido si es Columns)."""
    state = load_state_or_exit(key)
    try:
        removed = state.remove_control(control_id)
    except FormTreeError as e:
        print_error(str(e))
        raise typer.Exit(1)

    state.save_form(key)
    print_success(f"Control eliminado: {removed.title or removed.type} ({removed.id})")

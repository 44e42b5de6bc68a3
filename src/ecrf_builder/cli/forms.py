"""
Comandos de gestión de formularios.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ecrf_builder.cli.common import load_form_or_exit
from ecrf_builder.cli.theme import (
    get_console,
    print_error,
    print_field,
    print_form_info,
    print_form_tree,
    print_forms_table,
    print_info,
    print_success,
    print_types_table,
)
from ecrf_builder.config import DEFAULT_FORM_TITLE
from ecrf_builder.factory import ControlFactory
from ecrf_builder.state import FormStateStore
from ecrf_builder.storage import get_repository
from ecrf_builder.tree.traversal import count_controls
from ecrf_builder.validation import validate


def form_new(
    title: Annotated[str, typer.Argument(help="Título del formulario")] = DEFAULT_FORM_TITLE,
    description: Annotated[Optional[str], typer.Option("--desc", "-d", help="Descripción")] = "",
    key: Annotated[Optional[str], typer.Option("--key", "-k", help="Clave de guardado (default: ID)")] = None,
) -> None:
    """
    Crea un formulario vacío y lo guarda.

    Ejemplo:
        ecrf new "Visita de seguimiento" --desc "Semana 4"
    """
    state = FormStateStore(repository=get_repository())
    state.update_metadata(title=title, description=description or "")
    storage_key = state.save_form(key)

    print_success("Formulario creado")
    print_form_info(state.form, storage_key)
    print_info(f"Usa 'ecrf add {storage_key} InputText' para agregar controles.")


def form_list() -> None:
    """Lista los formularios guardados, más recientes primero."""
    forms = get_repository().list_forms()

    if not forms:
        print_info("No hay formularios guardados.")
        print_info("Usa 'ecrf new <título>' para crear uno nuevo.")
        return

    console = get_console()
    console.print()
    print_forms_table(forms, title=f"Formularios ({len(forms)})")
    console.print()


def form_show(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
) -> None:
    """Muestra los metadatos y el árbol de controles de un formulario."""
    form = load_form_or_exit(key)

    console = get_console()
    console.print()
    print_form_info(form, key)
    print_field("Controles", count_controls(form))
    console.print()
    print_form_tree(form)
    console.print()


def form_validate(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
) -> None:
    """
    Valida un formulario.

    Termina con código 1 si hay errores.
    """
    form = load_form_or_exit(key)
    report = validate(form)

    if report.valid:
        print_success("Formulario válido")
        return

    print_error(f"Formulario inválido ({len(report.errors)} errores)")
    for error in report.errors:
        typer.echo(f"  - {error}")
    raise typer.Exit(1)


def form_export(
    key: Annotated[str, typer.Argument(help="Clave del formulario")],
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Archivo de salida")] = None,
) -> None:
    """Exporta un formulario como JSON (a archivo o a stdout)."""
    form = load_form_or_exit(key)
    data = form.model_dump_json(by_alias=True, indent=2)

    if output is None:
        typer.echo(data)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(data, encoding="utf-8")
    print_success(f"Formulario exportado: {output}")


def form_types() -> None:
    """Lista los tipos de control disponibles."""
    print_types_table(ControlFactory().control_groups())

"""
CLI de ecrf-builder.

Comandos sobre formularios guardados:
- new, list, show, validate, export: gestión de formularios
- add, move, reorder, duplicate, delete: edición de controles
- types: tipos de control disponibles
"""

from typing import Annotated

import typer

from ecrf_builder.cli.common import configure_logging
from ecrf_builder.cli.controls import (
    control_add,
    control_delete,
    control_duplicate,
    control_move,
    control_reorder,
)
from ecrf_builder.cli.forms import (
    form_export,
    form_list,
    form_new,
    form_show,
    form_types,
    form_validate,
)
from ecrf_builder.cli.theme import CLITheme, ThemeName

# Crear aplicación principal
app = typer.Typer(
    name="ecrf",
    help="Constructor de formularios eCRF: crea, edita y valida formularios.",
    no_args_is_help=True,
)

# Formularios
app.command("new")(form_new)
app.command("list")(form_list)
app.command("show")(form_show)
app.command("validate")(form_validate)
app.command("export")(form_export)
app.command("types")(form_types)

# Controles
app.command("add")(control_add)
app.command("move")(control_move)
app.command("reorder")(control_reorder)
app.command("duplicate")(control_duplicate)
app.command("delete")(control_delete)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Mostrar log de depuración")] = False,
    plain: Annotated[bool, typer.Option("--plain", help="Salida sin colores")] = False,
) -> None:
    """
    ecrf - Diseño de formularios de recolección de datos (eCRF).

    Los formularios se guardan en $ECRF_BUILDER_HOME/forms.db
    (default: ~/.ecrf_builder/forms.db).
    """
    configure_logging(verbose)
    CLITheme.set_theme(ThemeName.MINIMAL if plain else ThemeName.DEFAULT)


__all__ = ["app"]

"""
Utilidades compartidas por los comandos CLI.
"""

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ecrf_builder.cli.theme import print_error
from ecrf_builder.models import Form
from ecrf_builder.state import FormStateStore
from ecrf_builder.storage import get_repository


def configure_logging(verbose: bool) -> None:
    """Configura el log en stderr (DEBUG con --verbose, WARNING si no)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_form_or_exit(key: str) -> Form:
    """Carga un formulario o termina con código 1."""
    form = get_repository().load(key)
    if form is None:
        print_error(f"Formulario '{key}' no encontrado.")
        raise typer.Exit(1)
    return form


def load_state_or_exit(key: str) -> FormStateStore:
    """Crea un FormStateStore con el formulario guardado bajo `key`."""
    form = load_form_or_exit(key)
    return FormStateStore(form=form, repository=get_repository())


def parse_options(pairs: Optional[list[str]]) -> dict:
    """
    Convierte opciones 'clave=valor' en un dict.

    Los valores se interpretan como JSON cuando es posible
    (ej: required=true, rows=5, choices='["a","b"]').
    """
    options = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"Opción inválida (se espera clave=valor): {pair}")
        key, raw = pair.split("=", 1)
        try:
            options[key.strip()] = json.loads(raw)
        except json.JSONDecodeError:
            options[key.strip()] = raw
    return options

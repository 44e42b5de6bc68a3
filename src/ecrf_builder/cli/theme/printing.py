"""
Salida de mensajes, campos y encabezados en la consola.
"""

from rich import box
from rich.panel import Panel
from rich.text import Text

from ecrf_builder.cli.theme.palette import get_console, get_palette

# Prefijo de cada tipo de mensaje
SYMBOLS = {
    "success": "[+]",
    "warning": "[!]",
    "error": "[x]",
    "info": "[-]",
}


def status_line(kind: str, text: str) -> Text:
    """Mensaje con prefijo y color según su tipo (success, warning, error, info)."""
    return Text(f"{SYMBOLS[kind]} {text}", style=getattr(get_palette(), kind))


def print_success(text: str) -> None:
    get_console().print(status_line("success", text))


def print_warning(text: str) -> None:
    get_console().print(status_line("warning", text))


def print_error(text: str) -> None:
    get_console().print(status_line("error", text))


def print_info(text: str) -> None:
    get_console().print(status_line("info", text))


def print_field(label: str, value, indent: int = 2) -> None:
    """Imprime 'etiqueta: valor' con sangría."""
    p = get_palette()
    line = Text(" " * indent)
    line.append(f"{label}: ", style=p.label)
    line.append(str(value), style=f"bold {p.number}")
    get_console().print(line)


def print_header(title: str, subtitle: str = None) -> None:
    """Panel con el título (y subtítulo opcional)."""
    p = get_palette()
    content = Text(title, style=f"bold {p.primary}")
    if subtitle:
        content.append(f"\n{subtitle}", style=p.muted)
    get_console().print(Panel(content, border_style=p.border, box=box.ROUNDED, padding=(0, 2)))


def print_form_info(form, key: str = None) -> None:
    """Metadatos de un formulario."""
    print_header(form.title or "(sin título)", form.description or None)
    if key:
        print_field("Clave", key)
    print_field("ID", form.id)
    print_field("Estado", form.status.value)
    print_field("Versión", form.version)
    print_field("Actualizado", form.updated_at[:19])


class ConsoleNotifier:
    """Avisos del enrutador de soltar impresos en la consola."""

    def success(self, message: str) -> None:
        print_success(message)

    def info(self, message: str) -> None:
        print_info(message)

    def error(self, message: str) -> None:
        print_error(message)

    def warn(self, message: str) -> None:
        print_warning(message)

"""
Paletas de colores y tema activo de la CLI.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.theme import Theme


class ThemeName(Enum):
    """Temas disponibles."""
    DEFAULT = "default"
    MINIMAL = "minimal"


@dataclass
class ColorPalette:
    """Estilos Rich usados por la salida de la CLI."""
    primary: str      # Títulos de paneles y tablas
    secondary: str    # Encabezados de columnas
    accent: str       # IDs de controles y claves de formularios

    success: str
    warning: str
    error: str
    info: str
    muted: str        # Fechas, categorías, "(vacío)"

    number: str       # Valores de campos
    label: str        # Etiquetas de campos
    type_tag: str     # Etiquetas de tipo de control
    container: str    # IDs de contenedores en el árbol

    border: str


THEME_DEFAULT = ColorPalette(
    primary="#5f87af",
    secondary="#87afaf",
    accent="#af87af",
    success="#87af87",
    warning="#d7af5f",
    error="#d75f5f",
    info="#5f87af",
    muted="#808080",
    number="#d7af5f",
    label="#afafaf",
    type_tag="#87af87",
    container="#5fd7d7",
    border="#5f5f5f",
)

# Sin colores: terminales sin soporte o salida para copiar
THEME_MINIMAL = ColorPalette(
    primary="bold",
    secondary="default",
    accent="bold",
    success="default",
    warning="bold",
    error="bold",
    info="default",
    muted="dim",
    number="bold",
    label="default",
    type_tag="default",
    container="italic",
    border="dim",
)

THEMES = {
    ThemeName.DEFAULT: THEME_DEFAULT,
    ThemeName.MINIMAL: THEME_MINIMAL,
}


class CLITheme:
    """Tema activo y consola compartida."""

    _palette: ColorPalette = THEME_DEFAULT
    _console: Optional[Console] = None

    @classmethod
    def set_theme(cls, theme: ThemeName) -> None:
        """Cambia el tema; la consola se recrea en el próximo uso."""
        cls._palette = THEMES.get(theme, THEME_DEFAULT)
        cls._console = None

    @classmethod
    def get_palette(cls) -> ColorPalette:
        return cls._palette

    @classmethod
    def get_console(cls) -> Console:
        if cls._console is None:
            p = cls._palette
            cls._console = Console(theme=Theme({
                "success": p.success,
                "warning": p.warning,
                "error": p.error,
                "info": p.info,
                "muted": p.muted,
                "type": p.type_tag,
                "container": p.container,
            }))
        return cls._console


def get_console() -> Console:
    """Consola Rich con el tema activo."""
    return CLITheme.get_console()


def get_palette() -> ColorPalette:
    """Paleta del tema activo."""
    return CLITheme.get_palette()

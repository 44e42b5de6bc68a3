"""
Sistema de temas para la interfaz CLI.

- palette: Paletas y gestión del tema (CLITheme, ColorPalette)
- printing: Funciones que imprimen directamente a consola
- tables: Tablas y árboles Rich
"""

from ecrf_builder.cli.theme.palette import (
    THEME_DEFAULT,
    THEME_MINIMAL,
    THEMES,
    CLITheme,
    ColorPalette,
    ThemeName,
    get_console,
    get_palette,
)
from ecrf_builder.cli.theme.printing import (
    ConsoleNotifier,
    print_error,
    print_field,
    print_form_info,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from ecrf_builder.cli.theme.tables import (
    create_forms_table,
    print_form_tree,
    print_forms_table,
    print_types_table,
)

__all__ = [
    # palette
    "ThemeName",
    "ColorPalette",
    "THEME_DEFAULT",
    "THEME_MINIMAL",
    "THEMES",
    "CLITheme",
    "get_console",
    "get_palette",
    # printing
    "ConsoleNotifier",
    "print_error",
    "print_field",
    "print_form_info",
    "print_header",
    "print_info",
    "print_success",
    "print_warning",
    # tables
    "create_forms_table",
    "print_form_tree",
    "print_forms_table",
    "print_types_table",
]

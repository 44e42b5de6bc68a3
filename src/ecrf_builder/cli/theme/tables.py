"""
Tablas y árboles Rich para formularios y controles.
"""

from rich import box
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ecrf_builder.catalog import get_metadata
from ecrf_builder.cli.theme.palette import get_console, get_palette
from ecrf_builder.config import ROOT_CONTAINER_ID, ControlCategory, ControlType
from ecrf_builder.models import ColumnsControl, Container, Form, SavedFormMetadata
from ecrf_builder.tree.addressing import column_container_id


def _base_table(title: str = None) -> Table:
    p = get_palette()
    return Table(
        title=title,
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        show_header=True,
        padding=(0, 1),
    )


def create_forms_table(title: str = None) -> Table:
    """Crea tabla para listar formularios guardados."""
    p = get_palette()
    table = _base_table(title)
    table.add_column("Clave", style=p.accent, justify="left")
    table.add_column("Título", justify="left")
    table.add_column("Estado", justify="left")
    table.add_column("Actualizado", justify="left", style=p.muted)
    return table


def print_forms_table(forms: list[SavedFormMetadata], title: str = None) -> None:
    """Imprime tabla de formularios guardados."""
    table = create_forms_table(title)
    for meta in forms:
        table.add_row(
            meta.key or meta.id,
            meta.title,
            meta.status.value if meta.status else "-",
            meta.updated_at[:19],
        )
    get_console().print(table)


def print_types_table(groups: dict[ControlCategory, list[ControlType]]) -> None:
    """Imprime los tipos de control disponibles por categoría."""
    p = get_palette()
    table = _base_table("Tipos de control")
    table.add_column("Tipo", style=p.type_tag, justify="left")
    table.add_column("Nombre", justify="left")
    table.add_column("Categoría", justify="left", style=p.muted)
    table.add_column("Descripción", justify="left")

    for category, types in groups.items():
        for control_type in types:
            meta = get_metadata(control_type)
            table.add_row(control_type.value, meta.display_name, category.value, meta.description)

    get_console().print(table)


def _add_container(node: Tree, container: Container) -> None:
    p = get_palette()
    if not container.controls:
        node.add(Text("(vacío)", style=p.muted))
        return
    for control in container.controls:
        label = Text()
        label.append(control.title or "(sin título)")
        label.append(f"  {control.type}", style=p.type_tag)
        label.append(f"  {control.id}", style=p.accent)
        child = node.add(label)
        if isinstance(control, ColumnsControl):
            for index, column in enumerate(control.columns):
                column_id = column_container_id(index, control.id)
                column_node = child.add(Text(f"Column {index + 1}  {column_id}", style=p.container))
                if column.container is None:
                    column_node.add(Text("(sin contenedor)", style=p.error))
                else:
                    _add_container(column_node, column.container)


def print_form_tree(form: Form) -> None:
    """Imprime el árbol de controles del formulario."""
    p = get_palette()
    root = Tree(Text(ROOT_CONTAINER_ID, style=p.container))
    _add_container(root, form.container)
    get_console().print(root)

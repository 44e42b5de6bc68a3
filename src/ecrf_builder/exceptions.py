"""Excepciones del árbol de formularios."""


class FormTreeError(Exception):
    """Error base de operaciones sobre el árbol del formulario."""


class ControlNotFoundError(FormTreeError, LookupError):
    """El control no existe en el contenedor indicado."""

    def __init__(self, control_id: str, container_id: str = None):
        self.control_id = control_id
        self.container_id = container_id
        if container_id:
            message = f"Control no encontrado: {control_id} (contenedor {container_id})"
        else:
            message = f"Control no encontrado: {control_id}"
        super().__init__(message)


class ContainerNotFoundError(FormTreeError, LookupError):
    """El identificador de contenedor no resuelve a ningún contenedor."""

    def __init__(self, container_id: str):
        self.container_id = container_id
        super().__init__(f"Contenedor no encontrado: {container_id}")


class DuplicateControlIdError(FormTreeError, ValueError):
    """Insertar el control duplicaría un ID ya presente en el formulario."""

    def __init__(self, control_id: str):
        self.control_id = control_id
        super().__init__(f"ID de control duplicado: {control_id}")


class NestingLimitError(FormTreeError, ValueError):
    """Se supera el anidamiento máximo de columnas."""

    def __init__(self, depth: int, limit: int):
        self.depth = depth
        self.limit = limit
        super().__init__(
            f"Maximum column nesting level ({limit}) reached. "
            f"Cannot nest columns deeper (requested {depth})."
        )


class InvalidMoveError(FormTreeError, ValueError):
    """Movimiento estructuralmente imposible (ej: columnas dentro de sí mismas)."""


class ControlTypeChangeError(FormTreeError, ValueError):
    """Un reemplazo intenta cambiar la etiqueta de tipo de un control."""

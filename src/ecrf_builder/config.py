"""Enumeraciones y modelos Pydantic de configuración del constructor de formularios."""

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ControlType(str, Enum):
    """Tipos de control soportados (etiqueta de tipo)."""
    INPUT_TEXT = "InputText"
    TEXT_AREA = "TextArea"
    CHECKBOX = "Checkbox"
    RADIO = "Radio"
    DATE_PICKER = "DatePicker"
    TIME_PICKER = "TimePicker"
    INPUT_NUMBER = "InputNumber"
    SELECT = "Select"
    MULTISELECT = "MultiSelect"
    LIST_BOX = "ListBox"
    SELECT_BUTTON = "SelectButton"
    COLUMNS = "Columns"


class FormStatus(str, Enum):
    """Estado de publicación de un formulario."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ControlCategory(str, Enum):
    """Grupos de la caja de herramientas."""
    BASIC = "basic"
    ADVANCED = "advanced"
    LAYOUT = "layout"


class CheckboxMode(str, Enum):
    """Modo de un checkbox: booleano simple o grupo de opciones."""
    BINARY = "binary"
    GROUP = "group"


class HourFormat(str, Enum):
    """Formato horario del selector de hora."""
    H12 = "12"
    H24 = "24"


# ============================================================================
# Constantes de contenedores
# ============================================================================

ROOT_CONTAINER_ID = "main-canvas"

# Sinónimos aceptados para el contenedor raíz
ROOT_CONTAINER_ALIASES = frozenset({
    "main-canvas",
    "form-canvas",
    "root-canvas",
    "form",
})

COLUMN_PREFIX = "column-"
TOOLBOX_PREFIX = "toolbox-"

DEFAULT_FORM_TITLE = "New Form"


# ============================================================================
# Configuración global
# ============================================================================

def default_data_dir() -> Path:
    """Directorio de datos: $ECRF_BUILDER_HOME o ~/.ecrf_builder."""
    env_dir = os.environ.get("ECRF_BUILDER_HOME")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".ecrf_builder"


class BuilderConfig(BaseModel):
    """Parámetros del constructor de formularios."""
    max_column_nesting: int = Field(
        default=2, ge=1, description="Niveles máximos de columnas anidadas"
    )
    default_column_count: int = Field(
        default=2, ge=1, description="Columnas creadas si no se indica otra cantidad"
    )
    storage_prefix: str = Field(
        default="ecrf_", min_length=1, description="Prefijo de claves en el almacén"
    )
    history_limit: int = Field(
        default=50, ge=1, description="Snapshots máximos en la pila de deshacer"
    )
    data_dir: Path = Field(
        default_factory=default_data_dir, description="Directorio de datos"
    )

    @property
    def database_path(self) -> Path:
        """Ruta del archivo SQLite de formularios."""
        return self.data_dir / "forms.db"


_config: Optional[BuilderConfig] = None


def get_config() -> BuilderConfig:
    """Retorna la configuración global."""
    global _config
    if _config is None:
        _config = BuilderConfig()
    return _config


def set_config(config: Optional[BuilderConfig]) -> None:
    """Reemplaza la configuración global (None la reinicia)."""
    global _config
    _config = config

"""
Clases base para modelos Pydantic.

Proporciona la configuración común (alias camelCase, inmutabilidad),
la generación de IDs de control y los timestamps.
"""

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def normalize_control_type(type_tag: str) -> str:
    """
    Normaliza una etiqueta de tipo a kebab-case.

    Ejemplos:
        "InputText" -> "input-text", "text_area" -> "text-area", "Radio" -> "radio"
    """
    kebab = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", str(type_tag))
    return kebab.replace("_", "-").replace(" ", "-").lower()


def generate_id(type_tag: str) -> str:
    """Genera un ID único de control: '<tipo-normalizado>-<9 caracteres>'."""
    return f"{normalize_control_type(type_tag)}-{uuid.uuid4().hex[:9]}"


def generate_group_name() -> str:
    """Genera un nombre de grupo de radio único."""
    return f"radio-group-{uuid.uuid4().hex[:7]}"


def generate_timestamp() -> str:
    """Genera timestamp ISO actual."""
    return datetime.now().isoformat()


class DocumentModel(BaseModel):
    """
    Modelo base del documento.

    Inmutable: toda modificación produce una copia (model_copy).
    Serializa con alias camelCase y acepta tanto alias como nombres Python.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict:
        """Dict JSON-compatible con claves camelCase."""
        return self.model_dump(mode="json", by_alias=True)


class TimestampedModel(DocumentModel):
    """
    Modelo base con ID y timestamps automáticos.

    Proporciona:
    - id: ID único de 8 caracteres
    - created_at: Timestamp de creación
    - updated_at: Timestamp de última actualización
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4())[:8])
    created_at: str = Field(default_factory=generate_timestamp)
    updated_at: str = Field(default_factory=generate_timestamp)

    def touched(self):
        """Retorna una copia con el timestamp de modificación actualizado."""
        return self.model_copy(update={"updated_at": generate_timestamp()})

"""
Modelo de formulario.

Un formulario es el agregado raíz: metadatos + un contenedor raíz.
Nunca se modifica en sitio; cada cambio produce un nuevo snapshot.
"""

from typing import Optional

from pydantic import Field, field_validator

from ecrf_builder.config import DEFAULT_FORM_TITLE, FormStatus
from ecrf_builder.models.base import DocumentModel, TimestampedModel
from ecrf_builder.models.controls import Container


class Form(TimestampedModel):
    """Formulario (documento completo)."""

    title: str = DEFAULT_FORM_TITLE
    description: str = ""
    container: Container = Field(default_factory=Container)
    version: str = "1"
    status: FormStatus = FormStatus.DRAFT

    def with_container(self, container: Container) -> "Form":
        """Copia del formulario con otro contenedor raíz."""
        return self.model_copy(update={"container": container})

    def with_metadata(self, **updates) -> "Form":
        """
        Copia con metadatos actualizados (title, description, status, version).

        El contenedor no se modifica por esta vía.
        """
        allowed = {"title", "description", "status", "version"}
        unknown = set(updates) - allowed
        if unknown:
            raise ValueError(f"Campos de metadatos no válidos: {sorted(unknown)}")
        if "status" in updates:
            updates["status"] = FormStatus(updates["status"])
        return self.model_copy(update=updates)


class SavedFormMetadata(DocumentModel):
    """Resumen de un formulario guardado (para listados)."""

    id: str
    key: str = ""
    title: str = "Untitled Form"
    updated_at: str
    status: Optional[FormStatus] = None

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value):
        return value or "Untitled Form"

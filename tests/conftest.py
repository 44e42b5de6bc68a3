"""Configuración de pytest para tests de ecrf_builder."""

import pytest

from ecrf_builder.config import set_config
from ecrf_builder.factory import ControlFactory
from ecrf_builder.models import Form
from ecrf_builder.storage import FormRepository, MemoryStore, reset_repository
from ecrf_builder.tree.operations import insert_control


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Aísla el directorio de datos y la configuración global."""
    home = tmp_path / "home"
    monkeypatch.setenv("ECRF_BUILDER_HOME", str(home))
    set_config(None)
    reset_repository()
    yield home
    set_config(None)
    reset_repository()


@pytest.fixture
def factory():
    """Fábrica con la tabla de despacho por defecto."""
    return ControlFactory()


@pytest.fixture
def repository():
    """Repositorio sobre un almacén en memoria."""
    return FormRepository(MemoryStore())


@pytest.fixture
def sample_form(factory):
    """
    Formulario de ejemplo.

    main-canvas:    [name (InputText), cols (Columns x2), sex (Radio)]
    column-0-cols:  [age (InputNumber)]
    column-1-cols:  []
    """
    form = Form(title="Sample")
    form = insert_control(
        form, "main-canvas", factory.create_control("InputText", {"id": "name", "title": "Name"})
    )
    form = insert_control(form, "main-canvas", factory.create_control("Columns", {"id": "cols"}))
    form = insert_control(
        form, "main-canvas", factory.create_control("Radio", {"id": "sex", "title": "Sex"})
    )
    form = insert_control(
        form, "column-0-cols", factory.create_control("InputNumber", {"id": "age", "title": "Age"})
    )
    return form

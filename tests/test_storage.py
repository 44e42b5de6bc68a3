"""
Tests para la persistencia (storage/).
"""

import json
import logging
import sqlite3

import pytest

from ecrf_builder.config import BuilderConfig, FormStatus, set_config
from ecrf_builder.models import Form
from ecrf_builder.storage import (
    FormRepository,
    KeyValueStore,
    MemoryStore,
    SQLiteStore,
    get_repository,
    reset_repository,
)
from ecrf_builder.storage.sqlite import SCHEMA_VERSION


def stored_form(form_id: str, title: str, updated_at: str) -> str:
    return json.dumps({"id": form_id, "title": title, "updatedAt": updated_at})


# ============================================================================
# Almacenes clave-valor
# ============================================================================

class TestMemoryStore:
    """Tests para MemoryStore."""

    def test_protocol(self):
        assert isinstance(MemoryStore(), KeyValueStore)

    def test_basic_operations(self):
        store = MemoryStore()
        store.set("a", "1")
        assert store.get("a") == "1"
        assert store.get("b") is None
        assert store.keys() == ["a"]
        assert store.delete("a") is True
        assert store.delete("a") is False
        assert len(store) == 0


class TestSQLiteStore:
    """Tests para SQLiteStore."""

    @pytest.fixture
    def sqlite_store(self, tmp_path):
        return SQLiteStore(tmp_path / "db" / "forms.db")

    def test_protocol(self, sqlite_store):
        assert isinstance(sqlite_store, KeyValueStore)

    def test_creates_file_and_schema(self, sqlite_store):
        assert sqlite_store.db_path.exists()
        assert sqlite_store.schema_version == SCHEMA_VERSION

    def test_set_get_overwrite(self, sqlite_store):
        sqlite_store.set("k", "v1")
        sqlite_store.set("k", "v2")
        assert sqlite_store.get("k") == "v2"
        assert sqlite_store.keys() == ["k"]

    def test_keys_sorted(self, sqlite_store):
        for key in ("b", "c", "a"):
            sqlite_store.set(key, "x")
        assert sqlite_store.keys() == ["a", "b", "c"]

    def test_delete(self, sqlite_store):
        sqlite_store.set("k", "v")
        assert sqlite_store.delete("k") is True
        assert sqlite_store.delete("k") is False
        assert sqlite_store.get("k") is None

    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "forms.db"
        SQLiteStore(path).set("k", "v")
        assert SQLiteStore(path).get("k") == "v"

    def test_default_path_from_config(self, tmp_path):
        set_config(BuilderConfig(data_dir=tmp_path / "data"))
        store = SQLiteStore()
        assert store.db_path == tmp_path / "data" / "forms.db"

    def test_newer_schema_warns(self, tmp_path, caplog):
        path = tmp_path / "forms.db"
        SQLiteStore(path)
        conn = sqlite3.connect(path)
        conn.execute("UPDATE metadata SET value = ? WHERE key = 'schema_version'", (str(SCHEMA_VERSION + 1),))
        conn.commit()
        conn.close()

        with caplog.at_level(logging.WARNING, logger="ecrf_builder.storage.sqlite"):
            SQLiteStore(path)
        assert "más nuevo" in caplog.text

    def test_rollback_on_error(self, sqlite_store):
        with pytest.raises(RuntimeError):
            with sqlite_store.connection() as conn:
                conn.execute("INSERT INTO kv_store (key, value) VALUES ('x', 'y')")
                raise RuntimeError("fallo")
        assert sqlite_store.get("x") is None


# ============================================================================
# Repositorio
# ============================================================================

class TestFormRepository:
    """Tests para FormRepository."""

    def test_save_and_load(self, repository, sample_form):
        key, saved = repository.save(sample_form)
        assert key == sample_form.id
        assert saved.created_at == sample_form.created_at
        assert repository.load(key) == saved

    def test_save_with_key_and_prefix(self, sample_form):
        store = MemoryStore()
        repository = FormRepository(store)
        repository.save(sample_form, "visita")
        assert store.keys() == ["ecrf_visita"]

    def test_custom_prefix(self, sample_form):
        store = MemoryStore()
        FormRepository(store, prefix="test_").save(sample_form, "a")
        assert store.keys() == ["test_a"]

    def test_stored_json_is_camel_case(self, sample_form):
        store = MemoryStore()
        FormRepository(store).save(sample_form, "a")
        data = json.loads(store.get("ecrf_a"))
        assert "updatedAt" in data
        assert data["container"]["controls"][2]["groupName"]

    def test_load_missing(self, repository, caplog):
        with caplog.at_level(logging.WARNING, logger="ecrf_builder.storage.repository"):
            assert repository.load("missing") is None
        assert "missing" in caplog.text

    def test_load_corrupt(self, caplog):
        repository = FormRepository(MemoryStore({"ecrf_x": '{"container": {"controls": [{"type": "Bogus"}]}}'}))
        with caplog.at_level(logging.ERROR, logger="ecrf_builder.storage.repository"):
            assert repository.load("x") is None
        assert "x" in caplog.text

    def test_exists_and_delete(self, repository, sample_form):
        key, _ = repository.save(sample_form)
        assert repository.exists(key)
        assert repository.delete(key) is True
        assert not repository.exists(key)
        assert repository.delete(key) is False

    def test_list_sorted_newest_first(self):
        store = MemoryStore({
            "ecrf_old": stored_form("1", "Viejo", "2024-01-01T10:00:00"),
            "ecrf_new": stored_form("2", "Nuevo", "2024-03-01T10:00:00"),
            "ecrf_mid": stored_form("3", "Medio", "2024-02-01T10:00:00"),
        })
        forms = FormRepository(store).list_forms()
        assert [f.key for f in forms] == ["new", "mid", "old"]
        assert forms[0].title == "Nuevo"

    def test_list_skips_corrupt_and_foreign(self, caplog):
        store = MemoryStore({
            "ecrf_ok": stored_form("1", "Bien", "2024-01-01T10:00:00"),
            "ecrf_bad": "{roto",
            "ecrf_list": "[1, 2]",
            "ecrf_incomplete": json.dumps({"title": "Sin id"}),
            "other_key": stored_form("9", "Ajeno", "2024-01-01T10:00:00"),
        })
        with caplog.at_level(logging.WARNING, logger="ecrf_builder.storage.repository"):
            forms = FormRepository(store).list_forms()
        assert [f.key for f in forms] == ["ok"]
        assert "ecrf_bad" in caplog.text

    def test_list_metadata_defaults(self):
        store = MemoryStore({"ecrf_a": json.dumps({"id": "a", "updatedAt": "2024-01-01"})})
        meta = FormRepository(store).list_forms()[0]
        assert meta.title == "Untitled Form"
        assert meta.status is None

    @pytest.mark.parametrize("title", ["", None])
    def test_list_empty_title_uses_default(self, title):
        store = MemoryStore({
            "ecrf_a": json.dumps({"id": "a", "title": title, "updatedAt": "2024-01-01"}),
        })
        assert FormRepository(store).list_forms()[0].title == "Untitled Form"

    def test_list_includes_status(self, repository):
        repository.save(Form(title="A", status=FormStatus.PUBLISHED), "a")
        assert repository.list_forms()[0].status == FormStatus.PUBLISHED

    def test_sqlite_round_trip(self, tmp_path, sample_form):
        repository = FormRepository(SQLiteStore(tmp_path / "forms.db"))
        key, saved = repository.save(sample_form, "visita")
        assert repository.load(key) == saved
        assert [meta.key for meta in repository.list_forms()] == ["visita"]


class TestGlobalRepository:
    """Tests para el repositorio global."""

    def test_singleton(self, isolated_home):
        repository = get_repository()
        assert repository is get_repository()
        assert isinstance(repository.store, SQLiteStore)
        assert repository.store.db_path == isolated_home / "forms.db"

    def test_reset(self):
        first = get_repository()
        reset_repository()
        assert get_repository() is not first

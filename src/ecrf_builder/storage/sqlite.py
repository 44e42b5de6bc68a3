"""
Almacén clave-valor sobre SQLite.

Una única tabla `kv_store` más la tabla `metadata` con la versión del
esquema. Cada operación abre su propia conexión.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ecrf_builder.config import get_config

logger = logging.getLogger(__name__)


# ============================================================================
# Esquema de la Base de Datos
# ============================================================================

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Pares clave-valor (un formulario JSON por clave)
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Tabla de metadatos
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


# ============================================================================
# Clase SQLiteStore
# ============================================================================

class SQLiteStore:
    """Almacén clave-valor persistente en un archivo SQLite."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Inicializa el almacén.

        Args:
            db_path: Ruta al archivo SQLite. Default: <data_dir>/forms.db
        """
        if db_path is None:
            db_path = get_config().database_path

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_database()

    def _init_database(self) -> None:
        """Inicializa el esquema de la base de datos."""
        with self.connection() as conn:
            conn.executescript(SCHEMA_SQL)

            cursor = conn.execute(
                "SELECT value FROM metadata WHERE key = 'schema_version'"
            )
            row = cursor.fetchone()

            if row is None:
                conn.execute(
                    "INSERT INTO metadata (key, value) VALUES (?, ?)",
                    ("schema_version", str(SCHEMA_VERSION))
                )
            elif int(row["value"]) > SCHEMA_VERSION:
                logger.warning(
                    "Esquema %s más nuevo que el soportado (%s): %s",
                    row["value"], SCHEMA_VERSION, self.db_path,
                )

    @property
    def schema_version(self) -> int:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM metadata WHERE key = 'schema_version'"
            ).fetchone()
        return int(row["value"])

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager para conexiones a la base de datos."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # ========================================================================
    # Operaciones clave-valor
    # ========================================================================

    def get(self, key: str) -> Optional[str]:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self.connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )

    def delete(self, key: str) -> bool:
        with self.connection() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def keys(self) -> list[str]:
        with self.connection() as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row["key"] for row in rows]

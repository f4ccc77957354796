"""
SQLite persistence adapter.

Each module key owns one row of ``module_records``; the collection is
stored as a JSON array and replaced wholesale on every save.
"""

import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from qmsrec.core.db import apply_schemas, get_db
from qmsrec.records.errors import PersistenceError
from qmsrec.storage.base import (
    PersistenceAdapter,
    decode_collection,
    encode_collection,
    logger,
)


class SqliteAdapter(PersistenceAdapter):
    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path else None
        self._schema_ready = False

    @property
    def backend_name(self) -> str:
        return "sqlite"

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        if not self._schema_ready:
            apply_schemas(conn)
            self._schema_ready = True

    def load_data(self, key: str) -> List[Dict[str, Any]]:
        try:
            with get_db(db_path=self.db_path) as conn:
                self._ensure_schema(conn)
                row = conn.execute(
                    "SELECT data FROM module_records WHERE module_key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            logger.warning("Failed to load '%s' from SQLite: %s", key, exc)
            return []

        if row is None:
            return []
        return decode_collection(key, row["data"])

    def save_data(self, key: str, records: List[Dict[str, Any]]) -> None:
        try:
            payload = encode_collection(records)
            with get_db(db_path=self.db_path) as conn:
                self._ensure_schema(conn)
                conn.execute(
                    """INSERT INTO module_records (module_key, data, record_count, updated_at)
                       VALUES (?, ?, ?, datetime('now'))
                       ON CONFLICT(module_key) DO UPDATE SET
                           data = excluded.data,
                           record_count = excluded.record_count,
                           updated_at = excluded.updated_at""",
                    (key, payload, len(records)),
                )
                conn.commit()
        except (sqlite3.Error, TypeError, ValueError) as exc:
            raise PersistenceError(f"Failed to save '{key}': {exc}") from exc

        logger.debug("Saved %d records to '%s'", len(records), key)

    def summary(self) -> List[Dict[str, Any]]:
        """Stored keys with their record counts and last save time."""
        try:
            with get_db(db_path=self.db_path) as conn:
                self._ensure_schema(conn)
                rows = conn.execute(
                    "SELECT module_key, record_count, updated_at "
                    "FROM module_records ORDER BY module_key"
                ).fetchall()
        except sqlite3.Error as exc:
            logger.warning("Failed to read storage summary: %s", exc)
            return []
        return [dict(r) for r in rows]

"""
Database access for QMSREC.

Provides connection management and schema migration
for the SQLite persistence backend.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from qmsrec.core.config import RECORD_PATHS


def get_db_path() -> Path:
    """Get database path from config."""
    return RECORD_PATHS.database


@contextmanager
def get_db(
    readonly: bool = False, db_path: Optional[Path] = None
) -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.

    Enables Row factory automatically.

    Args:
        readonly: Open in read-only mode (useful for queries)
        db_path: Override the configured database file

    Yields:
        sqlite3.Connection with Row factory enabled
    """
    db_path = Path(db_path) if db_path else get_db_path()

    if readonly:
        uri = f"file:{db_path}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
    else:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(db_path))

    try:
        conn.execute("PRAGMA foreign_keys = ON")
        if not readonly:
            conn.execute("PRAGMA journal_mode = WAL")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


# Packages that ship a schema.sql, applied in this order.
SCHEMA_ORDER = [
    "storage",
]


def apply_schemas(conn: sqlite3.Connection) -> None:
    """Apply every schema.sql in SCHEMA_ORDER to an open connection."""
    from qmsrec.core.logging import get_logger

    logger = get_logger("qmsrec.migrate")
    package_dir = Path(__file__).parent.parent

    for module_name in SCHEMA_ORDER:
        schema_file = package_dir / module_name / "schema.sql"
        if schema_file.exists():
            logger.debug("Applying schema: %s/schema.sql", module_name)
            conn.executescript(schema_file.read_text(encoding="utf-8"))
        else:
            logger.debug("No schema for module: %s", module_name)
    conn.commit()


def migrate_all(db_path: Optional[Path] = None) -> None:
    """
    Run all package schemas in dependency order.

    Each schema.sql uses CREATE TABLE IF NOT EXISTS,
    making this safe to run repeatedly (idempotent).
    """
    from qmsrec.core.logging import get_logger

    logger = get_logger("qmsrec.migrate")

    with get_db(db_path=db_path) as conn:
        apply_schemas(conn)

    logger.info("All schemas applied successfully")

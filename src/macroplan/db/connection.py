"""SQLite access for user accounts, saved plans and grocery check marks."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from macroplan.db.schema import SCHEMA_VERSION, get_schema_sql

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """Opens short-lived connections to one macroplan database file.

    Every ``get_connection()`` block is one transaction: it commits when the
    block finishes and rolls back if it raises, so a failed plan save never
    leaves half of a plan behind.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # Plan rows and check marks reference users(username)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for one unit of work.

        Example:
            with db.get_connection() as conn:
                PlanQueries.save_plan(conn, "alice", plan)
        """
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create missing tables and stamp the schema version."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        logger.debug("Schema v%d ready at %s", SCHEMA_VERSION, self.db_path)

    def schema_version(self) -> int:
        with self.get_connection() as conn:
            return conn.execute("PRAGMA user_version").fetchone()[0]

    def table_exists(self, table_name: str) -> bool:
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table_name,),
            ).fetchone()
        return row is not None


_db: Optional[DatabaseConnection] = None


def get_db() -> DatabaseConnection:
    """Return the shared database, created from settings on first use."""
    global _db
    if _db is None:
        from macroplan.config import get_settings

        _db = DatabaseConnection(get_settings().database.path)
        _db.initialize_schema()
    return _db


def set_db(db: Optional[DatabaseConnection]) -> None:
    """Replace the shared database (tests use a temporary file; None resets)."""
    global _db
    _db = db

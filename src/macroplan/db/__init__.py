"""SQLite persistence for users, saved plans and grocery check marks."""

from macroplan.db.connection import DatabaseConnection, get_db, set_db

__all__ = ["DatabaseConnection", "get_db", "set_db"]

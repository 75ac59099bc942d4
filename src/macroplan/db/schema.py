"""SQLite database schema definitions."""

# Stored in PRAGMA user_version
SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Registered users and their saved preferences
CREATE TABLE IF NOT EXISTS users (
    username TEXT PRIMARY KEY,
    password_hash TEXT NOT NULL,
    calories REAL NOT NULL DEFAULT 2200,
    protein REAL NOT NULL DEFAULT 120,
    carbs REAL NOT NULL DEFAULT 250,
    fat REAL NOT NULL DEFAULT 70,
    days INTEGER NOT NULL DEFAULT 3,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Last generated plan per user, one row per (day, slot)
CREATE TABLE IF NOT EXISTS plan_selections (
    username TEXT NOT NULL,
    day_number INTEGER NOT NULL,
    slot TEXT NOT NULL CHECK (slot IN ('breakfast', 'lunch', 'dinner')),
    recipe_name TEXT NOT NULL,
    servings REAL NOT NULL,
    PRIMARY KEY (username, day_number, slot),
    FOREIGN KEY (username) REFERENCES users(username)
);

CREATE INDEX IF NOT EXISTS idx_plan_selections_user ON plan_selections(username);

-- Grocery items checked off for the current plan
CREATE TABLE IF NOT EXISTS grocery_checks (
    username TEXT NOT NULL,
    item_key TEXT NOT NULL,
    PRIMARY KEY (username, item_key),
    FOREIGN KEY (username) REFERENCES users(username)
);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL

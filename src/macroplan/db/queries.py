"""Common database query functions."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError

from macroplan.export.serialization import plan_from_rows, plan_to_rows
from macroplan.optimizer.models import (
    AuthenticationError,
    CatalogItem,
    DayPlan,
    NutrientVector,
    UserExistsError,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4

DEFAULT_TARGET = NutrientVector(2200, 120, 250, 70)
DEFAULT_DAYS = 3

# Encoded hashes carry their own salt and parameters ("$argon2id$v=19$...")
pwd_hasher = PasswordHasher()


def normalize_username(username: str) -> str:
    return username.strip().lower()


@dataclass
class UserProfile:
    """A registered user's saved preferences."""

    username: str
    target: NutrientVector
    days: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserProfile":
        return cls(
            username=row["username"],
            target=NutrientVector(row["calories"], row["protein"], row["carbs"], row["fat"]),
            days=row["days"],
        )


class UserQueries:
    """Query functions for users table."""

    @staticmethod
    def register(
        conn: sqlite3.Connection,
        username: str,
        password: str,
        target: NutrientVector = DEFAULT_TARGET,
        days: int = DEFAULT_DAYS,
    ) -> UserProfile:
        """Create a new user with a salted password hash.

        Args:
            conn: Database connection
            username: Login name, stored trimmed and lower-cased
            password: Plain-text password (at least 4 characters)
            target: Initial daily target
            days: Initial preferred plan length

        Returns:
            The new user's profile

        Raises:
            ValueError: If the username is empty or the password too short.
            UserExistsError: If the username is taken.
        """
        name = normalize_username(username)
        if not name:
            raise ValueError("Username cannot be empty")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if UserQueries.get_user(conn, name) is not None:
            raise UserExistsError(name)

        conn.execute(
            """
            INSERT INTO users (username, password_hash, calories, protein, carbs, fat, days)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                name,
                pwd_hasher.hash(password),
                target.energy,
                target.protein,
                target.carbohydrate,
                target.fat,
                days,
            ),
        )
        logger.info("Registered user %s", name)
        return UserProfile(username=name, target=target, days=days)

    @staticmethod
    def authenticate(
        conn: sqlite3.Connection, username: str, password: str
    ) -> UserProfile:
        """Check a user's password.

        Raises:
            AuthenticationError: If the user does not exist or the password
                is wrong.
        """
        name = normalize_username(username)
        row = conn.execute(
            "SELECT * FROM users WHERE username = ?", (name,)
        ).fetchone()
        if row is None:
            raise AuthenticationError(f"User not found: {name}")

        try:
            pwd_hasher.verify(row["password_hash"], password)
        except VerifyMismatchError as e:
            raise AuthenticationError("Invalid password") from e

        return UserProfile.from_row(row)

    @staticmethod
    def get_user(conn: sqlite3.Connection, username: str) -> Optional[UserProfile]:
        """Get a user's profile, or None if not registered."""
        row = conn.execute(
            "SELECT * FROM users WHERE username = ?", (normalize_username(username),)
        ).fetchone()
        return UserProfile.from_row(row) if row else None

    @staticmethod
    def update_preferences(
        conn: sqlite3.Connection,
        username: str,
        target: Optional[NutrientVector] = None,
        days: Optional[int] = None,
    ) -> None:
        """Update a user's saved target and/or plan length."""
        name = normalize_username(username)
        if target is not None:
            conn.execute(
                """
                UPDATE users SET calories = ?, protein = ?, carbs = ?, fat = ?
                WHERE username = ?
                """,
                (target.energy, target.protein, target.carbohydrate, target.fat, name),
            )
        if days is not None:
            conn.execute("UPDATE users SET days = ? WHERE username = ?", (days, name))


class PlanQueries:
    """Query functions for plan_selections table."""

    @staticmethod
    def save_plan(
        conn: sqlite3.Connection, username: str, plan: Sequence[DayPlan]
    ) -> None:
        """Replace a user's saved plan.

        Grocery check marks belong to the previous plan and are cleared.
        """
        name = normalize_username(username)
        conn.execute("DELETE FROM plan_selections WHERE username = ?", (name,))
        conn.executemany(
            """
            INSERT INTO plan_selections (username, day_number, slot, recipe_name, servings)
            VALUES (?, ?, ?, ?, ?)
            """,
            [(name, *row) for row in plan_to_rows(plan)],
        )
        GroceryQueries.clear(conn, name)
        logger.info("Saved %d-day plan for %s", len(plan), name)

    @staticmethod
    def has_plan(conn: sqlite3.Connection, username: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM plan_selections WHERE username = ? LIMIT 1",
            (normalize_username(username),),
        ).fetchone()
        return row is not None

    @staticmethod
    def load_plan(
        conn: sqlite3.Connection, username: str, catalog: Iterable[CatalogItem]
    ) -> Optional[list[DayPlan]]:
        """Load a user's saved plan, resolving recipe names in the catalog.

        Returns:
            The plan, or None if the user has none saved

        Raises:
            UnknownRecipeError: If a saved recipe is no longer in the catalog.
        """
        rows = conn.execute(
            """
            SELECT day_number, slot, recipe_name, servings
            FROM plan_selections
            WHERE username = ?
            ORDER BY day_number
            """,
            (normalize_username(username),),
        ).fetchall()
        if not rows:
            return None
        return plan_from_rows([tuple(row) for row in rows], catalog)


class GroceryQueries:
    """Query functions for grocery_checks table."""

    @staticmethod
    def get_checked(conn: sqlite3.Connection, username: str) -> set[str]:
        query = "SELECT item_key FROM grocery_checks WHERE username = ?"
        return {
            row[0]
            for row in conn.execute(query, (normalize_username(username),)).fetchall()
        }

    @staticmethod
    def set_checked(
        conn: sqlite3.Connection, username: str, item_key: str, checked: bool = True
    ) -> None:
        """Mark or unmark a grocery item as bought."""
        name = normalize_username(username)
        if checked:
            conn.execute(
                "INSERT OR IGNORE INTO grocery_checks (username, item_key) VALUES (?, ?)",
                (name, item_key),
            )
        else:
            conn.execute(
                "DELETE FROM grocery_checks WHERE username = ? AND item_key = ?",
                (name, item_key),
            )

    @staticmethod
    def clear(conn: sqlite3.Connection, username: str) -> None:
        conn.execute(
            "DELETE FROM grocery_checks WHERE username = ?",
            (normalize_username(username),),
        )

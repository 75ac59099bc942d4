"""Pytest fixtures for macroplan tests."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from macroplan.config import settings as settings_module
from macroplan.config.settings import Settings
from macroplan.db import set_db
from macroplan.db.connection import DatabaseConnection
from macroplan.optimizer.models import CatalogItem, Ingredient, MealSlot, NutrientVector


def make_item(
    name: str,
    slot: MealSlot,
    energy: float,
    protein: float = 0.0,
    carbohydrate: float = 0.0,
    fat: float = 0.0,
    ingredients: tuple[Ingredient, ...] = (),
    base_servings: float = 1.0,
) -> CatalogItem:
    """Build a catalog item with only the fields a test cares about."""
    return CatalogItem(
        name=name,
        slot=slot,
        macros=NutrientVector(energy, protein, carbohydrate, fat),
        ingredients=ingredients,
        base_servings=base_servings,
    )


@pytest.fixture
def item_factory():
    """Factory for catalog items."""
    return make_item


@pytest.fixture
def small_catalog() -> tuple[CatalogItem, ...]:
    """Two recipes per slot, with ingredients that overlap across slots."""
    return (
        make_item(
            "Porridge",
            MealSlot.BREAKFAST,
            400, 15, 60, 10,
            ingredients=(Ingredient("oats", "g", 80), Ingredient("milk", "ml", 250)),
        ),
        make_item(
            "Egg Toast",
            MealSlot.BREAKFAST,
            350, 20, 30, 15,
            ingredients=(Ingredient("eggs", "pc", 2), Ingredient("bread slices", "pc", 2)),
        ),
        make_item(
            "Chicken Rice",
            MealSlot.LUNCH,
            600, 45, 70, 12,
            ingredients=(
                Ingredient("chicken breast", "g", 150),
                Ingredient("rice (cooked)", "g", 200),
            ),
        ),
        make_item(
            "Tofu Bowl",
            MealSlot.LUNCH,
            550, 25, 65, 18,
            ingredients=(Ingredient("tofu", "g", 200), Ingredient("rice (cooked)", "g", 150)),
        ),
        make_item(
            "Salmon Plate",
            MealSlot.DINNER,
            650, 40, 50, 28,
            ingredients=(Ingredient("salmon fillet", "g", 180), Ingredient("Milk", "ml", 50)),
        ),
        make_item(
            "Bean Chili",
            MealSlot.DINNER,
            500, 28, 65, 10,
            ingredients=(Ingredient("kidney beans", "g", 200), Ingredient("onion", "pc", 1)),
        ),
    )


@pytest.fixture
def daily_target() -> NutrientVector:
    return NutrientVector(2200, 120, 250, 70)


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def cli_env(temp_db, tmp_path, monkeypatch):
    """Point the CLI at default settings and a temporary database."""
    settings = Settings()
    settings.database.path = temp_db.db_path
    monkeypatch.setattr(settings_module, "_settings", settings)
    set_db(temp_db)

    yield settings

    set_db(None)

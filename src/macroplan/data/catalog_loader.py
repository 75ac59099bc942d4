"""Load recipe catalogs from YAML and look recipes up by name.

A catalog file is a YAML list of recipes (or a mapping with a ``recipes``
key)::

    recipes:
      - name: Overnight Oats
        slot: breakfast
        calories: 420
        protein: 22
        carbs: 60
        fat: 10
        base_servings: 2          # optional, default 1
        ingredients:
          - [oats, g, 120]
          - {name: milk, unit: ml, quantity: 300}
        instructions:
          - Mix and refrigerate overnight
        prep_minutes: 5
        cook_minutes: 0
        difficulty: Easy

File order is preserved; it is the optimizer's scan order.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Optional, Sequence

import yaml

from macroplan.data.recipe_library import get_default_catalog
from macroplan.optimizer.models import (
    CatalogError,
    CatalogItem,
    Ingredient,
    MealSlot,
    NutrientVector,
    UnknownRecipeError,
)

if TYPE_CHECKING:
    from macroplan.config.settings import Settings


def _parse_ingredient(raw: Any, where: str) -> Ingredient:
    if isinstance(raw, dict):
        try:
            return Ingredient(
                name=str(raw["name"]),
                unit=str(raw["unit"]),
                quantity=float(raw["quantity"]),
            )
        except KeyError as e:
            raise CatalogError(f"{where}: ingredient is missing {e}") from e
        except (TypeError, ValueError) as e:
            raise CatalogError(f"{where}: invalid ingredient quantity: {e}") from e

    if isinstance(raw, (list, tuple)) and len(raw) == 3:
        name, unit, quantity = raw
        try:
            return Ingredient(str(name), str(unit), float(quantity))
        except (TypeError, ValueError) as e:
            raise CatalogError(f"{where}: invalid ingredient quantity: {e}") from e

    raise CatalogError(
        f"{where}: ingredient must be [name, unit, quantity] or a mapping, got {raw!r}"
    )


def parse_catalog_entry(data: dict[str, Any], index: int = 0) -> CatalogItem:
    """Build a CatalogItem from one YAML entry.

    Args:
        data: Parsed YAML mapping for one recipe
        index: Position of the entry in the file, used in error messages

    Raises:
        CatalogError: If a required field is missing or invalid.
    """
    where = f"recipe #{index + 1}"
    if not isinstance(data, dict):
        raise CatalogError(f"{where}: expected a mapping, got {type(data).__name__}")

    name = data.get("name")
    if not name:
        raise CatalogError(f"{where}: 'name' is required")
    where = f"recipe #{index + 1} ('{name}')"

    try:
        slot = MealSlot(str(data.get("slot", "")).lower())
    except ValueError as e:
        valid = ", ".join(s.value for s in MealSlot)
        raise CatalogError(f"{where}: 'slot' must be one of {valid}") from e

    try:
        macros = NutrientVector(
            energy=float(data["calories"]),
            protein=float(data["protein"]),
            carbohydrate=float(data["carbs"]),
            fat=float(data["fat"]),
        )
    except KeyError as e:
        raise CatalogError(f"{where}: missing nutrient {e}") from e
    except (TypeError, ValueError) as e:
        raise CatalogError(f"{where}: invalid nutrient value: {e}") from e
    if any(value < 0 for value in macros.as_tuple()):
        raise CatalogError(f"{where}: nutrient values cannot be negative")

    ingredients = tuple(
        _parse_ingredient(raw, where) for raw in data.get("ingredients") or []
    )

    try:
        return CatalogItem(
            name=str(name),
            slot=slot,
            macros=macros,
            ingredients=ingredients,
            base_servings=float(data.get("base_servings", 1.0)),
            instructions=tuple(str(step) for step in data.get("instructions") or []),
            prep_minutes=int(data.get("prep_minutes", 15)),
            cook_minutes=int(data.get("cook_minutes", 15)),
            difficulty=str(data.get("difficulty", "Medium")),
        )
    except (TypeError, ValueError) as e:
        raise CatalogError(f"{where}: {e}") from e


def parse_catalog(data: Any) -> tuple[CatalogItem, ...]:
    """Build a catalog from parsed YAML data, rejecting duplicate names."""
    if isinstance(data, dict):
        data = data.get("recipes")
    if not isinstance(data, list):
        raise CatalogError("Catalog must be a list of recipes or a mapping with 'recipes'")

    items: list[CatalogItem] = []
    seen: set[str] = set()
    for index, entry in enumerate(data):
        item = parse_catalog_entry(entry, index)
        key = item.name.casefold()
        if key in seen:
            raise CatalogError(f"recipe #{index + 1}: duplicate name '{item.name}'")
        seen.add(key)
        items.append(item)
    return tuple(items)


def load_catalog_from_yaml(path: Path) -> tuple[CatalogItem, ...]:
    """Load a catalog from a YAML file.

    Raises:
        CatalogError: If the file is missing, not valid YAML, or malformed.
    """
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e
    return parse_catalog(data)


def catalog_to_yaml_data(catalog: Iterable[CatalogItem]) -> dict[str, Any]:
    """Convert a catalog to the YAML structure read by parse_catalog()."""
    return {
        "recipes": [
            {
                "name": item.name,
                "slot": item.slot.value,
                "calories": item.macros.energy,
                "protein": item.macros.protein,
                "carbs": item.macros.carbohydrate,
                "fat": item.macros.fat,
                "base_servings": item.base_servings,
                "ingredients": [[i.name, i.unit, i.quantity] for i in item.ingredients],
                "instructions": list(item.instructions),
                "prep_minutes": item.prep_minutes,
                "cook_minutes": item.cook_minutes,
                "difficulty": item.difficulty,
            }
            for item in catalog
        ]
    }


def load_catalog(settings: Optional["Settings"] = None) -> tuple[CatalogItem, ...]:
    """Load the configured catalog, or the built-in one if none is set."""
    if settings is not None and settings.catalog.path is not None:
        return load_catalog_from_yaml(settings.catalog.path)
    return get_default_catalog()


def filter_by_slot(catalog: Iterable[CatalogItem], slot: MealSlot) -> list[CatalogItem]:
    """Items of one slot, in catalog order."""
    return [item for item in catalog if item.slot == slot]


def find_by_name(catalog: Iterable[CatalogItem], name: str) -> CatalogItem:
    """Find a recipe by name, ignoring case.

    Raises:
        UnknownRecipeError: If no recipe has that name.
    """
    for item in catalog:
        if item.matches_name(name):
            return item
    raise UnknownRecipeError(name)


def exclude_keywords(
    catalog: Iterable[CatalogItem], keywords: Sequence[str]
) -> list[CatalogItem]:
    """Drop recipes whose name or ingredients mention any keyword."""
    if not keywords:
        return list(catalog)
    return [item for item in catalog if not item.contains_any(keywords)]

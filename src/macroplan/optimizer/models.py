"""Data models for catalog items, selections and day plans."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union


class MealSlot(Enum):
    """Meal periods of a plan day, in plan order."""

    BREAKFAST = "breakfast"  # Morning
    LUNCH = "lunch"  # Midday
    DINNER = "dinner"  # Evening

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def ordered(cls) -> tuple["MealSlot", ...]:
        """Return the slots in the order they are planned each day."""
        return (cls.BREAKFAST, cls.LUNCH, cls.DINNER)


@dataclass(frozen=True)
class NutrientVector:
    """Energy and macro-nutrient amounts.

    Arithmetic is component-wise and never clamps, so a subtraction may
    produce negative components.
    """

    energy: float = 0.0  # kcal
    protein: float = 0.0  # g
    carbohydrate: float = 0.0  # g
    fat: float = 0.0  # g

    @classmethod
    def zero(cls) -> "NutrientVector":
        return cls(0.0, 0.0, 0.0, 0.0)

    def add(self, other: "NutrientVector") -> "NutrientVector":
        return NutrientVector(
            self.energy + other.energy,
            self.protein + other.protein,
            self.carbohydrate + other.carbohydrate,
            self.fat + other.fat,
        )

    def subtract(self, other: "NutrientVector") -> "NutrientVector":
        return NutrientVector(
            self.energy - other.energy,
            self.protein - other.protein,
            self.carbohydrate - other.carbohydrate,
            self.fat - other.fat,
        )

    def scale(self, factor: float) -> "NutrientVector":
        return NutrientVector(
            self.energy * factor,
            self.protein * factor,
            self.carbohydrate * factor,
            self.fat * factor,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.energy, self.protein, self.carbohydrate, self.fat)

    def __add__(self, other: "NutrientVector") -> "NutrientVector":
        return self.add(other)

    def __sub__(self, other: "NutrientVector") -> "NutrientVector":
        return self.subtract(other)

    def __mul__(self, factor: float) -> "NutrientVector":
        return self.scale(factor)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return (
            f"{self.energy:.0f} kcal | P {self.protein:.0f}g | "
            f"C {self.carbohydrate:.0f}g | F {self.fat:.0f}g"
        )


def sum_vectors(vectors: Iterable[NutrientVector]) -> NutrientVector:
    """Add up a sequence of vectors, starting from zero."""
    total = NutrientVector.zero()
    for vector in vectors:
        total = total.add(vector)
    return total


@dataclass(frozen=True)
class Ingredient:
    """An ingredient quantity, defined per base serving of its recipe."""

    name: str
    unit: str  # g, ml, pc, slices
    quantity: float

    def scaled(self, factor: float) -> "Ingredient":
        return Ingredient(self.name, self.unit, self.quantity * factor)

    def __str__(self) -> str:
        return f"{self.name}: {self.quantity:.1f} {self.unit}"


@dataclass(frozen=True)
class CatalogItem:
    """A recipe that can fill one meal slot.

    Attributes:
        name: Display name, also the identity used for repeat detection
        slot: Meal slot this recipe is planned in
        macros: Nutrients at ``base_servings``
        ingredients: Ingredient quantities at ``base_servings``
        base_servings: Serving count the nutrients and quantities refer to
        instructions: Cooking steps
        prep_minutes: Preparation time
        cook_minutes: Cooking time
        difficulty: Easy / Medium / Hard
    """

    name: str
    slot: MealSlot
    macros: NutrientVector
    ingredients: tuple[Ingredient, ...] = ()
    base_servings: float = 1.0
    instructions: tuple[str, ...] = ()
    prep_minutes: int = 15
    cook_minutes: int = 15
    difficulty: str = "Medium"

    def __post_init__(self) -> None:
        if not self.base_servings > 0:
            raise ValueError(
                f"base_servings must be positive for '{self.name}', "
                f"got {self.base_servings}"
            )
        # Lists are accepted from callers but stored as tuples.
        object.__setattr__(self, "ingredients", tuple(self.ingredients))
        object.__setattr__(self, "instructions", tuple(self.instructions))

    def macros_for(self, servings: float) -> NutrientVector:
        """Nutrients for the given number of servings."""
        return self.macros.scale(servings / self.base_servings)

    def ingredients_for(self, servings: float) -> list[Ingredient]:
        """Ingredient quantities for the given number of servings."""
        factor = servings / self.base_servings
        return [ingredient.scaled(factor) for ingredient in self.ingredients]

    def matches_name(self, other: Union["CatalogItem", str]) -> bool:
        other_name = other.name if isinstance(other, CatalogItem) else other
        return self.name.casefold() == other_name.casefold()

    def contains_any(self, keywords: Iterable[str]) -> bool:
        """Check whether the name or any ingredient mentions a keyword."""
        haystacks = [self.name.lower()] + [i.name.lower() for i in self.ingredients]
        for keyword in keywords:
            needle = keyword.strip().lower()
            if needle and any(needle in text for text in haystacks):
                return True
        return False

    @property
    def total_minutes(self) -> int:
        return self.prep_minutes + self.cook_minutes

    def formatted_instructions(self) -> str:
        if not self.instructions:
            return "No instructions available"
        return "\n".join(
            f"{number}. {step}" for number, step in enumerate(self.instructions, 1)
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.slot.label}): {self.macros}"


@dataclass(frozen=True)
class Selection:
    """A catalog item chosen for a slot, with its serving multiplier."""

    item: CatalogItem
    servings: float

    @property
    def macros(self) -> NutrientVector:
        return self.item.macros_for(self.servings)

    @property
    def ingredients(self) -> list[Ingredient]:
        return self.item.ingredients_for(self.servings)

    @property
    def slot(self) -> MealSlot:
        return self.item.slot


@dataclass(frozen=True)
class DayPlan:
    """One planned day: a selection for each meal slot."""

    day: int  # 1-based
    breakfast: Selection
    lunch: Selection
    dinner: Selection

    @property
    def selections(self) -> tuple[Selection, Selection, Selection]:
        return (self.breakfast, self.lunch, self.dinner)

    def get(self, slot: MealSlot) -> Selection:
        return getattr(self, slot.value)

    @property
    def macros(self) -> NutrientVector:
        return sum_vectors(s.macros for s in self.selections)

    @property
    def ingredients(self) -> list[Ingredient]:
        return [i for s in self.selections for i in s.ingredients]

    @property
    def total_minutes(self) -> int:
        return sum(s.item.total_minutes for s in self.selections)


# Custom exceptions


class MealPlanError(Exception):
    """Base exception for macroplan errors."""

    pass


class EmptySlotCategoryError(MealPlanError):
    """Raised when a meal slot has no catalog items to choose from."""

    def __init__(self, slots: Iterable[MealSlot]):
        self.slots = tuple(slots)
        names = ", ".join(slot.value for slot in self.slots)
        super().__init__(f"No catalog items available for slot(s): {names}")


class InvalidDayCountError(MealPlanError):
    """Raised when a plan is requested for fewer than one day."""

    def __init__(self, day_count: object):
        self.day_count = day_count
        super().__init__(f"Day count must be a positive integer, got {day_count!r}")


class UnknownRecipeError(MealPlanError):
    """Raised when a stored recipe name is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Recipe '{name}' is not in the catalog")


class CatalogError(MealPlanError):
    """Raised when a catalog file cannot be parsed."""

    pass


class AuthenticationError(MealPlanError):
    """Raised when a username/password pair does not match."""

    pass


class UserExistsError(MealPlanError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str, message: Optional[str] = None):
        self.username = username
        super().__init__(message or f"Username '{username}' already exists")

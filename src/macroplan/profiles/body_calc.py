"""Body composition calculator for calorie and macro targets.

Calculates TDEE (Total Daily Energy Expenditure) and a daily macronutrient
target from body metrics and a goal (maintain, cut, bulk).

Uses Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate. Inputs are metric.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from macroplan.optimizer.models import NutrientVector


class Sex(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE calculation."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    ACTIVE = "active"                # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very_active"      # Physical job plus exercise


class Goal(Enum):
    """Body composition goal."""
    MAINTAIN = "maintain"            # TDEE
    CUT = "cut"                      # 15% deficit
    BULK = "bulk"                    # 10% surplus


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

ACTIVITY_DESCRIPTIONS = {
    ActivityLevel.SEDENTARY: "Sedentary (little to no exercise)",
    ActivityLevel.LIGHT: "Lightly active (1-3 days/week)",
    ActivityLevel.MODERATE: "Moderately active (3-5 days/week)",
    ActivityLevel.ACTIVE: "Very active (6-7 days/week)",
    ActivityLevel.VERY_ACTIVE: "Extra active (physical job + exercise)",
}

# Calorie multiplier of TDEE by goal
GOAL_MULTIPLIERS = {
    Goal.MAINTAIN: 1.0,
    Goal.CUT: 0.85,
    Goal.BULK: 1.1,
}

# Share of calories from (protein, carbs, fat) by goal
MACRO_SPLITS = {
    Goal.MAINTAIN: (0.30, 0.40, 0.30),
    Goal.CUT: (0.35, 0.35, 0.30),
    Goal.BULK: (0.25, 0.45, 0.30),
}

GOAL_DESCRIPTIONS = {
    Goal.MAINTAIN: "Maintain weight",
    Goal.CUT: "Lose weight (15% deficit)",
    Goal.BULK: "Gain muscle (10% surplus)",
}

# Atwater factors
KCAL_PER_GRAM_PROTEIN = 4.0
KCAL_PER_GRAM_CARBS = 4.0
KCAL_PER_GRAM_FAT = 9.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass
class MacroTargets:
    """Calculated daily target based on body composition goals."""

    bmr: float                  # Basal Metabolic Rate
    tdee: float                 # Total Daily Energy Expenditure
    target: NutrientVector      # Rounded daily target
    goal: Goal
    activity_level: ActivityLevel

    def summary(self) -> str:
        """Human-readable summary of targets."""
        return "\n".join(
            [
                f"Goal: {GOAL_DESCRIPTIONS[self.goal]}",
                f"Activity: {ACTIVITY_DESCRIPTIONS[self.activity_level]}",
                f"BMR: {self.bmr:.0f} kcal/day",
                f"TDEE: {self.tdee:.0f} kcal/day",
                f"Target: {self.target}",
            ]
        )


def calculate_bmr(age: int, sex: Sex, height_cm: float, weight_kg: float) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        sex: Biological sex
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms

    Returns:
        BMR in calories per day
    """
    bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)
    if sex == Sex.MALE:
        return bmr + 5
    return bmr - 161


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level

    Returns:
        TDEE in calories per day
    """
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def generate_macros(tdee: float, goal: Goal) -> NutrientVector:
    """Split goal-adjusted calories into protein, carb and fat grams.

    Every value is rounded half-up to a whole number.
    """
    calories = tdee * GOAL_MULTIPLIERS[goal]
    protein_share, carb_share, fat_share = MACRO_SPLITS[goal]
    return NutrientVector(
        energy=round_half_up(calories),
        protein=round_half_up(calories * protein_share / KCAL_PER_GRAM_PROTEIN),
        carbohydrate=round_half_up(calories * carb_share / KCAL_PER_GRAM_CARBS),
        fat=round_half_up(calories * fat_share / KCAL_PER_GRAM_FAT),
    )


def calculate_targets(
    age: int,
    sex: str,
    height_cm: float,
    weight_kg: float,
    goal: str = "maintain",
    activity_level: str = "moderate",
) -> MacroTargets:
    """Calculate a daily calorie and macro target.

    Args:
        age: Age in years
        sex: "male" or "female"
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms
        goal: "maintain", "cut" or "bulk"
        activity_level: "sedentary", "light", "moderate", "active", "very_active"

    Returns:
        MacroTargets with the rounded daily target

    Raises:
        ValueError: On an unknown sex, goal or activity level, or on
            non-positive body metrics.
    """
    if age <= 0 or height_cm <= 0 or weight_kg <= 0:
        raise ValueError("Age, height and weight must be positive")

    sex_enum = Sex(sex.lower())
    goal_enum = Goal(goal.lower())
    activity_enum = ActivityLevel(activity_level.lower())

    bmr = calculate_bmr(age, sex_enum, height_cm, weight_kg)
    tdee = calculate_tdee(bmr, activity_enum)

    return MacroTargets(
        bmr=bmr,
        tdee=tdee,
        target=generate_macros(tdee, goal_enum),
        goal=goal_enum,
        activity_level=activity_enum,
    )


def targets_to_dict(targets: MacroTargets) -> dict:
    """Convert MacroTargets to dict for JSON output."""
    return {
        "calories": targets.target.energy,
        "protein": targets.target.protein,
        "carbs": targets.target.carbohydrate,
        "fat": targets.target.fat,
        "reference": {
            "bmr": round(targets.bmr, 1),
            "tdee": round(targets.tdee, 1),
        },
        "goal": targets.goal.value,
        "activity_level": targets.activity_level.value,
    }

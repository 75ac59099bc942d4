"""Tests for plan output formatters."""

import io
import json

import pytest
from rich.console import Console

from macroplan.export.formatters import (
    JSONFormatter,
    MarkdownFormatter,
    TableFormatter,
    format_plan,
    progress_bar,
)
from macroplan.optimizer.models import Ingredient, MealSlot, NutrientVector
from macroplan.optimizer.planner import build_plan

from conftest import make_item


@pytest.fixture
def plan(small_catalog, daily_target):
    return build_plan(2, daily_target, small_catalog)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestProgressBar:
    """Tests for progress_bar."""

    def test_half(self):
        """Test a half-filled bar."""
        assert progress_bar(1100, 2200) == "[" + "█" * 10 + "░" * 10 + "] 50%"

    def test_capped_at_full(self):
        """Test that going over target shows a full bar at 100%."""
        assert progress_bar(3000, 2200) == "[" + "█" * 20 + "] 100%"

    def test_zero_target(self):
        """Test that a zero target gives an empty bar."""
        assert progress_bar(50, 0) == "[" + "░" * 20 + "] 0%"

    def test_negative_value_gives_empty_bar(self):
        """Test that the bar never grows past its width below zero."""
        assert progress_bar(-100, 2200) == "[" + "░" * 20 + "] 0%"

    def test_width(self):
        """Test a custom width."""
        assert progress_bar(1, 4, width=8) == "[██░░░░░░] 25%"


class TestJSONFormatter:
    """Tests for JSON output."""

    def test_structure(self, plan, daily_target):
        """Test per-meal nutrients, totals, target and average."""
        data = json.loads(JSONFormatter().format(plan, daily_target))

        assert len(data["days"]) == 2
        day = data["days"][0]
        assert day["breakfast"]["recipe"] == plan[0].breakfast.item.name
        assert day["breakfast"]["nutrients"]["calories"] == pytest.approx(
            plan[0].breakfast.macros.energy, abs=0.05
        )
        assert day["totals"]["calories"] == pytest.approx(plan[0].macros.energy, abs=0.05)
        assert day["total_minutes"] == plan[0].total_minutes
        assert data["target"] == {"calories": 2200, "protein": 120, "carbs": 250, "fat": 70}
        assert set(data["average"]) == {"calories", "protein", "carbs", "fat"}
        assert "timestamp" in data


class TestMarkdownFormatter:
    """Tests for Markdown output."""

    def test_sections(self, plan, daily_target):
        """Test headings and one table row per meal."""
        text = MarkdownFormatter().format(plan, daily_target)
        assert text.startswith("# Meal Plan")
        assert "## Day 1" in text
        assert "## Day 2" in text
        assert "## Average" in text
        assert f"| Breakfast | {plan[0].breakfast.item.name} |" in text

    def test_empty_plan(self, daily_target):
        """Test that an empty plan has no day or average sections."""
        text = MarkdownFormatter().format([], daily_target)
        assert "## Day" not in text
        assert "## Average" not in text


class TestTableFormatter:
    """Tests for Rich table output."""

    def test_plan(self, plan, daily_target, console):
        """Test that days, recipes and the average are printed."""
        TableFormatter(console).format_plan(plan, daily_target, title="alice")
        output = console.file.getvalue()
        assert "Day 1" in output
        assert "alice" in output
        assert plan[0].lunch.item.name in output
        assert "Average daily macros" in output

    def test_names_are_escaped(self, daily_target, console):
        """Test that markup-like recipe names print literally."""
        catalog = [
            make_item("[bold]Oats[/bold]", MealSlot.BREAKFAST, 500),
            make_item("Soup", MealSlot.LUNCH, 800),
            make_item("Stew", MealSlot.DINNER, 700),
        ]
        plan = build_plan(1, daily_target, catalog)
        TableFormatter(console).format_plan(plan, daily_target)
        assert "[bold]Oats[/bold]" in console.file.getvalue()

    def test_recipe_card(self, console):
        """Test a scaled recipe card."""
        item = make_item(
            "Toast",
            MealSlot.BREAKFAST,
            300,
            ingredients=(Ingredient("bread slices", "pc", 2),),
        )
        TableFormatter(console).format_recipe(item, servings=2)
        output = console.file.getvalue()
        assert "Toast" in output
        assert "4.0 pc" in output
        assert "600 kcal" in output
        assert "No instructions available" in output


class TestFormatPlan:
    """Tests for the format_plan dispatcher."""

    def test_json_and_markdown_return_text(self, plan, daily_target):
        """Test that text formats return strings."""
        assert json.loads(format_plan(plan, daily_target, "json"))["days"]
        assert format_plan(plan, daily_target, "markdown").startswith("# Meal Plan")

    def test_table_prints(self, plan, daily_target, console):
        """Test that the table format prints and returns None."""
        assert format_plan(plan, daily_target, "table", console) is None
        assert "Day 2" in console.file.getvalue()

    def test_unknown_format(self, plan, daily_target):
        """Test that an unknown format is rejected."""
        with pytest.raises(ValueError, match="Unknown output format"):
            format_plan(plan, NutrientVector(2000), "csv")

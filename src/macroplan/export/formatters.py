"""Output formatters for meal plans."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from macroplan.export.serialization import nutrients_to_dict, plan_to_dict
from macroplan.optimizer.models import CatalogItem, DayPlan, NutrientVector
from macroplan.optimizer.planner import average_macros

BAR_WIDTH = 20

_NUTRIENT_ROWS = (
    ("Calories", "energy", "kcal"),
    ("Protein", "protein", "g"),
    ("Carbs", "carbohydrate", "g"),
    ("Fat", "fat", "g"),
)


def progress_bar(value: float, target: float, width: int = BAR_WIDTH) -> str:
    """Text progress bar of value against target, clamped to 0-100%."""
    if target <= 0:
        return f"[{'░' * width}] 0%"
    ratio = max(0.0, min(1.0, value / target))
    filled = int(ratio * width + 0.5)
    return f"[{'█' * filled}{'░' * (width - filled)}] {int(ratio * 100 + 0.5)}%"


class TableFormatter:
    """Format plans as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def _progress(self, actual: NutrientVector, target: NutrientVector) -> None:
        for label, attr, _ in _NUTRIENT_ROWS:
            self.console.print(
                f"  {label:<9}{progress_bar(getattr(actual, attr), getattr(target, attr))}",
                highlight=False,
            )

    def format_plan(
        self,
        plan: Sequence[DayPlan],
        target: NutrientVector,
        title: Optional[str] = None,
    ) -> None:
        """Print one table per day, then the average against the target.

        Args:
            plan: Meal plan to format
            target: Daily nutrient target
            title: Optional heading, e.g. the user name
        """
        header_lines = [
            f"[bold]MEAL PLAN[/bold] - {datetime.now().strftime('%Y-%m-%d %H:%M')}",
        ]
        if title:
            header_lines.append(title)
        header_lines.append(f"Days: {len(plan)} | Target: {target}")
        self.console.print(Panel("\n".join(header_lines), title="Meal Plan"))

        for day in plan:
            table = Table(title=f"Day {day.day}")
            table.add_column("Meal", style="bold")
            table.add_column("Recipe", style="cyan", max_width=40)
            table.add_column("Servings", justify="right")
            table.add_column("Time", justify="right")
            table.add_column("Calories", justify="right")
            table.add_column("Protein", justify="right")
            table.add_column("Carbs", justify="right")
            table.add_column("Fat", justify="right")

            for selection in day.selections:
                macros = selection.macros
                table.add_row(
                    selection.slot.label,
                    escape(selection.item.name),
                    f"x{selection.servings:.1f}",
                    f"{selection.item.total_minutes} min",
                    f"{macros.energy:.0f}",
                    f"{macros.protein:.0f}g",
                    f"{macros.carbohydrate:.0f}g",
                    f"{macros.fat:.0f}g",
                )

            totals = day.macros
            table.add_row(
                "[bold]TOTAL[/bold]",
                "",
                "",
                f"{day.total_minutes} min",
                f"{totals.energy:.0f}",
                f"{totals.protein:.0f}g",
                f"{totals.carbohydrate:.0f}g",
                f"{totals.fat:.0f}g",
                style="bold",
            )
            table.add_row(
                "[dim]Target[/dim]",
                "",
                "",
                "",
                f"[dim]{target.energy:.0f}[/dim]",
                f"[dim]{target.protein:.0f}g[/dim]",
                f"[dim]{target.carbohydrate:.0f}g[/dim]",
                f"[dim]{target.fat:.0f}g[/dim]",
            )
            self.console.print(table)
            self._progress(totals, target)
            self.console.print()

        if plan:
            average = average_macros(plan)
            self.console.print(f"[bold]Average daily macros:[/bold] {average}")
            self._progress(average, target)

    def format_recipe(self, item: CatalogItem, servings: Optional[float] = None) -> None:
        """Print a recipe card, scaled to ``servings`` if given."""
        servings = item.base_servings if servings is None else servings
        macros = item.macros_for(servings)

        header = [
            f"[bold]{escape(item.name)}[/bold] ({item.slot.label})",
            f"Servings: {servings:g} | Prep: {item.prep_minutes} min | "
            f"Cook: {item.cook_minutes} min | Difficulty: {item.difficulty}",
            f"Nutrition: {macros}",
        ]
        self.console.print(Panel("\n".join(header), title="Recipe"))

        table = Table(title="Ingredients")
        table.add_column("Ingredient", style="cyan")
        table.add_column("Amount", justify="right")
        for ingredient in item.ingredients_for(servings):
            table.add_row(escape(ingredient.name), f"{ingredient.quantity:.1f} {ingredient.unit}")
        self.console.print(table)

        self.console.print("[bold]Instructions[/bold]")
        self.console.print(item.formatted_instructions(), highlight=False)


class JSONFormatter:
    """Format plans as JSON for programmatic use."""

    def to_dict(self, plan: Sequence[DayPlan], target: NutrientVector) -> dict:
        """Plan with per-meal nutrients, day totals, target and average."""
        data = plan_to_dict(plan)
        for day_data, day in zip(data["days"], plan):
            for selection in day.selections:
                day_data[selection.slot.value]["nutrients"] = nutrients_to_dict(
                    selection.macros
                )
            day_data["totals"] = nutrients_to_dict(day.macros)
            day_data["total_minutes"] = day.total_minutes

        data["timestamp"] = datetime.now().isoformat()
        data["target"] = nutrients_to_dict(target)
        data["average"] = nutrients_to_dict(average_macros(plan))
        return data

    def format(self, plan: Sequence[DayPlan], target: NutrientVector) -> str:
        """Return JSON string.

        Args:
            plan: Meal plan to format
            target: Daily nutrient target

        Returns:
            JSON string
        """
        return json.dumps(self.to_dict(plan, target), indent=2)


class MarkdownFormatter:
    """Format plans as Markdown for sharing or documentation."""

    def format(self, plan: Sequence[DayPlan], target: NutrientVector) -> str:
        """Return Markdown string.

        Args:
            plan: Meal plan to format
            target: Daily nutrient target

        Returns:
            Markdown string
        """
        lines = [
            "# Meal Plan",
            "",
            f"**Days:** {len(plan)}",
            f"**Daily target:** {target}",
        ]

        for day in plan:
            lines.extend(
                [
                    "",
                    f"## Day {day.day}",
                    "",
                    "| Meal | Recipe | Servings | Calories | Protein | Carbs | Fat |",
                    "|------|--------|----------|----------|---------|-------|-----|",
                ]
            )
            for selection in day.selections:
                m = selection.macros
                lines.append(
                    f"| {selection.slot.label} | {selection.item.name} | "
                    f"{selection.servings:.1f} | {m.energy:.0f} | {m.protein:.0f}g | "
                    f"{m.carbohydrate:.0f}g | {m.fat:.0f}g |"
                )
            lines.append("")
            lines.append(f"**Total:** {day.macros} ({day.total_minutes} min cooking)")

        if plan:
            lines.extend(["", "## Average", "", str(average_macros(plan))])

        return "\n".join(lines)


def format_plan(
    plan: Sequence[DayPlan],
    target: NutrientVector,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a plan in the specified format.

    Args:
        plan: Meal plan to format
        target: Daily nutrient target
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format_plan(plan, target)
        return None
    elif output_format == "json":
        return JSONFormatter().format(plan, target)
    elif output_format == "markdown":
        return MarkdownFormatter().format(plan, target)
    else:
        raise ValueError(f"Unknown output format: {output_format}")

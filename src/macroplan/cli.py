"""CLI interface using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from macroplan.app_logging import configure_logging
from macroplan.config import get_settings
from macroplan.config.settings import Settings, default_config_path
from macroplan.data.catalog_loader import (
    catalog_to_yaml_data,
    exclude_keywords,
    filter_by_slot,
    find_by_name,
    load_catalog,
)
from macroplan.db import get_db
from macroplan.db.queries import GroceryQueries, PlanQueries, UserProfile, UserQueries
from macroplan.export.formatters import JSONFormatter, MarkdownFormatter, TableFormatter
from macroplan.export.serialization import nutrients_to_dict
from macroplan.export.shopping_list import (
    format_shopping_list,
    generate_shopping_list,
    shopping_list_to_dict,
)
from macroplan.optimizer.models import (
    CatalogItem,
    DayPlan,
    MealPlanError,
    MealSlot,
    NutrientVector,
)
from macroplan.optimizer.planner import build_plan, slot_target
from macroplan.optimizer.slot_optimizer import SlotOptimizer

app = typer.Typer(
    help="Multi-day meal planning against a daily macro target",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
grocery_app = typer.Typer(help="Grocery list for a saved plan")
recipes_app = typer.Typer(help="Browse and export the recipe catalog")
targets_app = typer.Typer(help="Calculate and save daily macro targets")
user_app = typer.Typer(help="Manage user accounts")
config_app = typer.Typer(help="Show and create the configuration file")

app.add_typer(grocery_app, name="grocery")
app.add_typer(recipes_app, name="recipes")
app.add_typer(targets_app, name="targets")
app.add_typer(user_app, name="user")
app.add_typer(config_app, name="config")

OUTPUT_FORMATS = ("table", "json", "markdown")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Plan meals for several days against a daily macro target."""
    configure_logging("DEBUG" if verbose else get_settings().logging.level)


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def fail(
    command: str,
    message: str,
    json_output: bool,
    suggestions: Optional[list[str]] = None,
) -> NoReturn:
    """Report an error in the requested output mode and exit with status 1."""
    if json_output:
        response = {"success": False, "command": command, "errors": [message]}
        if suggestions:
            response["suggestions"] = suggestions
        output_json(response)
    else:
        console.print(f"[red]{escape(message)}[/red]")
        for suggestion in suggestions or []:
            console.print(suggestion)
    raise typer.Exit(1)


def get_catalog(command: str, json_output: bool) -> tuple[CatalogItem, ...]:
    try:
        return load_catalog(get_settings())
    except MealPlanError as e:
        fail(command, str(e), json_output)


def parse_slot(command: str, value: str, json_output: bool) -> MealSlot:
    try:
        return MealSlot(value.strip().lower())
    except ValueError:
        valid = ", ".join(slot.value for slot in MealSlot)
        fail(command, f"Unknown meal slot '{value}'. Choose one of: {valid}", json_output)


def check_day_count(command: str, days: int, settings: Settings, json_output: bool) -> None:
    low, high = settings.planner.min_days, settings.planner.max_days
    if not low <= days <= high:
        fail(command, f"Days must be between {low} and {high}, got {days}", json_output)


def apply_overrides(
    base: NutrientVector,
    calories: Optional[float],
    protein: Optional[float],
    carbs: Optional[float],
    fat: Optional[float],
) -> NutrientVector:
    """Replace the components of a target given on the command line."""
    return NutrientVector(
        energy=base.energy if calories is None else calories,
        protein=base.protein if protein is None else protein,
        carbohydrate=base.carbohydrate if carbs is None else carbs,
        fat=base.fat if fat is None else fat,
    )


def login(
    command: str,
    username: str,
    password: Optional[str],
    json_output: bool,
) -> UserProfile:
    """Authenticate a user, prompting for the password if not given."""
    if password is None:
        password = Prompt.ask("Password", password=True)

    db = get_db()
    try:
        with db.get_connection() as conn:
            return UserQueries.authenticate(conn, username, password)
    except MealPlanError as e:
        fail(command, str(e), json_output)


def load_saved_plan(
    command: str, username: str, json_output: bool
) -> list[DayPlan]:
    catalog = get_catalog(command, json_output)
    db = get_db()
    try:
        with db.get_connection() as conn:
            plan = PlanQueries.load_plan(conn, username, catalog)
    except MealPlanError as e:
        fail(command, f"Could not load saved plan: {e}", json_output)

    if plan is None:
        fail(
            command,
            f"No saved plan for '{username}'",
            json_output,
            [f"Create one with: macroplan plan --user {username}"],
        )
    return plan


def print_plan(
    plan: list[DayPlan],
    target: NutrientVector,
    output_format: str,
    title: Optional[str] = None,
) -> None:
    if output_format == "json":
        print(JSONFormatter().format(plan, target))
    elif output_format == "markdown":
        print(MarkdownFormatter().format(plan, target))
    else:
        TableFormatter(console).format_plan(plan, target, title=title)


# ============================================================================
# Planning
# ============================================================================


@app.command()
def plan(
    days: Optional[int] = typer.Option(None, "--days", "-d", help="Number of days to plan"),
    calories: Optional[float] = typer.Option(
        None, "--calories", min=1200, max=4000, help="Daily calories (kcal)"
    ),
    protein: Optional[float] = typer.Option(
        None, "--protein", min=50, max=300, help="Daily protein (g)"
    ),
    carbs: Optional[float] = typer.Option(
        None, "--carbs", min=100, max=500, help="Daily carbohydrates (g)"
    ),
    fat: Optional[float] = typer.Option(None, "--fat", min=30, max=200, help="Daily fat (g)"),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Skip recipes mentioning this ingredient (repeatable)"
    ),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Plan for (and save to) a user"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Generate a meal plan for a daily macro target."""
    settings = get_settings()
    output_format = output_format or settings.defaults.output_format
    if output_format not in OUTPUT_FORMATS:
        fail("plan", f"Unknown output format: {output_format}", json_output)

    profile = login("plan", user, password, json_output) if user else None
    base_target = profile.target if profile else settings.planner.target.to_vector()
    target = apply_overrides(base_target, calories, protein, carbs, fat)

    if days is None:
        days = profile.days if profile else settings.planner.days
    check_day_count("plan", days, settings, json_output)

    catalog = get_catalog("plan", json_output)
    if exclude:
        catalog = exclude_keywords(catalog, exclude)

    try:
        meal_plan = build_plan(days, target, catalog)
    except MealPlanError as e:
        suggestions = ["Remove some --exclude keywords"] if exclude else None
        fail("plan", str(e), json_output, suggestions)

    if profile:
        db = get_db()
        with db.get_connection() as conn:
            PlanQueries.save_plan(conn, profile.username, meal_plan)
            UserQueries.update_preferences(conn, profile.username, target=target, days=days)

    if json_output:
        data = JSONFormatter().to_dict(meal_plan, target)
        data["saved_for"] = profile.username if profile else None
        output_json({
            "success": True,
            "command": "plan",
            "data": data,
            "human_summary": f"Planned {days} days at {target}",
        })
        return

    print_plan(meal_plan, target, output_format)
    if profile and output_format == "table":
        console.print(f"[green]Plan saved for {escape(profile.username)}[/green]")


@app.command()
def show(
    user: str = typer.Option(..., "--user", "-u", help="User whose plan to show"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    day: Optional[int] = typer.Option(None, "--day", help="Show only this day"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show a user's saved meal plan."""
    settings = get_settings()
    output_format = output_format or settings.defaults.output_format
    if output_format not in OUTPUT_FORMATS:
        fail("show", f"Unknown output format: {output_format}", json_output)

    profile = login("show", user, password, json_output)
    meal_plan = load_saved_plan("show", profile.username, json_output)

    if day is not None:
        meal_plan = [d for d in meal_plan if d.day == day]
        if not meal_plan:
            fail("show", f"Day {day} is not in the saved plan", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "show",
            "data": JSONFormatter().to_dict(meal_plan, profile.target),
            "human_summary": f"Saved plan for {profile.username} ({len(meal_plan)} days)",
        })
        return

    print_plan(meal_plan, profile.target, output_format, title=f"User: {profile.username}")


@app.command()
def explain(
    slot: str = typer.Argument(..., help="Meal slot: breakfast, lunch or dinner"),
    calories: Optional[float] = typer.Option(None, "--calories", help="Daily calories (kcal)"),
    protein: Optional[float] = typer.Option(None, "--protein", help="Daily protein (g)"),
    carbs: Optional[float] = typer.Option(None, "--carbs", help="Daily carbohydrates (g)"),
    fat: Optional[float] = typer.Option(None, "--fat", help="Daily fat (g)"),
    previous: Optional[str] = typer.Option(
        None, "--previous", "-p", help="Recipe chosen for this slot the day before"
    ),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of candidates to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Rank the recipe and serving candidates for one meal slot."""
    settings = get_settings()
    meal_slot = parse_slot("explain", slot, json_output)
    target = apply_overrides(settings.planner.target.to_vector(), calories, protein, carbs, fat)
    sub_target = slot_target(target, meal_slot)

    catalog = get_catalog("explain", json_output)
    candidates = filter_by_slot(catalog, meal_slot)
    if not candidates:
        fail("explain", f"No catalog items available for slot(s): {meal_slot.value}", json_output)

    previous_item = None
    if previous:
        try:
            previous_item = find_by_name(catalog, previous)
        except MealPlanError as e:
            fail("explain", str(e), json_output)

    ranked = SlotOptimizer().rank_candidates(sub_target, candidates, previous_item, limit=limit)

    if json_output:
        output_json({
            "success": True,
            "command": "explain",
            "data": {
                "slot": meal_slot.value,
                "slot_target": nutrients_to_dict(sub_target),
                "previous": previous_item.name if previous_item else None,
                "candidates": [
                    {
                        "recipe": c.item.name,
                        "servings": c.servings,
                        "score": round(c.score, 2),
                        "repeat_penalty": c.repeated,
                        "nutrients": nutrients_to_dict(c.item.macros_for(c.servings)),
                    }
                    for c in ranked
                ],
            },
            "human_summary": (
                f"Best {meal_slot.value}: {ranked[0].item.name} x{ranked[0].servings:.1f}"
            ),
        })
        return

    console.print(f"\n[bold]{meal_slot.label} target:[/bold] {sub_target}")
    table = Table(title=f"Top {len(ranked)} candidates")
    table.add_column("#", justify="right")
    table.add_column("Recipe", style="cyan")
    table.add_column("Servings", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Nutrients")
    for rank, candidate in enumerate(ranked, 1):
        name = escape(candidate.item.name)
        if candidate.repeated:
            name += " [yellow](repeat)[/yellow]"
        table.add_row(
            str(rank),
            name,
            f"x{candidate.servings:.1f}",
            f"{candidate.score:.1f}",
            str(candidate.item.macros_for(candidate.servings)),
        )
    console.print(table)


# ============================================================================
# Grocery list
# ============================================================================


@grocery_app.command("list")
def grocery_list(
    user: str = typer.Option(..., "--user", "-u", help="User whose plan to shop for"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    day: Optional[int] = typer.Option(None, "--day", help="Only this day's ingredients"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the consolidated grocery list for a saved plan."""
    profile = login("grocery list", user, password, json_output)
    meal_plan = load_saved_plan("grocery list", profile.username, json_output)
    if day is not None:
        meal_plan = [d for d in meal_plan if d.day == day]
        if not meal_plan:
            fail("grocery list", f"Day {day} is not in the saved plan", json_output)

    db = get_db()
    with db.get_connection() as conn:
        checked = GroceryQueries.get_checked(conn, profile.username)
    shopping_list = generate_shopping_list(meal_plan, checked=checked)

    if json_output:
        output_json({
            "success": True,
            "command": "grocery list",
            "data": shopping_list_to_dict(shopping_list),
            "human_summary": (
                f"{len(shopping_list.unchecked)} of {len(shopping_list.items)} items to buy"
            ),
        })
        return

    console.print(format_shopping_list(shopping_list), highlight=False, markup=False)


def _set_grocery_check(
    command: str,
    item: str,
    checked: bool,
    user: str,
    password: Optional[str],
    json_output: bool,
) -> None:
    profile = login(command, user, password, json_output)
    meal_plan = load_saved_plan(command, profile.username, json_output)
    grocery_item = generate_shopping_list(meal_plan).find(item)
    if grocery_item is None:
        fail(command, f"'{item}' is not on the grocery list", json_output)

    db = get_db()
    with db.get_connection() as conn:
        GroceryQueries.set_checked(conn, profile.username, grocery_item.key, checked)

    state = "checked off" if checked else "unchecked"
    if json_output:
        output_json({
            "success": True,
            "command": command,
            "data": {"item": grocery_item.name, "checked": checked},
            "human_summary": f"{grocery_item.name} {state}",
        })
    else:
        console.print(f"[green]{escape(grocery_item.name)} {state}[/green]")


@grocery_app.command("check")
def grocery_check(
    item: str = typer.Argument(..., help="Ingredient name"),
    user: str = typer.Option(..., "--user", "-u", help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Mark a grocery item as bought."""
    _set_grocery_check("grocery check", item, True, user, password, json_output)


@grocery_app.command("uncheck")
def grocery_uncheck(
    item: str = typer.Argument(..., help="Ingredient name"),
    user: str = typer.Option(..., "--user", "-u", help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Unmark a grocery item."""
    _set_grocery_check("grocery uncheck", item, False, user, password, json_output)


@grocery_app.command("reset")
def grocery_reset(
    user: str = typer.Option(..., "--user", "-u", help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Clear all check marks on the grocery list."""
    profile = login("grocery reset", user, password, json_output)
    db = get_db()
    with db.get_connection() as conn:
        GroceryQueries.clear(conn, profile.username)

    if json_output:
        output_json({
            "success": True,
            "command": "grocery reset",
            "data": {"username": profile.username},
            "human_summary": "Grocery list reset",
        })
    else:
        console.print("[green]Grocery list reset[/green]")


# ============================================================================
# Recipes
# ============================================================================


@recipes_app.command("list")
def recipes_list(
    slot: Optional[str] = typer.Option(None, "--slot", "-s", help="Only this meal slot"),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Skip recipes mentioning this ingredient (repeatable)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List catalog recipes."""
    catalog = list(get_catalog("recipes list", json_output))
    if slot:
        catalog = filter_by_slot(catalog, parse_slot("recipes list", slot, json_output))
    if exclude:
        catalog = exclude_keywords(catalog, exclude)

    if json_output:
        output_json({
            "success": True,
            "command": "recipes list",
            "data": {
                "recipes": [
                    {
                        "name": item.name,
                        "slot": item.slot.value,
                        "base_servings": item.base_servings,
                        "nutrients": nutrients_to_dict(item.macros),
                        "total_minutes": item.total_minutes,
                        "difficulty": item.difficulty,
                    }
                    for item in catalog
                ]
            },
            "human_summary": f"{len(catalog)} recipes",
        })
        return

    table = Table(title=f"Recipes ({len(catalog)})")
    table.add_column("Recipe", style="cyan")
    table.add_column("Meal")
    table.add_column("Calories", justify="right")
    table.add_column("Protein", justify="right")
    table.add_column("Carbs", justify="right")
    table.add_column("Fat", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Difficulty")
    for item in catalog:
        table.add_row(
            escape(item.name),
            item.slot.label,
            f"{item.macros.energy:.0f}",
            f"{item.macros.protein:.0f}g",
            f"{item.macros.carbohydrate:.0f}g",
            f"{item.macros.fat:.0f}g",
            f"{item.total_minutes} min",
            item.difficulty,
        )
    console.print(table)


@recipes_app.command("show")
def recipes_show(
    name: str = typer.Argument(..., help="Recipe name (case-insensitive)"),
    servings: Optional[float] = typer.Option(
        None, "--servings", min=0.5, help="Scale ingredients to this many servings"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show a recipe card with ingredients and instructions."""
    catalog = get_catalog("recipes show", json_output)
    try:
        item = find_by_name(catalog, name)
    except MealPlanError as e:
        fail("recipes show", str(e), json_output, ["List recipes with: macroplan recipes list"])

    servings = item.base_servings if servings is None else servings

    if json_output:
        output_json({
            "success": True,
            "command": "recipes show",
            "data": {
                "name": item.name,
                "slot": item.slot.value,
                "servings": servings,
                "nutrients": nutrients_to_dict(item.macros_for(servings)),
                "ingredients": [
                    {"name": i.name, "unit": i.unit, "quantity": round(i.quantity, 2)}
                    for i in item.ingredients_for(servings)
                ],
                "instructions": list(item.instructions),
                "prep_minutes": item.prep_minutes,
                "cook_minutes": item.cook_minutes,
                "difficulty": item.difficulty,
            },
            "human_summary": f"{item.name} x{servings:g}",
        })
        return

    TableFormatter(console).format_recipe(item, servings)


@recipes_app.command("export")
def recipes_export(
    path: Path = typer.Argument(..., help="YAML file to write"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Export the catalog to a YAML file that can be edited and loaded back."""
    catalog = get_catalog("recipes export", json_output)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(catalog_to_yaml_data(catalog), f, default_flow_style=False, sort_keys=False)

    if json_output:
        output_json({
            "success": True,
            "command": "recipes export",
            "data": {"path": str(path), "recipes": len(catalog)},
            "human_summary": f"Exported {len(catalog)} recipes to {path}",
        })
    else:
        console.print(f"[green]Exported {len(catalog)} recipes to {path}[/green]")
        console.print(f"Use it with [cyan]catalog.path: {path}[/cyan] in config.yaml")


# ============================================================================
# Targets
# ============================================================================


@targets_app.command("calculate")
def targets_calculate(
    age: int = typer.Option(..., "--age", min=18, max=100, help="Age in years"),
    sex: str = typer.Option(..., "--sex", help="Sex (male/female)"),
    height: float = typer.Option(..., "--height", min=100, max=250, help="Height in cm"),
    weight: float = typer.Option(..., "--weight", min=30, max=300, help="Weight in kg"),
    activity: str = typer.Option(
        "moderate",
        "--activity",
        help="Activity level (sedentary/light/moderate/active/very_active)",
    ),
    goal: str = typer.Option("maintain", "--goal", help="Goal (maintain/cut/bulk)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Save the target for this user"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Calculate a daily macro target from body metrics."""
    from macroplan.profiles.body_calc import calculate_targets, targets_to_dict

    try:
        targets = calculate_targets(
            age=age,
            sex=sex,
            height_cm=height,
            weight_kg=weight,
            goal=goal,
            activity_level=activity,
        )
    except ValueError as e:
        fail("targets calculate", f"Invalid input: {e}", json_output)

    if user:
        profile = login("targets calculate", user, password, json_output)
        db = get_db()
        with db.get_connection() as conn:
            UserQueries.update_preferences(conn, profile.username, target=targets.target)

    if json_output:
        data = targets_to_dict(targets)
        data["saved_for"] = user.strip().lower() if user else None
        output_json({
            "success": True,
            "command": "targets calculate",
            "data": data,
            "human_summary": f"Daily target: {targets.target}",
        })
        return

    console.print(Panel(targets.summary(), title="Macro Targets"))
    if user:
        console.print(f"[green]Target saved for {escape(user)}[/green]")


@targets_app.command("set")
def targets_set(
    user: str = typer.Option(..., "--user", "-u", help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    calories: Optional[float] = typer.Option(
        None, "--calories", min=1200, max=4000, help="Daily calories (kcal)"
    ),
    protein: Optional[float] = typer.Option(
        None, "--protein", min=50, max=300, help="Daily protein (g)"
    ),
    carbs: Optional[float] = typer.Option(
        None, "--carbs", min=100, max=500, help="Daily carbohydrates (g)"
    ),
    fat: Optional[float] = typer.Option(None, "--fat", min=30, max=200, help="Daily fat (g)"),
    days: Optional[int] = typer.Option(None, "--days", "-d", help="Preferred plan length"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Save a user's daily target and preferred plan length."""
    settings = get_settings()
    if days is not None:
        check_day_count("targets set", days, settings, json_output)

    profile = login("targets set", user, password, json_output)
    target = apply_overrides(profile.target, calories, protein, carbs, fat)

    db = get_db()
    with db.get_connection() as conn:
        UserQueries.update_preferences(conn, profile.username, target=target, days=days)

    saved_days = profile.days if days is None else days
    if json_output:
        output_json({
            "success": True,
            "command": "targets set",
            "data": {"target": nutrients_to_dict(target), "days": saved_days},
            "human_summary": f"Saved target {target} for {saved_days} days",
        })
    else:
        console.print(f"[green]Saved target {target} ({saved_days} days)[/green]")


# ============================================================================
# Users
# ============================================================================


@user_app.command("register")
def user_register(
    username: str = typer.Argument(..., help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="Password (min 4 characters)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create a user account with default targets."""
    if password is None:
        password = Prompt.ask("Password", password=True)

    settings = get_settings()
    db = get_db()
    try:
        with db.get_connection() as conn:
            profile = UserQueries.register(
                conn,
                username,
                password,
                target=settings.planner.target.to_vector(),
                days=settings.planner.days,
            )
    except (MealPlanError, ValueError) as e:
        fail("user register", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "user register",
            "data": {
                "username": profile.username,
                "target": nutrients_to_dict(profile.target),
                "days": profile.days,
            },
            "human_summary": f"Registered {profile.username}",
        })
    else:
        console.print(f"[green]Registration successful! Welcome, {escape(profile.username)}[/green]")


@user_app.command("show")
def user_show(
    user: str = typer.Option(..., "--user", "-u", help="User name"),
    password: Optional[str] = typer.Option(None, "--password", help="User password"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show a user's saved preferences."""
    profile = login("user show", user, password, json_output)
    db = get_db()
    with db.get_connection() as conn:
        has_plan = PlanQueries.has_plan(conn, profile.username)

    if json_output:
        output_json({
            "success": True,
            "command": "user show",
            "data": {
                "username": profile.username,
                "target": nutrients_to_dict(profile.target),
                "days": profile.days,
                "has_plan": has_plan,
            },
            "human_summary": f"{profile.username}: {profile.target}",
        })
        return

    console.print(f"\n[bold]{escape(profile.username)}[/bold]")
    console.print(f"Daily target: {profile.target}")
    console.print(f"Plan length: {profile.days} days")
    console.print(f"Saved plan: {'yes' if has_plan else 'no'}")


# ============================================================================
# Configuration
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the active configuration."""
    data = get_settings().to_dict()
    if json_output:
        output_json({
            "success": True,
            "command": "config show",
            "data": data,
            "human_summary": "Active configuration",
        })
        return
    console.print(yaml.dump(data, default_flow_style=False, sort_keys=False), markup=False)


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Write a config.yaml with default settings."""
    path = path or default_config_path()
    if path.exists() and not force:
        fail("config init", f"Config file already exists: {path}", json_output, ["Use --force to overwrite"])

    Settings().save(path)

    if json_output:
        output_json({
            "success": True,
            "command": "config init",
            "data": {"path": str(path)},
            "human_summary": f"Wrote {path}",
        })
    else:
        console.print(f"[green]Wrote {path}[/green]")


if __name__ == "__main__":
    app()

"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from macroplan.optimizer.models import NutrientVector


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".macroplan"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "macroplan.db"


def default_config_path() -> Path:
    """Return the default config.yaml path."""
    return _default_config_dir() / "config.yaml"


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class CatalogConfig:
    """Recipe catalog configuration."""

    path: Optional[Path] = None  # None uses the built-in recipe library


@dataclass
class TargetConfig:
    """Default daily nutrient target."""

    calories: float = 2200.0
    protein: float = 120.0
    carbs: float = 250.0
    fat: float = 70.0

    def to_vector(self) -> NutrientVector:
        return NutrientVector(self.calories, self.protein, self.carbs, self.fat)


@dataclass
class PlannerConfig:
    """Plan length limits and the default target."""

    days: int = 3
    min_days: int = 3
    max_days: int = 5
    target: TargetConfig = field(default_factory=TargetConfig)


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.macroplan/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse database config
        if "database" in data:
            db_data = data["database"] or {}
            if "path" in db_data:
                settings.database.path = Path(db_data["path"]).expanduser()

        # Parse catalog config
        if "catalog" in data:
            cat_data = data["catalog"] or {}
            if cat_data.get("path"):
                settings.catalog.path = Path(cat_data["path"]).expanduser()

        # Parse planner config
        if "planner" in data:
            plan_data = data["planner"] or {}
            if "days" in plan_data:
                settings.planner.days = int(plan_data["days"])
            if "min_days" in plan_data:
                settings.planner.min_days = int(plan_data["min_days"])
            if "max_days" in plan_data:
                settings.planner.max_days = int(plan_data["max_days"])
            target_data = plan_data.get("target") or {}
            for key in ("calories", "protein", "carbs", "fat"):
                if key in target_data:
                    setattr(settings.planner.target, key, float(target_data[key]))

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        # Parse logging config
        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                settings.logging.level = str(log_data["level"]).upper()

        return settings

    def to_dict(self) -> dict:
        """Settings as the nested mapping written to config.yaml."""
        target = self.planner.target
        return {
            "database": {
                "path": str(self.database.path),
            },
            "catalog": {
                "path": str(self.catalog.path) if self.catalog.path else None,
            },
            "planner": {
                "days": self.planner.days,
                "min_days": self.planner.min_days,
                "max_days": self.planner.max_days,
                "target": {
                    "calories": target.calories,
                    "protein": target.protein,
                    "carbs": target.carbs,
                    "fat": target.fat,
                },
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.macroplan/config.yaml
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings

"""Tests for YAML settings."""

from pathlib import Path

import yaml

from macroplan.config import settings as settings_module
from macroplan.config.settings import Settings, get_settings, reload_settings


class TestSettingsDefaults:
    """Tests for default settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.planner.days == 3
        assert (settings.planner.min_days, settings.planner.max_days) == (3, 5)
        assert settings.planner.target.to_vector().energy == 2200
        assert settings.catalog.path is None
        assert settings.defaults.output_format == "table"
        assert settings.logging.level == "WARNING"
        assert settings.database.path.name == "macroplan.db"

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test that a missing config file is not an error."""
        assert Settings.load(tmp_path / "absent.yaml") == Settings()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path) == Settings()


class TestSettingsFile:
    """Tests for loading and saving config.yaml."""

    def test_partial_file(self, tmp_path):
        """Test that only the given keys override defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "planner": {"days": 4, "target": {"calories": 1800}},
                    "catalog": {"path": str(tmp_path / "recipes.yaml")},
                    "logging": {"level": "debug"},
                }
            )
        )
        settings = Settings.load(path)
        assert settings.planner.days == 4
        assert settings.planner.target.calories == 1800.0
        assert settings.planner.target.protein == 120.0
        assert settings.catalog.path == tmp_path / "recipes.yaml"
        assert settings.logging.level == "DEBUG"

    def test_save_and_load(self, tmp_path):
        """Test that saved settings load back unchanged."""
        settings = Settings()
        settings.database.path = tmp_path / "plans.db"
        settings.planner.max_days = 7
        settings.planner.target.fat = 65.0
        settings.defaults.output_format = "markdown"

        path = tmp_path / "nested" / "config.yaml"
        settings.save(path)

        assert path.exists()
        assert Settings.load(path) == settings

    def test_null_catalog_path_written(self, tmp_path):
        """Test that an unset catalog path is stored as null."""
        path = tmp_path / "config.yaml"
        Settings().save(path)
        data = yaml.safe_load(path.read_text())
        assert data["catalog"]["path"] is None
        assert Settings.load(path).catalog.path is None


class TestGlobalSettings:
    """Tests for the cached settings instance."""

    def test_reload(self, tmp_path, monkeypatch):
        """Test that reload_settings replaces the cached instance."""
        monkeypatch.setattr(settings_module, "_settings", None)
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"planner": {"days": 5}}))

        reloaded = reload_settings(path)

        assert reloaded.planner.days == 5
        assert get_settings() is reloaded

    def test_database_path_expands_user(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"database": {"path": "~/plans.db"}}))
        assert Settings.load(path).database.path == Path.home() / "plans.db"

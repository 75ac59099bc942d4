"""Recipe catalog data and loaders."""

from macroplan.data.catalog_loader import load_catalog, load_catalog_from_yaml
from macroplan.data.recipe_library import get_default_catalog

__all__ = ["get_default_catalog", "load_catalog", "load_catalog_from_yaml"]

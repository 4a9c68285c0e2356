"""Exercise catalog adapters."""

from infrastructure.catalog.yaml_exercise_catalog import (
    DEFAULT_CATALOG_PATH,
    CatalogLoadError,
    YamlExerciseCatalog,
)

__all__ = ["DEFAULT_CATALOG_PATH", "CatalogLoadError", "YamlExerciseCatalog"]

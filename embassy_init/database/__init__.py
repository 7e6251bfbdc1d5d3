"""Bundled chip catalog and its ChipDatabase implementation."""

from embassy_init.database.yaml_database import (
    YamlChipDatabase,
    clear_catalog_cache,
    load_chip_database,
)

__all__ = ["YamlChipDatabase", "clear_catalog_cache", "load_chip_database"]

"""Chip database backed by a YAML catalog file."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml  # type: ignore[import-untyped]

from embassy_init.core.exceptions import SettingsError
from embassy_init.interfaces.chip_database import ChipDatabase, ChipRecord

# Catalog cache with thread safety
_CATALOG_CACHE: dict[str, "YamlChipDatabase"] = {}
_CACHE_LOCK = threading.RLock()


def _search_key(name: str) -> str:
    return name.strip().replace("-", "_").lower()


class YamlChipDatabase(ChipDatabase):
    """In-memory chip catalog.

    search() ranks exact matches first, then prefix matches, then
    substring matches; ties keep catalog order.
    """

    def __init__(self, records: Iterable[ChipRecord]):
        self._records: dict[str, ChipRecord] = {}
        for record in records:
            if record.name in self._records:
                raise SettingsError(
                    "chips", f"duplicate chip '{record.name}' in catalog"
                )
            self._records[record.name] = record

    def __len__(self) -> int:
        return len(self._records)

    def search(self, query: str) -> list[str]:
        key = _search_key(query)
        if not key:
            return []

        exact: list[str] = []
        prefix: list[str] = []
        substring: list[str] = []
        for name in self._records:
            candidate = _search_key(name)
            if candidate == key:
                exact.append(name)
            elif candidate.startswith(key):
                prefix.append(name)
            elif key in candidate:
                substring.append(name)

        return exact + prefix + substring

    def describe(self, identifier: str) -> ChipRecord:
        return self._records[identifier]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> YamlChipDatabase:
        """Build a catalog from the parsed YAML mapping."""
        try:
            series_list = raw["series"]
            records = [
                ChipRecord(
                    name=str(chip),
                    series=str(series["name"]),
                    vendor=str(series.get("vendor", "")),
                )
                for series in series_list
                for chip in series["chips"]
            ]
        except KeyError as exc:
            raise SettingsError("chip_database", f"missing required catalog key: {exc}") from exc
        except (TypeError, AttributeError) as exc:
            raise SettingsError("chip_database", f"invalid catalog schema: {exc}") from exc

        return cls(records)

    @classmethod
    def from_file(cls, path: Path) -> YamlChipDatabase:
        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError("chip_database", f"failed to read {path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise SettingsError("chip_database", f"{path} must contain a mapping")

        return cls.from_dict(raw)


def _get_catalog_path(path: Optional[Path] = None) -> Path:
    if path is None:
        return Path(__file__).parent / "chips.yaml"
    return Path(path)


def load_chip_database(path: Optional[Path] = None) -> YamlChipDatabase:
    """Return the catalog at path (bundled chips.yaml if None), cached.

    THREAD SAFETY: This function is thread-safe.
    """
    p = _get_catalog_path(path)
    with _CACHE_LOCK:
        key = str(p)
        if key not in _CATALOG_CACHE:
            _CATALOG_CACHE[key] = YamlChipDatabase.from_file(p)
        return _CATALOG_CACHE[key]


def clear_catalog_cache() -> None:
    with _CACHE_LOCK:
        _CATALOG_CACHE.clear()

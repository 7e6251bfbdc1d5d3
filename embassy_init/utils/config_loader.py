"""Helpers for loading and validating scaffolder settings."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from embassy_init.core.exceptions import SettingsError
from embassy_init.interfaces.options import PanicHandler


@dataclass(frozen=True)
class CargoSettings:
    binary: str = "cargo"
    timeout: Optional[float] = 300.0


@dataclass(frozen=True)
class DefaultsSettings:
    panic_handler: PanicHandler = PanicHandler.PANIC_HALT


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(frozen=True)
class ScaffoldSettings:
    cargo: CargoSettings = field(default_factory=CargoSettings)
    chip_database: Optional[Path] = None
    templates_dir: Optional[Path] = None
    defaults: DefaultsSettings = field(default_factory=DefaultsSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Settings cache with thread safety
_SETTINGS_CACHE: dict[str, ScaffoldSettings] = {}
_CACHE_LOCK = threading.RLock()


def _get_settings_path(path: Optional[str] = None) -> str:
    if path is None:
        # Bundled defaults live next to the package sources
        base = Path(__file__).parent.parent / "settings.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise SettingsError("settings", f"failed to read {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SettingsError("settings", f"{path} must contain a mapping")

    return raw


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise SettingsError(key, "expected a mapping")
    return value


def _optional_path(raw: dict[str, Any], key: str, base_dir: Path) -> Optional[Path]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SettingsError(key, "expected a path string")

    path = Path(value).expanduser()
    # Relative paths are resolved against the settings file's directory
    if not path.is_absolute():
        path = base_dir / path
    return path


def _build_cargo_settings(cargo_raw: dict[str, Any]) -> CargoSettings:
    binary = cargo_raw.get("binary", "cargo")
    if not isinstance(binary, str) or not binary:
        raise SettingsError("cargo.binary", "expected a non-empty string")

    timeout = cargo_raw.get("timeout", 300.0)
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as exc:
            raise SettingsError("cargo.timeout", "expected seconds or null") from exc
        if timeout <= 0:
            raise SettingsError("cargo.timeout", "must be positive")

    return CargoSettings(binary=binary, timeout=timeout)


def _build_defaults_settings(defaults_raw: dict[str, Any]) -> DefaultsSettings:
    panic_raw = defaults_raw.get("panic_handler", PanicHandler.PANIC_HALT.value)
    try:
        panic_handler = PanicHandler.parse(str(panic_raw))
    except ValueError as exc:
        raise SettingsError("defaults.panic_handler", str(exc)) from exc

    return DefaultsSettings(panic_handler=panic_handler)


def _build_logging_settings(logging_raw: dict[str, Any]) -> LoggingSettings:
    level = str(logging_raw.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise SettingsError("logging.level", f"must be one of {list(_LOG_LEVELS)}")
    return LoggingSettings(level=level)


def _parse_settings_from_dict(raw: dict[str, Any], base_dir: Path) -> ScaffoldSettings:
    return ScaffoldSettings(
        cargo=_build_cargo_settings(_section(raw, "cargo")),
        chip_database=_optional_path(raw, "chip_database", base_dir),
        templates_dir=_optional_path(raw, "templates_dir", base_dir),
        defaults=_build_defaults_settings(_section(raw, "defaults")),
        logging=_build_logging_settings(_section(raw, "logging")),
    )


def load_settings(path: Optional[str] = None) -> ScaffoldSettings:
    """Load and validate settings from a YAML file.

    Args:
        path: Optional path to YAML settings. If None, load the bundled
            embassy_init/settings.yaml.

    Returns:
        ScaffoldSettings instance; absent keys take their defaults

    Raises:
        SettingsError: on parse or validation errors
    """

    p = Path(_get_settings_path(path=path))
    raw = _load_yaml_file(p)

    return _parse_settings_from_dict(raw=raw, base_dir=p.parent)


def get_settings(path: Optional[str] = None) -> ScaffoldSettings:
    """Return the loaded settings for path, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe.
    """
    key = _get_settings_path(path=path)
    with _CACHE_LOCK:
        if key not in _SETTINGS_CACHE:
            _SETTINGS_CACHE[key] = load_settings(path=key)
        return _SETTINGS_CACHE[key]


def clear_settings_cache() -> None:
    """Clear all cached settings.

    All subsequent calls to get_settings() will reload from disk.
    """
    with _CACHE_LOCK:
        _SETTINGS_CACHE.clear()

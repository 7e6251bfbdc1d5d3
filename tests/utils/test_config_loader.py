from pathlib import Path

import pytest
import yaml

from embassy_init.core.exceptions import SettingsError
from embassy_init.interfaces.options import PanicHandler
from embassy_init.utils.config_loader import (
    CargoSettings,
    ScaffoldSettings,
    _get_settings_path,
    _load_yaml_file,
    _parse_settings_from_dict,
    clear_settings_cache,
    get_settings,
    load_settings,
)


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


def _write(path: Path, raw) -> str:
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(raw, f)
    return str(path)


class TestGetSettingsPath:
    def test_default_is_bundled(self):
        path = _get_settings_path()
        assert path.endswith("settings.yaml")
        assert Path(path).exists()

    def test_custom(self):
        assert _get_settings_path("/etc/embassy.yaml") == "/etc/embassy.yaml"


class TestLoadYamlFile:
    def test_empty_file_is_empty_mapping(self, temp_yaml_file):
        temp_yaml_file.write_text("", encoding="utf-8")
        assert _load_yaml_file(temp_yaml_file) == {}

    def test_invalid_yaml(self, temp_yaml_file):
        temp_yaml_file.write_text("{ invalid: yaml: content", encoding="utf-8")
        with pytest.raises(SettingsError):
            _load_yaml_file(temp_yaml_file)

    def test_list_is_rejected(self, temp_yaml_file):
        temp_yaml_file.write_text("- 1\n", encoding="utf-8")
        with pytest.raises(SettingsError):
            _load_yaml_file(temp_yaml_file)


class TestParseSettings:
    def test_defaults_for_empty_dict(self, tmp_path):
        settings = _parse_settings_from_dict({}, tmp_path)
        assert settings == ScaffoldSettings()
        assert settings.cargo == CargoSettings(binary="cargo", timeout=300.0)
        assert settings.defaults.panic_handler is PanicHandler.PANIC_HALT
        assert settings.logging.level == "INFO"

    def test_full_settings(self, tmp_path):
        raw = {
            "cargo": {"binary": "/usr/bin/cargo", "timeout": None},
            "chip_database": "catalog/chips.yaml",
            "templates_dir": "/opt/templates",
            "defaults": {"panic_handler": "panic-reset"},
            "logging": {"level": "debug"},
        }
        settings = _parse_settings_from_dict(raw, tmp_path)

        assert settings.cargo.binary == "/usr/bin/cargo"
        assert settings.cargo.timeout is None
        assert settings.chip_database == tmp_path / "catalog" / "chips.yaml"
        assert settings.templates_dir == Path("/opt/templates")
        assert settings.defaults.panic_handler is PanicHandler.PANIC_RESET
        assert settings.logging.level == "DEBUG"

    @pytest.mark.parametrize(
        "raw,key",
        [
            ({"cargo": {"timeout": "soon"}}, "cargo.timeout"),
            ({"cargo": {"timeout": -1}}, "cargo.timeout"),
            ({"cargo": {"binary": ""}}, "cargo.binary"),
            ({"cargo": ["cargo"]}, "cargo"),
            ({"defaults": {"panic_handler": "panic-probe"}}, "defaults.panic_handler"),
            ({"logging": {"level": "LOUD"}}, "logging.level"),
            ({"chip_database": 42}, "chip_database"),
        ],
    )
    def test_invalid_values(self, tmp_path, raw, key):
        with pytest.raises(SettingsError) as info:
            _parse_settings_from_dict(raw, tmp_path)
        assert info.value.config_key == key


class TestLoadSettings:
    def test_bundled_settings(self):
        settings = load_settings()
        assert settings.cargo.binary == "cargo"
        assert settings.chip_database is None
        assert settings.templates_dir is None

    def test_from_file(self, temp_yaml_file):
        path = _write(temp_yaml_file, {"defaults": {"panic_handler": "panic-reset"}})
        assert load_settings(path).defaults.panic_handler is PanicHandler.PANIC_RESET

    def test_get_settings_caches(self, temp_yaml_file):
        path = _write(temp_yaml_file, {"logging": {"level": "WARNING"}})
        first = get_settings(path)

        _write(temp_yaml_file, {"logging": {"level": "ERROR"}})
        assert get_settings(path) is first

        clear_settings_cache()
        assert get_settings(path).logging.level == "ERROR"

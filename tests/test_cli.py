import pytest

from embassy_init import cli
from embassy_init.core.resolver import ChipResolver
from embassy_init.emit.templates import JinjaTemplateStore
from embassy_init.interfaces.options import PanicHandler, Softdevice
from embassy_init.scaffold import Scaffolder
from embassy_init.utils.config_loader import clear_settings_cache
from embassy_init.utils.consts import DOCS_URL


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    levels = []
    monkeypatch.setattr(
        cli,
        "setup_logging",
        lambda settings, level=None, quiet=False: levels.append(level or settings.level),
    )
    clear_settings_cache()
    yield levels
    clear_settings_cache()


@pytest.fixture
def scaffolder(monkeypatch, fake_database, package_manager):
    scaffolder = Scaffolder(
        resolver=ChipResolver(fake_database),
        package_manager=package_manager,
        templates=JinjaTemplateStore.bundled(),
    )
    monkeypatch.setattr(cli, "create_scaffolder", lambda settings: scaffolder)
    return scaffolder


def test_docs_opens_browser(monkeypatch):
    opened = []
    monkeypatch.setattr(cli.webbrowser, "open", opened.append)

    assert cli.main(["docs"]) == 0
    assert opened == [DOCS_URL]


def test_init_stm32(scaffolder, package_manager, tmp_path):
    code = cli.main(["init", "blinky", "--chip", "stm32f103c8", "--dir", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "blinky" / "src" / "main.rs").is_file()
    assert package_manager.added[-1] == PanicHandler.PANIC_HALT.crate


def test_init_nrf_with_softdevice(scaffolder, package_manager, tmp_path):
    code = cli.main([
        "init", "ble",
        "--chip", "nrf52840",
        "--softdevice", "S140",
        "--panic-handler", "panic_reset",
        "--flash-origin", "0x27000",
        "--flash-length", "0xD9000",
        "--ram-origin", "0x20020000",
        "--ram-length", "0x20000",
        "--dir", str(tmp_path),
    ])

    assert code == 0
    assert Softdevice.S140.helper_crate in package_manager.added
    assert package_manager.added[-1] == "panic-reset"
    assert "0x000D9000" in (tmp_path / "ble" / "memory.x").read_text(encoding="utf-8")


def test_engine_error_returns_one(scaffolder, package_manager, tmp_path):
    code = cli.main(["init", "x", "--chip", "esp32", "--dir", str(tmp_path)])

    assert code == 1
    assert package_manager.calls == []


def test_incomplete_memory_layout_exits(scaffolder, tmp_path):
    with pytest.raises(SystemExit) as info:
        cli.main(["init", "x", "--chip", "nrf52840", "--flash-origin", "0x27000"])
    assert info.value.code == 2


def test_unknown_panic_handler_exits():
    with pytest.raises(SystemExit):
        cli.main(["init", "x", "--chip", "stm32f103c8", "--panic-handler", "panic-probe"])


def test_log_level_override(monkeypatch, _quiet_logging):
    monkeypatch.setattr(cli.webbrowser, "open", lambda url: True)

    cli.main(["--log-level", "DEBUG", "docs"])
    assert _quiet_logging == ["DEBUG"]


def test_bad_settings_file(temp_yaml_file):
    temp_yaml_file.write_text("logging:\n  level: LOUD\n", encoding="utf-8")
    assert cli.main(["--settings", str(temp_yaml_file), "docs"]) == 1


def test_unreadable_chip_catalog_returns_one(temp_yaml_file, tmp_path):
    temp_yaml_file.write_text("chip_database: /nonexistent/chips.yaml\n", encoding="utf-8")
    code = cli.main([
        "--settings", str(temp_yaml_file),
        "init", "x", "--chip", "stm32f103c8", "--dir", str(tmp_path),
    ])

    assert code == 1
    assert list(tmp_path.iterdir()) == []

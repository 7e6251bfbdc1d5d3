"""
Pytest configuration and shared fixtures for the embassy_init test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest

# Ensure project root is on PYTHONPATH so 'embassy_init' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from embassy_init.chip import Chip, Family, MemRegion, Target  # noqa: E402
from embassy_init.interfaces.chip_database import ChipDatabase, ChipRecord  # noqa: E402
from embassy_init.interfaces.package_manager import PackageManager  # noqa: E402


class FakeChipDatabase(ChipDatabase):
    """Catalog over a fixed list of names; prefix match in list order."""

    def __init__(self, names):
        self.names = list(names)
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        return [
            n for n in self.names
            if n.lower().replace("-", "_").startswith(query)
        ]

    def describe(self, identifier):
        if identifier not in self.names:
            raise KeyError(identifier)
        return ChipRecord(name=identifier, series="test", vendor="test")


class RecordingPackageManager(PackageManager):
    """Records calls; creates the project directory like `cargo new` would."""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def new_project(self, name, parent):
        self.calls.append(("new", name))
        project_dir = Path(parent) / name
        (project_dir / "src").mkdir(parents=True, exist_ok=True)
        return project_dir

    def add(self, project_dir, crate, features=(), optional=False):
        if crate == self.fail_on:
            raise RuntimeError(f"cargo add {crate} exploded")
        self.calls.append(("add", crate, tuple(features), optional))

    @property
    def added(self):
        return [c[1] for c in self.calls if c[0] == "add"]


CATALOG_NAMES = [
    "STM32F103C8",
    "STM32F401RE",
    "STM32F4_SOMETHING",
    "STM32MP157C",
    "nRF52840_xxAA",
    "nRF52832_xxAA",
    "RP2040",
]

NRF_MEMORY = MemRegion(
    flash_origin=0x00027000,
    flash_length=0x000D9000,
    ram_origin=0x20020000,
    ram_length=0x00020000,
)


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def fake_database():
    return FakeChipDatabase(CATALOG_NAMES)


@pytest.fixture
def package_manager():
    return RecordingPackageManager()


@pytest.fixture
def nrf_memory():
    return NRF_MEMORY


@pytest.fixture
def stm32_chip():
    return Chip(
        name="stm32f103c8",
        family=Family.stm32(),
        target=Target.THUMBV7M,
        probe_name="STM32F103C8",
    )


@pytest.fixture
def nrf_chip():
    return Chip(
        name="nrf52840",
        family=Family.nrf(),
        target=Target.THUMBV7EM_HF,
        probe_name="nRF52840_xxAA",
    )


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests that write a full project to disk",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")

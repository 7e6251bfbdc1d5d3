import pytest

from embassy_init.chip import Chip, Family, FamilyKind, Target
from embassy_init.core.exceptions import (
    UnclassifiedFamily,
    UnknownChip,
    UnresolvedTarget,
)
from embassy_init.core.resolver import ChipResolver, normalize_chip_name
from embassy_init.database import load_chip_database


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("STM32F103C8", "stm32f103c8"),
        ("stm32f4-something", "stm32f4_something"),
        ("  nRF52840  ", "nrf52840"),
        ("NRF52-840", "nrf52_840"),
        ("", ""),
    ],
)
def test_normalize_chip_name(raw, expected):
    assert normalize_chip_name(raw) == expected


class TestResolveWithFakeDatabase:
    def test_stm32_scenario(self, fake_database):
        chip = ChipResolver(fake_database).resolve("stm32f103c8")

        assert chip == Chip(
            name="stm32f103c8",
            family=Family.stm32(),
            target=Target.THUMBV7M,
            probe_name="STM32F103C8",
        )

    def test_nrf_resolves_without_memory(self, fake_database):
        chip = ChipResolver(fake_database).resolve("nrf52840")

        assert chip.family.kind is FamilyKind.NRF
        assert chip.family.memory is None
        assert chip.target is Target.THUMBV7EM_HF
        assert chip.probe_name == "nRF52840_xxAA"

    def test_resolution_depends_only_on_normalized_input(self, fake_database):
        resolver = ChipResolver(fake_database)
        a = resolver.resolve("STM32F4-something")
        b = resolver.resolve("stm32f4_something")

        assert a == b
        assert fake_database.queries == ["stm32f4_something", "stm32f4_something"]

    def test_first_candidate_is_authoritative(self, fake_database):
        # "stm32f4" matches STM32F401RE before STM32F4_SOMETHING
        chip = ChipResolver(fake_database).resolve("stm32f4")
        assert chip.probe_name == "STM32F401RE"
        assert chip.name == "stm32f4"

    def test_unknown_chip(self, fake_database):
        with pytest.raises(UnknownChip) as info:
            ChipResolver(fake_database).resolve("foobar9000")
        assert info.value.raw_name == "foobar9000"

    def test_empty_input_is_unknown_without_lookup(self, fake_database):
        with pytest.raises(UnknownChip):
            ChipResolver(fake_database).resolve("   ")
        assert fake_database.queries == []

    def test_unclassified_family(self, fake_database):
        with pytest.raises(UnclassifiedFamily):
            ChipResolver(fake_database).resolve("rp2040")

    def test_unresolved_target(self, fake_database):
        with pytest.raises(UnresolvedTarget):
            ChipResolver(fake_database).resolve("stm32mp157")

    def test_describe_failure_is_unknown_chip(self, fake_database, monkeypatch):
        def broken_describe(identifier):
            raise KeyError(identifier)

        monkeypatch.setattr(fake_database, "describe", broken_describe)
        with pytest.raises(UnknownChip) as info:
            ChipResolver(fake_database).resolve("stm32f103c8")
        assert info.value.details["canonical"] == "STM32F103C8"


class TestResolveWithBundledCatalog:
    @pytest.fixture
    def resolver(self):
        return ChipResolver(load_chip_database())

    @pytest.mark.parametrize(
        "raw,target",
        [
            ("stm32f103c8", Target.THUMBV7M),
            ("STM32G071RB", Target.THUMBV6M),
            ("stm32h743zi", Target.THUMBV7EM_HF),
            ("stm32u575zi", Target.THUMBV8M_MAIN_HF),
        ],
    )
    def test_stm32_chips(self, resolver, raw, target):
        chip = resolver.resolve(raw)
        assert chip.family == Family.stm32()
        assert chip.target is target

    def test_nrf52840(self, resolver):
        chip = resolver.resolve("nrf52840")
        assert chip.name == "nrf52840"
        assert chip.family == Family.nrf()
        assert chip.probe_name == "nRF52840_xxAA"

    def test_foobar_is_unknown(self, resolver):
        with pytest.raises(UnknownChip):
            resolver.resolve("foobar9000")

    def test_esp_is_unclassified(self, resolver):
        with pytest.raises(UnclassifiedFamily):
            resolver.resolve("esp32c3")

    @pytest.mark.parametrize("raw", ["103", "f103c8", "F103C8"])
    def test_name_fragment_is_not_a_feature_name(self, resolver, raw):
        with pytest.raises(UnclassifiedFamily) as info:
            resolver.resolve(raw)
        assert info.value.canonical.startswith("stm32f103")

    def test_family_prefix_without_core_is_unresolved(self, resolver):
        with pytest.raises(UnresolvedTarget):
            resolver.resolve("stm32")

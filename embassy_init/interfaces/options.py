"""User choice enumerations consumed by build-configuration derivation."""

from __future__ import annotations

from enum import Enum


class PanicHandler(Enum):
    """Panic-handling crate used in release builds.

    The value is the crate name on crates.io.
    """

    PANIC_HALT = "panic-halt"
    """Halt the core in an infinite loop on panic."""

    PANIC_RESET = "panic-reset"
    """Reset the chip on panic."""

    @property
    def crate(self) -> str:
        return self.value

    @property
    def rust_path(self) -> str:
        """Crate name as written in a Rust ``use`` path (``panic_halt``)."""
        return self.value.replace("-", "_")

    @classmethod
    def parse(cls, text: str) -> PanicHandler:
        key = text.strip().lower().replace("_", "-")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(
            f"Unknown panic handler '{text}'. "
            f"Available: {[m.value for m in cls]}"
        )


class Softdevice(Enum):
    """Nordic BLE softdevice variants.

    The value is the package identifier, used both as an nrf-softdevice
    feature and as the suffix of the companion crate name.
    """

    S112 = "s112"
    S113 = "s113"
    S122 = "s122"
    S132 = "s132"
    S140 = "s140"

    @property
    def package_id(self) -> str:
        return self.value

    @property
    def helper_crate(self) -> str:
        return f"nrf-softdevice-{self.value}"

    @classmethod
    def parse(cls, text: str) -> Softdevice:
        key = text.strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(
            f"Unknown softdevice '{text}'. Available: {[m.value for m in cls]}"
        )

"""Silicon family classification and the user-supplied memory layout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class MemRegion:
    """Flash and RAM address ranges for a chip.

    No defaults: parts within one family ship with different flash/RAM
    sizes, so the layout must come from the user.
    """

    flash_origin: int
    flash_length: int
    ram_origin: int
    ram_length: int

    def __post_init__(self) -> None:
        for field_name in ("flash_origin", "flash_length", "ram_origin", "ram_length"):
            value = getattr(self, field_name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{field_name} must be an int, got {value!r}")
            if value < 0:
                raise ValueError(f"{field_name} must be non-negative, got {value}")

        if self.flash_length == 0 or self.ram_length == 0:
            raise ValueError("flash_length and ram_length must be non-zero")


class FamilyKind(Enum):
    """Supported silicon families."""

    STM32 = "stm32"
    """ST STM32 parts; memory layout comes from the HAL's linker metadata."""

    NRF = "nrf"
    """Nordic nRF parts; memory layout is written to memory.x by hand."""


@dataclass(frozen=True)
class Family:
    """A family classification, optionally carrying an NRF memory layout.

    Only NRF may carry a MemRegion. Resolution always produces a family
    without one; the user's layout is attached with with_memory() before
    project emission.
    """

    kind: FamilyKind
    memory: Optional[MemRegion] = None

    def __post_init__(self) -> None:
        if self.memory is not None and self.kind is not FamilyKind.NRF:
            raise ValueError(f"{self.kind.value} does not take a memory region")

    @classmethod
    def stm32(cls) -> Family:
        return cls(FamilyKind.STM32)

    @classmethod
    def nrf(cls, memory: Optional[MemRegion] = None) -> Family:
        return cls(FamilyKind.NRF, memory)

    @property
    def is_nrf(self) -> bool:
        return self.kind is FamilyKind.NRF

    def with_memory(self, memory: Optional[MemRegion]) -> Family:
        """Return a copy of this family carrying the given layout."""
        return Family(self.kind, memory)

    def __str__(self) -> str:
        return self.kind.value

"""Resolved chip descriptor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from embassy_init.chip.family import Family, MemRegion
from embassy_init.chip.target import Target


@dataclass(frozen=True)
class Chip:
    """A chip resolved from a user-typed identifier.

    Attributes:
        name: Normalized identifier; doubles as the HAL crate feature name.
        family: Silicon family classification.
        target: Toolchain target triple for the chip's core.
        probe_name: Display name of the canonical catalog record, used by
            the debug probe configuration.
    """

    name: str
    family: Family
    target: Target
    probe_name: str = ""

    def with_memory(self, memory: Optional[MemRegion]) -> Chip:
        """Return a copy whose family carries the given memory layout."""
        return replace(self, family=self.family.with_memory(memory))

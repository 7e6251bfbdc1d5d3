"""Chip data model.

- family: FamilyKind, Family, MemRegion
- target: Target triples
- chip: the resolved Chip descriptor
"""

from embassy_init.chip.chip import Chip
from embassy_init.chip.family import Family, FamilyKind, MemRegion
from embassy_init.chip.target import Target

__all__ = [
    "Chip",
    "Family",
    "FamilyKind",
    "MemRegion",
    "Target",
]

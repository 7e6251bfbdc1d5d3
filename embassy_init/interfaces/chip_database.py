"""Chip database lookup interface.

A ChipDatabase maps a fuzzy, user-typed chip name to canonical chip
records. Ranking of search results is owned by the database; callers
treat the first result as authoritative.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChipRecord:
    """Canonical catalog entry for one chip.

    Attributes:
        name: Display name as known to debug probes (e.g. 'nRF52840_xxAA')
        series: Vendor series label (e.g. 'STM32F1 Series')
        vendor: Manufacturer name
    """

    name: str
    series: str = ""
    vendor: str = ""


class ChipDatabase(ABC):
    """Interface for chip catalog lookups."""

    @abstractmethod
    def search(self, query: str) -> list[str]:
        """Return canonical identifiers matching query, best match first.

        Returns an empty list when nothing matches.
        """
        ...

    @abstractmethod
    def describe(self, identifier: str) -> ChipRecord:
        """Return the canonical record for an identifier from search().

        Raises:
            KeyError: if the identifier is not in the catalog
        """
        ...

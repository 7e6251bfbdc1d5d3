"""Chip resolution: raw user input to a Chip descriptor."""

from __future__ import annotations

import logging
from typing import Optional

from embassy_init.chip.chip import Chip
from embassy_init.core.classifier import ClassifierTable, default_table
from embassy_init.core.exceptions import UnclassifiedFamily, UnknownChip
from embassy_init.interfaces.chip_database import ChipDatabase

logger = logging.getLogger(__name__)


def normalize_chip_name(raw_name: str) -> str:
    """Canonicalize separators and case: 'STM32F4-Disco' -> 'stm32f4_disco'."""
    return raw_name.strip().replace("-", "_").lower()


class ChipResolver:
    """Resolves user-typed chip names against a chip database.

    The first search result is authoritative; ranking belongs to the
    database. Apart from the lookup, resolve() is a pure function of the
    normalized input.
    """

    def __init__(
        self,
        database: ChipDatabase,
        table: Optional[ClassifierTable] = None,
    ):
        self._database = database
        self._table = table or default_table()

    @property
    def database(self) -> ChipDatabase:
        return self._database

    def resolve(self, raw_name: str) -> Chip:
        """Resolve raw_name to a Chip.

        Raises:
            UnknownChip: empty input or no database match
            UnclassifiedFamily: match belongs to no supported family, or the
                input itself (e.g. a fragment like "f103c8") does not
            UnresolvedTarget: match or input has an unrecognized core variant
        """
        name = normalize_chip_name(raw_name)
        if not name:
            raise UnknownChip(raw_name)

        logger.info("Searching chips")
        candidates = self._database.search(name)
        if not candidates:
            raise UnknownChip(raw_name)

        canonical = candidates[0]
        if len(candidates) > 1:
            logger.debug(
                f"{len(candidates)} candidates for '{name}', using '{canonical}'"
            )

        try:
            record = self._database.describe(canonical)
        except KeyError as exc:
            raise UnknownChip(raw_name, details={"canonical": canonical}) from exc

        canonical_id = normalize_chip_name(canonical)
        family, target = self._table.classify(canonical_id, raw_name=raw_name)

        # The input is the HAL feature name; it must classify under the same family
        if self._table.match(name) is not self._table.match(canonical_id):
            raise UnclassifiedFamily(raw_name=raw_name, canonical=canonical_id)
        self._table.classify(name, raw_name=raw_name)
        logger.debug(f"Resolved '{name}' as {family} ({target}), probe '{record.name}'")

        return Chip(name=name, family=family, target=target, probe_name=record.name)

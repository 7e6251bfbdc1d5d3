"""Family signature table and chip classification.

Classification is data-driven: an ordered table of family signatures,
each pairing an identifier pattern with a family and an ordered list of
core-variant rules that pick the toolchain target. The first matching
family wins, then the first matching core rule within it.

The table is independent of the chip database, so it can be exercised
directly with canonical identifiers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from embassy_init.chip.family import Family, FamilyKind
from embassy_init.chip.target import Target
from embassy_init.core.exceptions import UnclassifiedFamily, UnresolvedTarget


@dataclass(frozen=True)
class CoreRule:
    """Maps a core-variant pattern in the identifier to a target."""

    pattern: re.Pattern[str]
    target: Target

    def matches(self, identifier: str) -> bool:
        return self.pattern.match(identifier) is not None


@dataclass(frozen=True)
class FamilySignature:
    """One classifier table entry."""

    name: str
    pattern: re.Pattern[str]
    kind: FamilyKind
    core_rules: tuple[CoreRule, ...]

    def matches(self, identifier: str) -> bool:
        return self.pattern.match(identifier) is not None

    def target_for(self, identifier: str) -> Optional[Target]:
        """Return the target of the first core rule matching identifier."""
        for rule in self.core_rules:
            if rule.matches(identifier):
                return rule.target
        return None


def _rules(*pairs: tuple[str, Target]) -> tuple[CoreRule, ...]:
    return tuple(CoreRule(re.compile(pattern), target) for pattern, target in pairs)


class ClassifierTable:
    """Ordered table of family signatures.

    Signatures are evaluated in registration order; the first match is
    returned. Names must be unique.

    THREAD SAFETY: Not thread-safe. Register all signatures before
    classifying.
    """

    def __init__(self, signatures: Iterable[FamilySignature] = ()):
        self._signatures: list[FamilySignature] = []
        for signature in signatures:
            self.register(signature)

    def register(self, signature: FamilySignature) -> None:
        """Append a signature at the lowest priority."""
        if any(s.name == signature.name for s in self._signatures):
            raise ValueError(f"Signature '{signature.name}' already registered")
        self._signatures.append(signature)

    def signatures(self) -> list[FamilySignature]:
        """List signatures in priority order."""
        return list(self._signatures)

    def match(self, identifier: str) -> Optional[FamilySignature]:
        """Return the first signature matching identifier, or None."""
        for signature in self._signatures:
            if signature.matches(identifier):
                return signature
        return None

    def classify(self, identifier: str, raw_name: str) -> tuple[Family, Target]:
        """Classify a normalized canonical identifier.

        Args:
            identifier: Canonical identifier, lowercased with '_' separators
            raw_name: The user's original input, carried into errors

        Returns:
            (family, target); the family never carries a memory region

        Raises:
            UnclassifiedFamily: no signature matches
            UnresolvedTarget: family matched but no core rule did
        """
        signature = self.match(identifier)
        if signature is None:
            raise UnclassifiedFamily(raw_name=raw_name, canonical=identifier)

        target = signature.target_for(identifier)
        if target is None:
            raise UnresolvedTarget(
                raw_name=raw_name,
                canonical=identifier,
                family=signature.kind.value,
            )

        return Family(signature.kind), target


STM32_SIGNATURE = FamilySignature(
    name="stm32",
    pattern=re.compile(r"^stm32"),
    kind=FamilyKind.STM32,
    core_rules=_rules(
        # Cortex-M0 / M0+
        (r"^stm32(c0|f0|g0|l0|u0|wb0|wl3)", Target.THUMBV6M),
        # Cortex-M3
        (r"^stm32(f1|f2|l1)", Target.THUMBV7M),
        # Cortex-M4 without FPU
        (r"^stm32wl", Target.THUMBV7EM),
        # Cortex-M33 / M55; wba must precede wb
        (r"^stm32(h5|l5|u3|u5|wba|n6)", Target.THUMBV8M_MAIN_HF),
        # Cortex-M4F / M7F
        (r"^stm32(f3|f4|f7|g4|h7|l4|wb)", Target.THUMBV7EM_HF),
    ),
)

NRF_SIGNATURE = FamilySignature(
    name="nrf",
    pattern=re.compile(r"^nrf"),
    kind=FamilyKind.NRF,
    core_rules=_rules(
        (r"^nrf51", Target.THUMBV6M),
        (r"^nrf52(805|810|811|820)", Target.THUMBV7EM),
        (r"^nrf52(832|833|840)", Target.THUMBV7EM_HF),
        (r"^nrf(53|54l|91)", Target.THUMBV8M_MAIN_HF),
    ),
)


def default_table() -> ClassifierTable:
    """Return a fresh table with the supported families."""
    return ClassifierTable([STM32_SIGNATURE, NRF_SIGNATURE])

"""Build plan value types produced by derivation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from embassy_init.chip.chip import Chip
from embassy_init.interfaces.options import PanicHandler, Softdevice


@dataclass(frozen=True)
class Directive:
    """One dependency-add operation."""

    crate: str
    features: tuple[str, ...] = ()
    optional: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so plans compare and hash
        object.__setattr__(self, "features", tuple(self.features))


@dataclass(frozen=True)
class TemplateSelection:
    """Template variant keys chosen for a chip."""

    main: str
    build: str
    memory: Optional[str]
    manifest_append: str


@dataclass(frozen=True)
class BuildPlan:
    """Ordered dependency directives plus template selection.

    Directive order reflects grouping: runtime, HAL, wireless stack,
    architecture support, diagnostics, panic handler. Consumers may run
    directives concurrently but must keep the wireless stack after the
    HAL.
    """

    chip: Chip
    panic_handler: PanicHandler
    softdevice: Optional[Softdevice]
    directives: tuple[Directive, ...]
    templates: TemplateSelection

    @property
    def crates(self) -> list[str]:
        return [d.crate for d in self.directives]

    def directive_for(self, crate: str) -> Directive:
        """Return the directive adding crate.

        Raises:
            KeyError: if the plan does not add crate
        """
        for directive in self.directives:
            if directive.crate == crate:
                return directive
        raise KeyError(crate)

    def index_of(self, crate: str) -> int:
        """Return the position of crate's directive in the plan."""
        return self.crates.index(crate)

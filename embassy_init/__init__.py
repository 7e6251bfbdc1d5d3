"""Embassy project scaffolder.

Resolves a user-typed chip name (STM32 or nRF) to a chip descriptor,
derives the dependency and template plan for it, and generates a Rust
Embassy firmware project.

Architecture:
- chip: MemRegion / Family / Target / Chip value types
- core: classifier table, resolver, derivation, exceptions
- interfaces: collaborator contracts (chip database, package manager,
  template store, artifact writer)
- database, emit: default collaborators (YAML catalog, cargo, Jinja2, files)

Getting started:
    from embassy_init import PanicHandler, scaffold

    scaffold("stm32f103c8", "blinky", PanicHandler.PANIC_HALT)
"""

from embassy_init.chip import Chip, Family, FamilyKind, MemRegion, Target
from embassy_init.core.derivation import derive
from embassy_init.core.exceptions import (
    ClassificationError,
    ConfigError,
    DirectiveEmissionFailed,
    EngineError,
    IncompatibleSoftdevice,
    UnclassifiedFamily,
    UnknownChip,
    UnresolvedTarget,
)
from embassy_init.core.plan import BuildPlan, Directive, TemplateSelection
from embassy_init.core.resolver import ChipResolver, normalize_chip_name
from embassy_init.interfaces.options import PanicHandler, Softdevice
from embassy_init.scaffold import Scaffolder, create_scaffolder, scaffold

__all__ = [
    # Data model
    "Chip",
    "Family",
    "FamilyKind",
    "MemRegion",
    "Target",
    "PanicHandler",
    "Softdevice",
    # Engine
    "ChipResolver",
    "normalize_chip_name",
    "derive",
    "BuildPlan",
    "Directive",
    "TemplateSelection",
    "Scaffolder",
    "create_scaffolder",
    "scaffold",
    # Errors
    "EngineError",
    "ClassificationError",
    "UnknownChip",
    "UnclassifiedFamily",
    "UnresolvedTarget",
    "ConfigError",
    "IncompatibleSoftdevice",
    "DirectiveEmissionFailed",
]

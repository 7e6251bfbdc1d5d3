"""Build-configuration derivation.

Turns a resolved Chip and the user's panic handler / softdevice choice
into a BuildPlan. Each dependency group has its own small builder so the
directive contents and ordering can be tested in isolation. No I/O.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from embassy_init.chip.chip import Chip
from embassy_init.chip.family import Family, FamilyKind
from embassy_init.core.exceptions import IncompatibleSoftdevice
from embassy_init.core.plan import BuildPlan, Directive, TemplateSelection
from embassy_init.interfaces.options import PanicHandler, Softdevice
from embassy_init.utils.consts import TemplateKeys

logger = logging.getLogger(__name__)

HalBuilder = Callable[[Chip, Optional[Softdevice]], list[Directive]]


def runtime_directives() -> list[Directive]:
    """Async executor, sync primitives, futures and time driver."""
    return [
        Directive(
            "embassy-executor",
            ("arch-cortex-m", "executor-thread", "integrated-timers"),
        ),
        Directive("embassy-sync"),
        Directive("embassy-futures"),
        Directive("embassy-time", ("tick-hz-32_768",)),
    ]


def stm32_hal_directives(
    chip: Chip, softdevice: Optional[Softdevice] = None
) -> list[Directive]:
    # memory-x: the HAL generates memory.x from its chip metadata
    return [
        Directive(
            "embassy-stm32",
            ("memory-x", chip.name, "time-driver-any", "exti", "unstable-pac"),
        )
    ]


def nrf_hal_directives(
    chip: Chip, softdevice: Optional[Softdevice] = None
) -> list[Directive]:
    """HAL directive, followed by the softdevice pair when requested."""
    directives = [
        Directive("embassy-nrf", (chip.name, "gpiote", "time-driver-rtc1")),
    ]
    if softdevice is not None:
        directives.append(
            Directive(
                "nrf-softdevice",
                (
                    chip.name,
                    softdevice.package_id,
                    "ble-peripheral",
                    "ble-gatt-server",
                    "critical-section-impl",
                ),
            )
        )
        directives.append(Directive(softdevice.helper_crate))
    return directives


def architecture_directives(softdevice: Optional[Softdevice]) -> list[Directive]:
    # The softdevice crate provides the critical section implementation
    cortex_m_features: tuple[str, ...] = ("inline-asm",)
    if softdevice is None:
        cortex_m_features += ("critical-section-single-core",)

    return [
        Directive("cortex-m", cortex_m_features),
        Directive("cortex-m-rt"),
    ]


def diagnostics_directives() -> list[Directive]:
    """Logging and panic reporting, enabled by the 'debug' feature."""
    return [
        Directive("defmt", optional=True),
        Directive("defmt-rtt", optional=True),
        Directive("panic-probe", ("print-defmt",), optional=True),
    ]


def panic_directives(panic_handler: PanicHandler) -> list[Directive]:
    return [Directive(panic_handler.crate)]


HAL_BUILDERS: dict[FamilyKind, HalBuilder] = {
    FamilyKind.STM32: stm32_hal_directives,
    FamilyKind.NRF: nrf_hal_directives,
}


def select_templates(
    family: Family, softdevice: Optional[Softdevice]
) -> TemplateSelection:
    """Pick template variants for family x softdevice."""
    if family.kind is FamilyKind.STM32:
        return TemplateSelection(
            main=TemplateKeys.MAIN_STM32,
            build=TemplateKeys.BUILD_STM32,
            memory=None,
            manifest_append=TemplateKeys.MANIFEST_APPEND,
        )

    if softdevice is not None:
        return TemplateSelection(
            main=TemplateKeys.MAIN_NRF_SD,
            build=TemplateKeys.BUILD_NRF,
            memory=TemplateKeys.MEMORY_X,
            manifest_append=TemplateKeys.MANIFEST_SD_APPEND,
        )

    return TemplateSelection(
        main=TemplateKeys.MAIN_NRF,
        build=TemplateKeys.BUILD_NRF,
        memory=TemplateKeys.MEMORY_X,
        manifest_append=TemplateKeys.MANIFEST_APPEND,
    )


def validate(chip: Chip, softdevice: Optional[Softdevice]) -> None:
    """Reject softdevice requests for non-NRF chips."""
    if softdevice is not None and not chip.family.is_nrf:
        raise IncompatibleSoftdevice(chip.name, softdevice.package_id)


def derive(
    chip: Chip,
    panic_handler: PanicHandler,
    softdevice: Optional[Softdevice] = None,
) -> BuildPlan:
    """Derive the build plan for chip.

    Validation runs before any directive is built.

    Raises:
        IncompatibleSoftdevice: softdevice given for a non-NRF chip
    """
    validate(chip, softdevice)

    hal_builder = HAL_BUILDERS[chip.family.kind]
    directives = (
        runtime_directives()
        + hal_builder(chip, softdevice)
        + architecture_directives(softdevice)
        + diagnostics_directives()
        + panic_directives(panic_handler)
    )
    logger.debug(f"Derived {len(directives)} directives for {chip.name}")

    return BuildPlan(
        chip=chip,
        panic_handler=panic_handler,
        softdevice=softdevice,
        directives=tuple(directives),
        templates=select_templates(chip.family, softdevice),
    )

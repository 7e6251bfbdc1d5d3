"""Rust toolchain target triples for Cortex-M cores."""

from enum import Enum


class Target(Enum):
    """Compilation target (core architecture + ABI).

    The value is the triple passed to rustup and cargo.
    """

    THUMBV6M = "thumbv6m-none-eabi"
    """Cortex-M0, Cortex-M0+."""

    THUMBV7M = "thumbv7m-none-eabi"
    """Cortex-M3."""

    THUMBV7EM = "thumbv7em-none-eabi"
    """Cortex-M4 / Cortex-M7 without FPU."""

    THUMBV7EM_HF = "thumbv7em-none-eabihf"
    """Cortex-M4F / Cortex-M7F."""

    THUMBV8M_BASE = "thumbv8m.base-none-eabi"
    """Cortex-M23."""

    THUMBV8M_MAIN_HF = "thumbv8m.main-none-eabihf"
    """Cortex-M33 / Cortex-M55 with FPU."""

    def __str__(self) -> str:
        return self.value

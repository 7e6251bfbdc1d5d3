"""Constants shared across the scaffolding engine."""


class TemplateKeys:
    """Keys of the templates in the template store."""

    # Entry point source, selected by family x softdevice
    MAIN_STM32 = "main.rs.stm32"
    """src/main.rs for STM32 chips."""

    MAIN_NRF = "main.rs.nrf"
    """src/main.rs for nRF chips without a softdevice."""

    MAIN_NRF_SD = "main.rs.nrf.sd"
    """src/main.rs for nRF chips running a BLE softdevice."""

    # Build script, selected by family
    BUILD_STM32 = "build.rs.stm32"
    BUILD_NRF = "build.rs.nrf"

    MEMORY_X = "memory.x"
    """Linker memory layout; nRF only."""

    # Fixed artifacts
    CARGO_CONFIG = "config.toml"
    TOOLCHAIN = "rust-toolchain.toml"
    EMBED = "Embed.toml"
    MANIFEST = "Cargo.toml"
    MANIFEST_FEATURE_PATCH = "Cargo.toml.feature-patch"
    MANIFEST_APPEND = "Cargo.toml.append"
    MANIFEST_SD_APPEND = "Cargo.toml.sd.append"
    FMT = "fmt.rs"


# Paths of generated artifacts, relative to the project root
CARGO_CONFIG_PATH = ".cargo/config.toml"
TOOLCHAIN_PATH = "rust-toolchain.toml"
EMBED_PATH = "Embed.toml"
BUILD_SCRIPT_PATH = "build.rs"
MANIFEST_PATH = "Cargo.toml"
FMT_PATH = "src/fmt.rs"
MAIN_PATH = "src/main.rs"
MEMORY_X_PATH = "memory.x"

TEMPLATE_SUFFIX = ".j2"
"""Template files are stored as '<key>.j2'."""

DOCS_URL = "https://embassy.dev/book/dev/index.html"
SOFTDEVICE_DOCS_URL = "https://github.com/embassy-rs/nrf-softdevice#running-examples"


def format_address(value: int) -> str:
    """Format an address or length as a linker-script hex literal."""
    return f"0x{value:08X}"

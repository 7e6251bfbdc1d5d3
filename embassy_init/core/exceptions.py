"""Custom exceptions used throughout the embassy_init package."""

from typing import Any, Optional


class EngineError(Exception):
    """Base exception for all scaffolding engine errors.

    All engine-specific exceptions should inherit from this class.
    This allows catching all engine errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class SettingsError(EngineError):
    """Raised when a settings or chip catalog file is invalid.

    This includes:
    - Unparseable YAML
    - Missing required keys
    - Values of the wrong type
    """

    def __init__(
        self,
        config_key: str,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize settings error.

        Args:
            config_key: The settings key (or file, for whole-file errors)
                that caused the error
            message: Description of what's wrong
            details: Additional context
        """
        full_message = f"Settings error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class ClassificationError(EngineError):
    """Base exception for chip resolution failures.

    Raised when a raw chip name cannot be turned into a Chip descriptor.
    """

    def __init__(
        self,
        message: str,
        raw_name: str,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["raw_name"] = raw_name

        super().__init__(message=message, details=details)
        self.raw_name = raw_name


class UnknownChip(ClassificationError):
    """Raised when the chip database has no match for the name."""

    def __init__(self, raw_name: str, details: Optional[dict[str, Any]] = None):
        message = f"Unknown chip '{raw_name}': no match in the chip database"
        super().__init__(message=message, raw_name=raw_name, details=details)


class UnclassifiedFamily(ClassificationError):
    """Raised when a database match fits none of the supported families.

    Examples:
    - an ESP32 or RP2040 part present in the catalog
    """

    def __init__(
        self,
        raw_name: str,
        canonical: str,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["canonical"] = canonical
        message = (
            f"Chip '{raw_name}' (matched '{canonical}') does not belong to a "
            f"supported family"
        )
        super().__init__(message=message, raw_name=raw_name, details=details)
        self.canonical = canonical


class UnresolvedTarget(ClassificationError):
    """Raised when the family is known but the core variant is not.

    Examples:
    - STM32MP1 (Cortex-A application processor)
    """

    def __init__(
        self,
        raw_name: str,
        canonical: str,
        family: str,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["canonical"] = canonical
        details["family"] = family
        message = (
            f"Chip '{raw_name}' (matched '{canonical}') is a {family} part "
            f"with no known toolchain target for its core"
        )
        super().__init__(message=message, raw_name=raw_name, details=details)
        self.canonical = canonical
        self.family = family


class ConfigError(EngineError):
    """Base exception for build-configuration validation failures."""


class IncompatibleSoftdevice(ConfigError):
    """Raised when a wireless stack is requested for a non-NRF chip."""

    def __init__(
        self,
        chip_name: str,
        softdevice: str,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["chip"] = chip_name
        details["softdevice"] = softdevice
        message = (
            f"Softdevice '{softdevice}' requires an nRF chip, "
            f"got '{chip_name}'"
        )
        super().__init__(message=message, details=details)
        self.chip_name = chip_name
        self.softdevice = softdevice


class MissingMemoryRegion(ConfigError):
    """Raised when an NRF project is emitted without a memory layout."""

    def __init__(self, chip_name: str, details: Optional[dict[str, Any]] = None):
        details = details or {}
        details["chip"] = chip_name
        message = (
            f"Chip '{chip_name}' needs an explicit flash/RAM layout "
            f"(flash origin/length, RAM origin/length) to generate memory.x"
        )
        super().__init__(message=message, details=details)
        self.chip_name = chip_name


class EmissionError(EngineError):
    """Base exception for failures of artifact-emission collaborators.

    The collaborator's own exception is kept as ``cause`` and chained.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if cause is not None:
            details = details or {}
            details["cause"] = str(cause)

        super().__init__(message=message, details=details)
        self.cause = cause


class DirectiveEmissionFailed(EmissionError):
    """Raised when adding a dependency directive fails."""

    def __init__(
        self,
        directive: Any,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["crate"] = directive.crate
        details["features"] = list(directive.features)
        message = f"Failed to add dependency '{directive.crate}'"
        super().__init__(message=message, cause=cause, details=details)
        self.directive = directive


class ProjectCreationFailed(EmissionError):
    """Raised when the package manager cannot create the project."""

    def __init__(
        self,
        project_name: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["project"] = project_name
        message = f"Failed to create project '{project_name}'"
        super().__init__(message=message, cause=cause, details=details)
        self.project_name = project_name


class ArtifactWriteFailed(EmissionError):
    """Raised when a generated file cannot be written."""

    def __init__(
        self,
        path: str,
        cause: Optional[BaseException] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = details or {}
        details["path"] = path
        message = f"Failed to write '{path}'"
        super().__init__(message=message, cause=cause, details=details)
        self.path = path

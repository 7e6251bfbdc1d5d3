"""Project scaffolding: resolve, derive, then hand the plan to collaborators.

All validation (chip resolution, softdevice compatibility, memory layout)
happens in plan() before the first collaborator call, so a failing run
never leaves a half-generated project behind because of bad input.
Collaborator failures after that point are terminal and are not rolled
back; cleaning up the project directory is the caller's decision.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from embassy_init.chip.family import MemRegion
from embassy_init.core.derivation import derive
from embassy_init.core.exceptions import (
    ArtifactWriteFailed,
    ConfigError,
    DirectiveEmissionFailed,
    MissingMemoryRegion,
    ProjectCreationFailed,
)
from embassy_init.core.plan import BuildPlan, Directive
from embassy_init.core.resolver import ChipResolver
from embassy_init.database.yaml_database import load_chip_database
from embassy_init.emit.cargo import CargoPackageManager
from embassy_init.emit.templates import JinjaTemplateStore
from embassy_init.emit.writer import FileArtifactWriter
from embassy_init.interfaces.options import PanicHandler, Softdevice
from embassy_init.interfaces.package_manager import PackageManager
from embassy_init.interfaces.template_store import ArtifactWriter, TemplateStore
from embassy_init.utils import consts
from embassy_init.utils.config_loader import ScaffoldSettings, get_settings
from embassy_init.utils.consts import TemplateKeys, format_address

logger = logging.getLogger(__name__)

WriterFactory = Callable[[Path], ArtifactWriter]


class Scaffolder:
    """Generates an Embassy project for one chip."""

    def __init__(
        self,
        resolver: ChipResolver,
        package_manager: PackageManager,
        templates: TemplateStore,
        writer_factory: WriterFactory = FileArtifactWriter,
    ):
        self.resolver = resolver
        self.package_manager = package_manager
        self.templates = templates
        self.writer_factory = writer_factory

    def plan(
        self,
        raw_chip_name: str,
        panic_handler: PanicHandler,
        softdevice: Optional[Softdevice] = None,
        memory: Optional[MemRegion] = None,
    ) -> BuildPlan:
        """Resolve and derive without touching any collaborator but the database.

        Raises:
            ClassificationError: chip could not be resolved
            ConfigError: invalid softdevice or memory layout choice
        """
        chip = self.resolver.resolve(raw_chip_name)
        plan = derive(chip, panic_handler, softdevice)

        if chip.family.is_nrf:
            if memory is None:
                raise MissingMemoryRegion(chip.name)
            plan = replace(plan, chip=chip.with_memory(memory))
        elif memory is not None:
            raise ConfigError(
                f"Chip '{chip.name}' takes its memory layout from the HAL; "
                f"do not pass flash/RAM options",
                details={"chip": chip.name, "family": str(chip.family)},
            )

        return plan

    def scaffold(
        self,
        raw_chip_name: str,
        project_name: str,
        panic_handler: PanicHandler,
        softdevice: Optional[Softdevice] = None,
        memory: Optional[MemRegion] = None,
        parent: Optional[Path] = None,
    ) -> Path:
        """Create the project and return its root directory."""
        plan = self.plan(raw_chip_name, panic_handler, softdevice, memory)

        parent = Path.cwd() if parent is None else Path(parent)
        try:
            project_dir = self.package_manager.new_project(project_name, parent)
        except Exception as exc:
            raise ProjectCreationFailed(project_name, exc) from exc

        self.emit(plan, project_name, project_dir)
        return project_dir

    def emit(self, plan: BuildPlan, project_name: str, project_dir: Path) -> None:
        """Write every artifact of plan into an existing project directory."""
        writer = self.writer_factory(project_dir)
        chip = plan.chip

        self._render_to(writer, consts.CARGO_CONFIG_PATH, TemplateKeys.CARGO_CONFIG,
                        {"target": chip.target.value, "chip": chip.probe_name})
        self._render_to(writer, consts.TOOLCHAIN_PATH, TemplateKeys.TOOLCHAIN,
                        {"target": chip.target.value})
        self._render_to(writer, consts.EMBED_PATH, TemplateKeys.EMBED,
                        {"chip": chip.probe_name})
        self._render_to(writer, consts.BUILD_SCRIPT_PATH, plan.templates.build, {})

        self._emit_manifest(plan, project_name, project_dir, writer)

        self._render_to(writer, consts.FMT_PATH, TemplateKeys.FMT, {})
        self._render_to(writer, consts.MAIN_PATH, plan.templates.main,
                        {"panic_handler": plan.panic_handler.rust_path})

        if plan.templates.memory is not None:
            memory = chip.family.memory
            if memory is None:
                raise MissingMemoryRegion(chip.name)
            self._render_to(writer, consts.MEMORY_X_PATH, plan.templates.memory, {
                "flash_origin": format_address(memory.flash_origin),
                "flash_length": format_address(memory.flash_length),
                "ram_origin": format_address(memory.ram_origin),
                "ram_length": format_address(memory.ram_length),
            })
            logger.warning(
                "[ACTION NEEDED] You must now flash the Softdevice and configure "
                f"memory.x. Instructions can be found here: {consts.SOFTDEVICE_DOCS_URL}"
            )

    def _emit_manifest(
        self,
        plan: BuildPlan,
        project_name: str,
        project_dir: Path,
        writer: ArtifactWriter,
    ) -> None:
        self._render_to(writer, consts.MANIFEST_PATH, TemplateKeys.MANIFEST,
                        {"name": project_name})

        for directive in plan.directives:
            self._add(project_dir, directive)

        try:
            manifest = writer.read(consts.MANIFEST_PATH)
            # Older cargo releases do not create [features] for optional deps
            if "[features]" not in manifest:
                writer.append(
                    consts.MANIFEST_PATH,
                    self.templates.render(TemplateKeys.MANIFEST_FEATURE_PATCH, {}),
                )
            writer.append(
                consts.MANIFEST_PATH,
                self.templates.render(
                    plan.templates.manifest_append, {"family": str(plan.chip.family)}
                ),
            )
        except Exception as exc:
            raise ArtifactWriteFailed(consts.MANIFEST_PATH, exc) from exc

    def _add(self, project_dir: Path, directive: Directive) -> None:
        try:
            self.package_manager.add(
                project_dir, directive.crate, directive.features, directive.optional
            )
        except Exception as exc:
            raise DirectiveEmissionFailed(directive, exc) from exc

    def _render_to(
        self,
        writer: ArtifactWriter,
        path: str,
        key: str,
        mapping: Mapping[str, Any],
    ) -> None:
        try:
            writer.write(path, self.templates.render(key, mapping))
        except Exception as exc:
            raise ArtifactWriteFailed(path, exc) from exc


def create_scaffolder(settings: Optional[ScaffoldSettings] = None) -> Scaffolder:
    """Build a Scaffolder wired to the default collaborators.

    Args:
        settings: Loaded settings; the bundled defaults if None
    """
    settings = settings or get_settings()

    return Scaffolder(
        resolver=ChipResolver(load_chip_database(settings.chip_database)),
        package_manager=CargoPackageManager(
            binary=settings.cargo.binary, timeout=settings.cargo.timeout
        ),
        templates=JinjaTemplateStore.from_dir_or_bundled(settings.templates_dir),
    )


def scaffold(
    raw_chip_name: str,
    project_name: str,
    panic_handler: PanicHandler,
    softdevice: Optional[Softdevice] = None,
    memory: Optional[MemRegion] = None,
    parent: Optional[Path] = None,
    settings: Optional[ScaffoldSettings] = None,
) -> Path:
    """Scaffold a project with the default collaborators.

    Returns:
        The project root directory

    Raises:
        EngineError: any resolution, validation or emission failure
    """
    scaffolder = create_scaffolder(settings)
    return scaffolder.scaffold(
        raw_chip_name,
        project_name,
        panic_handler,
        softdevice=softdevice,
        memory=memory,
        parent=parent,
    )

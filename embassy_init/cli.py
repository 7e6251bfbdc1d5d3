"""Command-line front end: `embassy-init init` and `embassy-init docs`."""

from __future__ import annotations

import argparse
import logging
import webbrowser
from pathlib import Path
from typing import Optional, Sequence

from embassy_init.chip.family import MemRegion
from embassy_init.core.exceptions import EngineError
from embassy_init.interfaces.options import PanicHandler, Softdevice
from embassy_init.scaffold import create_scaffolder
from embassy_init.utils.config_loader import LoggingSettings, ScaffoldSettings, get_settings
from embassy_init.utils.consts import DOCS_URL
from embassy_init.utils.logger import setup_logging

logger = logging.getLogger(__name__)

_MEMORY_OPTIONS = ("flash_origin", "flash_length", "ram_origin", "ram_length")


def _int(s: str) -> int:
    return int(s, 0)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="embassy-init",
        description="Scaffold Embassy firmware projects for STM32 and nRF chips",
    )
    parser.add_argument("--settings", help="Path to a settings YAML file")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the settings file log level",
    )
    parser.add_argument("--quiet", action="store_true", help="Reduce console output")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Create a new project")
    init.add_argument("name", help="Project (crate) name")
    init.add_argument("--chip", required=True, help="Chip name, e.g. stm32f103c8 or nrf52840")
    init.add_argument(
        "--panic-handler",
        type=PanicHandler.parse,
        help=f"One of {[p.value for p in PanicHandler]} (default from settings)",
    )
    init.add_argument(
        "--softdevice",
        type=Softdevice.parse,
        help=f"BLE softdevice for nRF chips: {[s.value for s in Softdevice]}",
    )
    init.add_argument(
        "--dir", type=Path, default=None,
        help="Parent directory for the project (default: current directory)",
    )

    # nRF memory layout; required together for nRF, rejected for STM32
    mem = init.add_argument_group("nRF memory layout (memory.x)")
    mem.add_argument("--flash-origin", type=_int, help="e.g. 0x00027000")
    mem.add_argument("--flash-length", type=_int, help="e.g. 0xD9000")
    mem.add_argument("--ram-origin", type=_int, help="e.g. 0x20020000")
    mem.add_argument("--ram-length", type=_int, help="e.g. 0x20000")

    sub.add_parser("docs", help="Open the Embassy book in a browser")
    return parser


def _memory_from_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> Optional[MemRegion]:
    values = {name: getattr(args, name) for name in _MEMORY_OPTIONS}
    given = [name for name, value in values.items() if value is not None]
    if not given:
        return None
    if len(given) != len(_MEMORY_OPTIONS):
        missing = [f"--{n.replace('_', '-')}" for n in _MEMORY_OPTIONS if n not in given]
        parser.error(f"memory layout is incomplete, missing {', '.join(missing)}")
    try:
        return MemRegion(**values)
    except ValueError as exc:
        parser.error(str(exc))
    return None


def _run_init(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    settings: ScaffoldSettings,
) -> int:
    memory = _memory_from_args(parser, args)
    panic_handler = args.panic_handler or settings.defaults.panic_handler

    try:
        scaffolder = create_scaffolder(settings)
        project_dir = scaffolder.scaffold(
            args.chip,
            args.name,
            panic_handler,
            softdevice=args.softdevice,
            memory=memory,
            parent=args.dir,
        )
    except EngineError as exc:
        logger.error(f"Failed with error: {exc}")
        for key, value in exc.details.items():
            logger.debug(f"  {key}: {value}")
        return 1

    logger.info(f"Created {project_dir}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings(args.settings)
    except EngineError as exc:
        setup_logging(LoggingSettings(), quiet=args.quiet)
        logger.error(str(exc))
        return 1

    setup_logging(settings.logging, level=args.log_level, quiet=args.quiet)

    if args.command == "docs":
        webbrowser.open(DOCS_URL)
        return 0

    return _run_init(parser, args, settings)

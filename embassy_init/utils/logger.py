"""Console logging for the command-line front end.

Library modules only create module loggers; handlers are installed here,
once, by the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from embassy_init.utils.config_loader import LoggingSettings

_VERBOSE_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_QUIET_FORMAT = "%(message)s"


def setup_logging(
    settings: LoggingSettings,
    level: Optional[str] = None,
    quiet: bool = False,
) -> int:
    """Replace root handlers with a single stderr handler.

    Args:
        settings: The ``logging`` section of the loaded settings
        level: Overrides ``settings.level`` when given (``--log-level``)
        quiet: Print bare messages without level and logger name

    Returns:
        The numeric level that was applied
    """
    name = (level or settings.level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(
        level=numeric,
        format=_QUIET_FORMAT if quiet else _VERBOSE_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    return numeric

"""Default artifact-emission collaborators.

- cargo: PackageManager over the cargo CLI
- templates: Jinja2 TemplateStore implementations
- writer: filesystem ArtifactWriter
"""

from embassy_init.emit.cargo import CargoError, CargoPackageManager
from embassy_init.emit.templates import DictTemplateStore, JinjaTemplateStore
from embassy_init.emit.writer import FileArtifactWriter

__all__ = [
    "CargoError",
    "CargoPackageManager",
    "DictTemplateStore",
    "FileArtifactWriter",
    "JinjaTemplateStore",
]

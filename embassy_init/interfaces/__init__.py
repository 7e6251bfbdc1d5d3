"""Interface abstractions for the scaffolding engine.

Defines the contracts of the external collaborators:
- ChipDatabase: fuzzy chip name lookup returning canonical records
- PackageManager: project creation and dependency adds
- TemplateStore: template key to rendered text
- ArtifactWriter: file emission relative to a project root
- PanicHandler, Softdevice: user choice enumerations
"""

from embassy_init.interfaces.chip_database import ChipDatabase, ChipRecord
from embassy_init.interfaces.options import PanicHandler, Softdevice
from embassy_init.interfaces.package_manager import PackageManager
from embassy_init.interfaces.template_store import ArtifactWriter, TemplateStore

__all__ = [
    "ArtifactWriter",
    "ChipDatabase",
    "ChipRecord",
    "PackageManager",
    "PanicHandler",
    "Softdevice",
    "TemplateStore",
]

"""Package manager interface for project creation and dependency adds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence


class PackageManager(ABC):
    """Interface for the package-manager collaborator.

    Failures are reported by raising; the scaffolder wraps them in
    emission errors. Implementations do not retry.
    """

    @abstractmethod
    def new_project(self, name: str, parent: Path) -> Path:
        """Create a new binary project under parent and return its root."""
        ...

    @abstractmethod
    def add(
        self,
        project_dir: Path,
        crate: str,
        features: Sequence[str] = (),
        optional: bool = False,
    ) -> None:
        """Add one dependency with the given features to the project manifest."""
        ...

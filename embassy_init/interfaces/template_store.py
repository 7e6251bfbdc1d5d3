"""Template rendering and artifact writing interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping


class TemplateStore(ABC):
    """Mapping from template key to text, rendered with substitutions."""

    @abstractmethod
    def render(self, key: str, mapping: Mapping[str, Any] | None = None) -> str:
        """Render the template registered under key.

        Raises:
            KeyError: if no template is registered under key
        """
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all available template keys."""
        ...


class ArtifactWriter(ABC):
    """Writes generated files relative to a project root."""

    @abstractmethod
    def write(self, path: Path | str, text: str) -> Path:
        """Create or truncate path and write text; returns the absolute path."""
        ...

    @abstractmethod
    def append(self, path: Path | str, text: str) -> Path:
        """Append text to an existing file."""
        ...

    @abstractmethod
    def read(self, path: Path | str) -> str:
        """Return the current contents of path."""
        ...

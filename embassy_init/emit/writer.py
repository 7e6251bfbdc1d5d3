"""Filesystem ArtifactWriter."""

from __future__ import annotations

import logging
from pathlib import Path

from embassy_init.interfaces.template_store import ArtifactWriter

logger = logging.getLogger(__name__)


class FileArtifactWriter(ArtifactWriter):
    """Writes artifacts under a project root, creating parent directories."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _resolve(self, path: Path | str) -> Path:
        return self.root / path

    def write(self, path: Path | str, text: str) -> Path:
        target = self._resolve(path)
        logger.info(f"Create file: {path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return target

    def append(self, path: Path | str, text: str) -> Path:
        target = self._resolve(path)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(text)
        return target

    def read(self, path: Path | str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

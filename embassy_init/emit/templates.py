"""Jinja2-backed template stores.

Templates are stored as '<key>.j2'. StrictUndefined makes a missing
substitution an error instead of an empty string.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import (
    BaseLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
)

from embassy_init.interfaces.template_store import TemplateStore
from embassy_init.utils.consts import TEMPLATE_SUFFIX


class JinjaTemplateStore(TemplateStore):
    """Renders templates from a Jinja2 loader."""

    def __init__(self, loader: BaseLoader):
        self._env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    @classmethod
    def bundled(cls) -> JinjaTemplateStore:
        """Store over the templates shipped in embassy_init/templates."""
        return cls(PackageLoader("embassy_init", "templates"))

    @classmethod
    def from_directory(cls, directory: Path) -> JinjaTemplateStore:
        return cls(FileSystemLoader(str(directory)))

    @classmethod
    def from_dir_or_bundled(cls, directory: Optional[Path]) -> JinjaTemplateStore:
        if directory is None:
            return cls.bundled()
        return cls.from_directory(directory)

    def render(self, key: str, mapping: Mapping[str, Any] | None = None) -> str:
        try:
            template = self._env.get_template(key + TEMPLATE_SUFFIX)
        except TemplateNotFound as exc:
            raise KeyError(key) from exc
        return template.render(dict(mapping or {}))

    def keys(self) -> list[str]:
        return sorted(
            name[: -len(TEMPLATE_SUFFIX)]
            for name in self._env.list_templates()
            if name.endswith(TEMPLATE_SUFFIX)
        )


class DictTemplateStore(JinjaTemplateStore):
    """In-memory store: template key to template text."""

    def __init__(self, templates: Mapping[str, str]):
        super().__init__(
            DictLoader({key + TEMPLATE_SUFFIX: text for key, text in templates.items()})
        )

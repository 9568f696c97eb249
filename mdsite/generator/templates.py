"""Jinja template loading and execution for generated pages."""

from __future__ import annotations

import logging
import typing as typ

from jinja2 import DictLoader, Environment, TemplateError, select_autoescape

from mdsite.errors import RenderError, SourceReadError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from mdsite.filesystem import FileSystem
    from mdsite.generator.models import Page

logger = logging.getLogger(__name__)


def discover_templates(
    templates_dir: Path, fs: FileSystem, log: logging.Logger = logger
) -> dict[str, str]:
    """Return template sources under ``templates_dir`` keyed by relative name.

    Raises
    ------
    SourceReadError
        If the directory cannot be listed or a template cannot be decoded.
    """
    try:
        paths = fs.list_files(templates_dir)
    except OSError as exc:
        msg = f"cannot list templates: {exc}"
        raise SourceReadError(msg, source_path=str(templates_dir)) from exc

    sources: dict[str, str] = {}
    for path in paths:
        log.info("found template %s", path)
        name = path.relative_to(templates_dir).as_posix()
        try:
            sources[name] = fs.read_file(path).decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"cannot read template: {exc}"
            raise SourceReadError(msg, source_path=str(path)) from exc
    return sources


class TemplateRenderer:
    """Execute named templates against a :class:`Page` context."""

    def __init__(self, sources: typ.Mapping[str, str]) -> None:
        self.env = Environment(
            loader=DictLoader(dict(sources)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @classmethod
    def from_directory(
        cls, templates_dir: Path, fs: FileSystem, log: logging.Logger = logger
    ) -> TemplateRenderer:
        """Build a renderer from every file found under ``templates_dir``."""
        return cls(discover_templates(templates_dir, fs, log))

    def render(self, template_name: str, page: Page) -> bytes:
        """Render ``template_name`` with ``page`` and return UTF-8 bytes.

        Raises
        ------
        RenderError
            If the template is missing or fails to execute.
        """
        try:
            template = self.env.get_template(template_name)
            html = template.render(page=page)
        except TemplateError as exc:
            msg = f"template {template_name!r} failed: {exc}"
            raise RenderError(msg) from exc
        return html.encode("utf-8")


__all__ = ["TemplateRenderer", "discover_templates"]

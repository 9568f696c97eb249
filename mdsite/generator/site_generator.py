"""High-level orchestration for static site generation.

:class:`SiteGenerator` consumes a :class:`~mdsite.config.SiteConfig` and
turns every sitemap node that points at a markdown document into an HTML
file. A run proceeds in phases:

1. Discover templates.
2. Annotate the sitemap, build the tag index and flatten the content nodes.
3. Parse every document (front matter, table of contents, body HTML) and
   attach each page's heading anchors to its sitemap node.
4. Render every page template with its previous/next neighbours and write
   the output files.

Any failure aborts the run; no output is written before all documents have
parsed successfully.

Example
-------
>>> from pathlib import Path
>>> from mdsite.config import load_site_config
>>> from mdsite.generator import SiteGenerator
>>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> SiteGenerator(config).run()  # doctest: +SKIP
[PosixPath('public/intro.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from mdsite.errors import SiteBuildError, SourceReadError, WriteError
from mdsite.filesystem import LocalFileSystem
from mdsite.generator.document import DocumentParser
from mdsite.generator.models import Page, RenderedDocument
from mdsite.generator.renderer import HtmlContentRenderer
from mdsite.generator.templates import TemplateRenderer
from mdsite.sitemap import (
    SitemapNode,
    annotate,
    build_tag_index,
    flatten_content_nodes,
)
from mdsite.toc import toc_sections

if typ.TYPE_CHECKING:
    from mdsite.config import SiteConfig
    from mdsite.filesystem import FileSystem

MARKDOWN_SUFFIXES = (".md", ".markdown")

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class _ParsedPage:
    node: SitemapNode
    source_path: str
    document: RenderedDocument
    output_name: str = ""


def output_stem(source_path: str, slug: str) -> str:
    """Return the output file stem: ``slug`` or the source name sans suffix."""
    if slug:
        return slug
    name = Path(source_path).name
    for suffix in MARKDOWN_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


class SiteGenerator:
    """Render every content node of a sitemap into themed HTML files."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        fs: FileSystem | None = None,
        renderer: HtmlContentRenderer | None = None,
        output_dir: Path | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the generator with configuration and collaborators.

        Parameters
        ----------
        config : SiteConfig
            Sitemap, template and output settings.
        fs : FileSystem, optional
            Filesystem capability; defaults to :class:`LocalFileSystem`.
        renderer : HtmlContentRenderer, optional
            Markdown engine; defaults to one using ``config.pygments_style``.
        output_dir : Path, optional
            Override for the HTML output directory.
        log : logging.Logger, optional
            Logger receiving progress messages; defaults to the module logger.
        """
        self.config = config
        self.fs = fs or LocalFileSystem()
        self.renderer = renderer or HtmlContentRenderer(config.pygments_style)
        self.parser = DocumentParser(self.renderer)
        self.output_dir = output_dir or config.output_dir
        self.log = log or logger

    def run(self) -> list[Path]:
        """Generate the whole site.

        Returns
        -------
        list[Path]
            Paths of the written HTML files in sitemap order.

        Raises
        ------
        SiteBuildError
            Raised for the first failing page; nothing is retried and the run
            stops immediately.
        """
        templates = TemplateRenderer.from_directory(
            self.config.templates_dir, self.fs, self.log
        )
        bundle = self.build_pages()
        return [self._generate_page(templates, page, name) for page, name in bundle]

    def build_pages(self) -> list[tuple[Page, str]]:
        """Parse every document and return page contexts with output names.

        The sitemap is annotated and indexed first; nothing is rendered or
        written.
        """
        root = self.config.sitemap
        annotate(root)
        tag_index = build_tag_index(root)
        content_nodes = flatten_content_nodes(root)

        parsed = [self._parse_page(node) for node in content_nodes]
        self._assign_output_names(parsed)

        stylesheet = self.renderer.stylesheet
        bundle: list[tuple[Page, str]] = []
        for idx, entry in enumerate(parsed):
            previous = content_nodes[idx - 1] if idx > 0 else None
            following = content_nodes[idx + 1] if idx + 1 < len(content_nodes) else None
            page = Page(
                source_path=entry.source_path,
                href=entry.node.resolved_href,
                document=entry.document,
                current=entry.node,
                site_root=root,
                tag_index=tag_index,
                previous=previous,
                next=following,
                cache_id=self.config.cache_id,
                stylesheet=stylesheet,
            )
            bundle.append((page, entry.output_name))
        return bundle

    def _parse_page(self, node: SitemapNode) -> _ParsedPage:
        """Read and parse the document behind ``node``."""
        source_path = node.page
        try:
            raw = self.fs.read_file(Path(source_path))
            text = raw.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"cannot read source document: {exc}"
            raise SourceReadError(msg, source_path=source_path) from exc

        try:
            document = self.parser.parse(text)
        except SiteBuildError as exc:
            exc.source_path = exc.source_path or source_path
            raise

        metadata = document.metadata
        if metadata.wants_toc and document.toc is None:
            self.log.debug("toc requested but no headings found in %s", source_path)
        node.sections = toc_sections(node.resolved_href, document.headings)
        return _ParsedPage(node=node, source_path=source_path, document=document)

    def _assign_output_names(self, parsed: list[_ParsedPage]) -> None:
        """Compute output names, rejecting two pages that share one."""
        seen: dict[str, str] = {}
        for entry in parsed:
            name = output_stem(entry.source_path, entry.document.metadata.slug)
            if name in seen:
                msg = f"output name '{name}.html' is also produced by {seen[name]}"
                raise WriteError(msg, source_path=entry.source_path)
            seen[name] = entry.source_path
            entry.output_name = name

    def _generate_page(
        self, templates: TemplateRenderer, page: Page, name: str
    ) -> Path:
        """Render ``page`` with its template and write it to the output folder."""
        self.log.info("generating page %s (href %s)", page.source_path, page.href)
        template_name = page.document.metadata.template or self.config.page_template
        try:
            html = templates.render(template_name, page)
        except SiteBuildError as exc:
            exc.source_path = exc.source_path or page.source_path
            raise

        output_path = self.output_dir / f"{name}.html"
        try:
            self.fs.write_file(output_path, html)
        except OSError as exc:
            msg = f"cannot write {output_path}: {exc}"
            raise WriteError(msg, source_path=page.source_path) from exc
        return output_path


__all__ = ["MARKDOWN_SUFFIXES", "SiteGenerator", "output_stem"]

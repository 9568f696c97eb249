"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from markupsafe import Markup

    from mdsite.metadata import PageMetadata
    from mdsite.sitemap import SitemapNode, TagIndex
    from mdsite.toc import TocNode


@dc.dataclass(frozen=True, slots=True)
class RenderedDocument:
    """A parsed and rendered markdown document.

    Attributes
    ----------
    html : Markup
        Rendered body HTML.
    toc_html : Markup
        Rendered table-of-contents list; empty when there is no TOC.
    metadata : PageMetadata
        Coerced front matter.
    toc : TocNode or None
        Table-of-contents tree, or ``None`` when disabled or empty.
    headings : TocNode or None
        Every heading of the document regardless of the TOC policy, or
        ``None`` when it has no headings.
    """

    html: Markup
    toc_html: Markup
    metadata: PageMetadata
    toc: TocNode | None
    headings: TocNode | None = None


@dc.dataclass(frozen=True, slots=True)
class Page:
    """Render context handed to the page template.

    Attributes
    ----------
    source_path : str
        Path of the markdown source.
    href : str
        Resolved href of the current sitemap node.
    document : RenderedDocument
        Rendered content and metadata.
    current : SitemapNode
        Sitemap node being rendered.
    site_root : SitemapNode
        Root of the sitemap, for navigation menus.
    tag_index : TagIndex
        Tag to nodes mapping shared by every page.
    previous : SitemapNode or None
        Preceding content node in document order.
    next : SitemapNode or None
        Following content node in document order.
    cache_id : str
        Opaque string templates may append to asset URLs.
    stylesheet : str
        CSS rules for highlighted code blocks.
    """

    source_path: str
    href: str
    document: RenderedDocument
    current: SitemapNode
    site_root: SitemapNode
    tag_index: TagIndex
    previous: SitemapNode | None = None
    next: SitemapNode | None = None
    cache_id: str = ""
    stylesheet: str = ""

    @property
    def title(self) -> str:
        """Return the front-matter title, falling back to the node text."""
        return self.document.metadata.title or self.current.text


__all__ = ["Page", "RenderedDocument"]

"""Turn markdown source into a :class:`RenderedDocument`.

Parsing runs the markdown engine once. While the document tree is still
open, a hook coerces the front matter, builds the table of contents from the
heading structure and adds a permalink anchor to every heading; the engine
then serializes the tree to HTML.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from xml.etree.ElementTree import SubElement

from markupsafe import Markup
from pygments.util import ClassNotFound

from mdsite.errors import RenderError
from mdsite.generator.models import RenderedDocument
from mdsite.metadata import TOC_UNLIMITED, PageMetadata, coerce_metadata
from mdsite.toc import TocNode, render_toc, synthesize_toc

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from mdsite.generator.renderer import HtmlContentRenderer

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
ANCHOR_CLASS = "anchor"
ANCHOR_TEXT = "#"


def insert_heading_anchors(root: Element) -> None:
    """Append a ``<a class="anchor">`` permalink to every heading with an id."""
    for element in root.iter():
        anchor_id = element.get("id")
        if element.tag in HEADING_TAGS and anchor_id:
            link = SubElement(element, "a", {"class": ANCHOR_CLASS})
            link.set("href", f"#{anchor_id}")
            link.text = ANCHOR_TEXT


@dc.dataclass(slots=True)
class _ParseState:
    metadata: PageMetadata = dc.field(default_factory=PageMetadata)
    toc: TocNode | None = None
    headings: TocNode | None = None


class DocumentParser:
    """Parse markdown documents with front matter and a table of contents."""

    def __init__(self, renderer: HtmlContentRenderer) -> None:
        self.renderer = renderer

    def parse(self, text: str) -> RenderedDocument:
        """Render ``text`` and return its HTML, TOC and metadata.

        Raises
        ------
        MetadataTypeError
            If a front-matter field has an unsupported type.
        TocSynthesisError
            If the heading structure is malformed.
        RenderError
            If Pygments cannot find the lexer or style a code block needs.
        """
        state = _ParseState()

        def _inspect(
            front_matter: cabc.Mapping[str, object],
            headings: list[dict[str, typ.Any]],
            root: Element,
        ) -> None:
            state.metadata = coerce_metadata(front_matter)
            state.toc = synthesize_toc(headings, state.metadata.toc)
            state.headings = synthesize_toc(headings, TOC_UNLIMITED)
            insert_heading_anchors(root)

        try:
            html = self.renderer.markdown(text, hook=_inspect)
        except ClassNotFound as exc:
            msg = f"markdown rendering failed: {exc}"
            raise RenderError(msg) from exc

        return RenderedDocument(
            html=Markup(html),
            toc_html=Markup(render_toc(state.toc)),
            metadata=state.metadata,
            toc=state.toc,
            headings=state.headings,
        )


__all__ = ["DocumentParser", "insert_heading_anchors"]

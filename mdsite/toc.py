"""Build a table of contents from a document's heading structure.

The markdown ``toc`` extension already nests headings by level and assigns
each one an id. This module truncates that tree according to the page's TOC
policy, renders it as an HTML list, and can mirror it into sitemap nodes so
navigation templates can link straight to a page's sections.

Examples
--------
>>> headings = [
...     {"level": 1, "id": "intro", "name": "Intro", "children": [
...         {"level": 2, "id": "setup", "name": "Setup", "children": [
...             {"level": 3, "id": "advanced", "name": "Advanced", "children": []},
...         ]},
...     ]},
... ]
>>> root = synthesize_toc(headings, 1)
>>> [node.title for node in root.walk()]
['Intro', 'Setup']
>>> synthesize_toc(headings, -1) is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from html import escape, unescape

from mdsite.errors import TocSynthesisError
from mdsite.metadata import TOC_DISABLED, TOC_UNLIMITED
from mdsite.sitemap import SitemapNode

TOC_LIST_ID = "toc-list"


@dc.dataclass(slots=True)
class TocNode:
    """A heading entry in a table of contents.

    Attributes
    ----------
    title : str
        Plain-text heading label.
    anchor_id : str
        Id of the heading element inside the rendered document.
    children : list[TocNode]
        Nested headings in document order.
    """

    title: str
    anchor_id: str
    children: list[TocNode] = dc.field(default_factory=list)

    def walk(self) -> cabc.Iterator[TocNode]:
        """Yield descendant headings in document order, excluding ``self``."""
        for child in self.children:
            yield child
            yield from child.walk()


def _convert(token: object, depth: int, max_depth: int | None) -> TocNode:
    """Turn a heading token into a :class:`TocNode`, dropping deep children."""
    if not isinstance(token, cabc.Mapping):
        msg = f"heading entry must be a mapping, got {type(token).__name__}"
        raise TocSynthesisError(msg)
    token = typ.cast("cabc.Mapping[str, object]", token)
    anchor_id = token.get("id")
    name = token.get("name")
    children = token.get("children", [])
    if not isinstance(anchor_id, str) or not anchor_id:
        msg = f"heading {name!r} has no anchor id"
        raise TocSynthesisError(msg)
    if not isinstance(name, str):
        msg = f"heading {anchor_id!r} has no text"
        raise TocSynthesisError(msg)
    if not isinstance(children, list):
        msg = f"heading {anchor_id!r} has malformed children"
        raise TocSynthesisError(msg)

    node = TocNode(title=unescape(name), anchor_id=anchor_id)
    if max_depth is None or depth < max_depth:
        node.children = [_convert(child, depth + 1, max_depth) for child in children]
    return node


def synthesize_toc(
    headings: cabc.Sequence[object], policy: int
) -> TocNode | None:
    """Return the TOC tree for ``headings`` under the given depth policy.

    Parameters
    ----------
    headings : Sequence[object]
        Nested heading tokens with ``id``, ``name`` and ``children`` keys, as
        produced by the markdown ``toc`` extension.
    policy : int
        ``-1`` for no TOC, ``0`` for every level, ``N > 0`` to keep the top
        level plus ``N`` levels below it.

    Returns
    -------
    TocNode or None
        A root node with empty title and anchor whose children are the
        top-level headings, or ``None`` when the TOC is disabled or the
        document has no headings.

    Raises
    ------
    TocSynthesisError
        If a heading token is malformed.
    """
    if policy == TOC_DISABLED or not headings:
        return None
    max_depth = None if policy == TOC_UNLIMITED else policy
    return TocNode(
        title="",
        anchor_id="",
        children=[_convert(token, 0, max_depth) for token in headings],
    )


def _render_items(nodes: list[TocNode], *, list_id: str | None = None) -> str:
    attrs = f' id="{list_id}"' if list_id else ""
    items = []
    for node in nodes:
        link = f'<a href="#{escape(node.anchor_id)}">{escape(node.title)}</a>'
        nested = _render_items(node.children) if node.children else ""
        items.append(f"<li>{link}{nested}</li>")
    return f"<ul{attrs}>{''.join(items)}</ul>"


def render_toc(root: TocNode | None) -> str:
    """Render ``root`` as a nested ``<ul id="toc-list">`` fragment."""
    if root is None or not root.children:
        return ""
    return _render_items(root.children, list_id=TOC_LIST_ID)


def toc_sections(href: str, root: TocNode | None) -> list[SitemapNode]:
    """Mirror a TOC tree into sitemap nodes anchored below ``href``."""
    if root is None:
        return []

    def _to_node(item: TocNode) -> SitemapNode:
        return SitemapNode(
            text=item.title,
            href=f"{href}#{item.anchor_id}",
            children=[_to_node(child) for child in item.children],
        )

    return [_to_node(item) for item in root.children]


__all__ = ["TOC_LIST_ID", "TocNode", "render_toc", "synthesize_toc", "toc_sections"]

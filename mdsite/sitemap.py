"""Sitemap tree model plus the annotation and indexing passes.

The sitemap is an ordered tree supplied by the caller. Child order is the
display order and also the order used for previous/next navigation. Before
any page is generated the tree is annotated once (each node learns its
parent's resolved href) and a tag index is derived from it; afterwards the
tree is only read.

Examples
--------
>>> root = SitemapNode(text="", children=[
...     SitemapNode(text="A", href="/a", page="a.md"),
...     SitemapNode(text="B", href="/b", page="b.md", tag="guide"),
... ])
>>> annotate(root)
>>> [node.text for node in flatten_content_nodes(root)]
['A', 'B']
>>> [node.text for node in build_tag_index(root)["guide"]]
['B']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from mdsite.hrefs import resolve_href, slugify

TagIndex = dict[str, list["SitemapNode"]]


@dc.dataclass(slots=True, eq=False)
class SitemapNode:
    """A single entry of the site hierarchy.

    Attributes
    ----------
    text : str
        Label shown in navigation.
    href : str
        Explicit href; when empty the href is derived from the parent.
    page : str
        Path of the markdown source; empty for pure grouping nodes.
    tag : str
        Optional label used to build the tag index.
    hidden : bool
        Whether navigation templates should skip the node.
    data : object
        Arbitrary payload made available to templates.
    children : list[SitemapNode]
        Ordered child nodes.
    sections : list[SitemapNode]
        Heading anchors of the node's page, attached while pages are parsed.
    resolved_parent_href : str
        Href of the parent node, set by :func:`annotate`.
    """

    text: str = ""
    href: str = ""
    page: str = ""
    tag: str = ""
    hidden: bool = False
    data: typ.Any = None
    children: list[SitemapNode] = dc.field(default_factory=list)
    sections: list[SitemapNode] = dc.field(default_factory=list)
    resolved_parent_href: str = ""

    @property
    def resolved_href(self) -> str:
        """Return the effective href for this node."""
        return resolve_href(self, self.resolved_parent_href)

    @property
    def slug(self) -> str:
        """Return the slug of the node's display text."""
        return slugify(self.text)

    @property
    def has_page(self) -> bool:
        """Return ``True`` when the node points at a source document."""
        return bool(self.page)

    @property
    def visible_children(self) -> list[SitemapNode]:
        """Return the children that navigation should display."""
        return [child for child in self.children if not child.hidden]


def iter_nodes(root: SitemapNode) -> cabc.Iterator[SitemapNode]:
    """Yield ``root`` and all of its descendants in pre-order."""
    yield root
    for child in root.children:
        yield from iter_nodes(child)


def annotate(root: SitemapNode) -> None:
    """Record each node's parent href, walking the tree in pre-order.

    Only ``resolved_parent_href`` is touched. The root is treated as having an
    empty parent href, so it resolves to its own explicit href.
    """
    root.resolved_parent_href = ""
    stack = [root]
    while stack:
        node = stack.pop()
        href = node.resolved_href
        for child in node.children:
            child.resolved_parent_href = href
        stack.extend(reversed(node.children))


def build_tag_index(root: SitemapNode) -> TagIndex:
    """Map each tag to the nodes carrying it, in document order.

    Nodes are only indexed when their tag and resolved href are non-empty.
    Nodes with neither text nor explicit href share their parent's href and
    are skipped. The index holds references to the tree's own nodes.
    """
    index: TagIndex = {}
    for node in iter_nodes(root):
        if node.tag and node.resolved_href and (node.text or node.href):
            index.setdefault(node.tag, []).append(node)
    return index


def flatten_content_nodes(root: SitemapNode) -> list[SitemapNode]:
    """Return every node with a source page, in document order."""
    return [node for node in iter_nodes(root) if node.has_page]


__all__ = [
    "SitemapNode",
    "TagIndex",
    "annotate",
    "build_tag_index",
    "flatten_content_nodes",
    "iter_nodes",
]

"""Slug and href helpers shared by the sitemap and heading anchors.

A single slug rule is used everywhere so sitemap hrefs, heading ids and the
anchors listed in a page's table of contents always agree.
"""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    from mdsite.sitemap import SitemapNode

WHITESPACE_PATTERN = re.compile(r"\s+")
DROPPED_CHARS_PATTERN = re.compile(r"[.`]")


def slugify(text: str) -> str:
    """Return the canonical slug for ``text``.

    Lowercases, drops periods and backticks and joins whitespace-separated
    words with single hyphens.

    Examples
    --------
    >>> slugify("Getting Started")
    'getting-started'
    >>> slugify("Using `pages.yaml`")
    'using-pagesyaml'
    """
    cleaned = DROPPED_CHARS_PATTERN.sub("", text.strip().lower())
    return WHITESPACE_PATTERN.sub("-", cleaned)


def heading_slugify(value: str, separator: str) -> str:  # noqa: ARG001
    """Adapter matching the ``slugify`` signature of the markdown toc extension."""
    return slugify(value)


def anchor_href(title: str) -> str:
    """Return a same-page anchor href for ``title``."""
    return f"#{slugify(title)}"


def resolve_href(node: SitemapNode, parent_href: str) -> str:
    """Return the effective href of ``node`` given its parent's href.

    An explicit href always wins. Otherwise the node becomes an anchor below
    its parent; a node without any text (typically the root) inherits the
    parent href unchanged.
    """
    if node.href:
        return node.href
    if not node.text:
        return parent_href
    return f"{parent_href}#{slugify(node.text)}"


__all__ = ["anchor_href", "heading_slugify", "resolve_href", "slugify"]

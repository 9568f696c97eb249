"""Coerce loosely typed front matter into a strict :class:`PageMetadata`.

Front matter arrives as whatever the YAML loader produced: strings, booleans,
integers, lists or nothing at all. Each field has a total coercion function
that either returns a typed value or raises :class:`MetadataTypeError` naming
the field, so nothing downstream has to inspect runtime types.

Examples
--------
>>> meta = coerce_metadata({"title": "Intro", "keywords": "a b  c", "toc": 2})
>>> meta.keywords
('a', 'b', 'c')
>>> meta.toc
2
>>> coerce_metadata({"toc": True}).toc
0
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from mdsite.errors import MetadataTypeError

TOC_DISABLED = -1
TOC_UNLIMITED = 0


@dc.dataclass(frozen=True, slots=True)
class PageMetadata:
    """Typed front matter for a single document.

    Attributes
    ----------
    title : str
        Page title; empty when not supplied.
    description : str
        Short description used for meta tags.
    slug : str
        Output file name override (without ``.html``).
    keywords : tuple[str, ...]
        Ordered keywords.
    template : str
        Per-page template override; empty means the site default.
    toc : int
        TOC policy: ``-1`` disables the TOC, ``0`` keeps every heading level,
        ``N > 0`` keeps the top level plus ``N`` levels below it.
    """

    title: str = ""
    description: str = ""
    slug: str = ""
    keywords: tuple[str, ...] = ()
    template: str = ""
    toc: int = TOC_DISABLED

    @property
    def wants_toc(self) -> bool:
        """Return ``True`` when the page asked for a table of contents."""
        return self.toc != TOC_DISABLED


def _type_name(value: object) -> str:
    return type(value).__name__


def coerce_string(field: str, value: object) -> str:
    """Return ``value`` as a string, treating ``None`` as empty."""
    match value:
        case None:
            return ""
        case str():
            return value
        case _:
            detail = f"expected a string, got {_type_name(value)}"
            raise MetadataTypeError(field, detail)


def coerce_keywords(value: object) -> tuple[str, ...]:
    """Return keywords from a whitespace separated string or a list of strings."""
    match value:
        case None:
            return ()
        case str():
            return tuple(value.split())
        case list() | tuple():
            for item in value:
                if not isinstance(item, str):
                    detail = f"expected string entries, got {_type_name(item)}"
                    raise MetadataTypeError("keywords", detail)
            return tuple(value)
        case _:
            detail = f"unsupported type {_type_name(value)}"
            raise MetadataTypeError("keywords", detail)


def coerce_toc(value: object) -> int:
    """Map the ``toc`` front-matter value onto a TOC depth policy.

    ``False`` (or absence) disables the TOC, ``True`` means no depth limit and
    an integer is used as the depth, with anything below ``-1`` clamped to
    ``-1``.
    """
    match value:
        case None:
            return TOC_DISABLED
        case bool():
            return TOC_UNLIMITED if value else TOC_DISABLED
        case int():
            return max(value, TOC_DISABLED)
        case _:
            detail = f"expected bool or int, got {_type_name(value)}"
            raise MetadataTypeError("toc", detail)


def coerce_metadata(raw: typ.Mapping[str, object]) -> PageMetadata:
    """Build :class:`PageMetadata` from a raw front-matter mapping.

    Parameters
    ----------
    raw : Mapping[str, object]
        Front matter as loaded from YAML; missing keys are allowed.

    Returns
    -------
    PageMetadata
        Immutable, fully typed metadata.

    Raises
    ------
    MetadataTypeError
        If any field holds a value of an unsupported type.
    """
    return PageMetadata(
        title=coerce_string("title", raw.get("title")),
        description=coerce_string("description", raw.get("description")),
        slug=coerce_string("slug", raw.get("slug")),
        keywords=coerce_keywords(raw.get("keywords")),
        template=coerce_string("template", raw.get("template")),
        toc=coerce_toc(raw.get("toc")),
    )


__all__ = [
    "TOC_DISABLED",
    "TOC_UNLIMITED",
    "PageMetadata",
    "coerce_keywords",
    "coerce_metadata",
    "coerce_string",
    "coerce_toc",
]

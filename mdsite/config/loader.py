"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from mdsite.sitemap import SitemapNode

from .models import (
    DEFAULT_PAGE_TEMPLATE,
    DEFAULT_PYGMENTS_STYLE,
    DEFAULT_TEMPLATES_DIR,
    SiteConfig,
    SiteConfigError,
)

SITEMAP_STRING_FIELDS = ("text", "href", "page", "tag")


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the sitemap and output choices.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``site.yaml``). Relative paths inside the file resolve against the
        file's directory.

    Returns
    -------
    SiteConfig
        Parsed configuration including the sitemap tree.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the sitemap is missing or one of its nodes is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdsite.config import load_site_config
    >>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
    >>> [child.text for child in config.sitemap.children]  # doctest: +SKIP
    ['Introduction', 'Guide']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    base_dir = path.parent

    sitemap_raw = raw.get("sitemap")
    if not sitemap_raw:
        msg = "No sitemap defined in site configuration."
        raise SiteConfigError(msg)
    sitemap = _build_sitemap_node(sitemap_raw, base_dir=base_dir, location="sitemap")

    templates_dir = defaults.get("templates_dir")
    return SiteConfig(
        sitemap=sitemap,
        output_dir=_resolve_path(base_dir, defaults.get("output_dir", "public")),
        templates_dir=(
            _resolve_path(base_dir, templates_dir)
            if templates_dir
            else DEFAULT_TEMPLATES_DIR
        ),
        page_template=defaults.get("page_template", DEFAULT_PAGE_TEMPLATE),
        pygments_style=defaults.get("pygments_style", DEFAULT_PYGMENTS_STYLE),
        cache_id=str(defaults.get("cache_id", "") or ""),
    )


def _resolve_path(base_dir: Path, value: str | Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _build_sitemap_node(
    payload: object, *, base_dir: Path, location: str
) -> SitemapNode:
    """Build a SitemapNode (and its children) from a YAML mapping."""
    if not isinstance(payload, dict):
        msg = f"Sitemap entry at {location} must be a mapping."
        raise SiteConfigError(msg)

    values: dict[str, str] = {}
    for field in SITEMAP_STRING_FIELDS:
        value = payload.get(field)
        if value is None:
            values[field] = ""
        elif isinstance(value, str):
            values[field] = value
        else:
            msg = f"Sitemap entry at {location} has a non-string '{field}'."
            raise SiteConfigError(msg)

    hidden = payload.get("hidden", False)
    if not isinstance(hidden, bool):
        msg = f"Sitemap entry at {location} has a non-boolean 'hidden'."
        raise SiteConfigError(msg)

    children_raw = payload.get("children") or []
    if not isinstance(children_raw, list):
        msg = f"Sitemap entry at {location} has non-list 'children'."
        raise SiteConfigError(msg)

    page = values["page"]
    if page:
        page = str(_resolve_path(base_dir, page))

    return SitemapNode(
        text=values["text"],
        href=values["href"],
        page=page,
        tag=values["tag"],
        hidden=hidden,
        data=payload.get("data"),
        children=[
            _build_sitemap_node(
                child, base_dir=base_dir, location=f"{location}.children[{idx}]"
            )
            for idx, child in enumerate(children_raw)
        ],
    )


__all__ = ["load_site_config"]

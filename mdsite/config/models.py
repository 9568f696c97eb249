"""Typed dataclasses describing mdsite configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from mdsite.sitemap import SitemapNode

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
DEFAULT_PAGE_TEMPLATE = "page.jinja"
DEFAULT_PYGMENTS_STYLE = "monokai"


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Everything the site generator needs to build a site.

    Attributes
    ----------
    sitemap : SitemapNode
        Root of the site hierarchy.
    output_dir : Path
        Directory receiving the generated ``.html`` files.
    templates_dir : Path
        Directory scanned for Jinja templates.
    page_template : str
        Template used when a page does not override it in its front matter.
    pygments_style : str
        Pygments style for highlighted code blocks.
    cache_id : str
        Opaque string exposed to templates for cache busting asset URLs.
    """

    sitemap: SitemapNode
    output_dir: Path = Path("public")
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    page_template: str = DEFAULT_PAGE_TEMPLATE
    pygments_style: str = DEFAULT_PYGMENTS_STYLE
    cache_id: str = ""


__all__ = [
    "DEFAULT_PAGE_TEMPLATE",
    "DEFAULT_PYGMENTS_STYLE",
    "DEFAULT_TEMPLATES_DIR",
    "SiteConfig",
    "SiteConfigError",
]

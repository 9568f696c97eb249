"""Load and validate site configuration YAML for mdsite builds.

This subpackage parses a ``site.yaml`` file, applies defaults for the output
and template locations, and builds the :class:`~mdsite.sitemap.SitemapNode`
tree that drives generation. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from mdsite.config import load_site_config
>>> site = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> site.output_dir  # doctest: +SKIP
PosixPath('public')
"""

from .loader import load_site_config
from .models import (
    DEFAULT_PAGE_TEMPLATE,
    DEFAULT_PYGMENTS_STYLE,
    DEFAULT_TEMPLATES_DIR,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "DEFAULT_PAGE_TEMPLATE",
    "DEFAULT_PYGMENTS_STYLE",
    "DEFAULT_TEMPLATES_DIR",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
]

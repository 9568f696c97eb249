"""Utilities for parsing, rendering, and generating mdsite pages."""

from .document import DocumentParser
from .models import Page, RenderedDocument
from .renderer import HtmlContentRenderer
from .site_generator import SiteGenerator
from .templates import TemplateRenderer

__all__ = [
    "DocumentParser",
    "HtmlContentRenderer",
    "Page",
    "RenderedDocument",
    "SiteGenerator",
    "TemplateRenderer",
]

"""Exception taxonomy raised while building a site.

Every failure during generation aborts the whole run. The errors below carry
the offending source path (and, for metadata problems, the front-matter field)
so the top-level caller can report exactly which page broke the build.

Examples
--------
>>> err = MetadataTypeError("toc", "expected bool or int, got str")
>>> str(err)
'front-matter field (toc): expected bool or int, got str'
>>> err.source_path = "docs/intro.md"
>>> str(err)
'docs/intro.md: front-matter field (toc): expected bool or int, got str'
"""

from __future__ import annotations


class SiteBuildError(Exception):
    """Base class for errors that abort site generation."""

    def __init__(self, message: str, *, source_path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source_path = source_path

    def __str__(self) -> str:
        if self.source_path:
            return f"{self.source_path}: {self.message}"
        return self.message


class MetadataTypeError(SiteBuildError, TypeError):
    """Raised when a front-matter field holds an unsupported value type."""

    def __init__(
        self, field: str, detail: str, *, source_path: str | None = None
    ) -> None:
        super().__init__(
            f"front-matter field ({field}): {detail}", source_path=source_path
        )
        self.field = field
        self.detail = detail


class TocSynthesisError(SiteBuildError):
    """Raised when the heading structure cannot be turned into a TOC."""


class SourceReadError(SiteBuildError):
    """Raised when a source document cannot be read or decoded."""


class RenderError(SiteBuildError):
    """Raised when markdown or template rendering fails."""


class WriteError(SiteBuildError):
    """Raised when a generated page cannot be written."""


__all__ = [
    "MetadataTypeError",
    "RenderError",
    "SiteBuildError",
    "SourceReadError",
    "TocSynthesisError",
    "WriteError",
]

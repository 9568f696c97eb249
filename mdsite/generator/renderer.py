"""Utilities for rendering markdown documents and syntax-highlighted code."""

from __future__ import annotations

import re
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from mdsite.generator.front_matter import (
    DocumentHook,
    DocumentHookExtension,
    FrontMatterExtension,
)
from mdsite.hrefs import heading_slugify

CODE_BLOCK_PATTERN = re.compile(
    r"^(`{3,}|~{3,})([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)^\1", re.DOTALL | re.MULTILINE
)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class HtmlContentRenderer:
    """Render markdown documents with a consistent set of extensions."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer using the given Pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str, hook: DocumentHook | None = None) -> str:
        """Render markdown into HTML, optionally inspecting the parsed tree.

        Parameters
        ----------
        text : str
            Markdown source, optionally starting with a YAML front-matter block.
        hook : DocumentHook, optional
            Callback invoked with the front matter, the nested heading tokens
            and the element tree once parsing is complete and before the tree
            is serialized. Exceptions raised by the hook propagate.

        Returns
        -------
        str
            Rendered HTML with ``data-language`` attributes on highlighted code
            blocks. Whitespace-only input renders to an empty string without
            calling the hook.
        """
        normalized = self._normalize_fenced_blocks(text)
        extensions: list[object] = [
            FrontMatterExtension(),
            "fenced_code",
            "codehilite",
            "tables",
            "footnotes",
            "sane_lists",
            "attr_list",
            "toc",
        ]
        if hook is not None:
            extensions.append(DocumentHookExtension(hook))
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": True,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "toc": {"slugify": heading_slugify},
            },
        )
        html = md.convert(normalized)
        return self._annotate_codehilite(html, normalized)

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(2) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]

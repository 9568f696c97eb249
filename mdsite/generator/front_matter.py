"""Markdown extensions that expose front matter and the parsed heading tree."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdsite.errors import MetadataTypeError, RenderError

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

FRONT_MATTER_DELIMITER = "---"
FRONT_MATTER_TERMINATORS = ("---", "...")

DocumentHook = cabc.Callable[
    [cabc.Mapping[str, object], list[dict[str, typ.Any]], Element], None
]


def split_front_matter(lines: list[str]) -> tuple[str | None, list[str]]:
    """Return the raw front-matter block (if any) and the remaining lines."""
    if not lines or lines[0].lstrip("\ufeff").strip() != FRONT_MATTER_DELIMITER:
        return None, lines
    for idx in range(1, len(lines)):
        if lines[idx].strip() in FRONT_MATTER_TERMINATORS:
            return "\n".join(lines[1:idx]), lines[idx + 1 :]
    return None, lines


def load_front_matter(block: str) -> dict[str, object]:
    """Parse a YAML front-matter block into a mapping."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(block)
    except YAMLError as exc:
        msg = f"invalid front matter: {exc}"
        raise RenderError(msg) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        detail = f"expected a mapping, got {type(loaded).__name__}"
        raise MetadataTypeError("front matter", detail)
    return dict(loaded)


class FrontMatterExtension(Extension):
    """Strip a leading YAML block and store it on ``md.front_matter``."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the front-matter preprocessor on the Markdown instance."""
        md.registerExtension(self)
        self.md = md
        self.reset()
        # Runs after whitespace normalisation (priority 30) so line endings
        # are already unified.
        md.preprocessors.register(FrontMatterPreprocessor(md), "front_matter", 29)

    def reset(self) -> None:
        """Clear front matter left over from a previous conversion."""
        self.md.front_matter = {}  # type: ignore[attr-defined]


class FrontMatterPreprocessor(Preprocessor):
    """Remove the front-matter block from the source lines."""

    def run(self, lines: list[str]) -> list[str]:
        """Parse and strip the front matter, returning the body lines."""
        block, body = split_front_matter(lines)
        if block is not None:
            self.md.front_matter = load_front_matter(block)  # type: ignore[attr-defined]
        return body


class DocumentHookExtension(Extension):
    """Invoke a callback with front matter and headings before serialization.

    The callback receives the front-matter mapping, the nested heading tokens
    recorded by the ``toc`` extension and the document tree, which it may
    modify in place before the HTML is produced.
    """

    def __init__(self, hook: DocumentHook) -> None:
        super().__init__()
        self.hook = hook

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the hook treeprocessor right after the toc treeprocessor."""
        processor = DocumentHookTreeprocessor(md, self.hook)
        md.treeprocessors.register(processor, "mdsite_document_hook", 4)


class DocumentHookTreeprocessor(Treeprocessor):
    """Hand the parsed document to a :data:`DocumentHook`."""

    def __init__(self, md: Markdown, hook: DocumentHook) -> None:
        super().__init__(md)
        self.hook = hook

    def run(self, root: Element) -> Element:
        """Call the hook with the collected front matter and heading tokens."""
        front_matter = getattr(self.md, "front_matter", {})
        headings = list(getattr(self.md, "toc_tokens", []))
        self.hook(front_matter, headings, root)
        return root


__all__ = [
    "DocumentHook",
    "DocumentHookExtension",
    "DocumentHookTreeprocessor",
    "FrontMatterExtension",
    "FrontMatterPreprocessor",
    "load_front_matter",
    "split_front_matter",
]

"""Tests for the markdown engine and the errors it surfaces while parsing."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup
from pygments.util import ClassNotFound

from mdsite.errors import RenderError
from mdsite.generator import DocumentParser, HtmlContentRenderer

MIXED_FENCES = (
    "~~~python\nprint('hi')\n~~~\n\n"
    "```js\nconsole.log('hi');\n```\n\n"
    "~~~~\nplain ``` text\n~~~~\n"
)


@pytest.fixture
def renderer() -> HtmlContentRenderer:
    """Return a renderer with the default Pygments style."""
    return HtmlContentRenderer()


def test_language_labels_follow_both_fence_styles(
    renderer: HtmlContentRenderer,
) -> None:
    """Tilde and backtick fences are labelled in document order."""
    soup = BeautifulSoup(renderer.markdown(MIXED_FENCES), "html.parser")
    blocks = soup.select("div.codehilite")
    assert [block["data-language"] for block in blocks] == ["python", "js", "text"]


def test_fence_extras_are_dropped(renderer: HtmlContentRenderer) -> None:
    """Comma-separated fence options do not leak into the language label."""
    html = renderer.markdown("```rust,ignore\nfn main() {}\n```\n")
    block = BeautifulSoup(html, "html.parser").select_one("div.codehilite")
    assert block is not None
    assert block["data-language"] == "rust"


def test_missing_pygments_class_is_render_error(
    renderer: HtmlContentRenderer, mocker: typ.Any
) -> None:
    """A Pygments lookup failure while parsing surfaces as RenderError."""
    mocker.patch.object(renderer, "markdown", side_effect=ClassNotFound("no style"))
    with pytest.raises(RenderError, match="no style"):
        DocumentParser(renderer).parse("# Title\n")


def test_unexpected_errors_propagate(
    renderer: HtmlContentRenderer, mocker: typ.Any
) -> None:
    """Only the expected engine failures are rewrapped."""
    mocker.patch.object(renderer, "markdown", side_effect=RuntimeError("boom"))
    with pytest.raises(RuntimeError, match="boom"):
        DocumentParser(renderer).parse("# Title\n")

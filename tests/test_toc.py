"""Tests for table-of-contents synthesis and rendering.

The unit tests feed heading tokens shaped like the markdown ``toc``
extension's output straight into :func:`mdsite.toc.synthesize_toc`; the
document tests run real markdown through :class:`DocumentParser` so the TOC
anchors are checked against the rendered heading ids.
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from mdsite.errors import TocSynthesisError
from mdsite.generator import DocumentParser, HtmlContentRenderer
from mdsite.toc import TocNode, render_toc, synthesize_toc, toc_sections

DEPTH_DOCUMENT = "# Intro\n\nWelcome.\n\n## Setup\n\nSteps.\n\n### Advanced\n\nMore.\n"


def _heading(
    anchor: str, name: str, *children: dict[str, typ.Any], level: int = 1
) -> dict[str, typ.Any]:
    return {"level": level, "id": anchor, "name": name, "children": list(children)}


@pytest.fixture
def headings() -> list[dict[str, typ.Any]]:
    """Return an ``Intro > Setup > Advanced`` heading chain plus a sibling."""
    return [
        _heading(
            "intro",
            "Intro",
            _heading("setup", "Setup", _heading("advanced", "Advanced", level=3), level=2),
        ),
        _heading("faq", "FAQ"),
    ]


@pytest.fixture
def parser() -> DocumentParser:
    """Return a document parser backed by the default renderer."""
    return DocumentParser(HtmlContentRenderer())


def _titles(root: TocNode | None) -> list[str]:
    assert root is not None, "expected a TOC tree"
    return [node.title for node in root.walk()]


def test_disabled_policy_yields_nothing(headings: list[dict[str, typ.Any]]) -> None:
    """Policy -1 produces no TOC at all."""
    assert synthesize_toc(headings, -1) is None


def test_unlimited_policy_keeps_every_level(
    headings: list[dict[str, typ.Any]],
) -> None:
    """Policy 0 keeps the full heading tree."""
    assert _titles(synthesize_toc(headings, 0)) == ["Intro", "Setup", "Advanced", "FAQ"]


def test_depth_policy_truncates_below_limit(
    headings: list[dict[str, typ.Any]],
) -> None:
    """Policy N keeps the top level plus N levels below it."""
    assert _titles(synthesize_toc(headings, 1)) == ["Intro", "Setup", "FAQ"]
    assert _titles(synthesize_toc(headings, 2)) == ["Intro", "Setup", "Advanced", "FAQ"]


def test_no_headings_is_absent() -> None:
    """A document without headings has no TOC, even when one was requested."""
    assert synthesize_toc([], 0) is None


def test_malformed_heading_raises() -> None:
    """Headings without an id cannot be linked and abort synthesis."""
    with pytest.raises(TocSynthesisError):
        synthesize_toc([{"name": "Intro", "children": []}], 0)


def test_render_toc_nests_lists(headings: list[dict[str, typ.Any]]) -> None:
    """The fragment is a nested list rooted at ``#toc-list``."""
    soup = BeautifulSoup(render_toc(synthesize_toc(headings, 0)), "html.parser")
    root_list = soup.select_one("ul#toc-list")
    assert root_list is not None
    items = root_list.find_all("li", recursive=False)
    assert [item.a["href"] for item in items] == ["#intro", "#faq"]
    assert items[0].select_one("ul li a")["href"] == "#setup"


def test_render_toc_escapes_titles() -> None:
    """Heading text is escaped inside the fragment."""
    root = TocNode(title="", anchor_id="", children=[TocNode("<b>x</b>", "x")])
    assert "&lt;b&gt;x&lt;/b&gt;" in render_toc(root)


def test_render_toc_of_nothing_is_empty() -> None:
    """No TOC renders to an empty string."""
    assert render_toc(None) == ""


def test_toc_sections_anchor_below_page_href(
    headings: list[dict[str, typ.Any]],
) -> None:
    """TOC entries become sitemap nodes linking into the page."""
    sections = toc_sections("/guide.html", synthesize_toc(headings, 0))
    assert [node.href for node in sections] == ["/guide.html#intro", "/guide.html#faq"]
    assert sections[0].children[0].href == "/guide.html#setup"
    assert sections[0].children[0].text == "Setup"


@pytest.mark.parametrize(
    ("toc_value", "expected"),
    [
        ("1", ["Intro", "Setup"]),
        ("true", ["Intro", "Setup", "Advanced"]),
        ("0", ["Intro", "Setup", "Advanced"]),
    ],
)
def test_document_toc_depth(
    parser: DocumentParser, toc_value: str, expected: list[str]
) -> None:
    """Front matter ``toc`` controls which headings reach the TOC fragment."""
    document = parser.parse(f"---\ntoc: {toc_value}\n---\n{DEPTH_DOCUMENT}")
    soup = BeautifulSoup(str(document.toc_html), "html.parser")
    assert [a.get_text() for a in soup.select("#toc-list a")] == expected


@pytest.mark.parametrize("toc_value", ["false", "-1"])
def test_document_toc_disabled(parser: DocumentParser, toc_value: str) -> None:
    """Disabling the TOC produces no fragment and no tree."""
    document = parser.parse(f"---\ntoc: {toc_value}\n---\n{DEPTH_DOCUMENT}")
    assert document.toc is None
    assert str(document.toc_html) == ""


def test_document_toc_links_match_heading_ids(parser: DocumentParser) -> None:
    """Every TOC link targets a heading id present in the body."""
    document = parser.parse(f"---\ntoc: true\n---\n{DEPTH_DOCUMENT}")
    body = BeautifulSoup(str(document.html), "html.parser")
    toc = BeautifulSoup(str(document.toc_html), "html.parser")
    heading_ids = {tag["id"] for tag in body.select("h1, h2, h3")}
    targets = {a["href"].lstrip("#") for a in toc.select("a")}
    assert targets == heading_ids == {"intro", "setup", "advanced"}


def test_document_headings_get_permalink_anchors(parser: DocumentParser) -> None:
    """Headings carry a trailing permalink anchor."""
    document = parser.parse(DEPTH_DOCUMENT)
    body = BeautifulSoup(str(document.html), "html.parser")
    anchor = body.select_one("h2#setup a.anchor")
    assert anchor is not None
    assert anchor["href"] == "#setup"


def test_document_front_matter_is_stripped(parser: DocumentParser) -> None:
    """Front matter never leaks into the rendered body."""
    document = parser.parse("---\ntitle: Hello\n---\nBody text.\n")
    assert document.metadata.title == "Hello"
    assert "title:" not in str(document.html)
    assert "Body text." in str(document.html)

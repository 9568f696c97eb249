"""Behaviour tests for previous/next navigation across generated pages.

These pytest-bdd scenarios build a two-page sitemap, run ``SiteGenerator``
with the packaged templates and inspect the written HTML with BeautifulSoup.
The feature file ``site_navigation.feature`` drives the scenario.

Usage
-----
Run ``pytest tests/bdd/test_site_navigation.py -v`` after installing the
test extras (``pip install -e .[test]``).
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from mdsite.config import SiteConfig
from mdsite.generator import SiteGenerator
from mdsite.sitemap import SitemapNode

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_navigation.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _soup(scenario_state: dict[str, object], name: str) -> BeautifulSoup:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    html = (output_dir / name).read_text(encoding="utf-8")
    return BeautifulSoup(html, "html.parser")


@given(
    parsers.parse(
        'a sitemap with pages "{first}" and "{second}" where "{tagged}" is tagged "{tag}"'
    )
)
def given_sitemap(
    tmp_path: Path,
    scenario_state: dict[str, object],
    first: str,
    second: str,
    tagged: str,
    tag: str,
) -> None:
    """Write two markdown pages and a sitemap pointing at them."""
    children = []
    for name in (first, second):
        stem = Path(name).stem
        source = tmp_path / name
        source.write_text(f"---\ntitle: Page {stem}\n---\n# {stem}\n", encoding="utf-8")
        children.append(
            SitemapNode(
                text=stem.upper(),
                href=f"/{stem}",
                page=str(source),
                tag=tag if name == tagged else "",
            )
        )
    scenario_state["config"] = SiteConfig(
        sitemap=SitemapNode(children=children), output_dir=tmp_path / "public"
    )
    scenario_state["output_dir"] = tmp_path / "public"


@when("I generate the site")
def when_generate(scenario_state: dict[str, object]) -> None:
    """Run the generator and keep the page contexts for later steps."""
    config = typ.cast("SiteConfig", scenario_state["config"])
    generator = SiteGenerator(config)
    scenario_state["written"] = generator.run()
    scenario_state["pages"] = [page for page, _name in generator.build_pages()]


@then(parsers.parse('the output directory contains "{first}" and "{second}"'))
def then_files_written(
    scenario_state: dict[str, object], first: str, second: str
) -> None:
    """Both pages were written to the output directory."""
    written = typ.cast("list[Path]", scenario_state["written"])
    assert [path.name for path in written] == [first, second]


@then(parsers.parse('"{name}" links to "{href}" as next and has no previous link'))
def then_next_only(scenario_state: dict[str, object], name: str, href: str) -> None:
    """The first page only links forward."""
    soup = _soup(scenario_state, name)
    assert soup.select_one("a.pager-prev") is None
    assert soup.select_one("a.pager-next")["href"] == href


@then(parsers.parse('"{name}" links to "{href}" as previous and has no next link'))
def then_previous_only(scenario_state: dict[str, object], name: str, href: str) -> None:
    """The last page only links backward."""
    soup = _soup(scenario_state, name)
    assert soup.select_one("a.pager-next") is None
    assert soup.select_one("a.pager-prev")["href"] == href


@then(parsers.parse('the tag "{tag}" lists only the "{text}" page'))
def then_tag_index(scenario_state: dict[str, object], tag: str, text: str) -> None:
    """The tag index holds the tagged node and nothing else."""
    pages = typ.cast("list[typ.Any]", scenario_state["pages"])
    tag_index = pages[0].tag_index
    assert list(tag_index) == [tag]
    assert [node.text for node in tag_index[tag]] == [text]

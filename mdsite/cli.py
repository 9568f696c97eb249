"""Cyclopts CLI entrypoint for generating a static site from markdown.

The ``mdsite`` console script defined here loads a ``site.yaml``
configuration, renders every markdown document referenced by its sitemap and
writes one HTML file per page. ``mdsite check`` parses everything without
writing, which is handy in CI.

Examples
--------
Generate the site described by the default configuration:

>>> from mdsite.cli import main
>>> main()  # doctest: +SKIP

Render into a custom directory with verbose logging:

>>> from mdsite.cli import app
>>> app(["generate", "--output-dir", "dist", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .errors import SiteBuildError
from .generator import SiteGenerator

DEFAULT_CONFIG = Path("site.yaml")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="mdsite", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr at INFO, or DEBUG when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _fail(error: SiteBuildError) -> typ.NoReturn:
    print(f"error: {error}", file=sys.stderr)
    raise SystemExit(1)


@app.command(help="Generate static HTML pages from the configured sitemap.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug diagnostics", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate every page described by the site configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override for the output directory declared in the configuration.
    verbose : bool, optional
        Emit debug-level log messages, such as pages that requested a table
        of contents but contain no headings.

    Returns
    -------
    None
        Writes rendered pages and prints their paths.

    Raises
    ------
    SystemExit
        With status 1 when any page fails to generate.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config)
    generator = SiteGenerator(site_config, output_dir=output_dir)
    try:
        written = generator.run()
    except SiteBuildError as exc:
        _fail(exc)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Parse every page without writing output.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug diagnostics", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Validate front matter and headings of every page in the sitemap.

    Prints the href and output file each page would be written to.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config)
    generator = SiteGenerator(site_config)
    try:
        bundle = generator.build_pages()
    except SiteBuildError as exc:
        _fail(exc)
    for page, name in bundle:
        print(f"{page.source_path} -> {name}.html ({page.href})")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``mdsite`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

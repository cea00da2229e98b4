"""Cyclopts CLI entrypoint for rendering dashboard content collections.

The ``cms`` console script renders a single document through the same
pipeline the dashboard uses, and prints a collection's navigation tree or a
document's table of contents. It is handy for checking content changes
before they ship.

Examples
--------
Render the docs landing page to stdout:

>>> from dashboard_cms.cli import app
>>> app(["render", "Docs"])  # doctest: +SKIP

Write a rendered page to disk:

>>> app(["render", "Docs", "install/", "--output", "install.html"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .collection import Collection
from .config import CmsConfig, CmsConfigError, load_cms_config
from .errors import CmsError, UnknownCollectionError
from .layout import LayoutContext, PageLayout

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .navigation import NavLink

DEFAULT_CONFIG = Path("config/cms.yaml")
COMMAND_ERRORS = (
    CmsError,
    CmsConfigError,
    UnknownCollectionError,
    FileNotFoundError,
    YAMLError,
)

app = App(name="cms", config=cyclopts.config.Env("CMS_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to the CMS config", env_var="CMS_CONFIG")
]
ContentRootOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the content root directory", env_var="CMS_CONTENT_ROOT"),
]
VerboseOption = typ.Annotated[bool, Parameter(help="Log progress to stderr")]


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr; INFO when verbose, WARNING otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _resolve_config(config: Path, content_root: Path | None) -> CmsConfig:
    """Load ``config`` or, when it is absent, build one from ``content_root``."""
    if config.exists():
        return load_cms_config(config, content_root=content_root)
    if content_root is None:
        msg = f"Configuration file '{config}' not found and no content root given."
        raise FileNotFoundError(msg)
    return CmsConfig(content_root=content_root)


def _load_collection(cms_config: CmsConfig, name: str) -> Collection:
    """Load the configured collection matching ``name`` (case-insensitive)."""
    for configured in cms_config.collections:
        if configured.lower() == name.lower():
            return Collection.load(configured, cms_config.content_root)
    raise UnknownCollectionError(name)


def _format_nav(links: cabc.Sequence[NavLink], depth: int = 0) -> list[str]:
    lines: list[str] = []
    for link in links:
        target = "(group)" if link.is_group else link.href
        lines.append(f"{'  ' * depth}- {link.title} {target}")
        lines.extend(_format_nav(link.children, depth + 1))
    return lines


@app.command(help="Render one document as a full HTML page.")
def render(
    collection: str,
    path: str = "",
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_root: ContentRootOption = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the page here instead of stdout")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """Render ``path`` from ``collection`` through the page layout.

    Parameters
    ----------
    collection : str
        Collection name, e.g. ``Docs``.
    path : str, optional
        Request path inside the collection; ``""`` renders the README.
    config : Path, optional
        CMS configuration file (overridable via ``CMS_CONFIG``).
    content_root : Path or None, optional
        Content root override (``CMS_CONTENT_ROOT``).
    output : Path or None, optional
        File to write; the page is printed when ``None``.
    verbose : bool, optional
        Log progress to stderr.

    Raises
    ------
    SystemExit
        When the collection or document cannot be loaded or rendered.
    """
    _configure_logging(verbose)
    try:
        cms_config = _resolve_config(config, content_root)
        page = _load_collection(cms_config, collection).get_content(path)
    except COMMAND_ERRORS as exc:
        raise SystemExit(f"error: {exc}") from exc

    layout = PageLayout(cms_config.templates_dir)
    html = layout.render(
        LayoutContext.from_page(page, footer_text=cms_config.footer_text)
    )
    if output is None:
        print(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    print(f"wrote {output}")


@app.command(help="Print a collection's navigation tree.")
def nav(
    collection: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the navigation index of ``collection``, one entry per line."""
    _configure_logging(verbose)
    try:
        loaded = _load_collection(_resolve_config(config, content_root), collection)
    except COMMAND_ERRORS as exc:
        raise SystemExit(f"error: {exc}") from exc
    for line in _format_nav(loaded.navigation_index):
        print(line)


@app.command(help="Print the table of contents of one document.")
def toc(
    collection: str,
    path: str = "",
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_root: ContentRootOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print every heading of ``path`` with its anchor id."""
    _configure_logging(verbose)
    try:
        cms_config = _resolve_config(config, content_root)
        page = _load_collection(cms_config, collection).get_content(path)
    except COMMAND_ERRORS as exc:
        raise SystemExit(f"error: {exc}") from exc
    for link in page.toc:
        print(f"{'  ' * (link.level - 1)}{link.text} {link.href}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``cms`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

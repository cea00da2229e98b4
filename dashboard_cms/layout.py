"""Hand rendered pages to the page layout.

:class:`LayoutContext` is the contract between the content core and whatever
draws the page chrome. :class:`PageLayout` is the default implementation used
by the CLI: a Jinja template wrapping the article with navigation and a
table of contents. The optional ``user`` value is passed through untouched.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    from .collection import RenderedPage
    from .navigation import NavLink
    from .renderer import TocLink


@dc.dataclass(frozen=True, slots=True)
class LayoutContext:
    """Values the page layout renders around an article body."""

    title: str
    html_body: str
    collection_name: str
    navigation_index: tuple[NavLink, ...]
    toc_links: tuple[TocLink, ...]
    footer_text: str = ""
    image: str | None = None
    description: str | None = None
    user: object | None = None

    @classmethod
    def from_page(
        cls, page: RenderedPage, *, footer_text: str = "", user: object | None = None
    ) -> LayoutContext:
        """Build a layout context from a rendered page."""
        return cls(
            title=page.title,
            html_body=page.html,
            collection_name=page.collection_name,
            navigation_index=page.navigation,
            toc_links=page.toc,
            footer_text=footer_text,
            image=page.meta.image,
            description=page.meta.description,
            user=user,
        )


class PageLayout:
    """Render a :class:`LayoutContext` into a complete HTML document."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        """Initialize the layout.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``page.jinja``. Defaults to the package
            templates directory when ``None``.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")

    def render(self, context: LayoutContext) -> str:
        """Return the full HTML page for ``context``."""
        return self.template.render(page=context)


__all__ = ["LayoutContext", "PageLayout"]

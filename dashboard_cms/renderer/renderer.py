"""Render Gitbook markdown bodies into HTML plus title and TOC."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markdown import Markdown

from .extension import DashboardMarkdownExtension
from .highlight import SyntaxHighlighter

if typ.TYPE_CHECKING:
    from .headings import OutlineTreeprocessor, TocLink

BASE_EXTENSIONS = ("tables", "sane_lists")


@dc.dataclass(frozen=True, slots=True)
class RenderedMarkdown:
    """HTML and outline produced from one markdown body.

    Attributes
    ----------
    html : str
        Rendered HTML fragment.
    title : str | None
        Text of the first top-level heading, or None when there is none.
    toc : list[TocLink]
        Every heading in document order with its anchor id.
    """

    html: str
    title: str | None
    toc: list[TocLink]


class MarkdownRenderer:
    """Render markdown with tables, directives, and syntax highlighting.

    The renderer itself holds no per-document state: every call builds a new
    ``Markdown`` instance, so one renderer can be shared between threads.
    """

    def __init__(self, highlighter: SyntaxHighlighter | None = None) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        highlighter : SyntaxHighlighter, optional
            Highlighter used for fenced code; a default one is created when
            ``None``.
        """
        self.highlighter = highlighter or SyntaxHighlighter()

    def render(self, text: str) -> RenderedMarkdown:
        """Render ``text`` and return its HTML, title, and TOC."""
        md = self._build()
        html = md.convert(text)
        outline = typ.cast("OutlineTreeprocessor", md.treeprocessors["cms_outline"])
        return RenderedMarkdown(html=html, title=outline.title, toc=list(outline.toc))

    def _build(self) -> Markdown:
        return Markdown(
            extensions=[*BASE_EXTENSIONS, DashboardMarkdownExtension(self.highlighter)],
            output_format="html",
        )


__all__ = ["BASE_EXTENSIONS", "MarkdownRenderer", "RenderedMarkdown"]

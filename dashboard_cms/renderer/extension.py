"""Python-Markdown extension bundling the dashboard's grammar and transforms.

Processing order within one ``Markdown.convert`` call:

1. ``cms_fences`` highlights fenced code and stashes it (preprocessor, 25).
2. ``cms_gitbook`` rewrites Gitbook hints/tabs into directive syntax (22).
3. ``cms_admonition`` and ``cms_tabs`` expand directives during block parsing.
4. ``cms_bare_urls`` links plain URLs once inline parsing is done (treeprocessor, 19).
5. ``cms_tables`` wraps tables before prettifying (15).
6. ``cms_outline`` assigns heading ids and records title and TOC (5).
"""

from __future__ import annotations

import typing as typ

from markdown.extensions import Extension

from .directives import AdmonitionProcessor, GitbookDirectivePreprocessor, TabsProcessor
from .fences import CodeFencePreprocessor
from .headings import OutlineTreeprocessor
from .highlight import SyntaxHighlighter
from .inline import BareUrlTreeprocessor, strikethrough_processor
from .tables import TableWrapTreeprocessor

if typ.TYPE_CHECKING:
    from markdown import Markdown


class DashboardMarkdownExtension(Extension):
    """Register the dashboard's custom processors on a Markdown instance."""

    def __init__(self, highlighter: SyntaxHighlighter | None = None) -> None:
        super().__init__()
        self.highlighter = highlighter or SyntaxHighlighter()

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register preprocessors, block processors, and treeprocessors."""
        md.preprocessors.register(
            CodeFencePreprocessor(md, self.highlighter), "cms_fences", 25
        )
        md.preprocessors.register(GitbookDirectivePreprocessor(md), "cms_gitbook", 22)
        md.parser.blockprocessors.register(
            AdmonitionProcessor(md.parser), "cms_admonition", 105
        )
        md.parser.blockprocessors.register(TabsProcessor(md.parser), "cms_tabs", 104)
        md.inlinePatterns.register(strikethrough_processor(), "cms_strikethrough", 65)
        md.treeprocessors.register(BareUrlTreeprocessor(md), "cms_bare_urls", 19)
        md.treeprocessors.register(TableWrapTreeprocessor(md), "cms_tables", 15)
        md.treeprocessors.register(OutlineTreeprocessor(md), "cms_outline", 5)


__all__ = ["DashboardMarkdownExtension"]

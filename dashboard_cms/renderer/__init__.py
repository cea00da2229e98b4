"""Markdown rendering pipeline for dashboard content pages."""

from .extension import DashboardMarkdownExtension
from .headings import TocLink, slugify_heading
from .highlight import SyntaxHighlighter
from .renderer import MarkdownRenderer, RenderedMarkdown

__all__ = [
    "DashboardMarkdownExtension",
    "MarkdownRenderer",
    "RenderedMarkdown",
    "SyntaxHighlighter",
    "TocLink",
    "slugify_heading",
]

"""Render Gitbook content collections for the dashboard.

The package turns Gitbook-style markdown trees (docs, blog, careers) into
HTML article bodies, page titles, tables of contents, and a per-collection
navigation index built from ``SUMMARY.md``.

Exports
-------
- ``Collection`` / ``ContentLibrary``: load collections and serve content.
- ``MarkdownRenderer``: the markdown pipeline on its own.
- ``app`` / ``main``: the ``cms`` command-line interface.

Examples
--------
>>> from dashboard_cms import MarkdownRenderer
>>> MarkdownRenderer().render("# Hello").title
'Hello'
"""

from __future__ import annotations

from .cli import app, main
from .collection import Collection, ContentLibrary, RenderedPage
from .renderer import MarkdownRenderer

__all__ = [
    "Collection",
    "ContentLibrary",
    "MarkdownRenderer",
    "RenderedPage",
    "app",
    "main",
]

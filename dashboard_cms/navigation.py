r"""Build a collection's navigation tree from its Gitbook ``SUMMARY.md``.

The summary is a nested markdown list of links. Each linked item becomes a
:class:`NavLink` whose href is rooted under ``/<collection>``; items with
nested lists but no link become group headers with an empty href. A bad
entry is logged and skipped, and its children are promoted to the parent
level, so one broken line never removes a whole section of navigation.

Example
-------
>>> links = build_navigation_index("* [Install](install/README.md)\n", "Docs")
>>> links[0].href
'/docs/install/'
"""

from __future__ import annotations

import dataclasses as dc
import html
import logging
import posixpath
import re
import typing as typ
import xml.etree.ElementTree as etree
from urllib.parse import urlsplit

from markdown import Markdown
from markdown.extensions.toc import render_inner_html, strip_tags
from markdown.treeprocessors import Treeprocessor

from ._constants import CONTENT_EXTENSION, INDEX_DOCUMENT
from .errors import SummaryNotFoundError, SummaryParseError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

LIST_TAGS = frozenset({"ul", "ol"})
NESTED_ITEM_PATTERN = re.compile(r"^( +)(?:[*+-]|\d+\.)[ ]", re.MULTILINE)


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """One entry in a collection's navigation tree.

    Attributes
    ----------
    title : str
        Link label shown in the sidebar.
    href : str
        Absolute path under ``/<collection>``; empty for group headers.
    children : tuple[NavLink, ...]
        Nested entries in summary order.
    active : bool
        True when this entry points at the page being rendered.
    open : bool
        True when this entry or one of its descendants is active.
    """

    title: str
    href: str = ""
    children: tuple[NavLink, ...] = ()
    active: bool = False
    open: bool = False

    @property
    def is_group(self) -> bool:
        """Return True for unlinked headers that only group their children."""
        return not self.href

    def with_state(self, url: str) -> NavLink:
        """Return a copy marked ``active``/``open`` relative to ``url``."""
        children = tuple(child.with_state(url) for child in self.children)
        active = bool(self.href) and _same_page(self.href, url)
        expanded = active or any(child.open for child in children)
        return dc.replace(self, children=children, active=active, open=expanded)


def mark_active(index: cabc.Sequence[NavLink], url: str) -> list[NavLink]:
    """Return a per-request copy of ``index`` with the current page highlighted."""
    return [link.with_state(url) for link in index]


def _same_page(href: str, url: str) -> bool:
    def _normalize(value: str) -> str:
        return urlsplit(value).path.rstrip("/")

    return _normalize(href) == _normalize(url)


def resolve_summary_href(href: str | None, root_url: str) -> str | None:
    """Return ``href`` rewritten under ``root_url`` or None when not local.

    ``.md`` suffixes are dropped and ``README`` maps to its directory, so
    ``install/README.md`` becomes ``<root>/install/``. Parent references
    cannot climb above ``root_url``.

    >>> resolve_summary_href("guides/../api.md#auth", "/docs")
    '/docs/api#auth'
    """
    if not href:
        return None
    parsed = urlsplit(href)
    if parsed.scheme or parsed.netloc:
        return None
    path = parsed.path
    if not path and not parsed.fragment:
        return None
    if path.endswith(CONTENT_EXTENSION):
        path = path[: -len(CONTENT_EXTENSION)]
    if path == INDEX_DOCUMENT or path.endswith(f"/{INDEX_DOCUMENT}"):
        path = path[: -len(INDEX_DOCUMENT)]
    directory = path == "" or path.endswith("/")
    normalized = posixpath.normpath(posixpath.join("/", path))
    url = root_url.rstrip("/") + normalized
    if directory and not url.endswith("/"):
        url = f"{url}/"
    if parsed.query:
        url = f"{url}?{parsed.query}"
    if parsed.fragment:
        url = f"{url}#{parsed.fragment}"
    return url


class _SummaryTreeprocessor(Treeprocessor):
    """Keep a reference to the parsed summary tree."""

    def __init__(self, md: Markdown) -> None:
        super().__init__(md)
        self.root: etree.Element | None = None

    def run(self, root: etree.Element) -> None:
        """Record ``root``; later treeprocessors still finish unescaping it."""
        self.root = root

    def text(self, element: etree.Element, *, skip_lists: bool = False) -> str:
        """Return the plain text of ``element``, optionally ignoring nested lists."""
        if skip_lists:
            trimmed = etree.Element(element.tag)
            trimmed.text = element.text
            trimmed.extend(child for child in element if child.tag not in LIST_TAGS)
            element = trimmed
        text = html.unescape(strip_tags(render_inner_html(element, self.md)))
        return " ".join(text.split())


def _indent_unit(summary: str) -> int:
    """Return the indentation width used for nesting in ``summary``.

    Gitbook writes summaries with two-space nesting while hand-written ones
    often use four; Python-Markdown needs to know which.
    """
    widths = [len(match.group(1)) for match in NESTED_ITEM_PATTERN.finditer(summary)]
    return min(widths, default=4)


def _find_anchor(item: etree.Element) -> etree.Element | None:
    """Return the first link in ``item`` outside its nested lists."""
    for child in item:
        if child.tag in LIST_TAGS:
            continue
        anchor = next(child.iter("a"), None)
        if anchor is not None:
            return anchor
    return None


class NavigationIndexBuilder:
    """Convert a parsed summary tree into :class:`NavLink` entries."""

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name
        self.root_url = f"/{collection_name.lower()}"

    def build(self, summary: str) -> list[NavLink]:
        """Return the navigation index for ``summary`` markdown.

        Raises
        ------
        SummaryParseError
            If the summary contains no list at its top level.
        """
        md = Markdown(extensions=["sane_lists"], tab_length=_indent_unit(summary))
        capture = _SummaryTreeprocessor(md)
        md.treeprocessors.register(capture, "cms_summary", 1)
        md.convert(summary)
        root = capture.root
        lists = [] if root is None else [el for el in root if el.tag in LIST_TAGS]
        if not lists:
            msg = f"Summary for collection '{self.collection_name}' contains no links."
            raise SummaryParseError(msg)
        links: list[NavLink] = []
        for element in lists:
            links.extend(self._walk_list(element, capture))
        return links

    def _walk_list(
        self, element: etree.Element, capture: _SummaryTreeprocessor
    ) -> list[NavLink]:
        links: list[NavLink] = []
        for item in element.findall("li"):
            links.extend(self._convert_item(item, capture))
        return links

    def _convert_item(
        self, item: etree.Element, capture: _SummaryTreeprocessor
    ) -> list[NavLink]:
        children: list[NavLink] = []
        for child in item:
            if child.tag in LIST_TAGS:
                children.extend(self._walk_list(child, capture))

        anchor = _find_anchor(item)
        if anchor is None:
            title = capture.text(item, skip_lists=True)
            if title and children:
                return [NavLink(title=title, children=tuple(children))]
            logger.warning(
                "Skipping navigation entry without a link in %s: %r",
                self.collection_name,
                title,
            )
            return children

        title = capture.text(anchor)
        href = resolve_summary_href(anchor.get("href"), self.root_url)
        if not title or href is None:
            logger.warning(
                "Skipping malformed navigation entry in %s: title=%r href=%r",
                self.collection_name,
                title,
                anchor.get("href"),
            )
            return children
        return [NavLink(title=title, href=href, children=tuple(children))]


def build_navigation_index(summary: str, collection_name: str) -> list[NavLink]:
    """Return the navigation index for ``summary`` in ``collection_name``."""
    return NavigationIndexBuilder(collection_name).build(summary)


def load_navigation_index(path: Path, collection_name: str) -> list[NavLink]:
    """Read and parse the summary document at ``path``.

    Raises
    ------
    SummaryNotFoundError
        If the file is missing or unreadable.
    SummaryParseError
        If the file is not UTF-8 or yields no navigation lists.
    """
    try:
        summary = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Summary '{path}' is not valid UTF-8."
        raise SummaryParseError(msg) from exc
    except OSError as exc:
        raise SummaryNotFoundError(path) from exc
    return build_navigation_index(summary, collection_name)


__all__ = [
    "NavLink",
    "NavigationIndexBuilder",
    "build_navigation_index",
    "load_navigation_index",
    "mark_active",
    "resolve_summary_href",
]

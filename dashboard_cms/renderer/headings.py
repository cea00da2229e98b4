"""Heading ids, page titles, and table-of-contents extraction.

Ids are assigned and TOC entries collected in the same walk, from the same
:func:`slugify_heading` derivation, so an anchor in the TOC always matches the
``id`` attribute in the rendered HTML.
"""

from __future__ import annotations

import dataclasses as dc
import html
import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions.toc import render_inner_html, strip_tags
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown import Markdown

HEADING_LEVELS = {f"h{level}": level for level in range(1, 7)}


@dc.dataclass(frozen=True, slots=True)
class TocLink:
    """One heading in a rendered document.

    Attributes
    ----------
    text : str
        Plain text of the heading.
    id : str
        Anchor id, unique within the document.
    level : int
        Heading level from 1 to 6.
    """

    text: str
    id: str
    level: int

    @property
    def href(self) -> str:
        """Return the in-page anchor for this heading."""
        return f"#{self.id}"


def slugify_heading(text: str) -> str:
    """Return the base anchor id for a heading's text.

    >>> slugify_heading("Install & Configure")
    'install-configure'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "heading"


def unique_id(base: str, used: set[str]) -> str:
    """Return ``base`` or the first free ``base-N`` suffix, recording it in ``used``."""
    candidate = base
    counter = 1
    while candidate in used:
        candidate = f"{base}-{counter}"
        counter += 1
    used.add(candidate)
    return candidate


def assign_heading_ids(
    root: etree.Element, text_of: cabc.Callable[[etree.Element], str]
) -> list[TocLink]:
    """Set an ``id`` on every heading under ``root`` and return the TOC.

    Headings that already carry an ``id`` keep it. Ids already present
    anywhere in the tree, such as tab group ids, are never reused.
    """
    used: set[str] = {
        anchor for element in root.iter() if (anchor := element.get("id"))
    }
    toc: list[TocLink] = []
    for element in root.iter():
        level = HEADING_LEVELS.get(element.tag)
        if level is None:
            continue
        text = text_of(element)
        existing = element.get("id")
        if existing:
            anchor = existing
        else:
            anchor = unique_id(slugify_heading(text), used)
            element.set("id", anchor)
        toc.append(TocLink(text=text, id=anchor, level=level))
    return toc


def find_title(
    root: etree.Element, text_of: cabc.Callable[[etree.Element], str]
) -> str | None:
    """Return the text of the first heading at the top level of ``root``."""
    for element in root:
        if element.tag in HEADING_LEVELS:
            return text_of(element)
    return None


class OutlineTreeprocessor(Treeprocessor):
    """Assign heading ids and record the document title and TOC.

    Results are kept on the processor instance; a fresh ``Markdown`` instance
    is built for every render so they never leak between documents.
    """

    def __init__(self, md: Markdown | None = None) -> None:
        super().__init__(md)
        self.title: str | None = None
        self.toc: list[TocLink] = []

    def run(self, root: etree.Element) -> None:
        """Collect the outline of ``root``."""
        self.toc = assign_heading_ids(root, self._text)
        self.title = find_title(root, self._text)

    def _text(self, element: etree.Element) -> str:
        text = html.unescape(strip_tags(render_inner_html(element, self.md)))
        return " ".join(text.split())


__all__ = [
    "HEADING_LEVELS",
    "OutlineTreeprocessor",
    "TocLink",
    "assign_heading_ids",
    "find_title",
    "slugify_heading",
    "unique_id",
]

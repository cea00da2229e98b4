"""Inline grammar additions: ``~~strikethrough~~`` and bare URL autolinks."""

from __future__ import annotations

import re
import xml.etree.ElementTree as etree

from markdown.inlinepatterns import SimpleTagInlineProcessor
from markdown.treeprocessors import Treeprocessor

STRIKETHROUGH_PATTERN = r"(~{2})(?!~)(.+?)(?<!~)\1"
BARE_URL_PATTERN = re.compile(
    r"(?<![\w/\"'=])https?://[^\s<>\"'\x02\x03]*[^\s<>\"'\x02\x03.,:;!?)\]]"
)
SKIP_TAGS = frozenset({"a", "code", "pre", "script", "style"})


def strikethrough_processor() -> SimpleTagInlineProcessor:
    """Return an inline processor rendering ``~~text~~`` as ``<del>``."""
    return SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del")


def _split_links(text: str) -> tuple[str, list[etree.Element]]:
    """Split ``text`` into a leading string and anchors carrying the rest as tails."""
    anchors: list[etree.Element] = []
    head = text
    last = 0
    for match in BARE_URL_PATTERN.finditer(text):
        if anchors:
            anchors[-1].tail = text[last : match.start()]
        else:
            head = text[: match.start()]
        anchor = etree.Element("a")
        anchor.set("href", match.group(0))
        anchor.text = match.group(0)
        anchors.append(anchor)
        last = match.end()
    if anchors:
        anchors[-1].tail = text[last:]
    return head, anchors


class BareUrlTreeprocessor(Treeprocessor):
    """Link plain ``http(s)://`` URLs that are not already inside a link."""

    def run(self, root: etree.Element) -> None:
        """Rewrite bare URLs in every text node outside links and code."""
        self._linkify(root)

    def _linkify(self, element: etree.Element) -> None:
        if element.tag in SKIP_TAGS:
            return
        children = list(element)
        for child in children:
            self._linkify(child)
        for child in reversed(children):
            if not child.tail:
                continue
            child.tail, anchors = _split_links(child.tail)
            position = list(element).index(child) + 1
            for offset, anchor in enumerate(anchors):
                element.insert(position + offset, anchor)
        if element.text:
            element.text, anchors = _split_links(element.text)
            for offset, anchor in enumerate(anchors):
                element.insert(offset, anchor)


__all__ = [
    "BARE_URL_PATTERN",
    "STRIKETHROUGH_PATTERN",
    "BareUrlTreeprocessor",
    "strikethrough_processor",
]

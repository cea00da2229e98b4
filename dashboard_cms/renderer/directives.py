"""Expand mkdocs and Gitbook directives into structural HTML nodes.

Two block syntaxes are recognised, both with four-space indented bodies::

    !!! warning "Be careful"
        Admonition body.

    === "Python"
        Tab body.

Consecutive ``===`` blocks join one tab group; a ``===!`` header always starts
a new group. Gitbook's ``{% hint %}`` and ``{% tabs %}`` blocks are rewritten
into the syntax above before block parsing, each ``{% tabs %}`` block opening
its own group.
Anything directive-shaped that is not recognised is left as literal text.
"""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.blockprocessors import BlockProcessor
from markdown.preprocessors import Preprocessor

if typ.TYPE_CHECKING:
    from markdown.blockparser import BlockParser

ADMONITION_KINDS = frozenset(
    {
        "abstract",
        "bug",
        "danger",
        "example",
        "failure",
        "info",
        "note",
        "question",
        "quote",
        "success",
        "tip",
        "warning",
    }
)

HINT_PATTERN = re.compile(
    r'^\{%\s*hint\s+style="(?P<style>[\w-]+)"\s*%\}[ ]*\n'
    r"(?P<body>.*?)\n?^\{%\s*endhint\s*%\}[ ]*$",
    re.MULTILINE | re.DOTALL,
)
TABS_PATTERN = re.compile(
    r"^\{%\s*tabs\s*%\}[ ]*\n(?P<body>.*?)^\{%\s*endtabs\s*%\}[ ]*$",
    re.MULTILINE | re.DOTALL,
)
TAB_PATTERN = re.compile(
    r'^\{%\s*tab\s+title="(?P<title>[^"\n]+)"\s*%\}[ ]*\n'
    r"(?P<body>.*?)\n?^\{%\s*endtab\s*%\}[ ]*$",
    re.MULTILINE | re.DOTALL,
)


def _indent(body: str, width: int = 4) -> str:
    pad = " " * width
    return "\n".join(f"{pad}{line}" if line.strip() else "" for line in body.split("\n"))


def _has_class(element: etree.Element | None, name: str) -> bool:
    if element is None:
        return False
    return name in (element.get("class") or "").split()


class GitbookDirectivePreprocessor(Preprocessor):
    """Rewrite Gitbook hint and tab blocks into mkdocs directive syntax."""

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with Gitbook directives converted."""
        text = "\n".join(lines)
        text = HINT_PATTERN.sub(self._replace_hint, text)
        text = TABS_PATTERN.sub(self._replace_tabs, text)
        return text.split("\n")

    @staticmethod
    def _replace_hint(match: re.Match[str]) -> str:
        style = match.group("style").lower()
        if style not in ADMONITION_KINDS:
            return match.group(0)
        return f'\n!!! {style} ""\n{_indent(match.group("body"))}\n'

    @staticmethod
    def _replace_tabs(match: re.Match[str]) -> str:
        tabs = list(TAB_PATTERN.finditer(match.group("body")))
        if not tabs:
            return match.group(0)
        blocks = [
            f'{"===!" if index == 0 else "==="} "{tab.group("title")}"\n'
            f'{_indent(tab.group("body"))}'
            for index, tab in enumerate(tabs)
        ]
        return "\n" + "\n\n".join(blocks) + "\n"


class AdmonitionProcessor(BlockProcessor):
    """Turn ``!!! kind "title"`` blocks into admonition containers."""

    CLASSNAME = "admonition"
    CLASSNAME_TITLE = "admonition-title"
    RE = re.compile(r'(?:^|\n)!!! ?(?P<kind>[\w-]+)(?: +"(?P<title>.*?)")? *(?:\n|$)')

    def test(self, parent: etree.Element, block: str) -> bool:
        """Return True for recognised admonition headers or their continuations."""
        match = self.RE.search(block)
        if match:
            return match.group("kind").lower() in ADMONITION_KINDS
        sibling = self.lastChild(parent)
        return block.startswith(" " * self.tab_length) and _has_class(
            sibling, self.CLASSNAME
        )

    def run(self, parent: etree.Element, blocks: list[str]) -> None:
        """Consume the admonition block and parse its body as markdown."""
        block = blocks.pop(0)
        match = self.RE.search(block)
        if match:
            if match.start() > 0:
                self.parser.parseBlocks(parent, [block[: match.start()]])
            block = block[match.end() :]
            container = self._build(parent, match)
        else:
            container = typ.cast("etree.Element", self.lastChild(parent))
        body, rest = self.detab(block)
        self.parser.parseChunk(container, body)
        if rest:
            blocks.insert(0, rest)

    def _build(self, parent: etree.Element, match: re.Match[str]) -> etree.Element:
        kind = match.group("kind").lower()
        title = match.group("title")
        if title is None:
            title = kind.capitalize()
        container = etree.SubElement(parent, "div")
        container.set("class", f"{self.CLASSNAME} {self.CLASSNAME}-{kind}")
        if title:
            heading = etree.SubElement(container, "p")
            heading.set("class", self.CLASSNAME_TITLE)
            heading.text = title
        return container


class TabsProcessor(BlockProcessor):
    """Group consecutive ``=== "Title"`` blocks into a tab container."""

    CLASSNAME = "tab-group"
    RE = re.compile(r'(?:^|\n)===(?P<new>!)? +"(?P<title>[^"\n]+)" *(?:\n|$)')

    def __init__(self, parser: BlockParser) -> None:
        super().__init__(parser)
        self._group_count = 0

    def test(self, parent: etree.Element, block: str) -> bool:
        """Return True for tab headers or indented continuations of a tab."""
        if self.RE.search(block):
            return True
        sibling = self.lastChild(parent)
        return block.startswith(" " * self.tab_length) and _has_class(
            sibling, self.CLASSNAME
        )

    def run(self, parent: etree.Element, blocks: list[str]) -> None:
        """Consume one tab (or tab continuation) and parse its body."""
        block = blocks.pop(0)
        match = self.RE.search(block)
        if match:
            if match.start() > 0:
                self.parser.parseBlocks(parent, [block[: match.start()]])
            block = block[match.end() :]
            pane = self._add_tab(
                parent, match.group("title"), new_group=bool(match.group("new"))
            )
        else:
            group = typ.cast("etree.Element", self.lastChild(parent))
            pane = list(group.find("div"))[-1]
        body, rest = self.detab(block)
        self.parser.parseChunk(pane, body)
        if rest:
            blocks.insert(0, rest)

    def _add_tab(
        self, parent: etree.Element, title: str, *, new_group: bool = False
    ) -> etree.Element:
        group = self.lastChild(parent)
        if new_group or not _has_class(group, self.CLASSNAME):
            group = self._new_group(parent)
        group = typ.cast("etree.Element", group)
        nav = typ.cast("etree.Element", group.find("ul"))
        content = typ.cast("etree.Element", group.find("div"))
        index = len(content) + 1
        pane_id = f"{group.get('id')}-{index}"
        first = index == 1

        item = etree.SubElement(nav, "li")
        item.set("class", "nav-item")
        button = etree.SubElement(item, "button")
        button.set("class", "nav-link active" if first else "nav-link")
        button.set("type", "button")
        button.set("data-bs-toggle", "tab")
        button.set("data-bs-target", f"#{pane_id}")
        button.text = title

        pane = etree.SubElement(content, "div")
        pane.set("class", "tab-pane active" if first else "tab-pane")
        pane.set("id", pane_id)
        pane.set("data-title", title)
        return pane

    def _new_group(self, parent: etree.Element) -> etree.Element:
        self._group_count += 1
        group = etree.SubElement(parent, "div")
        group.set("class", self.CLASSNAME)
        group.set("id", f"{self.CLASSNAME}-{self._group_count}")
        nav = etree.SubElement(group, "ul")
        nav.set("class", "nav nav-tabs")
        nav.set("role", "tablist")
        content = etree.SubElement(group, "div")
        content.set("class", "tab-content")
        return group


__all__ = [
    "ADMONITION_KINDS",
    "AdmonitionProcessor",
    "GitbookDirectivePreprocessor",
    "TabsProcessor",
]

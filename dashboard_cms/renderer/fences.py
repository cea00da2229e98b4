"""Fenced code block support backed by :class:`SyntaxHighlighter`.

Fences are pulled out of the source before block parsing and replaced with
raw-HTML placeholders, the same way Python-Markdown's ``fenced_code``
extension does. The placeholder keeps the fence's indentation so code inside
list items, tabs, and admonitions stays attached to its container.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.preprocessors import Preprocessor

from .highlight import SyntaxHighlighter

if typ.TYPE_CHECKING:
    from markdown import Markdown

FENCE_PATTERN = re.compile(
    r"^(?P<indent>[ ]*)(?P<fence>(?P<char>[`~])(?P=char){2,})[ ]*"
    r"(?P<lang>[A-Za-z0-9_+#.-]*)[^\n]*\n"
    r"(?P<code>.*?)(?<=\n)(?P=indent)?(?P=fence)(?P=char)*[ ]*$",
    re.MULTILINE | re.DOTALL,
)
CONTAINER_PATTERN = re.compile(r"^[ ]*(?:[*+-]|\d+[.)]|!!!|===!?|\{%)[ ]")
CODE_BLOCK_INDENT = 4


def _dedent(code: str, indent: str) -> str:
    """Strip the fence's own indentation from every code line."""
    if not indent:
        return code
    lines = [
        line[len(indent) :] if line.startswith(indent) else line.lstrip(" ")
        for line in code.split("\n")
    ]
    return "\n".join(lines)


def _opens_fence(before: str, indent: str) -> bool:
    """Return True when a fence indented by ``indent`` is not an indented code block.

    Fences indented by four or more spaces only count when they continue a
    list item or directive body, found by walking back to the nearest line
    indented less than the fence.
    """
    if len(indent) < CODE_BLOCK_INDENT:
        return True
    for line in reversed(before.split("\n")):
        if not line.strip() or len(line) - len(line.lstrip(" ")) >= len(indent):
            continue
        return CONTAINER_PATTERN.match(line) is not None
    return False


class CodeFencePreprocessor(Preprocessor):
    """Replace fenced code blocks with stashed, highlighted HTML."""

    def __init__(self, md: Markdown, highlighter: SyntaxHighlighter) -> None:
        super().__init__(md)
        self.highlighter = highlighter

    def run(self, lines: list[str]) -> list[str]:
        """Highlight every fence in ``lines`` and return the rewritten lines."""
        text = "\n".join(lines)
        position = 0
        while match := FENCE_PATTERN.search(text, position):
            indent = match.group("indent")
            if not _opens_fence(text[: match.start()], indent):
                position = match.end()
                continue
            language = match.group("lang") or None
            code = _dedent(match.group("code"), indent)
            html = self.highlighter.highlight(code, language)
            placeholder = self.md.htmlStash.store(html)
            replacement = f"{indent}{placeholder}"
            text = f"{text[: match.start()]}\n{replacement}\n{text[match.end() :]}"
            position = match.start() + len(replacement) + 2
        return text.split("\n")


__all__ = ["CONTAINER_PATTERN", "FENCE_PATTERN", "CodeFencePreprocessor"]

"""Syntax highlighting for fenced code blocks.

Highlighted tokens are wrapped in ``<span class="syntax-highlight">`` markers
rather than Pygments' usual per-token classes; the dashboard stylesheet only
knows that one class.
"""

from __future__ import annotations

import typing as typ
from html import escape

from pygments import highlight
from pygments.formatter import Formatter
from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, Keyword, Name, Number, Operator, String
from pygments.util import ClassNotFound

from dashboard_cms._constants import HIGHLIGHT_CLASS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pygments.token import _TokenType

HIGHLIGHTED_TOKENS = (
    Keyword,
    Name.Builtin,
    Name.Function,
    Name.Class,
    String,
    Number,
    Comment,
    Operator.Word,
)


def _is_highlighted(ttype: _TokenType) -> bool:
    return any(ttype in parent for parent in HIGHLIGHTED_TOKENS)


class SyntaxHighlightFormatter(Formatter):
    """Pygments formatter emitting a single marker class per significant token."""

    name = "Dashboard syntax highlight"
    aliases: typ.ClassVar[list[str]] = ["syntax-highlight"]

    def format(  # noqa: A003 - Pygments API
        self,
        tokensource: cabc.Iterable[tuple[_TokenType, str]],
        outfile: typ.TextIO,
    ) -> None:
        """Write escaped tokens, wrapping highlighted ones in marker spans."""
        for ttype, value in tokensource:
            text = escape(value, quote=False)
            if value.strip() and _is_highlighted(ttype):
                outfile.write(f'<span class="{HIGHLIGHT_CLASS}">{text}</span>')
            else:
                outfile.write(text)


class SyntaxHighlighter:
    """Render fenced code into ``<pre><code>`` HTML."""

    def __init__(self) -> None:
        self._formatter = SyntaxHighlightFormatter()

    def highlight(self, code: str, language: str | None) -> str:
        """Return highlighted HTML for ``code`` tagged with ``language``.

        Unknown or missing languages render as escaped plain text without any
        highlight markers.
        """
        body = self._highlight_body(code, language)
        if not language:
            return f"<pre><code>{body}</code></pre>"
        lang = escape(language, quote=True)
        return (
            f'<pre data-language="{lang}"><code class="language-{lang}">'
            f"{body}</code></pre>"
        )

    def _highlight_body(self, code: str, language: str | None) -> str:
        if not language:
            return escape(code, quote=False)
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound:
            return escape(code, quote=False)
        return highlight(code, lexer, self._formatter)


__all__ = ["HIGHLIGHTED_TOKENS", "SyntaxHighlightFormatter", "SyntaxHighlighter"]

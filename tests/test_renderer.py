"""Tests for the markdown rendering pipeline.

These cover the pieces the dashboard styles against: heading anchors and
the table of contents derived from them, the ``syntax-highlight`` markers on
fenced code, the scroll wrapper around tables, and the inline grammar
additions (strikethrough and bare URLs).
"""

from __future__ import annotations

import warnings
import xml.etree.ElementTree as etree
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup

from dashboard_cms.renderer import MarkdownRenderer, SyntaxHighlighter, slugify_heading
from dashboard_cms.renderer.headings import unique_id
from dashboard_cms.renderer.tables import wrap_tables

TABLE_MARKDOWN = dedent(
    """\
    This is some markdown with a table

    | Syntax      | Description |
    | ----------- | ----------- |
    | Header      | Title       |
    | Paragraph   | Text        |

    This is the end of the markdown
    """
)


def test_postgresql_keywords_are_highlighted(renderer: MarkdownRenderer) -> None:
    html = renderer.render("# Hello\n\n```postgresql\nSELECT * FROM test;\n```\n").html
    assert '<span class="syntax-highlight">SELECT</span>' in html


@pytest.mark.parametrize("keyword", ["SELECT", "FROM", "WHERE"])
def test_every_sql_keyword_is_wrapped(keyword: str) -> None:
    html = SyntaxHighlighter().highlight("SELECT id FROM users WHERE id = 1;\n", "sql")
    assert f'<span class="syntax-highlight">{keyword}</span>' in html


def test_python_fence_marks_keywords_and_comments(renderer: MarkdownRenderer) -> None:
    markdown = "# Code\n\n```python\n# greet\ndef hello():\n    return 'hi'\n```\n"
    soup = BeautifulSoup(renderer.render(markdown).html, "html.parser")
    marked = [span.get_text() for span in soup.select("pre code span.syntax-highlight")]
    assert "def" in marked
    assert "# greet" in marked
    assert soup.select_one("pre")["data-language"] == "python"


@pytest.mark.parametrize("fence", ["```nosuchlang", "```"], ids=["unknown", "absent"])
def test_unhighlighted_fences_render_escaped_text(
    renderer: MarkdownRenderer, fence: str
) -> None:
    html = renderer.render(f"# Code\n\n{fence}\n<b>bold</b>\n```\n").html
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "syntax-highlight" not in html


def test_fence_info_string_extras_are_ignored(renderer: MarkdownRenderer) -> None:
    markdown = "# Code\n\n- Example\n\n    ```rust,no_run\n    fn main() {}\n    ```\n"
    html = renderer.render(markdown).html
    assert 'data-language="rust"' in html
    assert '<span class="syntax-highlight">fn</span>' in html


def test_code_fence_comments_are_not_headings(renderer: MarkdownRenderer) -> None:
    rendered = renderer.render("# Title\n\n```bash\n# not a heading\nls\n```\n")
    assert [link.text for link in rendered.toc] == ["Title"]


def test_fences_inside_indented_code_stay_literal(renderer: MarkdownRenderer) -> None:
    markdown = "# T\n\nWrite a fence like this:\n\n    ```python\n    x = 1\n    ```\n"
    soup = BeautifulSoup(renderer.render(markdown).html, "html.parser")
    assert soup.select("pre pre") == []
    assert soup.select_one("pre code").get_text() == "```python\nx = 1\n```\n"
    assert "syntax-highlight" not in str(soup)


def test_indented_fences_continue_admonition_bodies(renderer: MarkdownRenderer) -> None:
    markdown = '!!! tip\n    Run it:\n\n    ```bash\n    ls -la\n    ```\n'
    soup = BeautifulSoup(renderer.render(markdown).html, "html.parser")
    block = soup.select_one("div.admonition pre")
    assert block["data-language"] == "bash"
    assert soup.select("pre pre") == []


def test_longer_closing_fence_ends_the_block(renderer: MarkdownRenderer) -> None:
    html = renderer.render("# Code\n\n```python\nx = 1\n`````\n\nAfter.\n").html
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("pre")["data-language"] == "python"
    assert "`" not in soup.get_text()
    assert soup.find_all("p")[-1].get_text() == "After."


def test_tables_are_wrapped(renderer: MarkdownRenderer) -> None:
    html = renderer.render(TABLE_MARKDOWN).html
    assert '\n<div class="overflow-auto w-100">\n<table>' in html
    assert "\n</table>\n</div>" in html


def test_documents_without_tables_have_no_wrapper(renderer: MarkdownRenderer) -> None:
    html = renderer.render("This has no table\n\nThe end\n").html
    assert "overflow-auto" not in html


def _table_tree() -> etree.Element:
    root = etree.Element("div")
    etree.SubElement(root, "p").text = "before"
    table = etree.SubElement(root, "table")
    etree.SubElement(etree.SubElement(table, "tr"), "td").text = "cell"
    table.tail = "\n"
    etree.SubElement(root, "p").text = "after"
    return root


def test_wrapping_tables_twice_matches_wrapping_once() -> None:
    once = wrap_tables(_table_tree())
    twice = wrap_tables(wrap_tables(_table_tree()))
    assert etree.tostring(once) == etree.tostring(twice)
    assert len(twice.findall("div")) == 1
    assert [child.tag for child in twice] == ["p", "div", "p"]


def test_wrapping_without_tables_is_a_no_op() -> None:
    root = etree.Element("div")
    etree.SubElement(root, "p").text = "plain"
    before = etree.tostring(root)
    assert etree.tostring(wrap_tables(root)) == before


def test_heading_ids_are_unique_and_match_toc(renderer: MarkdownRenderer) -> None:
    markdown = "# Intro\n\n## Setup\n\n## Setup\n\n### Install & Configure\n"
    rendered = renderer.render(markdown)
    assert [(link.id, link.level) for link in rendered.toc] == [
        ("intro", 1),
        ("setup", 2),
        ("setup-1", 2),
        ("install-configure", 3),
    ]
    assert '<h2 id="setup-1">Setup</h2>' in rendered.html
    soup = BeautifulSoup(rendered.html, "html.parser")
    for link in rendered.toc:
        assert soup.find(id=link.id).get_text() == link.text


def test_inline_markup_is_flattened_in_toc(renderer: MarkdownRenderer) -> None:
    rendered = renderer.render("# The `cms` *command*\n")
    assert rendered.toc[0].text == "The cms command"
    assert rendered.toc[0].id == "the-cms-command"
    assert rendered.toc[0].href == "#the-cms-command"


def test_heading_text_keeps_escapes_and_entities(renderer: MarkdownRenderer) -> None:
    rendered = renderer.render("# Use `<b>` \\*tags\\* & more\n")
    assert rendered.title == "Use <b> *tags* & more"
    assert rendered.toc[0].id == "use-b-tags-more"


def test_rendering_emits_no_deprecation_warnings(renderer: MarkdownRenderer) -> None:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        renderer.render("# Title\n\n## Section `code`\n")
    assert not [w for w in caught if issubclass(w.category, DeprecationWarning)]


def test_title_is_first_top_level_heading(renderer: MarkdownRenderer) -> None:
    rendered = renderer.render("Intro text\n\n## Second\n\n# First\n")
    assert rendered.title == "Second"


def test_nested_headings_do_not_become_title(renderer: MarkdownRenderer) -> None:
    rendered = renderer.render('!!! note\n    # Inside\n\n# Outside\n')
    assert rendered.title == "Outside"
    assert [link.text for link in rendered.toc] == ["Inside", "Outside"]


def test_missing_heading_yields_no_title(renderer: MarkdownRenderer) -> None:
    rendered = renderer.render("Just a paragraph.\n")
    assert rendered.title is None
    assert rendered.toc == []


def test_strikethrough(renderer: MarkdownRenderer) -> None:
    assert "<del>old</del> new" in renderer.render("~~old~~ new\n").html


def test_bare_urls_become_links(renderer: MarkdownRenderer) -> None:
    html = renderer.render("See https://example.com/docs.\n").html
    assert '<a href="https://example.com/docs">https://example.com/docs</a>.' in html


def test_existing_links_are_not_relinked(renderer: MarkdownRenderer) -> None:
    html = renderer.render("[Docs](https://example.com) and `https://x.test`\n").html
    assert html.count("<a ") == 1


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Install & Configure", "install-configure"),
        ("  Hello, World!  ", "hello-world"),
        ("!!!", "heading"),
    ],
)
def test_slugify_heading(text: str, expected: str) -> None:
    assert slugify_heading(text) == expected


def test_unique_id_appends_counter() -> None:
    used: set[str] = set()
    assert [unique_id("a", used) for _ in range(3)] == ["a", "a-1", "a-2"]

"""Tests for handing rendered pages to the Jinja page layout."""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup

from dashboard_cms.collection import Collection
from dashboard_cms.layout import LayoutContext, PageLayout


def test_context_carries_page_values(docs: Collection) -> None:
    page = docs.get_content("")
    context = LayoutContext.from_page(page, footer_text="Footer", user="ada")
    assert context.title == "Introduction"
    assert context.html_body == page.html
    assert context.collection_name == "Docs"
    assert context.navigation_index == page.navigation
    assert context.toc_links == page.toc
    assert context.image == "/docs/.gitbook/assets/logo.svg"
    assert context.description == "Learn the dashboard"
    assert context.user == "ada"


def test_layout_escapes_metadata_but_not_body() -> None:
    context = LayoutContext(
        title="A <b> title",
        html_body="<p>Body</p>",
        collection_name="Docs",
        navigation_index=(),
        toc_links=(),
        description='Say "hi"',
    )
    html = PageLayout().render(context)
    assert "<title>A &lt;b&gt; title | Docs</title>" in html
    assert "<p>Body</p>" in html
    assert 'content="Say &#34;hi&#34;"' in html
    assert 'class="toc"' not in html


def test_group_headers_render_without_links(docs: Collection) -> None:
    html = PageLayout().render(LayoutContext.from_page(docs.get_content("")))
    soup = BeautifulSoup(html, "html.parser")
    group = soup.select_one("nav li span.nav-group")
    assert group.get_text() == "Guides"
    assert group.find_parent("li").find("a", recursive=False) is None
    assert soup.select_one("li.open a.nav-link.active")["href"] == "/docs/"


def test_custom_templates_directory(tmp_path: Path, docs: Collection) -> None:
    (tmp_path / "page.jinja").write_text(
        "{{ page.collection_name }}: {{ page.title }}", encoding="utf-8"
    )
    html = PageLayout(tmp_path).render(LayoutContext.from_page(docs.get_content("")))
    assert html == "Docs: Introduction"

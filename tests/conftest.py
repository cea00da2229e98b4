"""Shared fixtures building a small on-disk Gitbook content tree.

The ``content_root`` fixture lays out ``docs``, ``careers``, and ``blog``
collections under ``tmp_path`` the same way the dashboard expects them:
``<root>/<name>/SUMMARY.md`` for navigation, ``<root>/<name>/<path>.md`` for
documents, and ``<root>/<name>/.gitbook/assets`` for static files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from dashboard_cms.collection import Collection
from dashboard_cms.renderer import MarkdownRenderer

DOCS_SUMMARY = """\
# Table of contents

* [Introduction](README.md)
* [Installation](install/README.md)
  * [Linux](install/linux.md)
  * [macOS](install/macos.md)
* Guides
  * [Search](guides/search.md)
* [API](api.md)
"""

DOCS_README = """\
---
description: Learn the dashboard
image: /docs/.gitbook/assets/logo.svg
---
# Introduction

Welcome to the dashboard.

## Quick start

| Option | Default |
| ------ | ------- |
| port   | 8000    |

```bash
dashboard --port 8000
```
"""

FILES: dict[str, str] = {
    "docs/SUMMARY.md": DOCS_SUMMARY,
    "docs/README.md": DOCS_README,
    "docs/install.md": "# Install shortcut\n\nSee the installation guide.\n",
    "docs/install/README.md": "# Installation\n\n## Linux\n\nUse apt.\n\n## macOS\n\nUse brew.\n",
    "docs/install/linux.md": "# Linux\n\nRun the installer.\n",
    "docs/untitled.md": "Just text, without any heading.\n",
    "docs/.gitbook/assets/logo.svg": "<svg xmlns='http://www.w3.org/2000/svg'/>\n",
    "careers/SUMMARY.md": "* [Open roles](README.md)\n",
    "careers/README.md": "# Careers\n\nWe are hiring.\n",
    "blog/SUMMARY.md": "* [First post](first-post.md)\n",
    "blog/first-post.md": "# First post\n\nHello world.\n",
}


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Return a content root populated with three small collections."""
    root = tmp_path / "content"
    for relative, text in FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def renderer() -> MarkdownRenderer:
    """Return a markdown renderer with default highlighting."""
    return MarkdownRenderer()


@pytest.fixture
def docs(content_root: Path) -> Collection:
    """Return the loaded ``Docs`` collection."""
    return Collection.load("Docs", content_root)

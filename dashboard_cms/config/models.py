"""Typed dataclasses describing the CMS configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from dashboard_cms._constants import DEFAULT_COLLECTIONS


class CmsConfigError(ValueError):
    """Raised when the CMS configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class CmsConfig:
    """Where content lives and which collections to serve.

    Attributes
    ----------
    content_root : Path
        Directory holding one subdirectory per collection (``docs/``,
        ``blog/``, ...).
    collections : tuple[str, ...]
        Collection names, loaded in this order at startup.
    footer_text : str
        Footer copy handed to the page layout.
    templates_dir : Path | None
        Override for the Jinja templates used by the page layout.
    """

    content_root: Path
    collections: tuple[str, ...] = DEFAULT_COLLECTIONS
    footer_text: str = ""
    templates_dir: Path | None = None


__all__ = ["CmsConfig", "CmsConfigError"]

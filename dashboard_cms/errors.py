"""Exceptions raised while loading collections and rendering content.

Every error carries the HTTP-style ``status`` the request boundary converts it
to, so routing code can do ``except CmsError as exc: return exc.status``
without knowing the individual failure modes.
"""

from __future__ import annotations

from pathlib import Path


class CmsError(Exception):
    """Base class for content-management failures."""

    status = 500


class ContentNotFoundError(CmsError):
    """Raised when a requested document or asset cannot be read."""

    status = 404

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Content '{self.path}' not found.")


class MissingTitleError(CmsError):
    """Raised when a document has no top-level heading to use as its title."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Document '{self.path}' has no top-level heading.")


class CollectionLoadError(CmsError):
    """Raised when a collection cannot be brought online at startup."""


class SummaryNotFoundError(CollectionLoadError):
    """Raised when a collection's ``SUMMARY.md`` is missing or unreadable."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Could not read table of contents markdown '{self.path}'.")


class SummaryParseError(CollectionLoadError):
    """Raised when a summary document yields no navigation structure."""


class UnknownCollectionError(KeyError):
    """Raised when looking up a collection that was never loaded."""


__all__ = [
    "CmsError",
    "CollectionLoadError",
    "ContentNotFoundError",
    "MissingTitleError",
    "SummaryNotFoundError",
    "SummaryParseError",
    "UnknownCollectionError",
]

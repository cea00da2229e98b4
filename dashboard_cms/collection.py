"""Gitbook collections: content lookup, rendering, and asset resolution.

A :class:`Collection` is built once per content set at process startup and is
read-only afterwards, so one instance can serve concurrent requests without
locking. :class:`ContentLibrary` loads every configured collection eagerly;
if any summary is missing or unparseable, startup fails instead of serving a
collection without navigation.

Example
-------
>>> from pathlib import Path
>>> from dashboard_cms.collection import Collection
>>> docs = Collection.load("Docs", Path("content"))  # doctest: +SKIP
>>> page = docs.get_content("install/")  # doctest: +SKIP
>>> page.title  # doctest: +SKIP
'Installation'
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import types
import typing as typ
from pathlib import Path

from ._constants import (
    ASSET_DIR_PARTS,
    CONTENT_EXTENSION,
    INDEX_DOCUMENT,
    SUMMARY_FILENAME,
)
from .errors import ContentNotFoundError, MissingTitleError, UnknownCollectionError
from .frontmatter import PageMeta, split_front_matter
from .navigation import NavLink, load_navigation_index, mark_active
from .renderer import MarkdownRenderer

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import CmsConfig
    from .renderer import TocLink

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class RenderedPage:
    """Everything the page layout needs to display one document.

    Attributes
    ----------
    title : str
        Text of the document's first top-level heading.
    html : str
        Rendered article body.
    toc : tuple[TocLink, ...]
        Headings in document order with their anchor ids.
    meta : PageMeta
        Front matter image and description.
    navigation : tuple[NavLink, ...]
        The collection's navigation index, marked for the requested URL.
    collection_name : str
        Name of the collection the document belongs to.
    url : str
        Public URL of the document, e.g. ``/docs/install/``.
    """

    title: str
    html: str
    toc: tuple[TocLink, ...]
    meta: PageMeta
    navigation: tuple[NavLink, ...]
    collection_name: str
    url: str


def _is_within(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


class Collection:
    """A named set of Gitbook documents sharing one navigation index."""

    def __init__(
        self,
        name: str,
        root_dir: Path,
        navigation_index: cabc.Sequence[NavLink],
        *,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        """Initialize a collection from already-loaded parts.

        Parameters
        ----------
        name : str
            Display name, e.g. ``"Docs"``; lowercased for URLs and directories.
        root_dir : Path
            Directory containing ``SUMMARY.md`` and the collection's documents.
        navigation_index : Sequence[NavLink]
            Parsed navigation tree; stored as an immutable tuple.
        renderer : MarkdownRenderer, optional
            Shared markdown renderer; a default one is created when ``None``.
        """
        self._name = name
        self._root_dir = root_dir
        self._asset_dir = root_dir.joinpath(*ASSET_DIR_PARTS)
        self._navigation_index = tuple(navigation_index)
        self._renderer = renderer or MarkdownRenderer()

    @classmethod
    def load(
        cls,
        name: str,
        content_root: Path,
        *,
        renderer: MarkdownRenderer | None = None,
    ) -> Collection:
        """Load the collection ``name`` from ``content_root``.

        Raises
        ------
        SummaryNotFoundError
            If ``<content_root>/<name>/SUMMARY.md`` cannot be read.
        SummaryParseError
            If the summary holds no navigation list.
        """
        logger.info("Loading content: %s", name)
        root_dir = content_root / name.lower()
        index = load_navigation_index(root_dir / SUMMARY_FILENAME, name)
        return cls(name, root_dir, index, renderer=renderer)

    @property
    def name(self) -> str:
        """Return the collection's display name."""
        return self._name

    @property
    def root_dir(self) -> Path:
        """Return the directory holding the collection's documents."""
        return self._root_dir

    @property
    def asset_dir(self) -> Path:
        """Return the ``.gitbook/assets`` directory for the collection."""
        return self._asset_dir

    @property
    def navigation_index(self) -> tuple[NavLink, ...]:
        """Return the shared, read-only navigation index."""
        return self._navigation_index

    @property
    def url_root(self) -> str:
        """Return the URL prefix every page of the collection lives under."""
        return f"/{self._name.lower()}"

    def document_path(self, relative_path: str) -> Path:
        """Map a request path to the markdown file that serves it.

        ``""`` and paths ending in ``/`` map to ``README.md`` in that
        directory; anything else gets the ``.md`` extension appended.

        Raises
        ------
        ContentNotFoundError
            If the path escapes the collection's root directory.
        """
        path = relative_path.lstrip("/")
        if not path or path.endswith("/"):
            path = f"{path}{INDEX_DOCUMENT}"
        candidate = self._root_dir / f"{path}{CONTENT_EXTENSION}"
        if not _is_within(candidate, self._root_dir):
            raise ContentNotFoundError(candidate)
        return candidate

    def url_for(self, relative_path: str) -> str:
        """Return the public URL of ``relative_path`` within this collection."""
        return f"{self.url_root}/{relative_path.lstrip('/')}"

    def get_content(self, relative_path: str) -> RenderedPage:
        """Read, split, and render the document at ``relative_path``.

        Raises
        ------
        ContentNotFoundError
            If the document does not exist or cannot be read as UTF-8.
        MissingTitleError
            If the document has no top-level heading.
        """
        logger.info("get_content: %s %s", self._name, relative_path)
        path = self.document_path(relative_path)
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Error reading markdown file '%s': %s", path, exc)
            raise ContentNotFoundError(path) from exc

        meta, body = split_front_matter(contents)
        rendered = self._renderer.render(body)
        if rendered.title is None:
            logger.error("Markdown file '%s' has no title heading", path)
            raise MissingTitleError(path)

        url = self.url_for(relative_path)
        return RenderedPage(
            title=rendered.title,
            html=rendered.html,
            toc=tuple(rendered.toc),
            meta=meta,
            navigation=tuple(mark_active(self._navigation_index, url)),
            collection_name=self._name,
            url=url,
        )

    async def get_content_async(self, relative_path: str) -> RenderedPage:
        """Run :meth:`get_content` in a worker thread for async callers."""
        return await asyncio.to_thread(self.get_content, relative_path)

    def get_asset(self, relative_path: str) -> Path | None:
        """Return the asset file at ``relative_path`` or None.

        Paths that resolve outside the asset directory, and paths that are
        not regular files, return None.
        """
        logger.info("get_asset: %s %s", self._name, relative_path)
        candidate = self._asset_dir / relative_path.lstrip("/")
        if not _is_within(candidate, self._asset_dir) or not candidate.is_file():
            return None
        return candidate


class ContentLibrary:
    """The process-wide set of collections, loaded once at startup."""

    def __init__(self, collections: cabc.Iterable[Collection]) -> None:
        self._collections = types.MappingProxyType(
            {collection.name.lower(): collection for collection in collections}
        )

    @classmethod
    def load(
        cls, config: CmsConfig, *, renderer: MarkdownRenderer | None = None
    ) -> ContentLibrary:
        """Load every configured collection, failing on the first broken one."""
        shared = renderer or MarkdownRenderer()
        return cls(
            Collection.load(name, config.content_root, renderer=shared)
            for name in config.collections
        )

    @property
    def names(self) -> list[str]:
        """Return collection names in load order."""
        return [collection.name for collection in self._collections.values()]

    def get(self, name: str) -> Collection:
        """Return the collection called ``name`` (case-insensitive).

        Raises
        ------
        UnknownCollectionError
            If no collection with that name was loaded.
        """
        try:
            return self._collections[name.lower()]
        except KeyError as exc:
            raise UnknownCollectionError(name) from exc

    def __iter__(self) -> cabc.Iterator[Collection]:
        return iter(self._collections.values())

    def __len__(self) -> int:
        return len(self._collections)


__all__ = ["Collection", "ContentLibrary", "RenderedPage"]

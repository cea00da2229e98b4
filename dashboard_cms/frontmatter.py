r"""Split optional YAML front matter from Gitbook markdown documents.

Gitbook stores page metadata between ``---`` marker lines at the top of a
file. Authors also use ``---`` as a horizontal rule, so the splitter is
deliberately lenient: whenever the second ``---``-delimited segment is not a
YAML mapping the input text is returned untouched and the page simply has
no metadata.

Example
-------
>>> meta, body = split_front_matter("---\ndescription: Hi\n---\n# Title\n")
>>> meta.description
'Hi'
>>> body
'\n# Title\n'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import FRONT_MATTER_DELIMITER


@dc.dataclass(frozen=True, slots=True)
class PageMeta:
    """Metadata parsed from a document's front matter.

    Attributes
    ----------
    image : str | None
        Social preview image path, if declared.
    description : str | None
        Short page description used for meta tags, if declared.
    """

    image: str | None = None
    description: str | None = None


def _optional_str(value: object | None) -> str | None:
    """Return ``value`` as a stripped string, or None when absent or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _load_mapping(segment: str) -> typ.Mapping[str, typ.Any] | None:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(segment)
    except (YAMLError, ValueError):
        return None
    if not isinstance(loaded, dict) or not loaded:
        return None
    return loaded


def split_front_matter(content: str) -> tuple[PageMeta, str]:
    """Separate front matter metadata from the markdown body.

    Parameters
    ----------
    content : str
        Raw file content, possibly starting with a ``---`` delimited block.

    Returns
    -------
    tuple[PageMeta, str]
        The parsed metadata and the remaining markdown. When there is no
        usable YAML mapping in the second segment, an empty ``PageMeta`` and
        the unmodified ``content`` are returned.
    """
    parts = content.split(FRONT_MATTER_DELIMITER)
    if len(parts) < 2:
        return PageMeta(), content

    mapping = _load_mapping(parts[1])
    if mapping is None:
        return PageMeta(), content

    meta = PageMeta(
        image=_optional_str(mapping.get("image")),
        description=_optional_str(mapping.get("description")),
    )
    return meta, FRONT_MATTER_DELIMITER.join(parts[2:])


__all__ = ["PageMeta", "split_front_matter"]

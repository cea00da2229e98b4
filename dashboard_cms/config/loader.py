"""Load the CMS configuration YAML into a :class:`CmsConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from dashboard_cms._constants import DEFAULT_COLLECTIONS

from .models import CmsConfig, CmsConfigError


def load_cms_config(path: Path, *, content_root: Path | None = None) -> CmsConfig:
    """Load the YAML configuration describing content collections.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML file (for example, ``config/cms.yaml``).
    content_root : Path, optional
        Override for the configured ``content_root``.

    Returns
    -------
    CmsConfig
        Parsed configuration. Relative paths are resolved against the
        directory containing ``path``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    CmsConfigError
        If the top level is not a mapping, no content root is given, or the
        collection list is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise CmsConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent

    root_value = content_root or raw.get("content_root")
    if not root_value:
        msg = "Configuration is missing 'content_root'."
        raise CmsConfigError(msg)

    templates_value = raw.get("templates_dir")
    return CmsConfig(
        content_root=_resolve(base_dir, root_value),
        collections=_parse_collections(raw.get("collections")),
        footer_text=str(raw.get("footer_text") or ""),
        templates_dir=_resolve(base_dir, templates_value) if templates_value else None,
    )


def _resolve(base_dir: Path, value: str | Path) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _parse_collections(value: object) -> tuple[str, ...]:
    match value:
        case None:
            return DEFAULT_COLLECTIONS
        case list() if value and all(isinstance(item, str) and item for item in value):
            return tuple(value)
        case _:
            msg = "'collections' must be a non-empty list of names."
            raise CmsConfigError(msg)


__all__ = ["load_cms_config"]

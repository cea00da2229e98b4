"""Common literal values used across dashboard_cms.

These constants pin the on-disk layout of a Gitbook collection and the CSS
class names that the dashboard stylesheet targets, so the renderer, the
collection loader, and the tests share one definition.

Examples
--------
>>> from dashboard_cms import _constants
>>> _constants.CONTENT_EXTENSION
'.md'
>>> _constants.ASSET_DIR_PARTS
('.gitbook', 'assets')
"""

DEFAULT_COLLECTIONS = ("Blog", "Careers", "Docs")
SUMMARY_FILENAME = "SUMMARY.md"
INDEX_DOCUMENT = "README"
CONTENT_EXTENSION = ".md"
ASSET_DIR_PARTS = (".gitbook", "assets")
FRONT_MATTER_DELIMITER = "---"

HIGHLIGHT_CLASS = "syntax-highlight"
TABLE_WRAPPER_CLASS = "overflow-auto w-100"

"""Load and validate the CMS configuration file.

The configuration names the content root that holds every Gitbook
collection, which collections to bring online at startup, and the footer
copy handed to the page layout.

Examples
--------
>>> from pathlib import Path
>>> from dashboard_cms.config import load_cms_config
>>> config = load_cms_config(Path("config/cms.yaml"))  # doctest: +SKIP
>>> config.collections  # doctest: +SKIP
('Blog', 'Careers', 'Docs')
"""

from .loader import load_cms_config
from .models import CmsConfig, CmsConfigError

__all__ = ["CmsConfig", "CmsConfigError", "load_cms_config"]

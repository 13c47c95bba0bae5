"""
Panini - render pages with front matter into layout templates.

Panini reads every page under a pages directory, merges its front
matter with global and per-file data, then renders all pages
concurrently through Jinja2 layouts. A page that fails to render is
replaced by an HTML error page instead of stopping the build.
"""

__version__ = "1.0.0"

from .core import Panini, BuildReport
from .models import RawPage, ParsedPage, Rendered, Failed
from .settings import PaniniConfig, PaniniSettings

__all__ = [
    'Panini', 'BuildReport', 'RawPage', 'ParsedPage', 'Rendered', 'Failed',
    'PaniniConfig', 'PaniniSettings',
]

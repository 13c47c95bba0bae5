"""
Exception types raised by Panini.
"""


class PaniniError(Exception):
    """Base class for every error Panini raises on purpose."""


class ConfigError(PaniniError):
    """Raised when the site configuration cannot be used to build pages."""

    def __init__(self, message, settings=None):
        super().__init__(message)
        self.settings = settings


class FrontMatterError(PaniniError):
    """Raised when a page's front matter block is not a valid YAML mapping."""

    def __init__(self, message, path=None):
        if path:
            message = f"{message} ({path})"
        super().__init__(message)
        self.path = path


class RenderTimeoutError(PaniniError):
    """A page was still rendering when the build timeout expired."""

"""
Records passed between the parse and build phases.
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class RawPage:
    """A page source as read from disk, before any parsing."""

    path: str
    contents: Union[str, bytes]
    data: Optional[Mapping[str, Any]] = None

    @property
    def name(self):
        """File name without its extension."""
        return os.path.splitext(os.path.basename(self.path))[0]

    @property
    def extension(self):
        return os.path.splitext(self.path)[1].lower()


@dataclass(frozen=True)
class ParsedPage:
    """
    A page ready to be rendered: its body and the merged data context.

    ``error`` is set when the page could not be parsed. Such a page still
    reaches the build phase, where it becomes a failed outcome.
    """

    source: RawPage
    body: str
    context: Mapping[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None

    def __post_init__(self):
        if not isinstance(self.context, MappingProxyType):
            object.__setattr__(self, 'context', MappingProxyType(dict(self.context)))

    @property
    def layout(self):
        return self.context.get('layout')

    @property
    def failed(self):
        return self.error is not None


@dataclass(frozen=True)
class Rendered:
    """A page rendered through its layout."""

    source: RawPage
    content: bytes

    ok = True


@dataclass(frozen=True)
class Failed:
    """A page that could not be rendered, with an HTML document describing why."""

    source: RawPage
    diagnostic_content: bytes
    cause: BaseException

    ok = False

    @property
    def content(self):
        return self.diagnostic_content


RenderOutcome = Union[Rendered, Failed]

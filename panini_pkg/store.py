"""
In-memory collection of parsed pages waiting for the build phase.
"""

from .exceptions import PaniniError


class PageStore:
    """
    Ordered, append-only list of ParsedPage records for one run.

    Pages are appended while parsing and handed out exactly once by
    ``drain()``. Call ``reset()`` before reusing the store for another run.
    """

    def __init__(self):
        self._pages = []
        self._drained = False

    def append(self, parsed_page):
        if self._drained:
            raise PaniniError("Cannot add pages to a store that has already been built")
        self._pages.append(parsed_page)

    def drain(self):
        """Return every stored page, in the order they were appended."""
        if self._drained:
            raise PaniniError("Pages have already been handed to the build phase")
        self._drained = True
        return tuple(self._pages)

    def reset(self):
        self._pages = []
        self._drained = False

    @property
    def drained(self):
        return self._drained

    def __len__(self):
        return len(self._pages)

    def __iter__(self):
        return iter(tuple(self._pages))

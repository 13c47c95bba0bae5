"""Tests for PageStore."""

import pytest
import os

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from panini_pkg.exceptions import PaniniError
from panini_pkg.models import ParsedPage, RawPage
from panini_pkg.store import PageStore


def parsed(name):
    return ParsedPage(source=RawPage(path=f'{name}.html', contents=''), body=name, context={'page': name})


class TestPageStore:
    """Test cases for PageStore."""

    def test_drain_keeps_append_order(self):
        store = PageStore()
        for name in ('c', 'a', 'b'):
            store.append(parsed(name))

        assert len(store) == 3
        assert [page.body for page in store.drain()] == ['c', 'a', 'b']
        assert store.drained

    def test_drain_only_once(self):
        store = PageStore()
        store.append(parsed('a'))
        store.drain()

        with pytest.raises(PaniniError):
            store.drain()

    def test_no_append_after_drain(self):
        store = PageStore()
        store.drain()

        with pytest.raises(PaniniError):
            store.append(parsed('late'))

    def test_reset(self):
        """Test that a reset store starts a new run."""
        store = PageStore()
        store.append(parsed('a'))
        store.drain()
        store.reset()
        store.append(parsed('b'))

        assert [page.body for page in store.drain()] == ['b']

    def test_empty_drain(self):
        assert PageStore().drain() == ()

"""
Parse phase: turn raw page sources into ParsedPage records.
"""

import logging
import os
import posixpath

from .exceptions import FrontMatterError
from .front_matter import parse_front_matter
from .models import ParsedPage
from .root_path import root_path

DEFAULT_LAYOUT = 'default'

MARKDOWN_EXTENSIONS = ('.md', '.markdown')


def resolve_layout_name(front_matter_layout, page_layouts, base_path, default=DEFAULT_LAYOUT):
    """
    Pick the layout a page is rendered with.

    The page's own ``layout`` attribute wins, then the layout configured
    for the page's directory, then ``default``.
    """
    if front_matter_layout:
        return front_matter_layout
    if page_layouts and page_layouts.get(base_path):
        return page_layouts[base_path]
    return default


def build_context(global_data, injected_data, attributes, constants):
    """
    Merge the data layers a page is rendered with into a new dict.

    Later layers replace earlier ones key by key; nested values are
    never merged. None of the inputs is modified.
    """
    context = {}
    for layer in (global_data, injected_data, attributes, constants):
        if layer:
            context.update(layer)
    return context


class PageParser:
    """Parse raw pages against one site configuration."""

    def __init__(self, config, global_data=None):
        self.config = config
        self.global_data = config.global_data if global_data is None else global_data
        self.pages_root = os.path.abspath(config.pages_dir)
        self.logger = logging.getLogger('Panini.parser')

    def base_path(self, page_path):
        """Directory of ``page_path`` relative to the pages root, with forward slashes."""
        rel_dir = os.path.relpath(os.path.dirname(os.path.abspath(page_path)), self.pages_root)
        if rel_dir == '.':
            return ''
        return posixpath.join(*rel_dir.split(os.sep))

    def parse(self, raw_page):
        """Parse one page. Unreadable front matter produces a failed ParsedPage instead of raising."""
        base_path = self.base_path(raw_page.path)
        try:
            front_matter = parse_front_matter(raw_page.contents, raw_page.path)
        except (FrontMatterError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to parse {raw_page.path}: {e}")
            constants = self._constants(raw_page, DEFAULT_LAYOUT)
            return ParsedPage(source=raw_page, body='', context=constants, error=e)

        layout = resolve_layout_name(
            front_matter.attributes.get('layout'),
            self.config.page_layouts,
            base_path,
        )

        context = build_context(
            # Global data
            self.global_data,
            # Data attached by whatever supplied the page
            raw_page.data,
            # Page-specific data
            front_matter.attributes,
            # Constants
            self._constants(raw_page, layout),
        )

        body = front_matter.body
        if raw_page.extension in MARKDOWN_EXTENSIONS:
            body = '{% filter markdown %}\n' + body + '\n{% endfilter %}'

        self.logger.debug(f"Parsed {raw_page.path} (layout: {layout})")
        return ParsedPage(source=raw_page, body=body, context=context)

    def _constants(self, raw_page, layout):
        return {
            'page': raw_page.name,
            'layout': layout,
            'root': root_path(raw_page.path, self.pages_root),
        }

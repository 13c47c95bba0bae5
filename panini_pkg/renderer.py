"""
Build phase, one page at a time: wrap a ParsedPage in its layout.
"""

import html
import logging
import os
import posixpath

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PrefixLoader

from .helpers import register_helpers
from .models import Failed, Rendered

LAYOUT_PREFIX = 'layout'

ERROR_DOCUMENT = (
    '<!DOCTYPE html><html><head><title>Panini error</title></head>'
    '<body><pre>{message}</pre></body></html>'
)


def create_environment(config):
    """
    Create the Jinja2 environment pages are rendered with.

    Layouts live under the ``layout:`` prefix and are only ever found in
    the layouts directory. Plain names such as ``{% include "header.html" %}``
    resolve in the partials directory.
    """
    loader = ChoiceLoader([
        PrefixLoader({LAYOUT_PREFIX: FileSystemLoader(config.layouts_dir)}, delimiter=':'),
        FileSystemLoader(config.partials_dir),
    ])
    env = Environment(loader=loader, enable_async=True)
    return register_helpers(env)


def error_document(err):
    """Minimal HTML page showing ``err``, so a broken page is visible in the browser."""
    message = html.escape(f"{type(err).__name__}: {err}")
    return ERROR_DOCUMENT.format(message=message).encode('utf-8')


def layout_template_name(layout):
    return f'{LAYOUT_PREFIX}:{layout}.html'


class PageRenderer:
    """
    Render parsed pages through their layouts.

    The page body is compiled into its own in-memory template and handed
    to the layout as ``partials.body``; layouts splice it in with
    ``{% include partials.body %}``. Nothing in the shared environment is
    modified per page, so any number of renders can run concurrently.
    """

    def __init__(self, config, env=None):
        self.config = config
        self.env = env or create_environment(config)
        self.pages_root = os.path.abspath(config.pages_dir)
        self.logger = logging.getLogger('Panini.renderer')

    def staging_name(self, parsed_page):
        """Name of the body partial, derived from the page's path under the pages root."""
        rel_path = os.path.relpath(os.path.abspath(parsed_page.source.path), self.pages_root)
        return 'body:' + posixpath.join(*rel_path.split(os.sep))

    def stage_body(self, parsed_page):
        """Compile the page body into a template the layout can include."""
        code = self.env.compile(
            parsed_page.body,
            name=self.staging_name(parsed_page),
            filename=parsed_page.source.path,
        )
        return self.env.template_class.from_code(self.env, code, self.env.make_globals(None))

    async def render(self, parsed_page):
        """Render one page. Always returns a Rendered or Failed outcome."""
        source = parsed_page.source
        try:
            if parsed_page.error is not None:
                raise parsed_page.error

            layout = self.env.get_template(layout_template_name(parsed_page.layout))
            body = self.stage_body(parsed_page)

            context = dict(parsed_page.context)
            context['partials'] = {'body': body}

            contents = await layout.render_async(context)
        except Exception as e:
            self.logger.error(f"Failed to render {source.path}: {e}")
            return self.failed(source, e)

        self.logger.debug(f"Rendered {source.path} with layout '{parsed_page.layout}'")
        return Rendered(source=source, content=contents.encode('utf-8'))

    @staticmethod
    def failed(source, err):
        return Failed(source=source, diagnostic_content=error_document(err), cause=err)

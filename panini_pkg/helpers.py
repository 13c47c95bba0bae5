"""
Template helpers available to every layout, partial and page body.
"""

import mistune
from jinja2 import pass_context


@pass_context
def ifpage(context, *pages):
    """True when the page being rendered is one of ``pages``."""
    return context.get('page') in pages


@pass_context
def unlesspage(context, *pages):
    """True when the page being rendered is none of ``pages``."""
    return context.get('page') not in pages


def create_markdown_parser():
    """Create a Mistune markdown parser with a custom renderer."""
    class CustomRenderer(mistune.HTMLRenderer):
        def __init__(self):
            super().__init__(escape=False)

        def block_code(self, code, info=None):
            escaped_code = mistune.escape(code)
            return '<pre style="white-space: pre-wrap;"><code>{}</code></pre>'.format(escaped_code)

    return mistune.create_markdown(
        renderer=CustomRenderer(),
        plugins=['table', 'task_lists', 'strikethrough']
    )


def register_helpers(env):
    """Install the Panini helpers on a Jinja2 environment."""
    markdown_parser = create_markdown_parser()

    def markdown_filter(text):
        """Convert markdown text to HTML."""
        return markdown_parser(text)

    env.globals['ifpage'] = ifpage
    env.globals['unlesspage'] = unlesspage
    env.filters['markdown'] = markdown_filter
    return env

"""
Path prefix from a page back to the pages root.
"""

import os
import posixpath


def root_path(page_path, pages_root):
    """
    Return the relative prefix that leads from ``page_path`` to ``pages_root``.

    Templates put the prefix in front of asset URLs so that they resolve
    at any nesting depth. Pages at the root get an empty string, pages one
    directory deep get ``'../'`` and so on. Browsers always want forward
    slashes, whatever the platform.
    """
    page_dir = os.path.dirname(os.path.abspath(page_path))
    rel_path = os.path.relpath(os.path.abspath(pages_root), page_dir)
    if rel_path == '.':
        return ''
    return posixpath.join(*rel_path.split(os.sep)) + '/'

"""
YAML front matter parsing for page sources.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from .exceptions import FrontMatterError

# An opening '---' line, the YAML document, then a closing '---' or '...' line.
FRONT_MATTER_PATTERN = re.compile(
    r'\A\ufeff?---[ \t]*\r?\n(.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)',
    re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class FrontMatter:
    """Attributes declared at the top of a page, and the body that follows them."""

    attributes: Dict[str, Any] = field(default_factory=dict)
    body: str = ''


def parse_front_matter(text, path=None):
    """
    Split ``text`` into its front matter attributes and body.

    Text without a front matter block is returned whole as the body with
    no attributes.

    Args:
        text: Page source, as ``str`` or UTF-8 encoded ``bytes``.
        path: Optional source path, only used in error messages.

    Returns:
        FrontMatter instance

    Raises:
        FrontMatterError: If the block is not valid YAML or not a mapping.
    """
    if isinstance(text, bytes):
        text = text.decode('utf-8')

    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return FrontMatter(attributes={}, body=text.lstrip('\ufeff'))

    try:
        attributes = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter: {e}", path) from e

    if attributes is None:
        attributes = {}
    elif not isinstance(attributes, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(attributes).__name__}", path
        )

    return FrontMatter(attributes=attributes, body=text[match.end():])

"""Test configuration and fixtures for Panini tests."""

import pytest
import tempfile
import shutil
import json
from pathlib import Path
import yaml

from panini_pkg.settings import PaniniConfig

DEFAULT_LAYOUT = """<!DOCTYPE html>
<html>
<head><title>{{ title }}</title><link rel="stylesheet" href="{{ root }}assets/app.css"></head>
<body>
{% include "header.html" %}
<nav>
<a href="{{ root }}index.html"{% if ifpage('index') %} class="active"{% endif %}>Home</a>
<a href="{{ root }}about.html"{% if unlesspage('index') %} class="not-home"{% endif %}>About</a>
</nav>
<main>{% include partials.body %}</main>
</body>
</html>"""

POST_LAYOUT = """<article class="post" data-layout="{{ layout }}">{% include partials.body %}</article>"""

BROKEN_LAYOUT = """<div>{{ missing.attr }}</div>"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def mock_site(temp_dir):
    """Create a site source tree with layouts, partials, data and pages."""
    src = Path(temp_dir) / 'src'
    layouts = src / 'layouts'
    partials = src / 'partials'
    pages = src / 'pages'
    data = src / 'data'
    for directory in (layouts, partials, pages / 'blog', pages / 'docs' / 'guide', data):
        directory.mkdir(parents=True)

    (layouts / 'default.html').write_text(DEFAULT_LAYOUT)
    (layouts / 'post.html').write_text(POST_LAYOUT)
    (layouts / 'broken.html').write_text(BROKEN_LAYOUT)
    (partials / 'header.html').write_text("<header>{{ site.name }}</header>")

    (data / 'site.yml').write_text(yaml.dump({'name': 'Test Site'}))
    (data / 'nav.json').write_text(json.dumps(['home', 'about']))

    (pages / 'index.html').write_text("""---
title: Home
---
<h1>{{ title }}</h1>
""")
    (pages / 'about.md').write_text("""---
title: About
---
# About us
""")
    (pages / 'blog' / 'first-post.html').write_text("""---
title: First post
---
<p>Hello from {{ page }}</p>
""")
    (pages / 'docs' / 'guide' / 'intro.html').write_text("""---
title: Intro
---
<p>Intro</p>
""")
    (pages / 'notes.txt').write_text("not a page")

    return str(src)


@pytest.fixture
def site_config(mock_site, temp_dir):
    """Configuration pointing at the mock site."""
    return PaniniConfig(
        input=mock_site,
        output=str(Path(temp_dir) / 'dist'),
        page_layouts={'blog': 'post'},
    )


@pytest.fixture
def add_page(mock_site):
    """Return a function that writes an extra page into the mock site."""
    def _add_page(rel_path, text):
        page_path = Path(mock_site) / 'pages' / rel_path
        page_path.parent.mkdir(parents=True, exist_ok=True)
        page_path.write_text(text)
        return str(page_path)
    return _add_page

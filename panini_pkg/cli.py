#!/usr/bin/env python3
"""
Command-line interface for Panini.
"""

import os
import sys
import argparse
import time
from typing import List, Optional

from . import __version__
from .core import Panini, setup_logging
from .exceptions import ConfigError
from .settings import PaniniSettings, validate_settings, log_config_error

SAMPLE_LAYOUT = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{{ title or page }}</title>
    <link rel="stylesheet" href="{{ root }}assets/css/app.css">
</head>
<body>
    <nav>
        <a href="{{ root }}index.html"{% if ifpage('index') %} class="active"{% endif %}>Home</a>
        <a href="{{ root }}about.html"{% if ifpage('about') %} class="active"{% endif %}>About</a>
    </nav>
    {% include partials.body %}
</body>
</html>
"""

SAMPLE_INDEX = """---
title: Home
---
<h1>{{ title }}</h1>
<p>Welcome to {{ site.name }}.</p>
"""

SAMPLE_ABOUT = """---
title: About
---
# About this site

This page is written in Markdown and rendered with the *default* layout.
"""

SAMPLE_DATA = """name: My Static Site
"""


def create_starter_structure(input_dir: str = 'src') -> None:
    """Create a starter site with a default layout, two pages and a data file."""
    starter_files = {
        os.path.join(input_dir, 'layouts', 'default.html'): SAMPLE_LAYOUT,
        os.path.join(input_dir, 'pages', 'index.html'): SAMPLE_INDEX,
        os.path.join(input_dir, 'pages', 'about.md'): SAMPLE_ABOUT,
        os.path.join(input_dir, 'data', 'site.yml'): SAMPLE_DATA,
    }
    os.makedirs(os.path.join(input_dir, 'partials'), exist_ok=True)

    for file_path, contents in starter_files.items():
        if os.path.exists(file_path):
            print(f"File already exists: {file_path}")
            continue
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(contents)
        print(f"Created: {file_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Panini - render pages into layouts')
    parser.add_argument('--input', type=str,
                        help='Root directory holding pages, layouts, partials and data')
    parser.add_argument('--pages', type=str,
                        help='Pages directory, relative to the input directory')
    parser.add_argument('--layouts', type=str,
                        help='Layouts directory, relative to the input directory')
    parser.add_argument('--partials', type=str,
                        help='Partials directory, relative to the input directory')
    parser.add_argument('--data', type=str,
                        help='Data directory, relative to the input directory')
    parser.add_argument('--output', type=str,
                        help='Output directory for rendered pages')
    parser.add_argument('--timeout', type=float,
                        help='Seconds to wait for all pages to render')
    parser.add_argument('--config-dir', type=str,
                        help='Directory containing panini.yml / panini.json')
    parser.add_argument('--logs', type=str,
                        help='Directory for detailed log files')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter site')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    settings_loader = PaniniSettings(args.config_dir)

    # Handle init command
    if args.init:
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")

        print("\nCreating starter site...")
        create_starter_structure(os.path.join(settings_loader.config_dir, 'src'))
        print("\nYour new Panini site is ready! Run 'panini' to build it.")
        return 0

    # Command line arguments take precedence over the config file
    args_dict = {k: v for k, v in vars(args).items()
                 if v is not None and k not in ('init', 'config_dir')}

    try:
        settings_loader.load_settings()
        final_settings = settings_loader.merge_with_args(args_dict)
        config = validate_settings(final_settings)
    except ConfigError as e:
        log_config_error(e, e.settings if e.settings is not None else settings_loader.settings)
        return 1

    logger = setup_logging(final_settings.get('logs'))

    overall_start_time = time.time()
    generator = Panini(config)
    report = generator.build()

    total_time = time.time() - overall_start_time
    logger.info(f"Site build completed in {total_time:.6f} seconds.")
    logger.info(f"Total pages rendered: {report.pages_rendered}")
    logger.info(f"Total pages failed: {report.pages_failed}")
    return 0


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
"""
Settings loader for Panini.
Supports configuration from panini.yml, panini.yaml, or panini.json files.
"""

import os
import json
from dataclasses import dataclass, field, replace
from pprint import pformat
from typing import Dict, Any, Optional

import yaml

from .exceptions import ConfigError


@dataclass(frozen=True)
class PaniniConfig:
    """
    Site configuration handed explicitly to every pipeline component.

    ``pages``, ``layouts``, ``partials`` and ``data`` are directories
    relative to ``input``. ``page_layouts`` maps a directory relative to
    the pages root (``''`` for the root itself) to a layout name.
    """

    input: str = 'src'
    pages: str = 'pages'
    layouts: str = 'layouts'
    partials: str = 'partials'
    data: str = 'data'
    output: str = 'dist'
    page_layouts: Dict[str, str] = field(default_factory=dict)
    global_data: Dict[str, Any] = field(default_factory=dict)
    timeout: Optional[float] = None

    @property
    def pages_dir(self):
        return os.path.join(self.input, self.pages)

    @property
    def layouts_dir(self):
        return os.path.join(self.input, self.layouts)

    @property
    def partials_dir(self):
        return os.path.join(self.input, self.partials)

    @property
    def data_dir(self):
        return os.path.join(self.input, self.data)

    def with_global_data(self, global_data):
        return replace(self, global_data=dict(global_data))

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> 'PaniniConfig':
        """Build a config from a settings dictionary such as PaniniSettings produces."""
        page_layouts = settings.get('page_layouts')
        if page_layouts is None:
            page_layouts = settings.get('pageLayouts')
        timeout = settings.get('timeout')
        return cls(
            input=os.path.expanduser(settings.get('input') or cls.input),
            pages=settings.get('pages') or cls.pages,
            layouts=settings.get('layouts') or cls.layouts,
            partials=settings.get('partials') or cls.partials,
            data=settings.get('data') or cls.data,
            output=os.path.expanduser(settings.get('output') or cls.output),
            page_layouts={str(k or ''): v for k, v in (page_layouts or {}).items()},
            global_data=dict(settings.get('global_data') or {}),
            timeout=float(timeout) if timeout else None,
        )


class PaniniSettings:
    """Load and manage Panini configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'input': 'src',
        'pages': 'pages',
        'layouts': 'layouts',
        'partials': 'partials',
        'data': 'data',
        'output': 'dist',
        'page_layouts': {},
        'global_data': {},
        'timeout': None,
        'logs': 'logs',
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['panini.yml', 'panini.yaml', 'panini.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = {k: (v.copy() if isinstance(v, dict) else v)
                         for k, v in self.DEFAULT_SETTINGS.items()}
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            ConfigError: If the configuration file exists but cannot be read.
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if loaded_settings:
                if not isinstance(loaded_settings, dict):
                    raise ConfigError(f"Configuration file {config_file} must contain a mapping")
                # Merge with defaults, giving preference to loaded settings
                self.settings.update(loaded_settings)
                print(f"Loaded configuration from: {os.path.relpath(config_file)}")

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ConfigError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}") from e
        except (IOError, OSError) as e:
            raise ConfigError(f"Error reading configuration file {config_path}: {e}") from e

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'panini.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Panini Configuration File\n\n")
                    f.write("# Source directories\n")
                    f.write("input: src\n")
                    f.write("pages: pages\n")
                    f.write("layouts: layouts\n")
                    f.write("partials: partials\n")
                    f.write("data: data\n\n")
                    f.write("# Where rendered pages are written\n")
                    f.write("output: dist\n\n")
                    f.write("# Layout used by every page in a directory (relative to pages)\n")
                    f.write("page_layouts:\n")
                    f.write("  blog: post\n\n")
                    f.write("# Data available to every page\n")
                    f.write("global_data:\n")
                    f.write("  site_title: My Static Site\n\n")
                    f.write("# Seconds to wait for all pages to render (empty for no limit)\n")
                    f.write("timeout:\n")
                elif file_format == 'json':
                    sample_config = {
                        'input': 'src',
                        'pages': 'pages',
                        'layouts': 'layouts',
                        'partials': 'partials',
                        'data': 'data',
                        'output': 'dist',
                        'page_layouts': {'blog': 'post'},
                        'global_data': {'site_title': 'My Static Site'},
                        'timeout': None,
                    }
                    json.dump(sample_config, f, indent=2)
                else:
                    raise ConfigError(f"Unsupported config file format: {file_format}")
        except (IOError, OSError) as e:
            raise ConfigError(f"Error writing configuration file {config_path}: {e}") from e

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None:
                merged[key] = value

        return merged


def validate_settings(settings: Dict[str, Any]) -> PaniniConfig:
    """
    Check that settings describe a site Panini can build.

    Returns:
        The PaniniConfig built from ``settings``

    Raises:
        ConfigError: If a required option or directory is missing, or
            there is no layout named ``default``.
    """
    for key in ('input', 'pages', 'layouts'):
        if not settings.get(key):
            raise ConfigError(f"You must specify the '{key}' option.", settings)

    page_layouts = settings.get('page_layouts', settings.get('pageLayouts'))
    if page_layouts is not None and not isinstance(page_layouts, dict):
        raise ConfigError("'page_layouts' must map directories to layout names.", settings)

    global_data = settings.get('global_data')
    if global_data is not None and not isinstance(global_data, dict):
        raise ConfigError("'global_data' must be a mapping.", settings)

    config = PaniniConfig.from_settings(settings)

    for label, path in (('input', config.input), ('pages', config.pages_dir), ('layouts', config.layouts_dir)):
        if not os.path.isdir(path):
            raise ConfigError(f"The {label} directory '{path}' does not exist.", settings)

    if not os.path.isfile(os.path.join(config.layouts_dir, 'default.html')):
        raise ConfigError('You must have a layout named "default".', settings)

    return config


def log_config_error(err, settings):
    """Print a configuration problem along with the settings that caused it."""
    print("There's an issue with how Panini is configured.")
    print(f"{err}\n")
    print("This is what the Panini configuration looks like:")
    print(pformat(settings, indent=2))

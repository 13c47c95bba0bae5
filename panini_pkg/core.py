import os
import json
import logging
import asyncio
from dataclasses import dataclass, field
from datetime import datetime

import yaml

from .coordinator import BuildCoordinator
from .events import Signals
from .models import RawPage
from .parser import PageParser
from .renderer import PageRenderer, create_environment
from .store import PageStore

PAGE_EXTENSIONS = ('.html', '.htm', '.md', '.markdown', '.hbs', '.handlebars')
DATA_EXTENSIONS = ('.yml', '.yaml', '.json')
# Page sources with these extensions are written out as .html
CONVERTED_EXTENSIONS = ('.md', '.markdown', '.hbs', '.handlebars')


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno > logging.INFO:
            return True
        allowed_messages = [
            "Site build completed in",
            "Total pages rendered:",
            "Total pages failed:",
            "Parsing pages",
            "Building pages",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(log_dir=None):
    """
    Set up logging configuration for the 'Panini' logger hierarchy.

    The console only shows progress messages and problems. When
    ``log_dir`` is given, every record down to DEBUG also goes to a
    timestamped file in that directory.
    """
    logger = logging.getLogger('Panini')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        # Console handler with filter
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.addFilter(InfoFilter())
        console_formatter = logging.Formatter('%(message)s')
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        # File handler for all logs
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            log_filename = datetime.now().strftime('panini_%Y-%m-%d_%H-%M-%S.log')
            log_filepath = os.path.join(log_dir, log_filename)

            file_handler = logging.FileHandler(log_filepath)
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

    return logger


@dataclass
class BuildReport:
    """What a call to Panini.build() produced."""

    outcomes: list = field(default_factory=list)
    written: list = field(default_factory=list)

    @property
    def pages_rendered(self):
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def pages_failed(self):
        return sum(1 for outcome in self.outcomes if not outcome.ok)

    @property
    def errors(self):
        return [outcome.cause for outcome in self.outcomes if not outcome.ok]


class Panini:
    """
    Render a directory of pages into complete HTML documents.

    Every page is parsed first; only once the whole set is known are the
    pages rendered, concurrently, through their layouts.
    """

    def __init__(self, config, logger=None):
        self.config = config
        self.logger = logger or logging.getLogger('Panini')
        self.signals = Signals()
        self.store = PageStore()
        self.refresh()

    def on(self, event, callback):
        """Subscribe ``callback`` to one of the lifecycle signals."""
        return self.signals.on(event, callback)

    def refresh(self):
        """Reload data files and recreate the template environment."""
        self.data = self.load_data()
        self.env = create_environment(self.config)
        self.parser = PageParser(self.config, global_data=self.data)
        self.renderer = PageRenderer(self.config, env=self.env)
        self.logger.debug(f"Loaded {len(self.data)} global data key(s)")

    def load_data(self):
        """
        Collect global data: each YAML/JSON file in the data directory
        becomes a key named after the file. Values from the configuration's
        ``global_data`` win over files with the same name.
        """
        data = {}
        data_dir = self.config.data_dir
        if os.path.isdir(data_dir):
            for file in sorted(os.listdir(data_dir)):
                name, ext = os.path.splitext(file)
                if ext.lower() not in DATA_EXTENSIONS:
                    continue
                file_path = os.path.join(data_dir, file)
                try:
                    with open(file_path, 'r', encoding='utf-8') as f:
                        if ext.lower() == '.json':
                            data[name] = json.load(f)
                        else:
                            data[name] = yaml.safe_load(f)
                except (IOError, OSError) as e:
                    self.logger.error(f"Failed to read data file {file_path}: {e}")
                except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
                    self.logger.error(f"Invalid data in {file_path}: {e}")
        data.update(self.config.global_data)
        return data

    def collect_pages(self):
        """Get every page source under the pages directory, sorted by path."""
        page_files = []
        for dirpath, dirnames, filenames in os.walk(self.config.pages_dir):
            dirnames.sort()
            for file in filenames:
                if os.path.splitext(file)[1].lower() in PAGE_EXTENSIONS:
                    page_files.append(os.path.join(dirpath, file))
        return sorted(page_files)

    def read_page(self, file_path, data=None):
        with open(file_path, 'rb') as f:
            return RawPage(path=file_path, contents=f.read(), data=data)

    async def render(self, raw_pages):
        """
        Parse every page in ``raw_pages``, then render them all.

        Returns:
            One Rendered or Failed outcome per page, in input order
        """
        self.store.reset()
        self.logger.info("Parsing pages")
        self.signals.emit('parsing')
        for raw_page in raw_pages:
            self.store.append(self.parser.parse(raw_page))

        pages = self.store.drain()
        self.logger.info(f"Building pages ({len(pages)})")
        coordinator = BuildCoordinator(self.renderer, signals=self.signals, timeout=self.config.timeout)
        return await coordinator.run(pages)

    def output_path(self, outcome):
        """Where a page's output goes: its path under the pages root, moved to the output directory."""
        rel_path = os.path.relpath(os.path.abspath(outcome.source.path), os.path.abspath(self.config.pages_dir))
        base, ext = os.path.splitext(rel_path)
        if ext.lower() in CONVERTED_EXTENSIONS:
            rel_path = base + '.html'
        return os.path.join(self.config.output, rel_path)

    def write_outcome(self, outcome):
        """Write a rendered page, or the error page standing in for it, to disk."""
        output_file_path = self.output_path(outcome)
        os.makedirs(os.path.dirname(output_file_path), exist_ok=True)
        with open(output_file_path, 'wb') as output_file:
            output_file.write(outcome.content)
        self.logger.debug(f"Generated HTML: {output_file_path}")
        return output_file_path

    def build(self):
        """Main build process."""
        raw_pages = [self.read_page(file_path) for file_path in self.collect_pages()]
        if not raw_pages:
            self.logger.warning(f"No pages found in {self.config.pages_dir}")

        outcomes = asyncio.run(self.render(raw_pages))

        report = BuildReport(outcomes=outcomes)
        for outcome in outcomes:
            try:
                report.written.append(self.write_outcome(outcome))
            except (IOError, OSError) as e:
                self.logger.error(f"Failed to write output for {outcome.source.path}: {e}")
        return report

"""
Build phase for a whole batch: render every parsed page concurrently.
"""

import asyncio
import logging

from .events import Signals
from .exceptions import RenderTimeoutError


class BuildCoordinator:
    """
    Fan a batch of ParsedPage records out to a PageRenderer and join them.

    ``run()`` returns one outcome per page, in the order the pages were
    given. ``rendered`` and ``error`` signals fire as each page settles,
    so listeners see them in completion order.
    """

    def __init__(self, renderer, signals=None, timeout=None):
        self.renderer = renderer
        self.signals = signals or Signals()
        self.timeout = timeout
        self.logger = logging.getLogger('Panini.coordinator')

    async def run(self, pages):
        pages = tuple(pages)
        self.signals.emit('building', pages)
        outcomes = [None] * len(pages)
        timed_out = False

        async def settle(index, page):
            outcome = await self._render(page)
            if not timed_out:
                outcomes[index] = outcome
                self._report(outcome)

        if pages:
            tasks = [asyncio.ensure_future(settle(index, page)) for index, page in enumerate(pages)]
            done, pending = await asyncio.wait(tasks, timeout=self.timeout)

            if pending:
                timed_out = True
                for task in pending:
                    task.add_done_callback(self._collect_late)
                self.logger.error(
                    f"Build timed out after {self.timeout} seconds with {len(pending)} page(s) still rendering"
                )
                for index, page in enumerate(pages):
                    if outcomes[index] is None:
                        err = RenderTimeoutError(
                            f"Rendering did not finish within {self.timeout} seconds"
                        )
                        outcomes[index] = self.renderer.failed(page.source, err)
                        self._report(outcomes[index])

            # A task can only fail here through a bug in this class or in a listener.
            for task in done:
                task.result()

        self.signals.emit('built', outcomes)
        return outcomes

    def _collect_late(self, task):
        """Retrieve the result of a render that finished after the timeout."""
        if task.cancelled():
            self.logger.debug("Late render was cancelled")
        elif task.exception() is not None:
            self.logger.debug(f"Late render failed: {task.exception()!r}")
        else:
            self.logger.debug("Late render finished after the timeout")

    async def _render(self, page):
        try:
            return await self.renderer.render(page)
        except Exception as e:
            self.logger.exception(f"Unexpected error rendering {page.source.path}")
            return self.renderer.failed(page.source, e)

    def _report(self, outcome):
        self.signals.emit('rendered', outcome)
        if not outcome.ok:
            self.signals.emit('error', outcome.cause, outcome)

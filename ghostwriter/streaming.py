"""
Streaming Renderer

Reveals AI output into the shared document one character at a time, then
appends a single non-breaking space so the next human contribution does not
run into the AI's last word.
"""

import asyncio
from typing import Callable, Iterator, Optional

from .document import UISink
from .exceptions import ConcurrentStreamError
from .logging_config import get_logger

logger = get_logger(__name__)

SENTINEL = "\u00a0"
DEFAULT_INTERVAL_MS = 30


class StreamHandle:
    """Cancellable handle on one emission pass."""

    def __init__(self, task: asyncio.Task):
        self._task = task

    def cancel(self) -> None:
        """Stop emitting. Characters already in the document stay there."""
        self._task.cancel()

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    async def wait(self) -> bool:
        """
        Wait for the pass to finish.

        Returns:
            True if every unit was emitted, False if the pass was cancelled
        """
        await asyncio.wait({self._task})
        if self._task.cancelled():
            return False
        # Surface errors raised by the sink
        self._task.result()
        return True


class StreamingRenderer:
    """Emits text into a UISink at a fixed cadence, one pass at a time."""

    def __init__(self, ui: UISink, sentinel: str = SENTINEL):
        self.ui = ui
        self.sentinel = sentinel
        self._in_progress = False
        self._task: Optional[asyncio.Task] = None

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def units(self, text: str) -> Iterator[str]:
        """The append operations for one pass: each character, then the sentinel."""
        yield from text
        yield self.sentinel

    def emit(
        self,
        text: str,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        on_complete: Optional[Callable[[], None]] = None
    ) -> StreamHandle:
        """
        Start revealing `text`; must be called from inside the running loop.

        Raises:
            ConcurrentStreamError: if a previous pass is still emitting
        """
        if self._in_progress:
            raise ConcurrentStreamError()

        self._in_progress = True
        task = asyncio.get_running_loop().create_task(
            self._drive(self.units(text), interval_ms / 1000, on_complete)
        )
        # A task cancelled before its first step never reaches _drive's finally
        task.add_done_callback(self._release)
        self._task = task
        logger.debug(f"Streaming {len(text)} characters at {interval_ms}ms")
        return StreamHandle(task)

    async def _drive(
        self,
        units: Iterator[str],
        delay: float,
        on_complete: Optional[Callable[[], None]]
    ) -> None:
        try:
            for index, unit in enumerate(units):
                if index:
                    await asyncio.sleep(delay)
                self.ui.append_text(unit)
        except asyncio.CancelledError:
            logger.info("Stream cancelled")
            raise
        finally:
            self._in_progress = False

        if on_complete:
            on_complete()

    async def cancel(self) -> None:
        """Cancel the pass in progress, if any, and wait until it has unwound."""
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        await asyncio.wait({task})

    def _release(self, task: asyncio.Task) -> None:
        if task is self._task:
            self._in_progress = False
            self._task = None

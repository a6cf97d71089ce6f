"""Debounced recomputation of the persisted text."""

import asyncio
from collections.abc import Callable
from typing import Any

from loguru import logger

from notes_editor.config import DEBOUNCE_SECONDS
from notes_editor.core.convert.serializer import to_persisted
from notes_editor.models.node import Document
from notes_editor.protocols import SchedulerProtocol, TimerHandle


class _IdleHandle:
    """Stands in for a timer when no loop is running; only a flush fires it."""

    def cancel(self) -> None:
        pass


class LoopScheduler:
    """Schedule on the running asyncio loop.

    With no running loop nothing is armed: the callback stays pending until
    the owner flushes, so a synchronous caller still converts once per burst.
    """

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, recompute waits for flush")
            return _IdleHandle()
        return loop.call_later(delay, callback, *args)


class DebouncedSync:
    """Trailing-edge debounce around the tree-to-text conversion.

    Every ``schedule()`` cancels the pending timer, if any, and arms a new one,
    so at most one recompute is in flight and it runs ``delay`` seconds after
    the last edit. Converting on every keystroke would rewrite the surface and
    move the cursor; the format state stays live separately.
    """

    def __init__(
        self,
        extract: Callable[[], Document | None],
        scheduler: SchedulerProtocol | None = None,
        *,
        delay: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._extract = extract
        self._scheduler = scheduler or LoopScheduler()
        self.delay = delay
        self._handle: TimerHandle | None = None
        # Pending-save buffer; None until the first recompute.
        self.buffer: str | None = None
        self.recompute_count = 0

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """Restart the quiet period."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        self.recompute()

    def recompute(self) -> str:
        """Convert the current tree into the pending buffer now."""
        document = self._extract()
        self.buffer = to_persisted(document) if document is not None else (self.buffer or "")
        self.recompute_count += 1
        logger.debug("Recomputed persisted text ({} chars)", len(self.buffer))
        return self.buffer

    def flush(self) -> str:
        """Run a pending recompute now and return the latest text.

        With nothing pending the buffer is returned as is, or computed fresh
        if it never was.
        """
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            return self.recompute()
        if self.buffer is None:
            return self.recompute()
        return self.buffer

    def cancel(self) -> None:
        """Disarm the pending timer; nothing is written afterwards."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Cancelled pending recompute")

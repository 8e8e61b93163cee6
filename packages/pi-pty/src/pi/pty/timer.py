"""Single-slot resettable deferred callback on the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ResettableTimeout:
    """Runs *callback* once after *delay* seconds of quiet.

    At most one call is outstanding: :meth:`schedule` and :meth:`reset`
    replace the deadline instead of stacking callbacks, and :meth:`cancel`
    drops it without firing. Outside a running event loop the callback runs
    immediately.
    """

    def __init__(self, callback: Callable[[], None], delay: float) -> None:
        self._callback = callback
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def delay(self) -> float:
        return self._delay

    def schedule(self) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running event loop - fire synchronously
            self._fire()
            return
        self._handle = loop.call_later(self._delay, self._fire)

    def reset(self) -> None:
        """Push the deadline back by a full delay (arms the slot if idle)."""
        self.schedule()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        try:
            self._callback()
        except Exception:
            logger.exception("Deferred callback failed")

"""Debounced prompt redraw around asynchronous output."""

from __future__ import annotations

from typing import Callable

from pi.pty import actions
from pi.pty.config import DEFAULT_PROMPT_DELAY
from pi.pty.timer import ResettableTimeout


class PromptController:
    """Tracks whether the prompt (plus any partial line) is on screen.

    The prompt is drawn only after output has been quiet for *delay*
    seconds, so a burst of writes produces a single redraw. It is erased
    before anything else is written.
    """

    def __init__(
        self,
        write: Callable[[str], None],
        *,
        delay: float = DEFAULT_PROMPT_DELAY,
    ) -> None:
        self._write = write
        self._shown = False
        self._render: Callable[[], str] | None = None
        self._timer = ResettableTimeout(self._on_timeout, delay)

    @property
    def shown(self) -> bool:
        return self._shown

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def unprompt(self, width: int) -> None:
        """Erase a shown prompt that occupies *width* columns."""
        if not self._shown:
            return
        self._write(actions.kill_line(width))
        self._shown = False

    def schedule(self, render: Callable[[], str]) -> None:
        """Redraw with ``render()`` once the output has gone quiet."""
        if self._shown:
            return
        self._render = render
        if self._timer.pending:
            self._timer.reset()
        else:
            self._timer.schedule()

    def cancel(self) -> None:
        self._timer.cancel()

    def forget(self) -> None:
        """Drop the shown state without erasing.

        Used when the display was wiped or the prompt line was committed
        with a newline.
        """
        self._timer.cancel()
        self._shown = False

    def dispose(self) -> None:
        self._timer.cancel()
        self._render = None

    def _on_timeout(self) -> None:
        render, self._render = self._render, None
        text = render() if render is not None else ""
        if text:
            self._write(text)
        self._shown = True

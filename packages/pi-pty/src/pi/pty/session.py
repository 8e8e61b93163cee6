"""PtySession: a cooked-mode line discipline over a display sink.

Input tokens from the host are decoded into editing commands that mutate the
current line and keep the display in step. Output written by the consumer
erases the prompt first and redraws it (with any partial line) once output
has gone quiet.

Events delivered to subscribers:

- ``DataEvent``  -- user input (a whole line in cooked mode, a raw token otherwise)
- ``CloseEvent`` -- the host closed the terminal; the session is unusable
- ``BreakEvent`` -- Ctrl-C was pressed (cooked mode only)
- ``EofEvent``   -- Ctrl-D (posix) or Ctrl-Z (windows) was pressed (cooked mode only)

``break`` and ``eof`` report keypresses only; reacting is up to the consumer.
No event is generated by :meth:`PtySession.dispose`.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from pi.pty import actions
from pi.pty.config import PtyOptions
from pi.pty.dispatcher import Dispatcher
from pi.pty.edit_buffer import EditBuffer
from pi.pty.errors import PtyConfigError
from pi.pty.events import CloseEvent, PtyEvent, PtyListener
from pi.pty.keys import classify
from pi.pty.prompt import PromptController
from pi.pty.terminal import Display, Host

logger = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r"\r?\n")


class PtySession:
    """Line-editing session bound to one display.

    *display* receives every string destined for the screen.
    *on_dispose* is called once when the session is disposed or closed, so
    that the host can release its side of the terminal.
    """

    def __init__(
        self,
        options: PtyOptions,
        display: Display,
        *,
        on_dispose: Callable[[], None] | None = None,
    ) -> None:
        self._options = options
        self._display: Display | None = display
        self._on_dispose = on_dispose
        self._listeners: list[PtyListener] = []
        self._buffer = EditBuffer()
        self._prompt = PromptController(self._fire, delay=options.prompt_delay)
        self._dispatcher = Dispatcher(self._fire, self._end_line, self._emit)
        self._paused = False
        self._disposing = False
        self._disposed = False
        self.reset_options(options)

    # -- properties ---------------------------------------------------------

    @property
    def options(self) -> PtyOptions:
        return self._options

    @property
    def name(self) -> str:
        return self._options.name

    @property
    def line(self) -> str:
        """The partially typed line."""
        return self._buffer.content

    @property
    def cursor(self) -> int:
        """1-based cursor position within :attr:`line`."""
        return self._buffer.cursor

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def prompt_shown(self) -> bool:
        return self._prompt.shown

    @property
    def disposed(self) -> bool:
        return self._disposed

    # -- subscribers --------------------------------------------------------

    def subscribe(self, listener: PtyListener) -> Callable[[], None]:
        """Subscribe to session events. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def remove_all_listeners(self) -> None:
        self._listeners.clear()

    def _emit(self, event: PtyEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("PtySession %s: %s listener failed", self.name, event.type)

    # -- pause / resume -----------------------------------------------------

    # While paused the terminal appears to take no input; input is dropped,
    # output is still written.
    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    # -- options ------------------------------------------------------------

    def reset_options(self, options: PtyOptions) -> None:
        """Swap prompt/mode settings and start a fresh line.

        Raises :class:`PtyConfigError` if *options* names another terminal.
        """
        if options.name != self._options.name:
            raise PtyConfigError("Reset terminal: Terminal name cannot change once created")
        self._prompt.cancel()
        self._unprompt()
        if options.prompt_delay != self._options.prompt_delay:
            self._prompt.dispose()
            self._prompt = PromptController(self._fire, delay=options.prompt_delay)
        self._options = options
        self._buffer.reset()
        self.write("\n")

    # -- input --------------------------------------------------------------

    def open(self) -> None:
        """Called by the host once the terminal surface is ready."""
        if self._disposed:
            return
        self._schedule_prompt()

    def handle_input(self, token: str) -> None:
        if self._paused or self._disposed or self._options.input_mode == "disabled":
            return
        try:
            key = classify(token, self._options.input_mode)
            self._dispatcher.dispatch(key, self._buffer, self._options)
        except Exception:
            logger.exception("PtySession %s: handle_input failed for %r", self.name, token)

    # -- output -------------------------------------------------------------

    def write(self, data: str | bytes) -> None:
        """Write consumer output, keeping the prompt out of its way."""
        if self._disposed:
            return
        try:
            self._unprompt()
            text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
            text = _NEWLINE_RE.sub("\r\n", text)
            self._fire(text)
            if text.endswith("\n"):
                self._schedule_prompt()
            else:
                self._prompt.cancel()
        except Exception:
            logger.exception("PtySession %s: write failed", self.name)

    def clear(self) -> None:
        """Clear the whole screen and scrollback and start an empty line."""
        if self._disposed:
            return
        self._fire(actions.clear_all())
        self._prompt.forget()
        self._buffer.reset()
        self._schedule_prompt()

    clear_terminal_buffer = clear

    # -- lifecycle ----------------------------------------------------------

    def handle_host_close(self) -> None:
        """The host closed the terminal surface."""
        if self._disposing or self._disposed:
            return
        self._display = None
        self._emit(CloseEvent())
        self.remove_all_listeners()
        self._release()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposing = True
        self.remove_all_listeners()
        self._display = None
        self._release()

    def _release(self) -> None:
        self._prompt.dispose()
        on_dispose, self._on_dispose = self._on_dispose, None
        if on_dispose is not None:
            try:
                on_dispose()
            except Exception:
                logger.exception("PtySession %s: releasing the host failed", self.name)
        self._disposed = True
        self._disposing = False

    # -- prompt -------------------------------------------------------------

    # The prompt is redrawn together with the remaining input.
    def _schedule_prompt(self) -> None:
        self._prompt.schedule(self._render_prompt)

    def _render_prompt(self) -> str:
        text = self._options.prompt + self._buffer.content
        if not text:
            return ""
        behind = self._buffer.length - self._buffer.cursor + 1
        return text + (actions.cursor_back(behind) if behind > 0 else "")

    def _end_line(self) -> None:
        # The prompt and typed text stay on screen as part of the output
        self._prompt.forget()
        self.write("\n")

    def _unprompt(self) -> None:
        self._prompt.unprompt(len(self._options.prompt) + self._buffer.length)

    def _fire(self, data: str) -> None:
        if self._display is not None:
            self._display.write(data)


def create_session(options: PtyOptions, host: Host) -> PtySession:
    """Create a session on *host* and start feeding it input.

    Disposing the session stops the host.
    """
    session = PtySession(options, host, on_dispose=host.stop)
    host.start(session.handle_input, session.handle_host_close)
    session.open()
    return session

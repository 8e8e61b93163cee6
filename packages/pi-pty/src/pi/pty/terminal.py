"""Display and host interfaces, plus a raw-mode stdin/stdout host.

A :class:`pi.pty.session.PtySession` only needs a :class:`Display` to write
to. A :class:`Host` additionally delivers input tokens and tells the session
when the terminal surface goes away. :class:`ProcessHost` is the concrete host
for the process's own controlling terminal.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import Callable, Protocol

from pi.pty.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"


class Display(Protocol):
    """Sink for rendered text and control sequences."""

    def write(self, data: str) -> None: ...


class Host(Display, Protocol):
    """A terminal surface that feeds input to a session."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_close: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...


class ProcessHost:
    """Host backed by ``sys.stdin``/``sys.stdout`` in raw mode.

    Input is read through an asyncio reader on stdin and cut into
    one-keypress tokens by :class:`StdinBuffer`. End of input on stdin is
    reported as a close. Set ``PI_PTY_WRITE_LOG`` to a path to append
    every write to that file.
    """

    def __init__(self) -> None:
        self._input_handler: Callable[[str], None] | None = None
        self._close_handler: Callable[[], None] | None = None
        self._stdin_buffer: StdinBuffer | None = None
        self._reader_active = False
        self._original_termios: list | None = None
        self._write_log_path: str = os.environ.get("PI_PTY_WRITE_LOG", "")

    @property
    def started(self) -> bool:
        return self._input_handler is not None

    def start(
        self,
        on_input: Callable[[str], None],
        on_close: Callable[[], None],
    ) -> None:
        """Enable raw mode and bracketed paste, then start reading stdin."""
        import termios
        import tty

        self._input_handler = on_input
        self._close_handler = on_close

        fd = sys.stdin.fileno()
        if os.isatty(fd):
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
            self._raw_write(_BRACKETED_PASTE_ENABLE)

        self._stdin_buffer = StdinBuffer(self._on_token)
        self._start_reader()

    def stop(self) -> None:
        """Restore the terminal and drop all handlers. Safe to call twice."""
        if self._stdin_buffer is not None:
            self._stdin_buffer.clear()
            self._stdin_buffer = None
        self._remove_reader()

        if self._original_termios is not None:
            import termios

            self._raw_write(_BRACKETED_PASTE_DISABLE)
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

        self._input_handler = None
        self._close_handler = None

    def write(self, data: str) -> None:
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("Cannot append to write log %s", self._write_log_path)

    # -- stdin reading ------------------------------------------------------

    def _start_reader(self) -> None:
        if self._reader_active:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("ProcessHost started without a running event loop; input disabled")
            return
        loop.add_reader(sys.stdin.fileno(), self._on_stdin_readable)
        self._reader_active = True

    def _remove_reader(self) -> None:
        if not self._reader_active:
            return
        try:
            asyncio.get_running_loop().remove_reader(sys.stdin.fileno())
        except (RuntimeError, ValueError):
            pass
        self._reader_active = False

    def _on_stdin_readable(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), 4096)
        except OSError as exc:
            logger.warning("Reading stdin failed: %s", exc)
            raw = b""

        if not raw:
            self._on_eof()
            return

        data = raw.decode("utf-8", errors="replace")
        if self._stdin_buffer is not None:
            self._stdin_buffer.process(data)

    def _on_eof(self) -> None:
        self._remove_reader()
        on_close = self._close_handler
        if on_close is not None:
            on_close()

    def _on_token(self, token: str) -> None:
        if self._input_handler is not None:
            self._input_handler(token)

    def _raw_write(self, data: str) -> None:
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            pass

"""Turn classified keys into buffer edits, display updates and events."""

from __future__ import annotations

import logging
from typing import Callable, assert_never

from pi.pty import actions
from pi.pty.config import PtyOptions
from pi.pty.edit_buffer import EditBuffer
from pi.pty.events import BreakEvent, DataEvent, EofEvent, PtyEvent
from pi.pty.keys import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ControlKey,
    CsiKey,
    Key,
    PrintableKey,
)

logger = logging.getLogger(__name__)


class Dispatcher:
    """Applies one key to an :class:`EditBuffer` according to the input mode.

    *output* receives raw control sequences for the display, *newline* ends
    the displayed line (leaving it on screen) and *emit* delivers events to
    the consumer.
    """

    def __init__(
        self,
        output: Callable[[str], None],
        newline: Callable[[], None],
        emit: Callable[[PtyEvent], None],
    ) -> None:
        self._output = output
        self._newline = newline
        self._emit = emit

    def dispatch(self, key: Key, buffer: EditBuffer, options: PtyOptions) -> None:
        mode = options.input_mode
        if mode == "cooked":
            self._dispatch_cooked(key, buffer, options)
        elif mode == "raw-echo":
            self._dispatch_raw(key, echo=True)
        elif mode == "raw":
            self._dispatch_raw(key, echo=False)
        elif mode == "disabled":
            return
        else:
            assert_never(mode)

    # -- raw modes ----------------------------------------------------------

    def _dispatch_raw(self, key: Key, *, echo: bool) -> None:
        if key.type == "enter":
            self._emit(DataEvent(key.token))
            if echo:
                self._newline()
        elif key.type == "delete":
            self._emit(DataEvent(key.token))
        elif key.type == "printable":
            if echo:
                self._output(key.text)
            self._emit(DataEvent(key.text))
        elif key.type == "csi" or key.type == "control" or key.type == "unrecognized-escape":
            # Only produced in cooked mode
            logger.debug("Ignoring %s key outside cooked mode", key.type)
        else:
            assert_never(key)

    # -- cooked mode --------------------------------------------------------

    def _dispatch_cooked(self, key: Key, buffer: EditBuffer, options: PtyOptions) -> None:
        if key.type == "enter":
            self._submit_line(buffer, options)
        elif key.type == "delete":
            self._kill_prev_char(buffer)
        elif key.type == "csi":
            self._handle_csi(key, buffer)
        elif key.type == "control":
            self._handle_control(key, buffer, options)
        elif key.type == "unrecognized-escape":
            logger.debug("Swallowed unrecognized escape sequence %r", key.token)
        elif key.type == "printable":
            self._insert(key, buffer)
        else:
            assert_never(key)

    def _submit_line(self, buffer: EditBuffer, options: PtyOptions) -> None:
        line = buffer.content + options.eol
        buffer.reset()
        self._newline()
        self._emit(DataEvent(line))

    def _handle_csi(self, key: CsiKey, buffer: EditBuffer) -> None:
        if key.letter == ARROW_RIGHT:
            self._move_right(buffer)
        elif key.letter == ARROW_LEFT:
            self._move_left(buffer)
        elif key.letter in (ARROW_UP, ARROW_DOWN):
            # No line history: up/down are accepted and ignored
            pass
        else:
            logger.debug("Swallowed unsupported CSI sequence %r", key.letter)

    def _handle_control(self, key: ControlKey, buffer: EditBuffer, options: PtyOptions) -> None:
        letter = key.letter
        if letter == "C":
            self._emit(BreakEvent())
        elif letter in ("D", "Z"):
            # Ctrl-D is end-of-file on posix, Ctrl-Z on windows; the other
            # letter is ignored. Ctrl-D never deletes the character at the cursor.
            if letter == options.eof_key:
                self._emit(EofEvent())
        elif letter == "A":
            self._move_to_start(buffer)
        elif letter == "E":
            self._move_to_end(buffer)
        elif letter == "F":
            self._move_right(buffer)
        elif letter == "B":
            self._move_left(buffer)
        elif letter == "H":
            self._kill_prev_char(buffer)
        elif letter == "K":
            self._kill_line_from_cursor(buffer)
        elif letter == "U":
            self._kill_entire_line(buffer)
        else:
            logger.debug("Swallowed unbound control key Ctrl-%s", letter)

    def _insert(self, key: PrintableKey, buffer: EditBuffer) -> None:
        text = key.text
        if not text:
            return
        start = buffer.cursor - 1
        buffer.insert(text)
        tail = buffer.content[start:]
        self._output(actions.kill_line_forward())
        self._output(tail)
        if len(tail) > len(text):
            self._output(actions.cursor_back(len(tail) - len(text)))

    # -- cursor movement ----------------------------------------------------

    def _move_left(self, buffer: EditBuffer) -> None:
        if buffer.move_by(-1):
            self._output(actions.cursor_back(1))

    def _move_right(self, buffer: EditBuffer) -> None:
        if buffer.move_by(1):
            self._output(actions.cursor_forward(1))

    def _move_to_start(self, buffer: EditBuffer) -> None:
        n = -buffer.move_by(-buffer.length)
        if n > 0:
            self._output(actions.cursor_back(n))

    def _move_to_end(self, buffer: EditBuffer) -> None:
        n = buffer.move_by(buffer.length)
        if n > 0:
            self._output(actions.cursor_forward(n))

    # -- kills --------------------------------------------------------------

    def _kill_prev_char(self, buffer: EditBuffer) -> None:
        if buffer.remove_before_cursor():
            self._output(actions.delete_prev_char())

    def _kill_line_from_cursor(self, buffer: EditBuffer) -> None:
        n = buffer.length - buffer.cursor + 1
        if n > 1:
            self._output(actions.kill_line_forward())
            buffer.truncate_at_cursor()

    def _kill_entire_line(self, buffer: EditBuffer) -> None:
        n = buffer.cursor - 1
        if n > 0:
            self._output(actions.kill_line(n))
            buffer.reset()

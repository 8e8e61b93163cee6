"""StdinBuffer splits raw stdin chunks into one-keypress tokens.

Reads from a raw-mode terminal arrive in arbitrary chunks: several keys at
once, or an escape sequence split across two reads. A :class:`PtySession`
expects exactly one logical keypress per token, so chunks are cut at key
boundaries here and partial escape sequences are held back until they
complete. A bracketed paste is delivered as a single token.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Literal

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]


def sequence_status(data: str) -> SequenceStatus:
    """Report whether *data* is a complete escape sequence."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]
    if introducer == "[":
        # CSI: parameter/intermediate bytes, then a final byte in 0x40-0x7E
        if len(data) < 3:
            return "incomplete"
        return "complete" if 0x40 <= ord(data[-1]) <= 0x7E else "incomplete"
    if introducer == "O":
        # SS3 (F1-F4, keypad arrows)
        return "complete" if len(data) >= 3 else "incomplete"
    # Meta key: ESC followed by one character
    return "complete"


def split_tokens(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete tokens.

    Returns ``(tokens, remainder)`` where the remainder is an unfinished
    escape sequence.
    """
    tokens: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            tokens.append(buffer[pos])
            pos += 1
            continue
        end = pos + 1
        while True:
            status = sequence_status(buffer[pos:end])
            if status == "complete":
                break
            if end >= len(buffer):
                return tokens, buffer[pos:]
            end += 1
        tokens.append(buffer[pos:end])
        pos = end
    return tokens, ""


class StdinBuffer:
    """Accumulates stdin data and emits whole tokens to *on_token*.

    An escape sequence still incomplete after *timeout* seconds is flushed
    as-is, so a lone ESC keypress is not held forever.
    """

    def __init__(self, on_token: Callable[[str], None], *, timeout: float = 0.01) -> None:
        self._on_token = on_token
        self._timeout = timeout
        self._buffer = ""
        self._paste_buffer: str | None = None
        self._timeout_handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> str:
        return self._buffer

    @property
    def in_paste(self) -> bool:
        return self._paste_buffer is not None

    def process(self, data: str) -> None:
        """Feed a chunk read from stdin."""
        self._cancel_timeout()
        if self._paste_buffer is not None:
            self._continue_paste(data)
            return

        self._buffer += data
        start = self._buffer.find(BRACKETED_PASTE_START)
        if start != -1:
            before = self._buffer[:start]
            rest = self._buffer[start + len(BRACKETED_PASTE_START) :]
            self._buffer = ""
            tokens, remainder = split_tokens(before)
            self._emit_all(tokens + ([remainder] if remainder else []))
            self._paste_buffer = ""
            self._continue_paste(rest)
            return

        tokens, self._buffer = split_tokens(self._buffer)
        self._emit_all(tokens)
        if self._buffer:
            self._schedule_flush()

    def flush(self) -> list[str]:
        """Return and drop whatever is held back."""
        self._cancel_timeout()
        if not self._buffer:
            return []
        held, self._buffer = self._buffer, ""
        return [held]

    def clear(self) -> None:
        self._cancel_timeout()
        self._buffer = ""
        self._paste_buffer = None

    def _continue_paste(self, data: str) -> None:
        assert self._paste_buffer is not None
        self._paste_buffer += data
        end = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end == -1:
            return
        pasted = self._paste_buffer[:end]
        remaining = self._paste_buffer[end + len(BRACKETED_PASTE_END) :]
        self._paste_buffer = None
        if pasted:
            self._emit_all([pasted])
        if remaining:
            self.process(remaining)

    def _schedule_flush(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop - flush immediately
            self._emit_all(self.flush())
            return
        self._timeout_handle = loop.call_later(self._timeout, self._flush_timeout)

    def _flush_timeout(self) -> None:
        self._timeout_handle = None
        self._emit_all(self.flush())

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def _emit_all(self, tokens: list[str]) -> None:
        for token in tokens:
            self._on_token(token)

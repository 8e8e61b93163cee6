"""Single-line edit buffer with a 1-based cursor."""

from __future__ import annotations


def insert_chars_at(text: str, chars: str, ix: int) -> str:
    """Insert *chars* into *text* before index *ix*.

    Out-of-range indices never raise: ``ix == 0`` prepends and any
    ``ix >= len(text) - 1`` appends.
    """
    if ix == 0:
        return chars + text
    if ix >= len(text) - 1:
        return text + chars
    return text[:ix] + chars + text[ix:]


def remove_char_at(text: str, ix: int) -> str:
    """Remove one character at index *ix*, with the same clamping as insertion."""
    if ix == 0:
        return text[1:]
    if ix >= len(text) - 1:
        return text[:-1]
    return text[:ix] + text[ix + 1 :]


class EditBuffer:
    """The line being edited and the cursor within it.

    ``cursor - 1`` is the zero-based insertion point, so the cursor always
    satisfies ``1 <= cursor <= len(content) + 1``.
    """

    def __init__(self) -> None:
        self._content: str = ""
        self._cursor: int = 1

    @property
    def content(self) -> str:
        return self._content

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        return len(self._content)

    @property
    def at_start(self) -> bool:
        return self._cursor == 1

    @property
    def at_end(self) -> bool:
        return self._cursor > len(self._content)

    def reset(self) -> None:
        self._content = ""
        self._cursor = 1

    def tail(self) -> str:
        """Text from the insertion point to the end of the line."""
        return self._content[self._cursor - 1 :]

    def insert(self, chars: str) -> None:
        """Splice *chars* in at the cursor and advance past them."""
        self._content = insert_chars_at(self._content, chars, self._cursor - 1)
        self._set_cursor(self._cursor + len(chars))

    def remove(self, ix: int) -> None:
        self._content = remove_char_at(self._content, ix)
        self._set_cursor(self._cursor)

    def remove_before_cursor(self) -> bool:
        """Delete the character left of the cursor; False if at the start."""
        if self._cursor <= 1:
            return False
        self._cursor -= 1
        self.remove(self._cursor - 1)
        return True

    def truncate_at_cursor(self) -> None:
        self._content = self._content[: self._cursor - 1]
        self._set_cursor(self._cursor)

    def move_by(self, delta: int) -> int:
        """Move the cursor by *delta*, clamped; returns the distance moved."""
        before = self._cursor
        self._set_cursor(self._cursor + delta)
        return self._cursor - before

    def _set_cursor(self, value: int) -> None:
        self._cursor = max(1, min(value, len(self._content) + 1))

"""Control sequences used to keep the remote display in step with edits.

Every function is pure: it only builds the string handed to the display.
"""

from __future__ import annotations

ESC = "\x1b"
CSI = ESC + "["  # control sequence introducer


def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A"


def cursor_down(n: int = 1) -> str:
    return f"{CSI}{n}B"


def cursor_forward(n: int = 1) -> str:
    return f"{CSI}{n}C"


def cursor_back(n: int = 1) -> str:
    return f"{CSI}{n}D"


def clear_all() -> str:
    """Erase the screen and scrollback, then home the cursor to 1,1."""
    return f"{CSI}2J{CSI}3J{CSI};H"


def delete_char() -> str:
    return f"{CSI}P"


def delete_prev_char() -> str:
    return cursor_back() + delete_char()


def kill_line_forward() -> str:
    return f"{CSI}K"


def kill_line(n: int = 0) -> str:
    """Move back *n* columns (if any) and erase to the end of the line."""
    return (cursor_back(n) if n else "") + kill_line_forward()

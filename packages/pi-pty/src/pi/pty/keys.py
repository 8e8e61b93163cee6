"""Classify input tokens into editing keys.

The host delivers one logical keypress (or one paste) per token. A token is
classified without any state carried between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pi.pty.config import InputMode

ESC = "\x1b"

KEY_ENTER = "\r"
KEY_DELETE = "\x7f"
KEY_BACKSPACE = "\x08"

_CONTROL_OFFSET = 0x40  # Ctrl-A (0x01) + 0x40 == "A"

# CSI final letters for the arrow keys
ARROW_UP = "A"
ARROW_DOWN = "B"
ARROW_RIGHT = "C"
ARROW_LEFT = "D"


def ctrl(letter: str) -> str:
    """Return the control character produced by Ctrl+*letter*."""
    return chr(ord(letter.upper()) - _CONTROL_OFFSET)


@dataclass(frozen=True)
class EnterKey:
    token: str = KEY_ENTER
    type: Literal["enter"] = "enter"


@dataclass(frozen=True)
class DeleteKey:
    token: str = KEY_DELETE
    type: Literal["delete"] = "delete"


@dataclass(frozen=True)
class CsiKey:
    letter: str
    type: Literal["csi"] = "csi"


@dataclass(frozen=True)
class ControlKey:
    letter: str
    type: Literal["control"] = "control"


@dataclass(frozen=True)
class UnrecognizedEscape:
    token: str
    type: Literal["unrecognized-escape"] = "unrecognized-escape"


@dataclass(frozen=True)
class PrintableKey:
    text: str
    type: Literal["printable"] = "printable"


Key = EnterKey | DeleteKey | CsiKey | ControlKey | UnrecognizedEscape | PrintableKey


def classify(token: str, mode: InputMode) -> Key:
    """Classify *token* for the given input *mode*.

    Enter and Delete are recognised in every mode. Escape sequences and
    control characters are only interpreted in ``cooked`` mode; everywhere
    else the token is passed through as printable.
    """
    if token == KEY_ENTER:
        return EnterKey()
    if token == KEY_DELETE:
        return DeleteKey()
    if mode != "cooked" or not token:
        return PrintableKey(token)

    code = ord(token[0])
    if code == 27:
        if len(token) != 3 or token[1] != "[":
            return UnrecognizedEscape(token)
        return CsiKey(token[2])
    if len(token) == 1 and code < 0x20:
        return ControlKey(chr(code + _CONTROL_OFFSET))
    return PrintableKey(token)

"""Events delivered to the consumer of a line-editing session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal


@dataclass(frozen=True)
class DataEvent:
    """User input.

    In ``cooked`` mode the payload is a whole line including its terminator;
    in the raw modes it is a single unmodified input token.
    """

    payload: str
    type: Literal["data"] = "data"


@dataclass(frozen=True)
class CloseEvent:
    """The host closed the terminal; the session is no longer usable."""

    type: Literal["close"] = "close"


@dataclass(frozen=True)
class BreakEvent:
    """The user pressed Ctrl-C (cooked mode only)."""

    type: Literal["break"] = "break"


@dataclass(frozen=True)
class EofEvent:
    """The user pressed the platform's end-of-file key (cooked mode only)."""

    type: Literal["eof"] = "eof"


PtyEvent = DataEvent | CloseEvent | BreakEvent | EofEvent

PtyListener = Callable[[PtyEvent], None]

"""pi-pty: cooked-mode line editing between a keystroke stream and a consumer."""

from pi.pty.config import (
    DEFAULT_PROMPT_DELAY,
    InputMode,
    Platform,
    PtyOptions,
    default_platform,
    options_from_env,
    parse_input_mode,
    parse_platform,
)
from pi.pty.errors import PtyConfigError, PtyError
from pi.pty.events import BreakEvent, CloseEvent, DataEvent, EofEvent, PtyEvent, PtyListener
from pi.pty.session import PtySession, create_session
from pi.pty.stdin_buffer import StdinBuffer
from pi.pty.terminal import Display, Host, ProcessHost

__all__ = [
    "DEFAULT_PROMPT_DELAY",
    "BreakEvent",
    "CloseEvent",
    "DataEvent",
    "Display",
    "EofEvent",
    "Host",
    "InputMode",
    "Platform",
    "ProcessHost",
    "PtyConfigError",
    "PtyError",
    "PtyEvent",
    "PtyListener",
    "PtyOptions",
    "PtySession",
    "StdinBuffer",
    "create_session",
    "default_platform",
    "options_from_env",
    "parse_input_mode",
    "parse_platform",
]

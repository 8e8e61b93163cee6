"""Terminal options: input mode, platform and prompt settings."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Literal, get_args

from pi.pty.errors import PtyConfigError

InputMode = Literal["cooked", "raw-echo", "raw", "disabled"]
"""How input tokens are interpreted.

- ``cooked``: full line editing, a line is delivered on Enter.
- ``raw-echo``: every token is echoed and forwarded verbatim.
- ``raw``: every token is forwarded verbatim without echo.
- ``disabled``: all input is discarded.
"""

Platform = Literal["posix", "windows"]

INPUT_MODES: tuple[InputMode, ...] = get_args(InputMode)
PLATFORMS: tuple[Platform, ...] = get_args(Platform)

DEFAULT_PROMPT_DELAY = 0.1  # seconds of quiet before the prompt is redrawn


def default_platform() -> Platform:
    return "windows" if sys.platform == "win32" else "posix"


def parse_input_mode(value: str) -> InputMode:
    normalized = value.strip().lower().replace("_", "-")
    if normalized == "rawecho":
        normalized = "raw-echo"
    if normalized not in INPUT_MODES:
        raise PtyConfigError(
            f"Unknown input mode '{value}' (expected one of: {', '.join(INPUT_MODES)})"
        )
    return normalized  # type: ignore[return-value]


def parse_platform(value: str) -> Platform:
    normalized = value.strip().lower()
    if normalized == "win32":
        normalized = "windows"
    if normalized not in PLATFORMS:
        raise PtyConfigError(
            f"Unknown platform '{value}' (expected one of: {', '.join(PLATFORMS)})"
        )
    return normalized  # type: ignore[return-value]


@dataclass(frozen=True)
class PtyOptions:
    """Options for a line-editing session.

    ``name`` identifies the terminal and cannot change once a session has been
    created with it. Everything else may be swapped via
    :meth:`pi.pty.session.PtySession.reset_options`.
    """

    name: str
    prompt: str = ""
    input_mode: InputMode = "cooked"
    platform: Platform = field(default_factory=default_platform)
    prompt_delay: float = DEFAULT_PROMPT_DELAY

    def __post_init__(self) -> None:
        if self.input_mode not in INPUT_MODES:
            raise PtyConfigError(f"Unknown input mode '{self.input_mode}'")
        if self.platform not in PLATFORMS:
            raise PtyConfigError(f"Unknown platform '{self.platform}'")
        if self.prompt_delay < 0:
            raise PtyConfigError("prompt_delay must not be negative")

    @property
    def eol(self) -> str:
        """Line terminator appended to completed lines."""
        return "\r\n" if self.platform == "windows" else "\n"

    @property
    def eof_key(self) -> str:
        """Control letter that signals end-of-file on this platform."""
        return "Z" if self.platform == "windows" else "D"

    def with_changes(self, **changes: Any) -> PtyOptions:
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PtyOptions:
        """Build options from a JSON-style mapping with camelCase keys."""
        if "name" not in data:
            raise PtyConfigError("Missing required field 'name'")
        kwargs: dict[str, Any] = {"name": str(data["name"])}
        if data.get("prompt") is not None:
            kwargs["prompt"] = str(data["prompt"])
        mode = data.get("inputMode", data.get("input_mode"))
        if mode is not None:
            kwargs["input_mode"] = parse_input_mode(str(mode))
        platform = data.get("platform")
        if platform:
            kwargs["platform"] = parse_platform(str(platform))
        delay = data.get("promptDelay", data.get("prompt_delay"))
        if delay is not None:
            kwargs["prompt_delay"] = float(delay)
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "prompt": self.prompt,
            "inputMode": self.input_mode,
            "platform": self.platform,
            "promptDelay": self.prompt_delay,
        }


def options_from_env(name: str, **overrides: Any) -> PtyOptions:
    """Build options for *name* from ``PI_PTY_*`` environment variables.

    Keyword *overrides* take precedence over the environment.
    """
    data: dict[str, Any] = {"name": name}
    if "PI_PTY_PROMPT" in os.environ:
        data["prompt"] = os.environ["PI_PTY_PROMPT"]
    if os.environ.get("PI_PTY_INPUT_MODE"):
        data["inputMode"] = os.environ["PI_PTY_INPUT_MODE"]
    if os.environ.get("PI_PTY_PLATFORM"):
        data["platform"] = os.environ["PI_PTY_PLATFORM"]
    options = PtyOptions.from_dict(data)
    return options.with_changes(**overrides) if overrides else options

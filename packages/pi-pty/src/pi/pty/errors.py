"""Exceptions raised by the line-editing session."""

from __future__ import annotations


class PtyError(Exception):
    """Base class for pi-pty errors."""


class PtyConfigError(PtyError, ValueError):
    """Raised for invalid or illegal changes to terminal options."""

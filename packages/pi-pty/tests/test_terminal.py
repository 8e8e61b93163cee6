"""Tests for pi.pty.terminal.ProcessHost that need no real terminal."""

from __future__ import annotations

from pathlib import Path

import pytest

from pi.pty import terminal
from pi.pty.stdin_buffer import StdinBuffer
from pi.pty.terminal import ProcessHost


class FakeStdin:
    def fileno(self) -> int:
        return 0


def attach(host: ProcessHost) -> tuple[list[str], list[str]]:
    """Wire handlers onto *host* without touching the real terminal."""
    tokens: list[str] = []
    closes: list[str] = []
    host._input_handler = tokens.append
    host._close_handler = lambda: closes.append("close")
    host._stdin_buffer = StdinBuffer(host._on_token)
    return tokens, closes


class TestWrite:
    def test_writes_to_stdout(self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PI_PTY_WRITE_LOG", raising=False)
        host = ProcessHost()
        host.write("hello\r\n")
        assert capsys.readouterr().out == "hello\r\n"

    def test_write_log(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        log = tmp_path / "writes.log"
        monkeypatch.setenv("PI_PTY_WRITE_LOG", str(log))
        host = ProcessHost()
        host.write("one")
        host.write("two")
        assert log.read_text() == "onetwo"
        assert capsys.readouterr().out == "onetwo"


class TestInput:
    def test_not_started(self) -> None:
        host = ProcessHost()
        assert host.started is False
        # Tokens before start are dropped
        host._on_token("a")

    def test_tokens_forwarded(self) -> None:
        host = ProcessHost()
        tokens, _ = attach(host)
        assert host.started is True
        host._on_token("x")
        assert tokens == ["x"]

    def test_stdin_chunk_split_into_tokens(self, monkeypatch: pytest.MonkeyPatch) -> None:
        host = ProcessHost()
        tokens, closes = attach(host)
        monkeypatch.setattr(terminal.sys, "stdin", FakeStdin())
        monkeypatch.setattr(terminal.os, "read", lambda fd, n: "hé\x1b[D".encode())
        host._on_stdin_readable()
        assert tokens == ["h", "é", "\x1b[D"]
        assert closes == []

    def test_end_of_input_reports_close(self, monkeypatch: pytest.MonkeyPatch) -> None:
        host = ProcessHost()
        tokens, closes = attach(host)
        monkeypatch.setattr(terminal.sys, "stdin", FakeStdin())
        monkeypatch.setattr(terminal.os, "read", lambda fd, n: b"")
        host._on_stdin_readable()
        assert closes == ["close"]
        assert tokens == []

    def test_read_error_reports_close(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def failing_read(fd: int, n: int) -> bytes:
            raise OSError("gone")

        host = ProcessHost()
        _, closes = attach(host)
        monkeypatch.setattr(terminal.sys, "stdin", FakeStdin())
        monkeypatch.setattr(terminal.os, "read", failing_read)
        host._on_stdin_readable()
        assert closes == ["close"]


class TestStop:
    def test_stop_drops_handlers_and_is_repeatable(self) -> None:
        host = ProcessHost()
        attach(host)
        host.stop()
        host.stop()
        assert host.started is False
        assert host._stdin_buffer is None

"""Tests for the pi-pty command line."""

from __future__ import annotations

import asyncio

import pytest

from pi.pty import cli

from .virtual_display import VirtualHost


class TestParseArgs:
    def test_defaults(self) -> None:
        args = cli.parse_args([])
        assert args.name == "pi-pty"
        assert args.prompt is None
        assert args.mode is None
        assert args.log_file is None
        assert args.log_level == "warning"

    def test_options(self) -> None:
        args = cli.parse_args(["--name", "shell", "--prompt", "$ ", "--mode", "raw-echo"])
        assert args.name == "shell"
        assert args.prompt == "$ "
        assert args.mode == "raw-echo"

    def test_rejects_unknown_mode(self) -> None:
        with pytest.raises(SystemExit):
            cli.parse_args(["--mode", "sideways"])


class TestRun:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PI_PTY_PROMPT", raising=False)
        monkeypatch.delenv("PI_PTY_INPUT_MODE", raising=False)
        monkeypatch.setenv("PI_PTY_PLATFORM", "posix")

    @pytest.mark.asyncio
    async def test_echoes_lines_until_eof(self, monkeypatch: pytest.MonkeyPatch) -> None:
        host = VirtualHost()
        monkeypatch.setattr(cli, "ProcessHost", lambda: host)
        task = asyncio.create_task(cli.run(cli.parse_args([])))
        await asyncio.sleep(0.01)

        host.simulate_input("h", "i", "\r")
        assert "hi\r\n" in host.output
        assert not task.done()

        host.simulate_input("\x04")
        await asyncio.wait_for(task, timeout=1)
        assert host.stop_count == 1

    @pytest.mark.asyncio
    async def test_ctrl_c_stops(self, monkeypatch: pytest.MonkeyPatch) -> None:
        host = VirtualHost()
        monkeypatch.setattr(cli, "ProcessHost", lambda: host)
        task = asyncio.create_task(cli.run(cli.parse_args(["--prompt", "$ "])))
        await asyncio.sleep(0.01)

        host.simulate_input("\x03")
        await asyncio.wait_for(task, timeout=1)
        assert "^C\r\n" in host.output
        assert host.stop_count == 1

    @pytest.mark.asyncio
    async def test_host_close_stops(self, monkeypatch: pytest.MonkeyPatch) -> None:
        host = VirtualHost()
        monkeypatch.setattr(cli, "ProcessHost", lambda: host)
        task = asyncio.create_task(cli.run(cli.parse_args([])))
        await asyncio.sleep(0.01)

        host.simulate_close()
        await asyncio.wait_for(task, timeout=1)
        assert host.stop_count == 1

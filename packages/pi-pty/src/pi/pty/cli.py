"""Entry point for the pi-pty CLI: an interactive line echo over stdin/stdout."""

from __future__ import annotations

import argparse
import asyncio
import logging

from pi.pty.config import INPUT_MODES, options_from_env, parse_input_mode
from pi.pty.events import PtyEvent
from pi.pty.session import create_session
from pi.pty.terminal import ProcessHost


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pi-pty",
        description="Line-edit input on this terminal and echo each line back",
    )
    parser.add_argument("--name", default="pi-pty", help="Terminal name (default: pi-pty)")
    parser.add_argument("--prompt", default=None, help="Prompt text (default: $PI_PTY_PROMPT or '> ')")
    parser.add_argument("--mode", default=None, choices=INPUT_MODES, help="Input mode (default: cooked)")
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> None:
    overrides: dict[str, object] = {}
    if args.prompt is not None:
        overrides["prompt"] = args.prompt
    if args.mode is not None:
        overrides["input_mode"] = parse_input_mode(args.mode)
    options = options_from_env(args.name, **overrides)
    if args.prompt is None and not options.prompt:
        options = options.with_changes(prompt="> ")

    done = asyncio.Event()
    host = ProcessHost()
    session = create_session(options, host)

    def on_event(event: PtyEvent) -> None:
        if event.type == "data":
            if options.input_mode == "cooked":
                session.write(f"{event.payload.removesuffix(options.eol)}\n")
            elif event.payload == "\x03":
                # Raw modes forward Ctrl-C as data
                done.set()
        elif event.type == "break":
            session.write("^C\n")
            done.set()
        elif event.type in ("eof", "close"):
            done.set()

    session.subscribe(on_event)
    try:
        await done.wait()
    finally:
        session.dispose()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )
    asyncio.run(run(args))


if __name__ == "__main__":
    main()

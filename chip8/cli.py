#!/usr/bin/env python3
"""Command-line front end: run a ROM headless and dump the final screen."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .config import MachineConfig
from .display import save_png, to_text
from .errors import InvalidOpcodeError, ProgramReadError, SizeError
from .interpreter import Chip8
from .runner import KeyScript, Runner
from .tracing.perfetto_tracing import DEFAULT_TRACE_PATH, tracer

logger = logging.getLogger("chip8")


def _log_beep() -> None:
    logger.info("beep")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHIP-8 interpreter (headless)")
    parser.add_argument("rom", type=Path, help="Program image to load at 0x200")
    parser.add_argument(
        "--steps", type=int, default=None, help="Number of steps to execute"
    )
    parser.add_argument(
        "--timeout-secs", type=float, default=None, help="Wall clock timeout"
    )
    parser.add_argument("--config", type=Path, help="Machine config JSON file")
    parser.add_argument("--seed", type=int, help="Seed for the RND instruction")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on invalid opcodes instead of stalling",
    )
    parser.add_argument(
        "--no-throttle",
        action="store_true",
        help="Run as fast as possible instead of holding the frame rate",
    )
    parser.add_argument(
        "--keys",
        type=str,
        default="",
        help="Scripted key events, e.g. '100:5:down,160:5:up' (key in hex)",
    )
    parser.add_argument("--save-png", type=Path, help="Save final screen as PNG")
    parser.add_argument(
        "--print-screen", action="store_true", help="Print final screen as text"
    )
    parser.add_argument(
        "--perfetto", action="store_true", help="Record a Perfetto trace"
    )
    parser.add_argument(
        "--trace-file",
        type=str,
        default=DEFAULT_TRACE_PATH,
        help="Perfetto trace path",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def _load_config(args: argparse.Namespace) -> MachineConfig:
    config = MachineConfig.load(args.config) if args.config else MachineConfig()
    config = MachineConfig.from_env(config)
    changes: dict = {}
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.strict:
        changes["strict_opcodes"] = True
    return replace(config, **changes) if changes else config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
        key_script = KeyScript.parse(args.keys)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    chip = Chip8(config, beeper=_log_beep)
    if args.perfetto:
        tracer.start(args.trace_file, step_clock=True)

    try:
        chip.load_rom(args.rom)
        runner = Runner(chip, throttle=not args.no_throttle, key_script=key_script)
        runner.run(max_steps=args.steps, timeout_secs=args.timeout_secs)
    except (SizeError, ProgramReadError, InvalidOpcodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted after %d steps", chip.cycle_count)
    finally:
        if args.perfetto:
            tracer.stop()
            logger.info("Perfetto trace written to %s", args.trace_file)

    pixels = chip.get_buffer()
    if args.save_png:
        path = save_png(pixels, args.save_png, config.on_color, config.off_color)
        logger.info("Saved screen to %s", path)
    if args.print_screen:
        print(to_text(pixels))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import MONOCHROME, parse_color


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "--rom",
        type=Path,
        required=True,
        help="Path to the CHIP-8 program image to run",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--hz",
        type=int,
        default=600,
        help="Instruction cycles executed per second (default: 600)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop on invalid opcodes and out-of-range memory accesses",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random number instruction",
    )
    parser.add_argument(
        "--foreground",
        default=None,
        help="Pixel colour as RRGGBB (default: ffffff)",
    )
    parser.add_argument(
        "--background",
        default=None,
        help="Background colour as RRGGBB (default: 000000)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"Program file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.hz <= 0:
        parser.error("--hz must be positive")

    background, foreground = MONOCHROME
    try:
        if args.background:
            background = parse_color(args.background)
        if args.foreground:
            foreground = parse_color(args.foreground)
    except ValueError as exc:
        parser.error(str(exc))

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        cycles_per_second=args.hz,
        fullscreen=args.fullscreen,
        strict_memory=args.strict,
        strict_illegal=args.strict,
        seed=args.seed,
        palette=(background, foreground),
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

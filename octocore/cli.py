"""Command line entry point."""

import argparse
from typing import Optional, Sequence

from octocore.config import EmulatorConfig
from octocore.console import run_headless, run_windowed
from octocore.logging import EmulatorLogger, LOG_LEVELS
from octocore.rendering import COLOR_SCHEMES


def build_parser() -> argparse.ArgumentParser:
    defaults = EmulatorConfig()
    parser = argparse.ArgumentParser(
        description="Run a CHIP-8 program"
    )
    parser.add_argument("rom", type=str, help="Path to the CHIP-8 ROM file")
    parser.add_argument(
        "--ipf",
        type=int,
        default=defaults.instructions_per_frame,
        help=f"Instructions executed per frame (default: {defaults.instructions_per_frame})",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=defaults.fps,
        help=f"Frames and timer ticks per second (default: {defaults.fps})",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=defaults.scale,
        help=f"Window pixels per CHIP-8 pixel (default: {defaults.scale})",
    )
    parser.add_argument(
        "--color-scheme",
        choices=sorted(COLOR_SCHEMES),
        default=defaults.color_scheme,
        help=f"Display colors (default: {defaults.color_scheme})",
    )
    parser.add_argument(
        "--fade",
        type=float,
        default=defaults.fade_factor,
        help=f"Pixel fade factor in (0, 1], 1 disables fading (default: {defaults.fade_factor})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help=f"Random number generator seed (default: {defaults.seed})",
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default=defaults.log_level,
        help=f"Console log level (default: {defaults.log_level})",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every executed instruction (needs --log-level DEBUG)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window for a fixed number of frames",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=600,
        help="Frames to run in headless mode (default: 600)",
    )
    parser.add_argument(
        "--dump-screen",
        action="store_true",
        help="Print the final screen as text in headless mode",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = EmulatorConfig(
            instructions_per_frame=args.ipf,
            fps=args.fps,
            scale=args.scale,
            color_scheme=args.color_scheme,
            fade_factor=args.fade,
            seed=args.seed,
            log_level=args.log_level,
            trace=args.trace,
        ).validate()
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 2

    logger = EmulatorLogger(log_level=config.log_level)
    if args.headless:
        return run_headless(args.rom, config, args.frames, logger, dump_screen=args.dump_screen)
    return run_windowed(args.rom, config, logger)

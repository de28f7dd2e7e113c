"""
Command line entry point for the chalbik command.

Usage:
    chalbik
    chalbik --tail-color green --head-color white --speed slow
    chalbik -l 3 --seed 42
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .colors import NAMED_COLORS, resolve_color
from .config import RainConfig, RainSpeed, parse_tail_length
from .constants import Defaults
from .decay import FadeCurve
from .errors import ChalbikError
from .screen import run_rain

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    color_names = " ".join(sorted(NAMED_COLORS))
    parser = argparse.ArgumentParser(
        prog="chalbik",
        description="Chalbik - Klingon Rain TUI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Colors:
    {color_names}
    (or a hex code such as '#33ff66')

Examples:
    chalbik                          # Red rain with yellow heads
    chalbik -t green -d white        # Classic green rain
    chalbik --speed slow -l 3        # Sparse rain with short trails

Quit: q or Esc
        """
    )
    parser.add_argument("--tail-color", "-t", default=Defaults.TAIL_COLOR,
                        help=f"Rain trail color (default: {Defaults.TAIL_COLOR})")
    parser.add_argument("--head-color", "-d", default=Defaults.HEAD_COLOR,
                        help=f"Leading drop color (default: {Defaults.HEAD_COLOR})")
    parser.add_argument("--speed", "-s", default=Defaults.SPEED,
                        help=f"Speed: slow|fast (default: {Defaults.SPEED})")
    parser.add_argument("--tail-length", "-l", default=str(int(Defaults.TAIL_LENGTH)),
                        help="Trail lifespan in seconds (default: 10)")
    parser.add_argument("--fade", choices=[c.value for c in FadeCurve],
                        default=FadeCurve.LINEAR.value,
                        help="Trail fade curve (default: linear)")
    parser.add_argument("--seed", type=int,
                        help="Random seed for repeatable rain")
    parser.add_argument("--log-file", type=str,
                        help="Write log messages to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debug messages (with --log-file)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> RainConfig:
    """Resolve parsed arguments into a RainConfig, defaulting anything invalid."""
    return RainConfig(
        tail_color=resolve_color(args.tail_color, Defaults.TAIL_COLOR),
        head_color=resolve_color(args.head_color, Defaults.HEAD_COLOR),
        speed=RainSpeed.parse(args.speed),
        tail_lifespan=parse_tail_length(args.tail_length),
        fade_curve=FadeCurve(args.fade),
    )


def setup_logging(log_file: Optional[str], verbose: bool = False):
    """Log to a file only; the terminal belongs to curses."""
    if not log_file:
        logging.getLogger("chalbik").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the chalbik command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        config = config_from_args(args)
        run_rain(config, seed=args.seed)
    except ChalbikError as e:
        logger.error(f"Rain failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

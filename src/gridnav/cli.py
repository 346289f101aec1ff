"""Entry point for the gridnav terminal demo."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from gridnav.config import apply_overrides, load_settings
from gridnav.demo import DEFAULT_GRIDS, GridDemo, GridSpec
from gridnav.keymap import NavigationKeybindingsManager
from gridnav.navigator import Navigator
from gridnav.registry import DUPLICATE_POLICIES
from gridnav.terminal import ProcessTerminal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridnav",
        description="gridnav: keyboard spatial navigation demo",
    )
    parser.add_argument(
        "--grid",
        action="append",
        type=GridSpec.parse,
        metavar="ROWSxCOLS",
        help="Add a grid (repeatable, default: 2x3 and 5x5)",
    )
    parser.add_argument(
        "--cache",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Remember the column last visited on each row",
    )
    parser.add_argument(
        "--reset-axis",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reset the column to 0 on every row change",
    )
    parser.add_argument(
        "--duplicate-policy",
        choices=DUPLICATE_POLICIES,
        default=None,
        help="How to treat two elements registered at one position",
    )
    parser.add_argument("--config", default=None, help="Settings JSON file")
    parser.add_argument("--cell-width", type=int, default=9, help="Cell width in columns (default: 9)")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=args.log_file,
    )

    settings = load_settings(args.config)
    config = apply_overrides(
        settings.navigator,
        cache=args.cache,
        reset_axis=args.reset_axis,
        duplicate_policy=args.duplicate_policy,
    )
    try:
        keybindings = NavigationKeybindingsManager(settings.keybindings)
    except ValueError as e:
        print(f"Invalid keybindings: {e}", file=sys.stderr)
        return 2

    if not sys.stdin.isatty():
        print("gridnav needs an interactive terminal", file=sys.stderr)
        return 1

    navigator = Navigator(config)
    demo = GridDemo(
        ProcessTerminal(),
        navigator,
        grids=args.grid or DEFAULT_GRIDS,
        keybindings=keybindings,
        cell_width=args.cell_width,
    )
    logger.info("Starting demo with %s", config)
    asyncio.run(demo.run())
    return 0


if __name__ == "__main__":
    sys.exit(main())

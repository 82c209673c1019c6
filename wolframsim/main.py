#!/usr/bin/env python3
"""CLI for the elementary cellular automaton simulator."""

import argparse
import curses
import logging
import sys
from typing import Optional

from .automaton import InvalidArgument, Rule
from .config import DEFAULT_DELAY, SimulationConfig, build_config
from .driver import simulate
from .render import CursesRenderer, ImageRenderer, TextRenderer
from .terminal import get_terminal_size

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def parse_rule(value: str) -> Optional[int]:
    """Rule number, or None for 'all' / -1 (cycle through every rule)."""
    if value.lower() == "all":
        return None
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid rule: {value!r}")
    return None if number == -1 else number


def configure_logging(path: str) -> logging.Handler:
    """Send package logs to ``path``."""
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("wolframsim")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def check(config: SimulationConfig, surface=None):
    errors = config.problems(surface)
    if errors:
        for error in errors:
            logger.error(error)
        fail(" ".join(errors))


def cmd_show(args):
    """Print a rule (or every rule) to the terminal."""
    terminal_size = get_terminal_size()
    config = build_config(
        args.rule, terminal_size, rows=args.rows, width=args.width, delay=args.delay
    )
    logger.info("Showing %s", config)

    if not args.color:
        renderer = TextRenderer(width=terminal_size[0])
        check(config, renderer.surface_size())
        simulate(config, renderer)
        return

    def run(stdscr):
        renderer = CursesRenderer(stdscr)
        config.validate(renderer.surface_size())
        return simulate(config, renderer)

    if not curses.wrapper(run):
        logger.info("Quit by user")


def cmd_image(args):
    """Render a rule (or every rule) to PNG files."""
    config = build_config(args.rule, get_terminal_size(), rows=args.rows, width=args.width, delay=0)
    check(config)

    renderer = ImageRenderer(output_dir=args.output, cell_size=args.cell_size)
    simulate(config, renderer)

    print(f"Saved {len(renderer.paths)} image(s) to {args.output}")


def cmd_table(args):
    """Show the lookup table of a rule."""
    if args.rule is None:
        fail("table needs a single rule number")
    rule = Rule(args.rule)

    print(f"Rule {rule.number}: {rule.to_bits()}")
    for line in rule.describe():
        print(f"  {line}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Elementary cellular automata - render Wolfram's 256 rules in a terminal"
    )
    parser.add_argument("--log", type=str, default=None, help="Write debug log to this file")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    rule_help = "Rule number 0-255, or 'all' / -1 to cycle through every rule"

    # Show command
    show_parser = subparsers.add_parser("show", help="Print rules to the terminal")
    show_parser.add_argument("rule", type=parse_rule, nargs="?", default=None, help=rule_help)
    show_parser.add_argument("-r", "--rows", type=int, default=None, help="Number of generations")
    show_parser.add_argument("-w", "--width", type=int, default=None, help="Display width (odd)")
    show_parser.add_argument("-d", "--delay", type=float, default=DEFAULT_DELAY,
                             help="Seconds between rules when cycling")
    show_parser.add_argument("-c", "--color", action="store_true", help="Colored interactive display")
    show_parser.set_defaults(func=cmd_show)

    # Image command
    image_parser = subparsers.add_parser("image", help="Save rules as PNG images")
    image_parser.add_argument("rule", type=parse_rule, help=rule_help)
    image_parser.add_argument("-r", "--rows", type=int, default=128, help="Number of generations")
    image_parser.add_argument("-w", "--width", type=int, default=255, help="Image width in cells (odd)")
    image_parser.add_argument("--cell-size", type=int, default=4, help="Cell size in pixels")
    image_parser.add_argument("-o", "--output", type=str, default="output", help="Output directory")
    image_parser.set_defaults(func=cmd_image)

    # Table command
    table_parser = subparsers.add_parser("table", help="Show a rule's lookup table")
    table_parser.add_argument("rule", type=parse_rule, help="Rule number 0-255")
    table_parser.set_defaults(func=cmd_table)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.log:
        try:
            configure_logging(args.log)
        except OSError as e:
            fail(f"cannot open log file {args.log}: {e}")

    try:
        args.func(args)
    except InvalidArgument as e:
        logger.error("%s", e)
        fail(str(e))
    except curses.error as e:
        fail(f"terminal error: {e}")


if __name__ == "__main__":
    main()

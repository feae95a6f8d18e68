"""Command-line interface for LifeClock."""

import argparse
import logging
import re
import sys
from typing import Dict, List, Optional

from .. import __version__
from ..config import LifeClockConfig
from ..live.scheduler import ManualScheduler, SchedScheduler
from ..validation.lifespan_rules import InputField
from .app import LifeClockApp
from .renderer import TerminalRenderer

logger = logging.getLogger(__name__)

_DATE_SEPARATORS = re.compile(r'[/.\-]')


def split_date(text: str) -> Optional[List[str]]:
    """Split 'DD/MM/YYYY' (or with '-' or '.') into its three parts."""
    parts = _DATE_SEPARATORS.split(text.strip())
    if len(parts) != 3:
        return None
    return parts


def build_fields(birth: str, death: str) -> Optional[Dict[InputField, str]]:
    """Map birth and death date strings onto the six input fields."""
    birth_parts = split_date(birth)
    death_parts = split_date(death)
    if birth_parts is None or death_parts is None:
        return None

    fields = [
        InputField.BIRTH_DAY, InputField.BIRTH_MONTH, InputField.BIRTH_YEAR,
        InputField.DEATH_DAY, InputField.DEATH_MONTH, InputField.DEATH_YEAR,
    ]
    return dict(zip(fields, birth_parts + death_parts))


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S',
    )


def calc_command(args: argparse.Namespace) -> int:
    """Execute the calc command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for invalid input)
    """
    fields = build_fields(args.birth, args.death)
    if fields is None:
        print("Error: dates must be given as DD/MM/YYYY", file=sys.stderr)
        return 1

    app = LifeClockApp(TerminalRenderer(), ManualScheduler())
    app.set_fields(fields)
    stats = app.run_calculation()
    app.unload()

    return 0 if stats is not None else 1


def live_command(args: argparse.Namespace) -> int:
    """Execute the live command: redraw every tick until interrupted.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for invalid input)
    """
    fields = build_fields(args.birth, args.death)
    if fields is None:
        print("Error: dates must be given as DD/MM/YYYY", file=sys.stderr)
        return 1

    try:
        config = LifeClockConfig(tick_interval=args.interval, calculation_latency=args.latency)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    scheduler = SchedScheduler()
    app = LifeClockApp(TerminalRenderer(), scheduler, config=config)
    app.set_fields(fields)

    stop_handle = None
    if args.ticks is not None:
        # Stop just after the last requested tick
        run_for = config.calculation_latency + args.ticks * config.tick_interval
        stop_handle = scheduler.call_later(run_for + config.tick_interval / 2, app.unload)

    def quit_if_rejected(stats):
        # Nothing to count down; don't wait for error annotations to expire
        if stats is None:
            scheduler.cancel(stop_handle)
            app.unload()

    app.request_calculation(on_done=quit_if_rejected)

    try:
        scheduler.run()
    except KeyboardInterrupt:
        logger.debug("Interrupted")
    finally:
        app.unload()

    return 0 if app.last_stats is not None else 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='lifeclock',
        description='Show time lived and time remaining between a birth date and a death date.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    calc_parser = subparsers.add_parser(
        'calc',
        help='Print lived and remaining time once'
    )
    calc_parser.add_argument('birth', help='Birth date (DD/MM/YYYY)')
    calc_parser.add_argument('death', help='Death date (DD/MM/YYYY)')

    live_parser = subparsers.add_parser(
        'live',
        help='Show a countdown that refreshes until interrupted'
    )
    live_parser.add_argument('birth', help='Birth date (DD/MM/YYYY)')
    live_parser.add_argument('death', help='Death date (DD/MM/YYYY)')
    live_parser.add_argument(
        '-n', '--ticks',
        type=int,
        default=None,
        help='Stop after this many refreshes (default: run until Ctrl-C)'
    )
    live_parser.add_argument(
        '-i', '--interval',
        type=float,
        default=1.0,
        help='Seconds between refreshes (default: 1.0)'
    )
    live_parser.add_argument(
        '--latency',
        type=float,
        default=0.5,
        help='Seconds before the first result is shown (default: 0.5)'
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == 'calc':
        return calc_command(args)
    elif args.command == 'live':
        return live_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())

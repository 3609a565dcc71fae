import argparse
from collections.abc import Sequence
import sys

from loguru import logger
from rich import print as rprint
from rich.markup import escape

from . import __version__
from .battery import (
    BatteryNotFoundError,
    BatteryReadError,
    BatteryRecord,
    find_battery_path,
    read_battery_info,
)
from .config import LogLevel, Settings
from .formatter import format_info, format_stats


class CommandError(Exception):
    """Raised in place of argparse's own exit so main() controls the exit code."""


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise CommandError(message)


def configure_logging(level: LogLevel) -> None:
    """Replace loguru's default sink with a stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        level=level,
    )


def load_record(settings: Settings) -> BatteryRecord:
    """
    Locate the battery and read it once.

    Raises:
        BatteryNotFoundError: If no battery exposes a status descriptor.
        BatteryReadError: If the descriptor cannot be read.
    """
    path = find_battery_path(settings)
    if path is None:
        raise BatteryNotFoundError()
    return read_battery_info(path, settings)


def stats(
    settings: Settings,
    show_icon: bool = False,
    show_tui_icon: bool = False,
    show_percentage: bool = False,
    number: bool = False,
    args: Sequence[str] = (),
) -> int:
    record = load_record(settings)
    print(
        format_stats(
            record,
            show_icon=show_icon,
            show_tui_icon=show_tui_icon,
            show_percentage=show_percentage,
            number=number,
            args=args,
        )
    )
    return 0


def info(settings: Settings) -> int:
    record = load_record(settings)
    for line in format_info(record):
        print(line)
    return 0


def tui(settings: Settings) -> int:
    """
    Run the interactive display until the battery disappears or the user quits.

    Returns:
        int: The display's return code, 1 if a battery read failed.
    """
    from .tui import BatteryApp

    app = BatteryApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        return 0
    finally:
        # The app swaps out every loguru sink while it owns the terminal
        configure_logging(settings.log_level)
    return app.return_code or 0


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="batstat", description="Battery charge level and charging state")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Stats command
    stats_parser = subparsers.add_parser("stats", aliases=["s"], help="Display battery stats")
    stats_parser.add_argument("-i", "--icon", dest="show_icon", action="store_true", help="Show battery icon")
    stats_parser.add_argument(
        "-t",
        "--tui-icon",
        "--tui",
        dest="show_tui_icon",
        action="store_true",
        help="Show tui battery icon",
    )
    stats_parser.add_argument(
        "-p", "--percentage", dest="show_percentage", action="store_true", help="Show battery percentage"
    )
    stats_parser.add_argument("-n", "--number", action="store_true", help="Show battery number only")
    stats_parser.add_argument(
        "args",
        nargs="*",
        help="Legacy tokens, pass after '--' (e.g. 'batstat stats -- -i -p')",
    )
    stats_parser.set_defaults(
        handler=lambda a, settings: stats(
            settings,
            show_icon=a.show_icon,
            show_tui_icon=a.show_tui_icon,
            show_percentage=a.show_percentage,
            number=a.number,
            args=a.args,
        )
    )

    # Info command
    info_parser = subparsers.add_parser("info", aliases=["i"], help="Display detailed battery information")
    info_parser.set_defaults(handler=lambda a, settings: info(settings))

    # TUI command
    tui_parser = subparsers.add_parser("tui", aliases=["t"], help="Live battery display, refreshed every second")
    tui_parser.set_defaults(handler=lambda a, settings: tui(settings))

    return parser


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    """
    Command-line entry point for batstat.

    Provides three commands:
    - 'stats' (s): one line of capacity and/or icon, shaped by flags
    - 'info' (i): summary line plus every raw attribute of the battery
    - 'tui' (t): terminal display refreshed once per second

    Returns:
        int: Exit code, 0 on success and 1 when no battery is found, it cannot be
            read, or the command line is invalid.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except CommandError as e:
        print(f"Error executing command: {e}")
        return 1

    settings = settings or Settings()
    if args.verbose:
        settings = settings.model_copy(update={"log_level": "DEBUG"})
    configure_logging(settings.log_level)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, settings)
    except BatteryNotFoundError as e:
        rprint(f"[bold red]{escape(str(e))}")
        return 1
    except BatteryReadError as e:
        logger.opt(exception=True).debug("Failed to read {}", e.path)
        rprint(f"[bold red]Error reading battery info: {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

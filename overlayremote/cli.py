"""overlayremote command-line interface"""

import argparse
import sys
from typing import NoReturn

from overlayremote import __version__


def arguments_parse(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="overlayremote",
        description="Translate pointer presses on a remote-control skin into media and volume commands",
    )

    parser.add_argument("--version", action="version", version=f"overlayremote {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--backend",
        type=str,
        choices=["uinput", "dryrun"],
        default=None,
        help="Output backend (overrides config). 'dryrun' only logs commands.",
    )

    parser.add_argument(
        "--volume-method",
        type=str,
        choices=["keys", "pactl"],
        default=None,
        dest="volume_method",
        help="Volume implementation (overrides config)",
    )

    parser.add_argument(
        "--device",
        type=str,
        action="append",
        default=None,
        metavar="PATH",
        help="Input device to read, e.g. /dev/input/event5 (repeatable; overrides config)",
    )

    parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        metavar="PX",
        help="Per-axis hit tolerance in pixels (overrides config)",
    )

    parser.add_argument(
        "--start-delay",
        type=float,
        default=None,
        dest="start_delay",
        metavar="SECONDS",
        help="Seconds to wait before the overlay becomes active (overrides config)",
    )

    parser.add_argument(
        "--grab",
        action="store_true",
        help="Take exclusive use of the input devices while running",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    return parser.parse_args(argv)


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None.
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def main() -> NoReturn:
    """Main entry point for the overlayremote command"""
    args = arguments_parse()

    log_level_override: str | None = logLevelOverride_get(args)
    if log_level_override is not None:
        setattr(args, "log_level", log_level_override)

    try:
        from overlayremote.host.main import host_run

        host_run(args)
        sys.exit(0)

    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

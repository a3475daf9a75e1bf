#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence

from receiptscan.runtime.remote_correction import REMOTE_CORRECTION_URL


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt OCR text interpretation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text_file|->        Parse OCR text into a structured receipt (JSON)
  serve [--host] [--port]    Start the receipt parsing HTTP server

Environment:
  RECEIPTSCAN_LOG_LEVEL      DEBUG, INFO, WARNING or ERROR
  RECEIPTSCAN_HOME           Project root holding config/parser_rules.toml
  RECEIPTSCAN_REMOTE_URL     Default remote correction service URL
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse receipt OCR text")
    parse_parser.add_argument("text_file", help="Path to OCR text file, or - for stdin")
    parse_parser.add_argument(
        "--remote-url",
        default=REMOTE_CORRECTION_URL or None,
        help="Remote correction service URL (default: $RECEIPTSCAN_REMOTE_URL, disabled if unset)",
    )
    parse_parser.add_argument("--compact", action="store_true", help="Print JSON on a single line")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start receipt parsing server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from receiptscan.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "serve":
        from receiptscan.cli.receipt import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())

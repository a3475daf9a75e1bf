"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from receiptscan.runtime import get_logger

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for parsing posted receipt text."""
    import uvicorn

    from receiptscan.runtime import receipt_server as server

    print(f"Starting receipt parser on {args.host}:{args.port}")
    print(f"Parse endpoint: http://{args.host}:{args.port}/parse")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse receipt OCR text from a file (or stdin) and print it as JSON."""
    from receiptscan.application.receipts.parse import ReceiptParseRequest, run_receipt_parse

    if args.text_file == "-":
        request = ReceiptParseRequest(text=sys.stdin.read(), remote_url=args.remote_url)
    else:
        request = ReceiptParseRequest(text_path=Path(args.text_file), remote_url=args.remote_url)

    result = run_receipt_parse(request)

    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "remote_unavailable":
        logger.warning("%s", result.error)
        print(f"Correction service unavailable, using local result: {result.error}", file=sys.stderr)

    receipt = result.receipt
    if receipt is None:
        print("Parse failed: missing receipt output.")
        sys.exit(1)

    indent = None if args.compact else 2
    print(json.dumps(receipt.to_dict(), indent=indent))

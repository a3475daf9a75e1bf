"""Receipt parse workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from receiptscan.receipt.extractor import extract_receipt
from receiptscan.receipt.remote_response import parse_remote_response
from receiptscan.runtime.parser_rules import load_receipt_parser_rules
from receiptscan.runtime.remote_correction import RemoteCorrectionUnavailable, request_remote_correction

if TYPE_CHECKING:
    from receiptscan.domain.receipt import ReceiptData
    from receiptscan.receipt.parser_rules import ReceiptParserRules

ParseStatus = Literal[
    "file_not_found",
    "parsed",
    "remote_corrected",
    "remote_unavailable",
]


@dataclass(frozen=True)
class ReceiptParseRequest:
    """Inputs for running the receipt parse workflow.

    Exactly one of ``text`` and ``text_path`` is expected; ``text`` wins when
    both are given.
    """

    text: str | None = None
    text_path: Path | None = None
    remote_url: str | None = None
    rules: ReceiptParserRules | None = None


@dataclass(frozen=True)
class ReceiptParseResult:
    """Outcome from the receipt parse workflow."""

    status: ParseStatus
    receipt: ReceiptData | None = None
    local_receipt: ReceiptData | None = None
    error: str | None = None


def run_receipt_parse(request: ReceiptParseRequest) -> ReceiptParseResult:
    """Run parse flow: read text -> local extraction -> optional remote correction."""
    if request.text is not None:
        raw_text = request.text
    elif request.text_path is not None and request.text_path.is_file():
        raw_text = request.text_path.read_text(encoding="utf-8", errors="replace")
    else:
        return ReceiptParseResult(
            status="file_not_found",
            error=f"Receipt text file not found: {request.text_path}",
        )

    rules = request.rules or load_receipt_parser_rules()
    local_receipt = extract_receipt(raw_text, rules)

    if not request.remote_url:
        return ReceiptParseResult(status="parsed", receipt=local_receipt, local_receipt=local_receipt)

    try:
        reply = request_remote_correction(raw_text, request.remote_url)
    except RemoteCorrectionUnavailable as exc:
        return ReceiptParseResult(
            status="remote_unavailable",
            receipt=local_receipt,
            local_receipt=local_receipt,
            error=str(exc),
        )

    return ReceiptParseResult(
        status="remote_corrected",
        receipt=parse_remote_response(reply, rules),
        local_receipt=local_receipt,
    )

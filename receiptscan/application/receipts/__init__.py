"""Receipt workflows."""

from receiptscan.application.receipts.parse import ReceiptParseRequest, ReceiptParseResult, run_receipt_parse

__all__ = [
    "ReceiptParseRequest",
    "ReceiptParseResult",
    "run_receipt_parse",
]

"""Core domain models for receiptscan.

- LineItem: one purchased item with a canonical price
- ReceiptData: the structured record produced from OCR text

Usage:
    from receiptscan.domain import LineItem, ReceiptData
"""

from receiptscan.domain.receipt import ZERO_PRICE, LineItem, ReceiptData

__all__ = [
    "LineItem",
    "ReceiptData",
    "ZERO_PRICE",
]

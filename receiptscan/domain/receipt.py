"""Data models for receipt text interpretation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ZERO_PRICE = "$0.00"


@dataclass(frozen=True)
class LineItem:
    """A single purchased item on a receipt."""

    name: str
    # Always canonical: "$" followed by a two-decimal amount.
    price: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "price": self.price}


@dataclass(frozen=True)
class ReceiptData:
    """Structured record extracted from one receipt's OCR text."""

    merchant: str = ""
    date: str = ""
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    subtotal: str = ZERO_PRICE
    tax: str = ZERO_PRICE
    total: str = ZERO_PRICE

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible shape shared with the remote correction service."""
        return {
            "merchant": self.merchant,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "total": self.total,
        }

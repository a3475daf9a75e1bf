"""Interpret replies from a remote receipt-correction service.

A reply is free text. When it embeds a JSON object (bare or inside a
Markdown code fence) with the receipt fields, those fields are used after
the same normalization the local extractor applies. Otherwise the reply is
treated as corrected OCR text and run through the local pipeline.
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from receiptscan.domain.receipt import LineItem, ReceiptData

from .extractor import extract_receipt
from .money import format_price
from .parser_rules import ReceiptParserRules

logger = logging.getLogger(f"receiptscan.{__name__}")

RECEIPT_FIELDS = ("merchant", "date", "items", "subtotal", "tax", "total")

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _json_candidates(text: str) -> list[str]:
    candidates = [m.group(1).strip() for m in _CODE_FENCE.finditer(text)]
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start : end + 1])
    return candidates


def find_embedded_json(text: str) -> dict[str, Any] | None:
    """Return the first JSON object embedded in ``text`` that looks like a receipt."""
    for candidate in _json_candidates(text or ""):
        try:
            payload = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(payload, dict) and any(key in payload for key in RECEIPT_FIELDS):
            return payload
    return None


def _text_field(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return " ".join(str(value).split())


def _price_field(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return format_price("" if value is None else str(value))


def _items_field(payload: Mapping[str, Any]) -> tuple[LineItem, ...]:
    raw_items = payload.get("items")
    if not isinstance(raw_items, list):
        return tuple()
    items: list[LineItem] = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            continue
        name = _text_field(raw, "name")
        if not name:
            continue
        items.append(LineItem(name=name, price=_price_field(raw, "price")))
    return tuple(items)


def receipt_from_payload(payload: Mapping[str, Any]) -> ReceiptData:
    """Build a ReceiptData from a decoded JSON object, defaulting missing fields."""
    return ReceiptData(
        merchant=_text_field(payload, "merchant"),
        date=_text_field(payload, "date"),
        items=_items_field(payload),
        subtotal=_price_field(payload, "subtotal"),
        tax=_price_field(payload, "tax"),
        total=_price_field(payload, "total"),
    )


def parse_remote_response(text: str, rules: ReceiptParserRules | None = None) -> ReceiptData:
    """Turn a remote correction reply into a receipt; never raises."""
    payload = find_embedded_json(text)
    if payload is None:
        logger.debug("Remote reply carries no receipt JSON; re-running local extraction")
        return extract_receipt(text, rules)
    return receipt_from_payload(payload)

"""Receipt text interpretation pipeline.

Raw OCR text -> normalized lines -> per-line classification -> ReceiptData.

Usage:
    from receiptscan.receipt import extract_receipt

    receipt = extract_receipt(ocr_text)
    print(receipt.merchant, receipt.total)
"""

from .classifier import LineClassification, LineRole, RoleKeywords, classify_line
from .dictionary import DictionaryEntry, ReceiptDictionary, build_dictionary
from .extractor import extract_lines, extract_receipt
from .money import find_prices, format_price
from .normalizer import normalize_line, normalize_lines
from .parser_rules import (
    ParserRulesError,
    ReceiptParserRules,
    build_receipt_parser_rules,
    get_default_parser_rules,
)
from .remote_response import parse_remote_response
from .token_corrector import correct_token, edit_distance

__all__ = [
    "DictionaryEntry",
    "LineClassification",
    "LineRole",
    "ParserRulesError",
    "ReceiptDictionary",
    "ReceiptParserRules",
    "RoleKeywords",
    "build_dictionary",
    "build_receipt_parser_rules",
    "classify_line",
    "correct_token",
    "edit_distance",
    "extract_lines",
    "extract_receipt",
    "find_prices",
    "format_price",
    "get_default_parser_rules",
    "normalize_line",
    "normalize_lines",
    "parse_remote_response",
]

"""Shared pytest fixtures for receiptscan tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from receiptscan.receipt.parser_rules import ReceiptParserRules, get_default_parser_rules
from receiptscan.runtime.parser_rules import load_receipt_parser_rules
from receiptscan.runtime.paths import reset_paths


@pytest.fixture
def default_rules() -> ReceiptParserRules:
    """Built-in rules only; no TOML files involved."""
    return get_default_parser_rules()


@pytest.fixture
def project_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point RECEIPTSCAN_HOME at an empty temp project and drop cached rules/paths."""
    monkeypatch.setenv("RECEIPTSCAN_HOME", str(tmp_path))
    reset_paths()
    load_receipt_parser_rules.cache_clear()
    yield tmp_path
    reset_paths()
    load_receipt_parser_rules.cache_clear()

"""Tests for the unified CLI entrypoint."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

import receiptscan.application.receipts.parse as parse_workflow
from receiptscan.application.receipts.parse import ReceiptParseRequest, ReceiptParseResult
from receiptscan.cli.main import main
from receiptscan.domain.receipt import ReceiptData

RAW = "SAFEWAY\nBANANAS 1.29\nMILK 3.49\nSUBTOTAL 4.78\nTAX 0.38\nTOTAL 5.16"


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "parse" in capsys.readouterr().out


def test_parse_file_prints_receipt_json(
    tmp_path: Path,
    project_home: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    text_file = tmp_path / "receipt.txt"
    text_file.write_text(RAW, encoding="utf-8")

    assert main(["parse", str(text_file)]) == 0

    receipt = json.loads(capsys.readouterr().out)
    assert receipt["merchant"] == "SAFEWAY"
    assert receipt["items"] == [{"name": "BANANAS", "price": "$1.29"}, {"name": "MILK", "price": "$3.49"}]
    assert receipt["total"] == "$5.16"


def test_parse_compact_output(tmp_path: Path, project_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    text_file = tmp_path / "receipt.txt"
    text_file.write_text(RAW, encoding="utf-8")

    assert main(["parse", str(text_file), "--compact"]) == 0

    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert json.loads(out)["tax"] == "$0.38"


def test_parse_stdin(
    project_home: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("SAFEWAY\nMILK 3.49\nTOTA1 3.49\n"))

    assert main(["parse", "-"]) == 0

    assert json.loads(capsys.readouterr().out)["total"] == "$3.49"


def test_parse_missing_file_exits_1(tmp_path: Path, project_home: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", str(tmp_path / "missing.txt")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_parse_passes_remote_url_to_workflow(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    captured: dict[str, ReceiptParseRequest] = {}

    def fake_run(request: ReceiptParseRequest) -> ReceiptParseResult:
        captured["request"] = request
        return ReceiptParseResult(
            status="remote_unavailable",
            receipt=ReceiptData(merchant="SAFEWAY"),
            error="Failed to connect to correction service",
        )

    monkeypatch.setattr(parse_workflow, "run_receipt_parse", fake_run)

    text_file = tmp_path / "receipt.txt"
    assert main(["parse", str(text_file), "--remote-url", "http://corrector.local"]) == 0

    request = captured["request"]
    assert request.text_path == text_file
    assert request.remote_url == "http://corrector.local"
    out, err = capsys.readouterr()
    assert json.loads(out)["merchant"] == "SAFEWAY"
    assert "unavailable" in err

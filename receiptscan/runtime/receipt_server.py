"""FastAPI server that turns posted OCR text into structured receipts."""

import json
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from receiptscan.receipt.extractor import extract_receipt
from receiptscan.receipt.remote_response import parse_remote_response
from receiptscan.runtime.logging import get_logger
from receiptscan.runtime.parser_rules import load_receipt_parser_rules
from receiptscan.runtime.remote_correction import (
    REMOTE_CORRECTION_URL,
    RemoteCorrectionUnavailable,
    request_remote_correction_async,
)

logger = get_logger(__name__)

app = FastAPI(title="Receipt Text Parser")


async def _read_parse_body(request: Request) -> tuple[str, bool] | None:
    """Return (text, use_remote) from a JSON or plain-text body, or None if invalid."""
    body = await request.body()
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            payload = json.loads(body or b"null")
        except ValueError:
            return None
        if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
            return None
        return payload["text"], bool(payload.get("remote", False))

    try:
        return body.decode("utf-8"), False
    except UnicodeDecodeError:
        return None


@app.post("/parse")
async def parse_receipt_text(request: Request) -> JSONResponse:
    """Parse posted OCR text; JSON bodies are {"text": "...", "remote": false}."""
    parsed = await _read_parse_body(request)
    if parsed is None:
        return JSONResponse(
            {"status": "error", "message": 'Expected a text/plain body or JSON {"text": "..."}'},
            status_code=400,
        )
    text, use_remote = parsed

    rules = load_receipt_parser_rules()
    receipt = extract_receipt(text, rules)
    response: dict[str, Any] = {"status": "parsed"}

    if use_remote:
        if not REMOTE_CORRECTION_URL:
            logger.warning("Remote correction requested but RECEIPTSCAN_REMOTE_URL is not set")
            response = {"status": "remote_unavailable", "message": "Remote correction is not configured"}
        else:
            try:
                reply = await request_remote_correction_async(text, REMOTE_CORRECTION_URL)
            except RemoteCorrectionUnavailable as e:
                response = {"status": "remote_unavailable", "message": str(e)}
            else:
                receipt = parse_remote_response(reply, rules)
                response = {"status": "remote_corrected"}

    logger.info("Parsed receipt text (%d chars): %d items", len(text), len(receipt.items))
    response["receipt"] = receipt.to_dict()
    return JSONResponse(response)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)

"""HTTP client for the optional remote receipt-correction service.

``request_remote_correction`` blocks and serves the CLI workflow;
``request_remote_correction_async`` is awaited by the HTTP server so a slow
correction service does not stall other requests.
"""

import os
import time

import httpx

from receiptscan.runtime.logging import get_logger

logger = get_logger(__name__)

REMOTE_CORRECTION_URL = os.environ.get("RECEIPTSCAN_REMOTE_URL", "")
DEFAULT_TIMEOUT = 60.0


class RemoteCorrectionUnavailable(RuntimeError):
    """Raised when the correction service cannot be reached or returns an error."""


def _reply_text(response: httpx.Response) -> str:
    """Prefer the ``text`` field of a JSON reply; otherwise the raw body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and isinstance(payload.get("text"), str):
        return payload["text"]
    return response.text


def _checked_reply(response: httpx.Response, start_time: float) -> str:
    elapsed_time = time.time() - start_time
    logger.info("Correction service returned in %.2f seconds", elapsed_time)

    if response.status_code != 200:
        # Body is not logged: it may echo receipt contents.
        logger.error("Correction service error: %s", response.status_code)
        raise RemoteCorrectionUnavailable(f"Correction service error: {response.status_code}")

    return _reply_text(response)


def _unreachable(url: str, e: httpx.RequestError) -> RemoteCorrectionUnavailable:
    logger.error("Failed to connect to correction service at %s: %s", url, e)
    return RemoteCorrectionUnavailable(f"Failed to connect to correction service: {e}")


def request_remote_correction(
    raw_text: str,
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.Client | None = None,
) -> str:
    """
    Send raw OCR text to the correction service and return its reply text.

    The reply is free text that may embed a receipt JSON object; see
    ``receiptscan.receipt.remote_response``.

    Raises:
        RemoteCorrectionUnavailable: connection failure or non-200 status.
    """
    url = url.rstrip("/")
    logger.info("Sending receipt text to correction service at %s...", url)

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout)
    try:
        start_time = time.time()
        response = http.post(f"{url}/correct", json={"text": raw_text})
        return _checked_reply(response, start_time)
    except httpx.RequestError as e:
        raise _unreachable(url, e) from e
    finally:
        if owns_client:
            http.close()


async def request_remote_correction_async(
    raw_text: str,
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Non-blocking ``request_remote_correction`` for use inside an event loop."""
    url = url.rstrip("/")
    logger.info("Sending receipt text to correction service at %s...", url)

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=timeout)
    try:
        start_time = time.time()
        response = await http.post(f"{url}/correct", json={"text": raw_text})
        return _checked_reply(response, start_time)
    except httpx.RequestError as e:
        raise _unreachable(url, e) from e
    finally:
        if owns_client:
            await http.aclose()

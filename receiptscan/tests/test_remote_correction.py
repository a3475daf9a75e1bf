"""Tests for the remote correction HTTP client."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from receiptscan.runtime.remote_correction import (
    RemoteCorrectionUnavailable,
    request_remote_correction,
    request_remote_correction_async,
)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_posts_text_and_returns_json_text_field() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"text": "SAFEWAY\nTOTAL 5.16"})

    with _client(handler) as client:
        reply = request_remote_correction("SAFEWAY\nTOTA1 5.16", "http://corrector.local/", client=client)

    assert reply == "SAFEWAY\nTOTAL 5.16"
    assert seen == {"method": "POST", "path": "/correct", "body": {"text": "SAFEWAY\nTOTA1 5.16"}}


def test_plain_text_reply_is_returned_as_is() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="SAFEWAY\nTOTAL 1.00")

    with _client(handler) as client:
        assert request_remote_correction("raw", "http://corrector.local", client=client) == "SAFEWAY\nTOTAL 1.00"


def test_json_reply_without_text_field_returns_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"merchant": "SAFEWAY", "total": "1.00"})

    with _client(handler) as client:
        reply = request_remote_correction("raw", "http://corrector.local", client=client)
    assert json.loads(reply) == {"merchant": "SAFEWAY", "total": "1.00"}


def test_error_status_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    with _client(handler) as client:
        with pytest.raises(RemoteCorrectionUnavailable, match="503"):
            request_remote_correction("raw", "http://corrector.local", client=client)


def test_connection_failure_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(RemoteCorrectionUnavailable) as excinfo:
            request_remote_correction("raw", "http://corrector.local", client=client)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_passed_client_is_left_open() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="ok")

    client = _client(handler)
    request_remote_correction("raw", "http://corrector.local", client=client)
    assert not client.is_closed
    client.close()


def test_async_request_returns_json_text_field() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/correct"
        assert json.loads(request.content) == {"text": "SAFEWAY\nTOTA1 5.16"}
        return httpx.Response(200, json={"text": "SAFEWAY\nTOTAL 5.16"})

    async def scenario() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await request_remote_correction_async("SAFEWAY\nTOTA1 5.16", "http://corrector.local/", client=client)

    assert asyncio.run(scenario()) == "SAFEWAY\nTOTAL 5.16"


def test_async_error_status_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    async def scenario() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await request_remote_correction_async("raw", "http://corrector.local", client=client)

    with pytest.raises(RemoteCorrectionUnavailable, match="503"):
        asyncio.run(scenario())


def test_async_connection_failure_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario() -> str:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await request_remote_correction_async("raw", "http://corrector.local", client=client)

    with pytest.raises(RemoteCorrectionUnavailable) as excinfo:
        asyncio.run(scenario())
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

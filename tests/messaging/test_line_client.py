from __future__ import annotations

import json

import httpx
import pytest

from src.attendance_bot.attendance_bot.core.exceptions import UpstreamError
from src.attendance_bot.attendance_bot.messaging.line_client import LineMessagingClient
from src.attendance_bot.attendance_bot.messaging.signature import compute_signature, verify_signature


def _client(handler) -> LineMessagingClient:
    http = httpx.Client(
        base_url="https://line.test/v2/bot",
        headers={"Authorization": "Bearer token"},
        transport=httpx.MockTransport(handler),
    )
    return LineMessagingClient("token", client=http)


def test_reply_and_push_payloads():
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append((request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={})

    client = _client(handler)
    client.reply("tok", "hello")
    client.push("U1", "hi there")

    assert sent[0] == ("/v2/bot/message/reply", {"replyToken": "tok", "messages": [{"type": "text", "text": "hello"}]})
    assert sent[1] == ("/v2/bot/message/push", {"to": "U1", "messages": [{"type": "text", "text": "hi there"}]})


def test_non_2xx_raises_upstream_error():
    client = _client(lambda request: httpx.Response(400, json={"message": "Invalid reply token"}))
    with pytest.raises(UpstreamError):
        client.reply("expired", "hello")


def test_signature_roundtrip_and_mismatch():
    body = b'{"events": []}'
    sig = compute_signature("secret", body)

    assert verify_signature("secret", body, sig)
    assert not verify_signature("other", body, sig)
    assert not verify_signature("secret", body, None)
    assert not verify_signature(None, body, sig)

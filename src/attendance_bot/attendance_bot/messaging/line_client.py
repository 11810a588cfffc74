"""HTTP client for the LINE Messaging API (reply and push only)."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

LINE_API_BASE = "https://api.line.me/v2/bot"

# LINE rejects text messages longer than this.
MAX_TEXT_LENGTH = 5000


class Messenger(Protocol):
    def reply(self, reply_token: str, text: str) -> None:
        raise NotImplementedError

    def push(self, user_id: str, text: str) -> None:
        raise NotImplementedError


def _text_message(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text[:MAX_TEXT_LENGTH]}


class LineMessagingClient:
    def __init__(
        self,
        access_token: Optional[str],
        *,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._client = client or httpx.Client(
            base_url=LINE_API_BASE,
            headers={
                "Authorization": f"Bearer {access_token or ''}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, payload: dict[str, Any]) -> None:
        try:
            response = self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"LINE {path} failed: {exc}") from exc
        if response.status_code >= 300:
            raise UpstreamError(f"LINE {path} returned {response.status_code}: {response.text[:200]}")

    def reply(self, reply_token: str, text: str) -> None:
        self._post("/message/reply", {"replyToken": reply_token, "messages": [_text_message(text)]})

    def push(self, user_id: str, text: str) -> None:
        self._post("/message/push", {"to": user_id, "messages": [_text_message(text)]})

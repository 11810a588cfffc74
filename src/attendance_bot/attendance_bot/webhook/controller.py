from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from flask import Flask, abort, jsonify, request

from ..container import Container
from ..core.exceptions import UpstreamError
from ..messaging.signature import verify_signature
from ..router.service import InboundEvent, RouterResult

logger = logging.getLogger(__name__)

GENERIC_ERROR_REPLY = "Sorry, something went wrong while handling your message. Please try again later."
MAX_WORKERS = 8


def parse_text_events(payload: Any) -> list[InboundEvent]:
    """Keep only text-message events that carry a user id."""
    if not isinstance(payload, dict):
        return []
    events: list[InboundEvent] = []
    for raw in payload.get("events") or []:
        if not isinstance(raw, dict) or raw.get("type") != "message":
            continue
        message = raw.get("message") or {}
        user_id = (raw.get("source") or {}).get("userId")
        if message.get("type") != "text" or not user_id:
            continue
        events.append(
            InboundEvent(
                user_id=str(user_id),
                text=str(message.get("text") or ""),
                reply_token=raw.get("replyToken"),
            )
        )
    return events


def _deliver(container: Container, event: InboundEvent, result: RouterResult) -> None:
    messenger = container.messenger
    if result.reply and event.reply_token:
        try:
            messenger.reply(event.reply_token, result.reply)
        except UpstreamError as exc:
            logger.warning("Reply to %s failed: %s", event.user_id, exc)
    for push in result.pushes:
        try:
            messenger.push(push.user_id, push.text)
        except UpstreamError as exc:
            logger.warning("Push to %s failed: %s", push.user_id, exc)


def handle_event(container: Container, event: InboundEvent) -> None:
    try:
        result = container.router.handle(event)
    except Exception:
        logger.exception("Unhandled error for event from %s", event.user_id)
        result = RouterResult(reply=GENERIC_ERROR_REPLY)
    _deliver(container, event, result)


def register(app: Flask, container: Container, *, executor: Optional[ThreadPoolExecutor] = None) -> None:
    pool = executor or ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix="webhook")

    @app.route("/webhook", methods=["POST"], endpoint="webhook")
    def webhook():
        body = request.get_data()
        signature = request.headers.get("X-Line-Signature")
        if not verify_signature(container.channel_secret, body, signature):
            logger.warning("Rejected webhook delivery with a bad signature")
            abort(400)

        try:
            container.calendar_service.refresh_if_stale(container.clock())
        except Exception:
            logger.exception("Holiday refresh failed")

        events = parse_text_events(request.get_json(silent=True))
        # Wait for every event so the delivery is acknowledged only after handling.
        list(pool.map(lambda e: handle_event(container, e), events))
        return "ok", 200

    @app.route("/healthz", methods=["GET"], endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"})

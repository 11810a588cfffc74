from __future__ import annotations

import json

import httpx

from src.attendance_bot.attendance_bot.intents.classifier import (
    GeminiIntentClassifier,
    parse_classifier_output,
)
from src.attendance_bot.attendance_bot.intents.model import (
    AddBonusIntent,
    ClarificationIntent,
    ClockIntent,
    LeaveRequestIntent,
    OffSiteIntent,
    OtherIntent,
    SalaryQueryIntent,
)


def test_leave_request_payload():
    raw = '```json\n{"intent": "LeaveRequest", "leaveType": "personal", "dates": ["2025-07-01~2025-07-02"], "description": "family"}\n```'
    intent = parse_classifier_output(raw, "text")
    assert intent == LeaveRequestIntent(leave_type="personal", dates=("2025-07-01~2025-07-02",), description="family")


def test_simple_labels():
    assert parse_classifier_output('{"intent": "ClockAction"}') == ClockIntent()
    assert parse_classifier_output('{"intent": "OffSiteVisit", "description": "site"}') == OffSiteIntent("site")
    assert parse_classifier_output({"intent": "SalaryQuery"}) == SalaryQueryIntent()
    assert parse_classifier_output('{"intent": "AddBonus"}') == AddBonusIntent()


def test_clarification_is_relayed():
    assert parse_classifier_output("[clarify] Which dates?") == ClarificationIntent("Which dates?")


def test_garbage_fails_open_to_other():
    assert parse_classifier_output("not json at all", "hi") == OtherIntent("hi")
    assert parse_classifier_output('{"intent": "Dance"}', "hi") == OtherIntent("hi")
    assert parse_classifier_output("[1, 2]", "hi") == OtherIntent("hi")
    assert parse_classifier_output(None, "hi") == OtherIntent("hi")


def _gemini(handler) -> GeminiIntentClassifier:
    client = httpx.Client(base_url="https://gemini.test/v1beta", transport=httpx.MockTransport(handler))
    return GeminiIntentClassifier("key", model="test-model", client=client)


def test_gemini_classifier_reads_candidate_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["prompt"] = json.loads(request.content)["contents"][0]["parts"][0]["text"]
        body = {"candidates": [{"content": {"parts": [{"text": '{"intent": "ClockAction"}'}]}}]}
        return httpx.Response(200, json=body)

    assert _gemini(handler).classify("clock in") == ClockIntent()
    assert seen["path"] == "/v1beta/models/test-model:generateContent"
    assert seen["key"] == "key"
    assert "clock in" in seen["prompt"]


def test_gemini_failure_is_other():
    classifier = _gemini(lambda request: httpx.Response(500, text="boom"))
    assert classifier.classify("clock in") == OtherIntent("clock in")


def test_missing_api_key_is_other():
    assert GeminiIntentClassifier(None).classify("clock in") == OtherIntent("clock in")

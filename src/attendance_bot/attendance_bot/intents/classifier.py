"""Intent classification of free-text messages.

The classifier is an external model; whatever it returns is parsed into the
closed ``Intent`` variant and every failure collapses to ``OtherIntent``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Protocol

import httpx

from .model import (
    AddBonusIntent,
    ClarificationIntent,
    ClockIntent,
    Intent,
    LeaveRequestIntent,
    OffSiteIntent,
    OtherIntent,
    SalaryQueryIntent,
)

logger = logging.getLogger(__name__)

CLARIFY_PREFIX = "[clarify]"
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

PROMPT_TEMPLATE = """You are the attendance assistant of a small office. Classify the message and
answer with JSON only, in this shape:
{{
  "intent": "LeaveRequest|ClockAction|OffSiteVisit|SalaryQuery|AddBonus|Other",
  "leaveType": "personal",
  "dates": ["2025-07-01", "2025-07-02"],
  "description": "family matters"
}}
Use ISO dates (YYYY-MM-DD); a range may be written as "YYYY-MM-DD~YYYY-MM-DD".
If a leave request lacks its dates, answer with "{clarify}" followed by a short question instead of JSON.
Message: "{message}"
"""

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class IntentClassifier(Protocol):
    def classify(self, text: str) -> Intent:
        raise NotImplementedError


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    v = str(value).strip()
    return v or None


def _dates(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(v).strip() for v in value if str(v).strip())


def intent_from_payload(payload: Any, text: str = "") -> Intent:
    if not isinstance(payload, dict):
        return OtherIntent(raw_text=text)

    label = str(payload.get("intent") or "").strip()
    if label == "LeaveRequest":
        return LeaveRequestIntent(
            leave_type=_str_or_none(payload.get("leaveType")),
            dates=_dates(payload.get("dates")),
            description=_str_or_none(payload.get("description")),
        )
    if label == "ClockAction":
        return ClockIntent()
    if label == "OffSiteVisit":
        return OffSiteIntent(description=_str_or_none(payload.get("description")))
    if label == "SalaryQuery":
        return SalaryQueryIntent()
    if label == "AddBonus":
        return AddBonusIntent()
    return OtherIntent(raw_text=text)


def parse_classifier_output(raw: Any, text: str = "") -> Intent:
    """Map raw model output (JSON text or an already-decoded dict) to an intent."""
    if isinstance(raw, dict):
        return intent_from_payload(raw, text)
    if not isinstance(raw, str):
        return OtherIntent(raw_text=text)

    body = raw.strip()
    if body.startswith(CLARIFY_PREFIX):
        question = body[len(CLARIFY_PREFIX):].strip()
        return ClarificationIntent(question=question) if question else OtherIntent(raw_text=text)

    body = _FENCE.sub("", body).strip()
    try:
        payload = json.loads(body)
    except ValueError:
        logger.warning("Classifier returned non-JSON output: %.200s", raw)
        return OtherIntent(raw_text=text)
    return intent_from_payload(payload, text)


class GeminiIntentClassifier:
    """Calls the Gemini ``generateContent`` REST endpoint; fails open to ``OtherIntent``."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gemini-1.5-pro",
        timeout: float = 15.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = client or httpx.Client(base_url=GEMINI_API_BASE, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def _generate(self, text: str) -> str:
        prompt = PROMPT_TEMPLATE.format(clarify=CLARIFY_PREFIX, message=text.replace('"', "'"))
        response = self._client.post(
            f"/models/{self._model}:generateContent",
            params={"key": self._api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        response.raise_for_status()
        data = response.json()
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(str(p.get("text", "")) for p in parts)

    def classify(self, text: str) -> Intent:
        if not self._api_key:
            return OtherIntent(raw_text=text)
        try:
            raw = self._generate(text)
        except Exception as exc:
            logger.warning("Intent classifier failed: %s", exc)
            return OtherIntent(raw_text=text)
        return parse_classifier_output(raw, text)


__all__ = [
    "IntentClassifier",
    "GeminiIntentClassifier",
    "parse_classifier_output",
    "intent_from_payload",
    "CLARIFY_PREFIX",
]

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Push:
    """Out-of-band message to another user (not tied to the inbound reply)."""

    user_id: str
    text: str

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Optional


def compute_signature(channel_secret: str, body: bytes) -> str:
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(channel_secret: Optional[str], body: bytes, signature: Optional[str]) -> bool:
    """Check the ``X-Line-Signature`` header against the raw request body."""
    if not channel_secret or not signature:
        return False
    return hmac.compare_digest(compute_signature(channel_secret, body), signature.strip())

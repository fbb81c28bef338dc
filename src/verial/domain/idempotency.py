"""Idempotency and rate-limit key builders.

Keys are colon-separated segments; an empty or missing segment renders
as ``none`` so keys stay parseable. When a caller has no resource id,
a SHA-256 of the request payload stands in for it.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

EMPTY_SEGMENT = "none"


def _segment(value: str | None) -> str:
    return value if value else EMPTY_SEGMENT


def hash_payload(payload: Any) -> str:
    """Hex SHA-256 of *payload*; strings hash as-is, anything else as canonical JSON."""
    if isinstance(payload, str):
        normalized = payload
    else:
        normalized = json.dumps(
            payload if payload is not None else {},
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def _resource(resource_id: str | None, payload: Any) -> str:
    if resource_id is not None:
        return _segment(resource_id)
    return _segment(hash_payload(payload) if payload else None)


def booking_idempotency_key(
    action: str,
    user_id: str | None,
    booking_id: str | None = None,
    payload: Any = None,
) -> str:
    """``booking:<action>:<user>:<booking id or payload hash>``."""
    return f"booking:{_segment(action)}:{_segment(user_id)}:{_resource(booking_id, payload)}"


def message_idempotency_key(
    thread_id: str,
    message_id: str | None = None,
    payload: Any = None,
) -> str:
    """``msg:<thread>:<message id or payload hash>``."""
    return f"msg:{_segment(thread_id)}:{_resource(message_id, payload)}"


def notification_idempotency_key(event: str, booking_id: str | None, user_id: str | None) -> str:
    """``notify:<event>:<booking>:<user>``."""
    return f"notify:{_segment(event)}:{_segment(booking_id)}:{_segment(user_id)}"


def rate_limit_key(resource: str, user_id: str | None = None, ip: str | None = None) -> str:
    """``rl:<resource>:u:<user>`` for signed-in users, else ``rl:<resource>:ip:<ip>``."""
    if user_id:
        return f"rl:{resource}:u:{user_id}"
    return f"rl:{resource}:ip:{ip.strip() if ip and ip.strip() else 'unknown'}"

"""Tests for idempotency and rate-limit key builders."""

from __future__ import annotations

import hashlib

from verial.domain.idempotency import (
    booking_idempotency_key,
    hash_payload,
    message_idempotency_key,
    notification_idempotency_key,
    rate_limit_key,
)


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class TestHashPayload:
    def test_string_hashed_verbatim(self) -> None:
        assert hash_payload("hello") == _sha256("hello")

    def test_key_order_irrelevant(self) -> None:
        assert hash_payload({"a": 1, "b": 2}) == hash_payload({"b": 2, "a": 1})

    def test_canonical_json(self) -> None:
        assert hash_payload({"b": [1, 2], "a": "x"}) == _sha256('{"a":"x","b":[1,2]}')

    def test_none_hashes_as_empty_object(self) -> None:
        assert hash_payload(None) == _sha256("{}")


class TestBookingKey:
    def test_with_booking_id(self) -> None:
        key = booking_idempotency_key("create", "user_1", "booking_1")
        assert key == "booking:create:user_1:booking_1"

    def test_payload_hash_stands_in(self) -> None:
        key = booking_idempotency_key("create", "user_1", None, {"foo": "bar"})
        assert key == f"booking:create:user_1:{hash_payload({'foo': 'bar'})}"

    def test_missing_segments(self) -> None:
        assert booking_idempotency_key("create", None) == "booking:create:none:none"
        assert booking_idempotency_key("create", "", "") == "booking:create:none:none"

    def test_booking_id_beats_payload(self) -> None:
        key = booking_idempotency_key("pay", "u", "b1", {"amount": 100})
        assert key == "booking:pay:u:b1"


class TestMessageKey:
    def test_payload_hash(self) -> None:
        assert message_idempotency_key("t1", None, "hello") == f"msg:t1:{_sha256('hello')}"

    def test_message_id(self) -> None:
        assert message_idempotency_key("t1", "m1") == "msg:t1:m1"


class TestNotificationKey:
    def test_segments(self) -> None:
        assert (
            notification_idempotency_key("booking.paid", "b1", None)
            == "notify:booking.paid:b1:none"
        )


class TestRateLimitKey:
    def test_user_wins(self) -> None:
        assert rate_limit_key("messages", "u1", "1.2.3.4") == "rl:messages:u:u1"

    def test_ip_fallback(self) -> None:
        assert rate_limit_key("messages", None, " 1.2.3.4 ") == "rl:messages:ip:1.2.3.4"

    def test_unknown(self) -> None:
        assert rate_limit_key("messages") == "rl:messages:ip:unknown"
        assert rate_limit_key("messages", "", "  ") == "rl:messages:ip:unknown"

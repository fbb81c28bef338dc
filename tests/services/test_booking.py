"""Tests for BookingService."""

from __future__ import annotations

from verial.config.settings import VerialSettings
from verial.services.booking import BookingService


class TestCheckTransition:
    def test_allowed(self, settings: VerialSettings) -> None:
        result = BookingService(settings).check_transition("pending", "accepted")
        assert result.ok
        assert result.data == {
            "lifecycle": "booking",
            "current": "pending",
            "target": "accepted",
            "allowed": True,
        }

    def test_legacy_alias_normalized(self, settings: VerialSettings) -> None:
        result = BookingService(settings).check_transition("confirmed", "paid")
        assert result.ok
        assert result.data["current"] == "accepted"

    def test_invalid(self, settings: VerialSettings) -> None:
        result = BookingService(settings).check_transition("pending", "paid")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_TRANSITION"
        assert result.error.detail["allowed"] == ["accepted", "declined", "canceled_customer"]

    def test_unknown_status(self, settings: VerialSettings) -> None:
        result = BookingService(settings).check_transition("pending", "teleported")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_STATUS"
        assert result.error.detail == {"status": "teleported"}

    def test_job_lifecycle(self, settings: VerialSettings) -> None:
        service = BookingService(settings)
        assert service.check_transition("open", "assigned", job=True).ok
        result = service.check_transition("open", "completed", job=True)
        assert result.error is not None
        assert result.error.detail["lifecycle"] == "job"


class TestListTransitions:
    def test_successors(self, settings: VerialSettings) -> None:
        result = BookingService(settings).list_transitions("accepted")
        assert result.ok
        assert result.data["transitions"] == BookingService(settings).list_transitions(
            "confirmed"
        ).data["transitions"]
        assert result.data["terminal"] is False

    def test_terminal(self, settings: VerialSettings) -> None:
        result = BookingService(settings).list_transitions("completed")
        assert result.data["transitions"] == []
        assert result.data["terminal"] is True

    def test_unknown(self, settings: VerialSettings) -> None:
        result = BookingService(settings).list_transitions("nope", job=True)
        assert result.error is not None
        assert result.error.code == "UNKNOWN_STATUS"

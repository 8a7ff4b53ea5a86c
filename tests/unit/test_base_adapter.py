"""Unit tests for EmailRelayAdapter base class."""

from typing import Any

import pytest

from catering_inquiry_service.adapters.base_adapter import EmailRelayAdapter


class RecordingRelayAdapter(EmailRelayAdapter):
    """Concrete implementation that records delivered payloads."""

    def __init__(self) -> None:
        super().__init__("recording")
        self.sent: list[dict[str, Any]] = []

    def build_payload(self, subject: str, name: str, email: str, message: str) -> dict[str, Any]:
        return {"subject": subject, "from": f"{name} <{email}>", "body": message}

    async def send_message(self, payload: dict[str, Any]) -> bool:
        self.sent.append(payload)
        return True


@pytest.mark.unit
class TestEmailRelayAdapter:
    """Test suite for EmailRelayAdapter abstract base class."""

    def test_concrete_adapter_can_be_instantiated(self) -> None:
        """Test that concrete implementation can be instantiated."""
        adapter = RecordingRelayAdapter()
        assert adapter.relay_name == "recording"

    def test_build_payload_must_be_implemented(self) -> None:
        """Test that build_payload must be implemented by subclasses."""

        class IncompleteAdapter(EmailRelayAdapter):
            async def send_message(self, payload: dict[str, Any]) -> bool:
                return True

        with pytest.raises(TypeError):
            IncompleteAdapter("incomplete")  # type: ignore

    def test_send_message_must_be_implemented(self) -> None:
        """Test that send_message must be implemented by subclasses."""

        class IncompleteAdapter(EmailRelayAdapter):
            def build_payload(
                self, subject: str, name: str, email: str, message: str
            ) -> dict[str, Any]:
                return {}

        with pytest.raises(TypeError):
            IncompleteAdapter("incomplete")  # type: ignore

    @pytest.mark.asyncio
    async def test_payload_round_trip(self) -> None:
        """Test that a built payload is handed to send_message unchanged."""
        adapter = RecordingRelayAdapter()

        payload = adapter.build_payload("Hi", "Alex", "alex@example.com", "Hello there")
        result = await adapter.send_message(payload)

        assert result is True
        assert adapter.sent == [
            {"subject": "Hi", "from": "Alex <alex@example.com>", "body": "Hello there"}
        ]

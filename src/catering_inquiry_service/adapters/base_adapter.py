"""Base adapter for email relay integrations.

This module defines the abstract base class that email relay adapters must
implement. Expected delivery failures are reported as False rather than
raised; only a missing relay configuration raises.
"""

from abc import ABC, abstractmethod
from typing import Any


class RelayConfigurationError(Exception):
    """Raised when the relay cannot be used because it is not configured."""


class EmailRelayAdapter(ABC):
    """Abstract base class for email relay adapters.

    The adapter follows a simple error handling pattern:
    - send_message returns False on any transport or relay failure
    - send_message raises RelayConfigurationError if credentials are missing
    - The submission layer decides what the user sees
    """

    def __init__(self, relay_name: str) -> None:
        """Initialize the relay adapter.

        Args:
            relay_name: Name of the relay service (e.g., 'web3forms')
        """
        self.relay_name = relay_name

    @abstractmethod
    def build_payload(self, subject: str, name: str, email: str, message: str) -> dict[str, Any]:
        """Assemble the relay-specific request body.

        Args:
            subject: Email subject line
            name: Name of the person submitting the form
            email: Reply-to address of the person submitting the form
            message: Freeform message body

        Returns:
            dict: Relay-specific payload

        Raises:
            RelayConfigurationError: If the relay credentials are not configured
        """
        pass

    @abstractmethod
    async def send_message(self, payload: dict[str, Any]) -> bool:
        """Deliver a payload built by build_payload.

        Args:
            payload: Relay-specific request body

        Returns:
            bool: True if the relay accepted the message, False otherwise
        """
        pass

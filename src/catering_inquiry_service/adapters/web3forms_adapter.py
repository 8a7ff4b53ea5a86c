"""Web3Forms email relay adapter.

This adapter forwards form submissions to the Web3Forms API, which emails
them to the restaurant's inbox.
"""

import logging
import time
from typing import Any

import httpx

from catering_inquiry_service.adapters.base_adapter import (
    EmailRelayAdapter,
    RelayConfigurationError,
)
from catering_inquiry_service.observability.metrics import record_relay_call

logger = logging.getLogger(__name__)

WEB3FORMS_ENDPOINT = "https://api.web3forms.com/submit"


class Web3FormsAdapter(EmailRelayAdapter):
    """Adapter for the Web3Forms submission API.

    A single POST per message; no retries. The response body is expected to
    be JSON of the form {"success": bool, "message": str}.
    """

    def __init__(self, access_key: str | None, endpoint: str = WEB3FORMS_ENDPOINT) -> None:
        """Initialize Web3Forms adapter.

        Args:
            access_key: Web3Forms access key, None when not configured
            endpoint: Submission endpoint URL
        """
        super().__init__("web3forms")
        self.access_key = access_key
        self.endpoint = endpoint

    def build_payload(self, subject: str, name: str, email: str, message: str) -> dict[str, Any]:
        """Assemble the Web3Forms JSON body.

        Raises:
            RelayConfigurationError: If no access key is configured
        """
        if not self.access_key:
            raise RelayConfigurationError("Web3Forms access key not configured")

        return {
            "access_key": self.access_key,
            "subject": subject,
            "name": name,
            "email": email,
            "message": message,
        }

    async def send_message(self, payload: dict[str, Any]) -> bool:
        """POST the payload to Web3Forms.

        Args:
            payload: Body built by build_payload

        Returns:
            bool: True if Web3Forms reported success, False otherwise
        """
        start = time.monotonic()
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.RequestError as e:
            logger.error(f"Network error contacting Web3Forms: {e}")
            return False
        finally:
            record_relay_call(self.relay_name, time.monotonic() - start)

        if response.status_code != 200:
            logger.error(f"Web3Forms HTTP error: {response.status_code} {response.text}")
            return False

        try:
            result = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse Web3Forms response: {e}")
            return False

        if not isinstance(result, dict) or not result.get("success"):
            detail = result.get("message") if isinstance(result, dict) else None
            logger.error(f"Web3Forms rejected submission: {detail or 'Unknown error'}")
            return False

        logger.info(f"Web3Forms accepted submission: {payload.get('subject')}")
        return True

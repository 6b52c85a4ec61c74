"""
Contact Service

Relays contact form submissions to the configured form-processing
endpoint when the server-side relay is enabled. Without the relay the
browser posts straight to the endpoint and this service is unused.
"""

import logging

import httpx

from portfolio.exceptions import ContactRelayError
from portfolio.schemas.contact import ContactMessage

logger = logging.getLogger(__name__)


class ContactService:
    """Forwards a validated ContactMessage to the form endpoint."""

    def __init__(
        self,
        endpoint: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    async def submit(self, message: ContactMessage) -> int:
        """
        POST the message as form data.

        Returns:
            The upstream HTTP status code (2xx)

        Raises:
            ContactRelayError: on timeout, connection failure or non-2xx reply
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint,
                    data=message.model_dump(mode="json"),
                    headers={"Accept": "application/json"},
                )
        except httpx.TimeoutException as exc:
            logger.warning("Contact relay timed out after %ss", self.timeout)
            raise ContactRelayError("Contact form endpoint timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("Contact relay request error: %s", exc)
            raise ContactRelayError(f"Contact form endpoint unreachable: {exc}") from exc

        if not response.is_success:
            logger.warning("Contact relay rejected with status %s", response.status_code)
            raise ContactRelayError(
                f"Contact form endpoint returned {response.status_code}",
                upstream_status=response.status_code,
            )

        logger.info("Contact message relayed (status=%s)", response.status_code)
        return response.status_code

import logging
from typing import Optional

import httpx

from app.core.config import EmailChannelConfig
from app.core.exceptions import EmailDispatchError
from app.services.notification_content import EmailMessage

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class EmailDispatchService:
    """Send lead alerts through the Resend HTTP API."""

    def __init__(
        self,
        config: EmailChannelConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def send(self, message: EmailMessage) -> Optional[str]:
        """Deliver *message* to the configured roofer address.

        Returns the Resend message id when the API reports one.

        Raises:
            EmailDispatchError: On timeout, transport failure or a
                non-2xx response.
        """
        payload = {
            "from": self._config.from_address,
            "to": [self._config.to_address],
            "subject": message.subject,
            "html": message.html,
        }
        headers = {"Authorization": f"Bearer {self._config.api_key}"}

        logger.info("Attempting to send lead email to %s", self._config.to_address)
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    RESEND_EMAILS_URL, json=payload, headers=headers
                )
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise EmailDispatchError("Resend request timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise EmailDispatchError(
                f"Resend returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise EmailDispatchError(f"Resend unreachable: {exc}") from exc

        message_id = None
        try:
            body = response.json()
        except ValueError:
            logger.debug("Resend response had no JSON body")
        else:
            if isinstance(body, dict):
                message_id = body.get("id")
        logger.info("Lead email sent (id=%s)", message_id)
        return message_id

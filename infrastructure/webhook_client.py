"""
HTTP client for the workout-generation webhook.

The webhook is an external automation (n8n) that turns user preferences into
a plan. Every request is signed with a short-lived service token and bounded
by a timeout; failures are surfaced as UpstreamError and never retried.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from application.exceptions import ConfigurationError, UpstreamError
from backend.auth import create_service_token
from backend.settings import Settings

logger = logging.getLogger(__name__)


class WorkoutWebhookClient:
    """
    HTTP client for the workout-generation webhook.

    Configuration is taken once from Settings at construction time.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the webhook client.

        Args:
            settings: Application settings (webhook URL, signing secret, timeouts)
            transport: Optional httpx transport, used by tests
        """
        self._settings = settings
        self._url = settings.n8n_webhook_url
        self._transport = transport

    async def send_preferences(self, payload: Dict[str, Any]) -> Any:
        """
        Relay a raw preference payload and return the response body verbatim.

        Args:
            payload: Preference data to forward

        Returns:
            Decoded JSON body, or the raw text if the body is not JSON

        Raises:
            ConfigurationError: If no webhook URL is configured
            UpstreamError: On timeout, connection failure or non-2xx response
        """
        response = await self._post(payload, self._settings.webhook_send_timeout_seconds)
        try:
            return response.json()
        except ValueError:
            return response.text

    async def regenerate_plan(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Request a regenerated plan from the webhook.

        Args:
            payload: Stored preferences plus the user's template catalog

        Returns:
            Decoded JSON object describing the new plan

        Raises:
            ConfigurationError: If no webhook URL is configured
            UpstreamError: On timeout, connection failure, non-2xx response
                           or a body that is not a JSON object
        """
        response = await self._post(
            payload, self._settings.webhook_regenerate_timeout_seconds
        )
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("Webhook returned a non-JSON response") from e

        # n8n "respond to webhook" nodes wrap single items in a list
        if isinstance(data, list) and len(data) == 1:
            data = data[0]
        if not isinstance(data, dict):
            raise UpstreamError("Webhook returned an unexpected response shape")
        return data

    async def _post(self, payload: Dict[str, Any], timeout: float) -> httpx.Response:
        if not self._url:
            logger.error("N8N_WEBHOOK_URL is not configured")
            raise ConfigurationError("Webhook URL not configured")

        headers = {
            "Authorization": f"Bearer {create_service_token(self._settings)}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=timeout, transport=self._transport
            ) as client:
                response = await client.post(self._url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"Webhook timeout after {timeout}s: {e}")
            raise UpstreamError(f"Webhook request timed out after {timeout:g}s") from e
        except httpx.HTTPError as e:
            logger.error(f"Webhook unavailable: {e}")
            raise UpstreamError(f"Webhook request failed: {e}") from e

        if response.is_success:
            return response

        logger.error(f"Webhook error: {response.status_code} - {response.text}")
        raise UpstreamError(
            f"Webhook responded with {response.status_code}: {response.text}"
        )

"""
Plan Generation Webhook Interface (Port).

Defines the abstract interface for the outbound webhook so use cases can
be tested with an in-memory fake.
"""
from typing import Protocol, Dict, Any


class PlanWebhook(Protocol):
    """Outbound client for the workout-generation automation webhook."""

    async def send_preferences(self, payload: Dict[str, Any]) -> Any:
        """
        Relay a raw preference payload and return the webhook's body verbatim.

        Raises:
            ConfigurationError: If no webhook URL is configured
            UpstreamError: On timeout, connection failure or non-2xx response
        """
        ...

    async def regenerate_plan(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Request a regenerated plan.

        Returns:
            Decoded JSON object with ``workouts`` and optionally
            ``newExerciseTemplates`` and ``description``

        Raises:
            ConfigurationError: If no webhook URL is configured
            UpstreamError: On timeout, connection failure, non-2xx response
                           or a body that is not a JSON object
        """
        ...

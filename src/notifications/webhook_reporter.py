"""Failure reporter that posts to an HTTP webhook."""

from datetime import datetime
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class WebhookFailureReporter:
    """Posts job failure events to a webhook endpoint."""

    def __init__(
        self,
        url: str,
        *,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize webhook reporter.

        Args:
            url: Webhook URL
            api_key: Optional bearer token
            http_client: Optional HTTP client for testing
        """
        self._url = url
        self._api_key = api_key
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def channel_name(self) -> str:
        """Return channel name for this reporter."""
        return "webhook"

    async def report(self, job_id: str, error: BaseException) -> None:
        """Post the failure event. Delivery problems are only logged."""
        await self.send(job_id, error)

    async def send(self, job_id: str, error: BaseException) -> bool:
        """Send failure event to the webhook.

        Args:
            job_id: Id of the failed job
            error: Exception raised by the job action

        Returns:
            True if sent successfully, False otherwise
        """
        payload = self._build_payload(job_id, error)
        headers = {}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        client = self._http_client or httpx.AsyncClient()
        try:
            response = await client.post(
                self._url,
                json=payload,
                headers=headers,
                timeout=10.0,
            )
            if response.status_code not in (200, 201, 202, 204):
                logger.warning(
                    f"Webhook rejected failure of job {job_id}: HTTP {response.status_code}"
                )
                return False
            return True
        except httpx.HTTPError as e:
            logger.warning(f"Could not report failure of job {job_id}: {e}")
            return False
        finally:
            if self._owns_client and not self._http_client:
                await client.aclose()

    def _build_payload(self, job_id: str, error: BaseException) -> dict:
        return {
            "job_id": job_id,
            "error": str(error),
            "error_type": type(error).__name__,
            "timestamp": datetime.now().isoformat(),
        }

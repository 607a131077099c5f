"""
Client for the external lead list processor (n8n workflow webhook).
"""
from typing import Optional
import httpx
from loguru import logger
from landhud_api.core import config
from landhud_api.core.exceptions import NotificationError
from landhud_api.models.dto.lead_list_dto import ProcessorNotification


class ProcessorClient:
    """Sends new lead lists to the external processor."""

    def __init__(self, http_client: Optional[httpx.Client] = None):
        self._http_client = http_client

    @property
    def webhook_url(self) -> str:
        return config.settings.lead_list_webhook_url

    def notify(self, payload: ProcessorNotification) -> None:
        """
        POST a lead list to the processor webhook.

        No client-side timeout is applied; the hosting platform's request
        ceiling bounds the call.

        Args:
            payload: Notification body

        Raises:
            NotificationError: On a transport error or a non-2xx response
        """
        body = payload.model_dump()
        try:
            if self._http_client is not None:
                response = self._http_client.post(self.webhook_url, json=body)
            else:
                with httpx.Client(timeout=None) as client:
                    response = client.post(self.webhook_url, json=body)
        except httpx.HTTPError as e:
            raise NotificationError(f"Failed to reach processor webhook: {str(e)}") from e

        if not response.is_success:
            raise NotificationError(
                f"Processor webhook returned status {response.status_code}",
                status_code=response.status_code
            )

    def notify_detached(self, payload: ProcessorNotification) -> None:
        """
        Fire-and-forget wrapper around notify.

        Failures go to the log only. The record stays in processing and is
        reconciled by hand (or deleted) if the processor never hears of it.
        """
        try:
            self.notify(payload)
        except NotificationError as e:
            if e.status_code is not None:
                logger.warning(f"[Upload] Processor webhook returned non-OK status {e.status_code} for record {payload.record_id}")
            else:
                logger.error(f"[Upload] Failed to trigger processor webhook for record {payload.record_id}: {e.message}")
            return

        logger.info(f"[Upload] Triggered processor webhook for record {payload.record_id}")

"""Webhook notifier — implements NotifierPort by POSTing {subject, body} as JSON."""

from __future__ import annotations

import logging

import httpx

from ticketflow.application.ports.notifier_port import Notification, NotifierPort
from ticketflow.config import settings
from ticketflow.domain.errors import NotificationError

logger = logging.getLogger(__name__)


class WebhookNotifier(NotifierPort):
    """One shared AsyncClient per notifier; close it with ``aclose()`` on shutdown."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._url = url or settings.notification_webhook_url
        if not self._url:
            raise ValueError("WebhookNotifier requires a URL (NOTIFICATION_WEBHOOK_URL)")
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.notification_timeout_seconds
        )

    async def publish(self, notification: Notification) -> None:
        try:
            resp = await self._client.post(
                self._url,
                json={"subject": notification.subject, "body": notification.body},
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"Notification webhook returned {e.response.status_code}",
                {"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise NotificationError(f"Notification webhook request failed: {e}") from e

        logger.debug("Webhook accepted notification '%s'", notification.subject)

    async def aclose(self) -> None:
        await self._client.aclose()

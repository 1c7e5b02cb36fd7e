"""HTTP event producers for the audit log and the three integrations.

Each producer POSTs a JSON event envelope to its configured URL and reports
acceptance as a boolean.  Producers never raise on transport or HTTP errors:
the failure is logged and ``False`` is returned, leaving the decision of
what to do with it to the caller.  An empty URL disables the producer.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel

from app.core.config import settings
from app.core.logging import LogPriority, log_error

logger = logging.getLogger(__name__)


class EventProducer:
    """Fire-and-forget sender of one kind of event."""

    def __init__(self, name: str, url: str, timeout: float | None = None) -> None:
        self.name = name
        self.url = url
        self.timeout = timeout if timeout is not None else settings.PRODUCER_TIMEOUT_SECONDS

    async def produce(self, event: BaseModel) -> bool:
        if not self.url:
            logger.warning("event_producer_not_configured", extra={"producer": self.name})
            return False

        payload = event.model_dump(mode="json", by_alias=True)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            log_error(
                logger,
                "event_producer_failed",
                exc,
                LogPriority.medium,
                producer=self.name,
            )
            return False

        logger.debug("event_produced", extra={"producer": self.name})
        return True


def get_audit_log_producer() -> EventProducer:
    return EventProducer("audit_log", settings.AUDIT_LOG_PRODUCER_URL)


def get_google_sheet_producer() -> EventProducer:
    return EventProducer("google_sheet", settings.GOOGLE_SHEET_PRODUCER_URL)


def get_active_campaign_producer() -> EventProducer:
    return EventProducer("active_campaign", settings.ACTIVE_CAMPAIGN_PRODUCER_URL)


def get_hubspot_producer() -> EventProducer:
    return EventProducer("hubspot", settings.HUBSPOT_PRODUCER_URL)

"""Integration fan-out: forward a freshly written profile to external producers.

Google Sheets receives a row for every profile; ActiveCampaign and Hubspot
only receive contacts that gave marketing consent.  A kind is attempted only
when the organization's plan allows it and the caller has the integration
switched on.  Sends run as independent tasks; each kind's outcome is
captured separately and never affects the outcome of the write.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from datetime import datetime
from typing import Any

from app.core.config import settings
from app.core.logging import LogPriority, log_error
from app.models.candidate_profile import CandidateProfile
from app.models.enums import IntegrationKind
from app.models.events import IntegrationEvent
from app.models.payment_plan import PaymentPlan
from app.models.user import UserContext
from app.services.payment_plans import is_integration_allowed
from app.services.producers import (
    get_active_campaign_producer,
    get_google_sheet_producer,
    get_hubspot_producer,
)

logger = logging.getLogger(__name__)

GOOGLE_SHEET_EVENT = "GoogleSheetIntegrationEvent"
ACTIVE_CAMPAIGN_EVENT = "ActiveCampaignIntegrationEvent"
HUBSPOT_EVENT = "HubspotIntegrationEvent"


def format_date_time(value: datetime) -> str:
    """Render *value* as ``YYYY-MM-DD HH:MM:SS``."""
    return value.strftime("%Y-%m-%d %H:%M:%S")


def _text(value: Any) -> str:
    return str(value) if value else ""


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def build_google_sheet_row(profile: CandidateProfile) -> list[str]:
    """Return the spreadsheet row for *profile*, in column order."""
    return [
        _text(profile.id),
        _text(profile.first_name),
        _text(profile.last_name),
        _text(profile.id_number),
        _text(profile.telephone_number),
        _text(profile.email_address),
        _text(profile.physical_address),
        _yes_no(profile.marketing_consent),
        _yes_no(profile.covid19_consent),
        _text(profile.username),
        format_date_time(profile.modified_date) if profile.modified_date else "",
    ]


def build_contact(
    profile: CandidateProfile,
    organization_id: str,
    tag_name: str,
) -> dict[str, str]:
    """Return the marketing contact payload shared by ActiveCampaign and Hubspot."""
    return {
        "firstName": _text(profile.first_name),
        "lastName": _text(profile.last_name),
        "email": _text(profile.email_address),
        "phone": _text(profile.telephone_number),
        "organizationId": organization_id,
        "activeCampaignTagName": tag_name,
    }


# ---------------------------------------------------------------------------
# Senders
# ---------------------------------------------------------------------------

async def send_to_google(profile: CandidateProfile, organization_id: str) -> bool:
    event = IntegrationEvent(
        event_name=GOOGLE_SHEET_EVENT,
        data={
            "sheetName": settings.GOOGLE_SHEET_NAME,
            "values": build_google_sheet_row(profile),
            "organizationId": organization_id,
        },
    )
    return await get_google_sheet_producer().produce(event)


async def send_to_active_campaign(
    profile: CandidateProfile,
    organization_id: str,
    tag_name: str,
) -> bool:
    event = IntegrationEvent(
        event_name=ACTIVE_CAMPAIGN_EVENT,
        data=build_contact(profile, organization_id, tag_name),
    )
    return await get_active_campaign_producer().produce(event)


async def send_to_hubspot(
    profile: CandidateProfile,
    organization_id: str,
    tag_name: str,
) -> bool:
    event = IntegrationEvent(
        event_name=HUBSPOT_EVENT,
        data=build_contact(profile, organization_id, tag_name),
    )
    return await get_hubspot_producer().produce(event)


# ---------------------------------------------------------------------------
# Fan-out
# ---------------------------------------------------------------------------

def _is_enabled(kind: IntegrationKind, plan: PaymentPlan, user: UserContext) -> bool:
    toggles = user.active_integrations
    if toggles is None:
        return False
    return is_integration_allowed(kind, plan) and bool(getattr(toggles, kind.value))


async def fan_out(
    profile: CandidateProfile,
    user: UserContext,
    plan: PaymentPlan,
) -> dict[str, bool]:
    """Send *profile* to every enabled integration.

    Returns the outcome per attempted kind; kinds that were gated out are
    absent from the result.
    """
    organization_id = str(user.organization_id)
    sends: dict[IntegrationKind, Awaitable[bool]] = {}

    if _is_enabled(IntegrationKind.google, plan, user):
        sends[IntegrationKind.google] = send_to_google(profile, organization_id)

    if profile.marketing_consent is True:
        tag_name = user.active_campaign_tag_name
        if _is_enabled(IntegrationKind.active_campaign, plan, user):
            sends[IntegrationKind.active_campaign] = send_to_active_campaign(
                profile, organization_id, tag_name
            )
        if _is_enabled(IntegrationKind.hubspot, plan, user):
            sends[IntegrationKind.hubspot] = send_to_hubspot(
                profile, organization_id, tag_name
            )

    if not sends:
        return {}

    outcomes = await asyncio.gather(*sends.values(), return_exceptions=True)

    results: dict[str, bool] = {}
    for kind, outcome in zip(sends, outcomes):
        if isinstance(outcome, BaseException):
            log_error(
                logger,
                "integration_send_failed",
                outcome,
                LogPriority.medium,
                integration=kind.value,
                profile_id=str(profile.id),
            )
            results[kind.value] = False
        else:
            results[kind.value] = bool(outcome)
            if not outcome:
                logger.warning(
                    "integration_send_rejected",
                    extra={"integration": kind.value, "profile_id": str(profile.id)},
                )
    return results

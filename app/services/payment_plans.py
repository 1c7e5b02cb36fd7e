"""Plan gate: resolve an organization's payment plan and its integration allowances.

The plan is reached through the ``organizations`` row, whose
``payment_plan`` column holds the subscribed ``plan_number``.
"""

from __future__ import annotations

import logging

from supabase import Client

from app.core.config import settings
from app.core.logging import log_error
from app.db.supabase import get_supabase
from app.models.enums import IntegrationKind
from app.models.payment_plan import Organization, PaymentPlan
from app.models.user import UserContext
from app.services.errors import (
    BusinessRuleError,
    OrganizationNotFoundError,
    PaymentPlanNotFoundError,
)

logger = logging.getLogger(__name__)

_ALLOWANCE_FIELDS: dict[IntegrationKind, str] = {
    IntegrationKind.google: "allow_google_integration",
    IntegrationKind.active_campaign: "allow_active_campaign_integration",
    IntegrationKind.hubspot: "allow_hubspot_integration",
}


def get_payment_plan(user: UserContext, client: Client | None = None) -> PaymentPlan:
    """Return the payment plan of the caller's organization.

    *client* lets the repository resolve the plan on the store client it is
    already using.  Raises ``OrganizationNotFoundError`` or
    ``PaymentPlanNotFoundError`` when either lookup comes back empty.
    """
    try:
        client = client or get_supabase()

        org_result = (
            client.table(settings.ORGANIZATIONS_TABLE)
            .select("id, payment_plan")
            .eq("id", str(user.organization_id))
            .limit(1)
            .execute()
        )
        if not org_result.data:
            raise OrganizationNotFoundError()
        organization = Organization(**org_result.data[0])

        plan_result = (
            client.table(settings.PAYMENT_PLANS_TABLE)
            .select("*")
            .eq("plan_number", organization.payment_plan)
            .limit(1)
            .execute()
        )
        if not plan_result.data:
            raise PaymentPlanNotFoundError()
        return PaymentPlan(**plan_result.data[0])
    except BusinessRuleError:
        raise
    except Exception as exc:
        log_error(
            logger,
            "payment_plan_lookup_failed",
            exc,
            organization_id=str(user.organization_id),
        )
        raise


def is_integration_allowed(kind: IntegrationKind | str, plan: PaymentPlan) -> bool:
    """Return the plan's allowance flag for *kind*; unknown kinds are not allowed."""
    try:
        field_name = _ALLOWANCE_FIELDS[IntegrationKind(kind)]
    except (KeyError, ValueError):
        return False
    return bool(getattr(plan, field_name))

"""Pydantic models for the read-only ``organizations`` and ``payment_plans`` tables."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class Organization(BaseModel):
    """Organization record; ``payment_plan`` holds the subscribed plan number."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    payment_plan: int


class PaymentPlan(BaseModel):
    """Subscription tier: profile quota and integration allowances."""
    model_config = ConfigDict(from_attributes=True)

    plan_number: int
    max_profiles: int = 0
    allow_google_integration: bool = False
    allow_active_campaign_integration: bool = False
    allow_hubspot_integration: bool = False

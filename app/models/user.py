"""Authenticated caller context.

Built from the bearer token claims by ``app.core.security``.  Claims use the
camelCase names issued by the identity service (``organizationId``,
``isAdminUser``, ``activeIntegrations``), with ``_id`` / ``sub`` accepted
for the caller identity.
"""

from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ActiveIntegrations(BaseModel):
    """Per-organization toggles for each external integration."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    google: bool = False
    active_campaign: bool = False
    hubspot: bool = False


class UserContext(BaseModel):
    """The caller on whose behalf a request runs."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID | None = Field(
        default=None,
        validation_alias=AliasChoices("id", "_id", "sub"),
    )
    name: str = ""
    organization_id: UUID | None = None
    is_admin_user: bool = False
    active_integrations: ActiveIntegrations | None = None
    active_campaign_tag_name: str = ""

"""Pydantic models for the ``candidate_profiles`` table and its requests.

Rows are stored with snake_case columns; the HTTP surface speaks camelCase
(``firstName``, ``idNumber``, ``covid19Consent``), so every model accepts
both spellings and serializes with ``by_alias=True``.

``id``, ``version`` and ``is_deleted`` are owned by the store / repository;
``user_id`` and ``organization_id`` are stamped from the caller and are not
accepted from request payloads.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CandidateProfile(BaseModel):
    """Full candidate profile record."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID | None = None
    user_id: UUID | None = None
    organization_id: UUID | None = None
    first_name: str = ""
    last_name: str = ""
    id_number: str = ""
    email_address: str | None = None
    physical_address: str | None = None
    telephone_number: str = ""
    covid19_consent: bool = False
    marketing_consent: bool = False
    username: str | None = None
    modified_date: datetime | None = None
    version: int = 1
    is_deleted: bool = False

    def to_row(self) -> dict[str, Any]:
        """Return the insertable column mapping (identifier left to the store)."""
        return self.model_dump(mode="json", exclude={"id"})


class CreateCandidateProfileRequest(BaseModel):
    """Payload for POST /api/v1/createcandidateprofile.

    Every field is optional so the validator can report all missing values
    at once; both consents stay ``None`` when absent.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    request_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    id_number: str | None = None
    email_address: str | None = None
    physical_address: str | None = None
    telephone_number: str | None = None
    covid19_consent: bool | None = None
    marketing_consent: bool | None = None


class UpdateCandidateProfileRequest(CreateCandidateProfileRequest):
    """Payload for PUT /api/v1/updatecandidateprofile."""

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("id", "_id"),
    )
    version: int | None = None

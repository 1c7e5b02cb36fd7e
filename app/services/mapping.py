"""Wire-format request <-> persisted record mapping."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from app.models.candidate_profile import (
    CandidateProfile,
    CreateCandidateProfileRequest,
    UpdateCandidateProfileRequest,
)


def map_request_to_profile(
    request: CreateCandidateProfileRequest | UpdateCandidateProfileRequest,
) -> CandidateProfile:
    """Map a validated create/update request to a ``CandidateProfile``.

    Ownership fields are left unset; the workflow stamps them from the caller.
    """
    fields: dict[str, Any] = {
        "first_name": request.first_name or "",
        "last_name": request.last_name or "",
        "id_number": request.id_number or "",
        "email_address": request.email_address,
        "physical_address": request.physical_address,
        "telephone_number": request.telephone_number or "",
        "covid19_consent": bool(request.covid19_consent),
        "marketing_consent": bool(request.marketing_consent),
    }
    if isinstance(request, UpdateCandidateProfileRequest):
        fields["id"] = UUID(request.id) if request.id else None
        fields["version"] = request.version or 0
    return CandidateProfile(**fields)


def map_row_to_profile(row: dict[str, Any]) -> CandidateProfile:
    """Map a ``candidate_profiles`` row to a ``CandidateProfile``."""
    return CandidateProfile.model_validate(row)

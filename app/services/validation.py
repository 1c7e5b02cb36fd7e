"""Request validation for candidate profile operations.

Each ``validate_*`` function is pure: it inspects a typed request and the
caller context and returns a ``ValidationResult``.  Field-level rules are
aggregated so the caller receives every violation in one message, one per
line.  A missing caller (or caller identity or organization) short-circuits before any field
rule runs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from uuid import UUID

from app.models.candidate_profile import (
    CreateCandidateProfileRequest,
    UpdateCandidateProfileRequest,
)
from app.models.user import UserContext

MIN_TELEPHONE_LENGTH = 10

EMPTY_REQUEST_MESSAGE = "Request and User Object cannot be empty"
EMPTY_ID_MESSAGE = "ID and User cannot be empty"
EMPTY_USER_MESSAGE = "User object cannot be empty"
INVALID_ID_MESSAGE = "The _id property is not valid"

_EMAIL_RE = re.compile(
    r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))@"
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|"
    r"(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)


@dataclass
class ValidationResult:
    """Outcome of a validation pass: success, or the list of violations."""
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        if self.is_valid:
            return "Validation successful"
        return "\n".join(self.errors)


def is_valid_identifier(value: str | None) -> bool:
    """Return True if *value* is a syntactically valid store reference (UUID)."""
    if not value:
        return False
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def is_valid_email(email: str | None) -> bool:
    """Return True if *email* looks like a deliverable address."""
    return bool(email) and _EMAIL_RE.match(email) is not None


def _has_identity(user: UserContext | None) -> bool:
    return (
        user is not None
        and user.id is not None
        and user.organization_id is not None
    )


def _profile_field_errors(request: CreateCandidateProfileRequest) -> list[str]:
    errors: list[str] = []

    if not request.request_id:
        errors.append("The request id needs to be supplied")
    if not request.first_name:
        errors.append("The candidate first name needs to be supplied")
    if not request.last_name:
        errors.append("The candidate last name needs to be supplied")
    if not request.id_number:
        errors.append("The candidate ID number needs to be supplied")
    if not request.telephone_number or len(request.telephone_number) < MIN_TELEPHONE_LENGTH:
        errors.append("The candidate telephone number is invalid")
    # Consents must be present; False is an accepted answer.
    if request.covid19_consent is None:
        errors.append("The Covid 19 consent value should be supplied")
    if request.marketing_consent is None:
        errors.append("The marketing consent value should be supplied")

    return errors


def validate_create(
    request: CreateCandidateProfileRequest | None,
    user: UserContext | None,
) -> ValidationResult:
    if request is None or not _has_identity(user):
        return ValidationResult([EMPTY_REQUEST_MESSAGE])
    return ValidationResult(_profile_field_errors(request))


def validate_update(
    request: UpdateCandidateProfileRequest | None,
    user: UserContext | None,
) -> ValidationResult:
    if request is None or not _has_identity(user):
        return ValidationResult([EMPTY_REQUEST_MESSAGE])

    errors: list[str] = []
    if not is_valid_identifier(request.id):
        errors.append(INVALID_ID_MESSAGE)
    errors.extend(_profile_field_errors(request))
    if request.version is None or request.version <= 0:
        errors.append("The object version is not valid")

    return ValidationResult(errors)


def _validate_identifier_only(profile_id: str | None, user: UserContext | None) -> ValidationResult:
    if not profile_id or not _has_identity(user):
        return ValidationResult([EMPTY_ID_MESSAGE])
    if not is_valid_identifier(profile_id):
        return ValidationResult([INVALID_ID_MESSAGE])
    return ValidationResult()


def validate_delete(profile_id: str | None, user: UserContext | None) -> ValidationResult:
    return _validate_identifier_only(profile_id, user)


def validate_undelete(profile_id: str | None, user: UserContext | None) -> ValidationResult:
    return _validate_identifier_only(profile_id, user)


def validate_lookup(profile_id: str | None, user: UserContext | None) -> ValidationResult:
    """An identifier is optional for lookup; when given it must be valid."""
    if not _has_identity(user):
        return ValidationResult([EMPTY_USER_MESSAGE])
    if profile_id and not is_valid_identifier(profile_id):
        return ValidationResult([INVALID_ID_MESSAGE])
    return ValidationResult()

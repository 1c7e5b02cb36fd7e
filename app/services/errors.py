"""Exception hierarchy for the candidate profile service.

``BusinessRuleError`` subclasses form the closed set of recoverable rule
violations raised by the repository and the plan gate.  The workflow turns
each into a failure envelope carrying the error's ``code`` and message.
Every rule violation reports ``internalServerError``; callers tell them
apart by the message text.  ``StoreConfigurationError`` is an infrastructure
failure and is never translated below the controller.
"""

from __future__ import annotations

from app.models.enums import StatusCode


class CandidateProfileError(Exception):
    """Base class for every error raised by this service."""

    code: StatusCode = StatusCode.internal_server_error


class StoreConfigurationError(CandidateProfileError):
    """The document store is not configured (missing URL or key)."""


class BusinessRuleError(CandidateProfileError):
    """A recoverable business-rule violation."""


class ProfileQuotaExceededError(BusinessRuleError):

    def __init__(self) -> None:
        super().__init__(
            "You have already created the maximum amount of profiles. "
            "Please upgrade your plan to continue or delete unused profiles"
        )


class DuplicateIdNumberError(BusinessRuleError):

    def __init__(self) -> None:
        super().__init__(
            "The profile for this ID Number already exists. "
            "Please use the existing profile instead"
        )


class VersionConflictError(BusinessRuleError):

    def __init__(self) -> None:
        super().__init__("Conflict detected, version out of date")


class ProfileNotFoundError(BusinessRuleError):

    def __init__(self, message: str = "Record does not exist in database") -> None:
        super().__init__(message)


class OrganizationNotFoundError(BusinessRuleError):

    def __init__(self) -> None:
        super().__init__("Organization not found")


class PaymentPlanNotFoundError(BusinessRuleError):

    def __init__(self) -> None:
        super().__init__("Payment plan not found for organization")

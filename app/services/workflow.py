"""Candidate profile workflow: validate -> map -> persist -> fan out -> envelope.

Create and update share one path that ends with the integration fan-out;
delete, undelete and lookup stop after the repository call.  Validation
failures and business-rule errors become failure envelopes here; anything
else is logged with a fixed per-operation message and re-raised for the
controller to convert.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from uuid import UUID

from app.core.logging import LogPriority, log_error
from app.models.candidate_profile import (
    CandidateProfile,
    CreateCandidateProfileRequest,
    UpdateCandidateProfileRequest,
)
from app.models.enums import StatusCode
from app.models.response import ResponseEnvelope
from app.models.user import UserContext
from app.services import repository
from app.services.errors import BusinessRuleError
from app.services.integrations import fan_out
from app.services.mapping import map_request_to_profile
from app.services.payment_plans import get_payment_plan
from app.services.validation import (
    ValidationResult,
    validate_create,
    validate_delete,
    validate_lookup,
    validate_undelete,
    validate_update,
)

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data could be retrieved"


def _validation_failure(result: ValidationResult, request_id: str) -> ResponseEnvelope:
    return ResponseEnvelope.failure(request_id, result.message, StatusCode.bad_request)


def _rule_failure(exc: BusinessRuleError, request_id: str) -> ResponseEnvelope:
    return ResponseEnvelope.failure(request_id, str(exc), exc.code)


async def _forward_to_integrations(
    profile: CandidateProfile,
    user: UserContext,
    request_id: str,
) -> dict[str, bool]:
    """Resolve the plan and fan out; a plan lookup failure only skips the fan-out.

    The profile is already stored at this point, so no error raised here may
    reach the caller.
    """
    if user.active_integrations is None:
        return {}
    try:
        plan = get_payment_plan(user)
    except BusinessRuleError as exc:
        log_error(
            logger,
            "integration_fan_out_skipped",
            exc,
            LogPriority.medium,
            with_traceback=False,
            request_id=request_id,
        )
        return {}
    except Exception as exc:
        log_error(
            logger,
            "integration_fan_out_skipped",
            exc,
            LogPriority.high,
            request_id=request_id,
        )
        return {}
    return await fan_out(profile, user, plan)


async def _write_and_forward(
    operation: str,
    write: Callable[[CandidateProfile, UserContext], Awaitable[CandidateProfile]],
    request: CreateCandidateProfileRequest,
    user: UserContext,
    request_id: str,
) -> ResponseEnvelope:
    model = map_request_to_profile(request)
    model = model.model_copy(
        update={"organization_id": user.organization_id, "user_id": user.id}
    )

    try:
        result = await write(model, user)
    except BusinessRuleError as exc:
        return _rule_failure(exc, request_id)

    if not result:
        return ResponseEnvelope.failure(
            request_id, f"CandidateProfile {operation} request failed"
        )

    integrations = await _forward_to_integrations(result, user, request_id)

    response = ResponseEnvelope.success(
        request_id, f"CandidateProfile {operation} request success", result
    )
    if integrations:
        response.integrations = integrations
    return response


async def create(
    request: CreateCandidateProfileRequest,
    user: UserContext,
    request_id: str,
) -> ResponseEnvelope:
    try:
        validation = validate_create(request, user)
        if not validation.is_valid:
            return _validation_failure(validation, request_id)

        return await _write_and_forward(
            "create", repository.create_profile, request, user, request_id
        )
    except Exception as exc:
        log_error(
            logger,
            "Error occurred while executing create aggregation logic in CandidateProfile API",
            exc,
            request_id=request_id,
        )
        raise


async def update(
    request: UpdateCandidateProfileRequest,
    user: UserContext,
    request_id: str,
) -> ResponseEnvelope:
    try:
        validation = validate_update(request, user)
        if not validation.is_valid:
            return _validation_failure(validation, request_id)

        return await _write_and_forward(
            "update", repository.update_profile, request, user, request_id
        )
    except Exception as exc:
        log_error(
            logger,
            "Error occurred while executing update aggregation logic in CandidateProfile API",
            exc,
            request_id=request_id,
        )
        raise


async def _toggle(
    operation: str,
    validate: Callable[[str | None, UserContext | None], ValidationResult],
    write: Callable[[UUID, UserContext], Awaitable[CandidateProfile]],
    profile_id: str,
    user: UserContext,
    request_id: str,
) -> ResponseEnvelope:
    try:
        validation = validate(profile_id, user)
        if not validation.is_valid:
            return _validation_failure(validation, request_id)

        try:
            result = await write(UUID(profile_id), user)
        except BusinessRuleError as exc:
            return _rule_failure(exc, request_id)

        if not result:
            return ResponseEnvelope.failure(
                request_id, f"CandidateProfile {operation} request failed"
            )
        return ResponseEnvelope.success(
            request_id, f"CandidateProfile {operation} request success"
        )
    except Exception as exc:
        log_error(
            logger,
            f"Error occurred while executing {operation} aggregation logic in CandidateProfile API",
            exc,
            request_id=request_id,
        )
        raise


async def delete(profile_id: str, user: UserContext, request_id: str) -> ResponseEnvelope:
    return await _toggle(
        "delete", validate_delete, repository.delete_profile, profile_id, user, request_id
    )


async def undelete(profile_id: str, user: UserContext, request_id: str) -> ResponseEnvelope:
    return await _toggle(
        "undelete", validate_undelete, repository.undelete_profile, profile_id, user, request_id
    )


async def lookup(
    profile_id: str | None,
    search_string: str | None,
    start: int,
    limit: int,
    user: UserContext,
    request_id: str,
    is_admin: bool,
) -> ResponseEnvelope:
    try:
        validation = validate_lookup(profile_id, user)
        if not validation.is_valid:
            return _validation_failure(validation, request_id)

        try:
            profiles = await repository.lookup_profiles(
                UUID(profile_id) if profile_id else None,
                (search_string or "").strip(),
                start,
                limit,
                user,
                is_admin,
            )
        except BusinessRuleError as exc:
            return _rule_failure(exc, request_id)

        if not profiles:
            return ResponseEnvelope.failure(request_id, NO_DATA_MESSAGE, StatusCode.no_data)

        return ResponseEnvelope.success(
            request_id, "CandidateProfile lookup request success", profiles
        )
    except Exception as exc:
        log_error(
            logger,
            "Error occurred while executing lookup aggregation logic in CandidateProfile API",
            exc,
            request_id=request_id,
        )
        raise

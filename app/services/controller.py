"""Candidate profile controller: the single place exceptions become envelopes.

Each function delegates to ``app.services.workflow`` and converts any
exception into an ``internalServerError`` envelope that carries only the
exception message.  Delete additionally requires an admin caller.
"""

from __future__ import annotations

import logging

from app.core.logging import log_error
from app.models.candidate_profile import (
    CreateCandidateProfileRequest,
    UpdateCandidateProfileRequest,
)
from app.models.enums import StatusCode
from app.models.response import ResponseEnvelope
from app.models.user import UserContext
from app.services import workflow

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "The user does not have the correct roles to access this functionality"


def _internal_error(operation: str, request_id: str, exc: Exception) -> ResponseEnvelope:
    log_error(
        logger,
        f"Error occurred while executing {operation} logic in CandidateProfile API",
        exc,
        request_id=request_id,
    )
    return ResponseEnvelope.failure(
        request_id,
        f"An error occurred inside the CandidateProfile {operation} controller "
        f"and the request could not be processed: {exc}",
        StatusCode.internal_server_error,
    )


def has_admin_role(user: UserContext | None) -> bool:
    return bool(user and user.is_admin_user)


async def create(request: CreateCandidateProfileRequest, user: UserContext) -> ResponseEnvelope:
    request_id = request.request_id or ""
    try:
        return await workflow.create(request, user, request_id)
    except Exception as exc:
        return _internal_error("create", request_id, exc)


async def update(request: UpdateCandidateProfileRequest, user: UserContext) -> ResponseEnvelope:
    request_id = request.request_id or ""
    try:
        return await workflow.update(request, user, request_id)
    except Exception as exc:
        return _internal_error("update", request_id, exc)


async def delete(profile_id: str, user: UserContext, request_id: str) -> ResponseEnvelope:
    try:
        if not has_admin_role(user):
            return ResponseEnvelope.failure(request_id, FORBIDDEN_MESSAGE, StatusCode.forbidden)
        return await workflow.delete(profile_id, user, request_id)
    except Exception as exc:
        return _internal_error("delete", request_id, exc)


async def undelete(profile_id: str, user: UserContext, request_id: str) -> ResponseEnvelope:
    try:
        return await workflow.undelete(profile_id, user, request_id)
    except Exception as exc:
        return _internal_error("undelete", request_id, exc)


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
        return await workflow.lookup(
            profile_id, search_string, start, limit, user, request_id, is_admin
        )
    except Exception as exc:
        return _internal_error("lookup", request_id, exc)

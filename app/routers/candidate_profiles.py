"""Candidate profile endpoints.

Create and update read a JSON body; delete, undelete and lookup take their
arguments from the path.  Every endpoint answers with a ``ResponseEnvelope``
whose ``code`` is also used as the HTTP status.

The lookup path has two optional trailing segments
(``/{searchString}/{id}``), registered as three routes on one handler.  A
blank search string (e.g. ``%20``) lets a caller reach the ``id`` segment.
"""

from __future__ import annotations

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from app.core.security import get_current_user
from app.models.candidate_profile import (
    CreateCandidateProfileRequest,
    UpdateCandidateProfileRequest,
)
from app.models.enums import StatusCode
from app.models.response import ResponseEnvelope
from app.models.user import UserContext
from app.services import controller

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_REQUEST_ID_MESSAGE = "The candidateprofile requestId cannot be empty"
LOOKUP_PATH = "/candidateprofilelookup/{request_id}/{start}/{limit}/{is_admin}"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _respond(envelope: ResponseEnvelope) -> JSONResponse:
    return JSONResponse(status_code=int(envelope.code), content=envelope.to_content())


def _missing_request_id() -> JSONResponse:
    logger.warning("candidate_profile_request_id_missing")
    return _respond(
        ResponseEnvelope.failure(
            str(uuid4()), MISSING_REQUEST_ID_MESSAGE, StatusCode.bad_request
        )
    )


def _parse_bound(raw: str, default: int, minimum: int) -> int:
    """Parse a pagination bound, falling back to *default* when invalid."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


# ---------------------------------------------------------------------------
# Write endpoints
# ---------------------------------------------------------------------------

@router.post("/createcandidateprofile")
async def create_candidate_profile(
    request: CreateCandidateProfileRequest,
    user: UserContext = Depends(get_current_user),
) -> JSONResponse:
    if not request.request_id:
        return _missing_request_id()
    return _respond(await controller.create(request, user))


@router.put("/updatecandidateprofile")
async def update_candidate_profile(
    request: UpdateCandidateProfileRequest,
    user: UserContext = Depends(get_current_user),
) -> JSONResponse:
    if not request.request_id:
        return _missing_request_id()
    return _respond(await controller.update(request, user))


@router.delete("/deletecandidateprofile/{request_id}/{profile_id}")
async def delete_candidate_profile(
    request_id: str,
    profile_id: str,
    user: UserContext = Depends(get_current_user),
) -> JSONResponse:
    return _respond(await controller.delete(profile_id, user, request_id))


@router.delete("/undeletecandidateprofile/{request_id}/{profile_id}")
async def undelete_candidate_profile(
    request_id: str,
    profile_id: str,
    user: UserContext = Depends(get_current_user),
) -> JSONResponse:
    return _respond(await controller.undelete(profile_id, user, request_id))


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

@router.get(LOOKUP_PATH)
@router.get(LOOKUP_PATH + "/{search_string}")
@router.get(LOOKUP_PATH + "/{search_string}/{profile_id}")
async def candidate_profile_lookup(
    request_id: str,
    start: str,
    limit: str,
    is_admin: str,
    search_string: str | None = None,
    profile_id: str | None = None,
    user: UserContext = Depends(get_current_user),
) -> JSONResponse:
    envelope = await controller.lookup(
        profile_id,
        search_string,
        _parse_bound(start, default=0, minimum=0),
        _parse_bound(limit, default=1, minimum=1),
        user,
        request_id,
        is_admin == "true",
    )
    return _respond(envelope)

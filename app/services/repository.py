"""Candidate profile repository: the only module touching ``candidate_profiles``.

Every operation runs its sequential queries against one store client inside
``_store_operation``, which logs any failure with a fixed message and
re-raises it.  Business-rule violations surface as ``BusinessRuleError``
subclasses; everything else (configuration, transport) propagates unchanged.

Concurrency is optimistic: every mutation is written with a compare-and-swap
filter on the version that was read, so a concurrent writer that got there
first makes the update match no rows and the caller receives
``VersionConflictError``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from supabase import Client

from app.core.config import settings
from app.core.logging import LogPriority, log_error
from app.db.supabase import get_supabase
from app.models.candidate_profile import CandidateProfile
from app.models.events import AuditLogEvent
from app.models.user import UserContext
from app.services.errors import (
    BusinessRuleError,
    DuplicateIdNumberError,
    ProfileNotFoundError,
    ProfileQuotaExceededError,
    VersionConflictError,
)
from app.services.mapping import map_row_to_profile
from app.services.payment_plans import get_payment_plan
from app.services.producers import get_audit_log_producer

logger = logging.getLogger(__name__)

DATABASE_ERROR_MESSAGE = "Error in CandidateProfile while doing a database operation"

CREATED_EVENT = "CandidateProfileCreatedEvent"
UPDATED_EVENT = "CandidateProfileUpdatedEvent"
DELETED_EVENT = "CandidateProfileDeletedEvent"
UNDELETED_EVENT = "CandidateProfileUndeletedEvent"

# Columns an update may overwrite; identity and ownership columns never change.
MUTABLE_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email_address",
    "physical_address",
    "telephone_number",
    "covid19_consent",
    "marketing_consent",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@contextmanager
def _store_operation(operation: str, user: UserContext) -> Iterator[Client]:
    """Yield the store client for one operation, logging and re-raising failures."""
    try:
        yield get_supabase()
    except BusinessRuleError as exc:
        log_error(
            logger,
            DATABASE_ERROR_MESSAGE,
            exc,
            LogPriority.medium,
            with_traceback=False,
            operation=operation,
            organization_id=str(user.organization_id),
        )
        raise
    except Exception as exc:
        log_error(
            logger,
            DATABASE_ERROR_MESSAGE,
            exc,
            LogPriority.high,
            operation=operation,
            organization_id=str(user.organization_id),
        )
        raise


def _profiles(client: Client) -> Any:
    return client.table(settings.CANDIDATE_PROFILES_TABLE)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_capacity(client: Client, user: UserContext) -> None:
    """Raise ``ProfileQuotaExceededError`` if the organization is at its plan limit."""
    result = (
        _profiles(client)
        .select("id", count="exact")
        .eq("organization_id", str(user.organization_id))
        .eq("is_deleted", False)
        .execute()
    )
    profile_count = result.count or 0
    plan = get_payment_plan(user, client)

    if profile_count >= plan.max_profiles:
        raise ProfileQuotaExceededError()


def _fetch_scoped(
    client: Client,
    profile_id: UUID,
    user: UserContext,
    *,
    include_deleted: bool,
) -> CandidateProfile | None:
    """Return the profile if it belongs to the caller's organization."""
    query = (
        _profiles(client)
        .select("*")
        .eq("id", str(profile_id))
        .eq("organization_id", str(user.organization_id))
    )
    if not include_deleted:
        query = query.eq("is_deleted", False)
    result = query.limit(1).execute()
    if not result.data:
        return None
    return map_row_to_profile(result.data[0])


def _compare_and_swap(
    client: Client,
    profile_id: UUID,
    expected_version: int,
    changes: dict[str, Any],
) -> CandidateProfile:
    """Apply *changes* only if the stored version is still *expected_version*."""
    result = (
        _profiles(client)
        .update(changes)
        .eq("id", str(profile_id))
        .eq("version", expected_version)
        .execute()
    )
    if not result.data:
        raise VersionConflictError()
    return map_row_to_profile(result.data[0])


async def _emit_audit_event(event_name: str, profile: CandidateProfile) -> bool:
    event = AuditLogEvent(
        event_name=event_name,
        version=profile.version,
        data=profile.model_dump(mode="json", by_alias=True),
        module=settings.AUDIT_LOG_MODULE,
    )
    return await get_audit_log_producer().produce(event)


def _stamp(user: UserContext) -> dict[str, Any]:
    return {"username": user.name, "modified_date": _now().isoformat()}


# ---------------------------------------------------------------------------
# Write path
# ---------------------------------------------------------------------------

async def create_profile(model: CandidateProfile, user: UserContext) -> CandidateProfile:
    """Insert *model* for the caller's organization and return it with its new id.

    Raises ``ProfileQuotaExceededError`` when the organization is at its plan
    limit and ``DuplicateIdNumberError`` when a live profile already uses the
    same ID number.
    """
    with _store_operation("create", user) as client:
        _ensure_capacity(client, user)

        existing = (
            _profiles(client)
            .select("id")
            .eq("organization_id", str(user.organization_id))
            .eq("id_number", model.id_number)
            .eq("is_deleted", False)
            .limit(1)
            .execute()
        )
        if existing.data:
            raise DuplicateIdNumberError()

        model = model.model_copy(
            update={
                "id": None,
                "version": 1,
                "is_deleted": False,
                "username": user.name,
                "modified_date": _now(),
            }
        )
        result = _profiles(client).insert(model.to_row()).execute()
        model = model.model_copy(update={"id": UUID(str(result.data[0]["id"]))})

        await _emit_audit_event(CREATED_EVENT, model)

    logger.info(
        "candidate_profile_created",
        extra={"profile_id": str(model.id), "organization_id": str(model.organization_id)},
    )
    return model


async def update_profile(model: CandidateProfile, user: UserContext) -> CandidateProfile:
    """Refresh the mutable fields of an existing live profile.

    Raises ``ProfileNotFoundError`` if the profile is missing, deleted or owned
    by another organization, and ``VersionConflictError`` when *model* carries
    a version older than the stored one or a concurrent write wins.
    """
    with _store_operation("update", user) as client:
        if model.id is None:
            raise ValueError("Model ID cannot be null when it is an update request")

        existing = _fetch_scoped(client, model.id, user, include_deleted=False)
        if existing is None:
            raise ProfileNotFoundError(
                "Record does not exist in database or the record has been deleted"
            )

        if existing.version > model.version:
            raise VersionConflictError()

        changes: dict[str, Any] = {
            name: getattr(model, name) for name in MUTABLE_FIELDS
        }
        changes["version"] = existing.version + 1
        changes.update(_stamp(user))

        updated = _compare_and_swap(client, model.id, existing.version, changes)

        await _emit_audit_event(UPDATED_EVENT, updated)

    logger.info(
        "candidate_profile_updated",
        extra={"profile_id": str(updated.id), "version": updated.version},
    )
    return updated


async def _set_deleted(
    client: Client,
    profile_id: UUID,
    user: UserContext,
    is_deleted: bool,
) -> CandidateProfile:
    existing = _fetch_scoped(client, profile_id, user, include_deleted=True)
    if existing is None:
        raise ProfileNotFoundError()

    changes: dict[str, Any] = {
        "is_deleted": is_deleted,
        "version": existing.version + 1,
        **_stamp(user),
    }
    updated = _compare_and_swap(client, profile_id, existing.version, changes)

    await _emit_audit_event(DELETED_EVENT if is_deleted else UNDELETED_EVENT, updated)
    return updated


async def delete_profile(profile_id: UUID, user: UserContext) -> CandidateProfile:
    """Soft-delete a profile of the caller's organization.

    Targets the record regardless of its current flag, so repeating a delete
    only bumps the version.
    """
    with _store_operation("delete", user) as client:
        return await _set_deleted(client, profile_id, user, True)


async def undelete_profile(profile_id: UUID, user: UserContext) -> CandidateProfile:
    """Restore a soft-deleted profile, subject to the same quota as create."""
    with _store_operation("undelete", user) as client:
        _ensure_capacity(client, user)
        return await _set_deleted(client, profile_id, user, False)


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------

async def lookup_profiles(
    profile_id: UUID | None,
    search_string: str,
    start: int,
    limit: int,
    user: UserContext,
    is_admin: bool,
) -> list[CandidateProfile]:
    """Return one page of profiles, ordered by last name then first name.

    Exactly one shape applies:

    1. *profile_id* given: that live profile within the organization.
    2. Admin caller in admin scope, no search: every live organization profile.
    3. Admin caller outside admin scope, no search: the caller's own live profiles.
    4. Otherwise: organization profiles whose ID number equals *search_string*.
    """
    with _store_operation("lookup", user) as client:
        query = _profiles(client).select("*")
        organization_id = str(user.organization_id)

        if profile_id is not None:
            query = (
                query.eq("id", str(profile_id))
                .eq("organization_id", organization_id)
                .eq("is_deleted", False)
            )
        elif user.is_admin_user and is_admin and not search_string:
            query = query.eq("organization_id", organization_id).eq("is_deleted", False)
        elif user.is_admin_user and not is_admin and not search_string:
            query = query.eq("user_id", str(user.id)).eq("is_deleted", False)
        else:
            query = query.eq("organization_id", organization_id).eq("id_number", search_string)

        result = (
            query.order("last_name")
            .order("first_name")
            .order("id")
            .range(start, start + limit - 1)
            .execute()
        )
        return [map_row_to_profile(row) for row in result.data or []]

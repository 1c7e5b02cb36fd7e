"""Shared test fixtures.

Provides caller contexts, an in-memory stand-in for the Supabase table query
builder, patched event producers and a FastAPI ``TestClient`` authenticated
through a dependency override.
"""

from __future__ import annotations

import copy
from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from app.models.user import ActiveIntegrations, UserContext

ORGANIZATION_ID = UUID("6f1c2f4e-8d8a-4a57-9b59-2b1d6f7a0c11")
OTHER_ORGANIZATION_ID = UUID("0b7e4d02-3f55-4f7c-a1a4-5a3c8b9e2d40")
ADMIN_ID = UUID("a3d9c2e1-4b5f-4c6d-8e7f-9a0b1c2d3e4f")
MEMBER_ID = UUID("c7e8f9a0-1b2c-4d3e-9f4a-5b6c7d8e9f01")


# ---------------------------------------------------------------------------
# In-memory Supabase stand-in
# ---------------------------------------------------------------------------

class FakeResult:
    def __init__(self, data: list[dict[str, Any]], count: int | None = None) -> None:
        self.data = data
        self.count = count


class FakeQuery:
    """Subset of the PostgREST request builder used by the service."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows
        self._operation = "select"
        self._payload: dict[str, Any] | None = None
        self._count: str | None = None
        self._filters: list[tuple[str, Any]] = []
        self._orders: list[tuple[str, bool]] = []
        self._range: tuple[int, int] | None = None
        self._limit: int | None = None

    def select(self, *columns: str, count: str | None = None) -> "FakeQuery":
        self._operation = "select"
        self._count = count
        return self

    def insert(self, row: dict[str, Any]) -> "FakeQuery":
        self._operation = "insert"
        self._payload = row
        return self

    def update(self, changes: dict[str, Any]) -> "FakeQuery":
        self._operation = "update"
        self._payload = changes
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._orders.append((column, desc))
        return self

    def range(self, start: int, end: int) -> "FakeQuery":
        self._range = (start, end)
        return self

    def limit(self, size: int) -> "FakeQuery":
        self._limit = size
        return self

    def _matches(self) -> list[dict[str, Any]]:
        return [
            row for row in self._rows
            if all(row.get(column) == value for column, value in self._filters)
        ]

    def execute(self) -> FakeResult:
        if self._operation == "insert":
            row = dict(self._payload or {})
            row["id"] = str(uuid4())
            self._rows.append(row)
            return FakeResult([copy.deepcopy(row)])

        matches = self._matches()

        if self._operation == "update":
            for row in matches:
                row.update(self._payload or {})
            return FakeResult([copy.deepcopy(row) for row in matches])

        for column, desc in reversed(self._orders):
            matches.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        total = len(matches)
        if self._range is not None:
            matches = matches[self._range[0]:self._range[1] + 1]
        if self._limit is not None:
            matches = matches[: self._limit]
        return FakeResult(
            [copy.deepcopy(row) for row in matches],
            total if self._count else None,
        )


class FakeSupabase:
    """Tables are plain lists of row dicts keyed by table name."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, []))

    def rows(self, name: str = "candidate_profiles") -> list[dict[str, Any]]:
        return self.tables.setdefault(name, [])

    def add_plan(
        self,
        organization_id: UUID = ORGANIZATION_ID,
        plan_number: int = 1,
        max_profiles: int = 5,
        **allowances: bool,
    ) -> None:
        self.rows("organizations").append(
            {"id": str(organization_id), "payment_plan": plan_number}
        )
        self.rows("payment_plans").append(
            {
                "plan_number": plan_number,
                "max_profiles": max_profiles,
                "allow_google_integration": allowances.get("google", True),
                "allow_active_campaign_integration": allowances.get("active_campaign", True),
                "allow_hubspot_integration": allowances.get("hubspot", True),
            }
        )

    def add_profile(self, **fields: Any) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": str(uuid4()),
            "user_id": str(ADMIN_ID),
            "organization_id": str(ORGANIZATION_ID),
            "first_name": "Thandi",
            "last_name": "Nkosi",
            "id_number": "8001015009087",
            "email_address": "thandi@example.com",
            "physical_address": "12 Long Street, Cape Town",
            "telephone_number": "0821234567",
            "covid19_consent": True,
            "marketing_consent": True,
            "username": "admin",
            "modified_date": "2026-01-05T08:30:00+00:00",
            "version": 1,
            "is_deleted": False,
        }
        row.update(fields)
        self.rows().append(row)
        return row


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def admin_user() -> UserContext:
    return UserContext(
        id=ADMIN_ID,
        name="admin",
        organization_id=ORGANIZATION_ID,
        is_admin_user=True,
        active_integrations=ActiveIntegrations(google=True, active_campaign=True, hubspot=True),
        active_campaign_tag_name="covid-screening",
    )


@pytest.fixture()
def member_user() -> UserContext:
    return UserContext(
        id=MEMBER_ID,
        name="member",
        organization_id=ORGANIZATION_ID,
        is_admin_user=False,
        active_integrations=ActiveIntegrations(),
    )


@pytest.fixture()
def store_factory() -> type[FakeSupabase]:
    return FakeSupabase


@pytest.fixture()
def fake_store() -> Generator[FakeSupabase, None, None]:
    """Patch every ``get_supabase`` import site with one in-memory store."""
    store = FakeSupabase()
    with patch("app.services.repository.get_supabase", return_value=store), \
            patch("app.services.payment_plans.get_supabase", return_value=store):
        yield store


@pytest.fixture()
def audit_producer() -> Generator[MagicMock, None, None]:
    producer = MagicMock()
    producer.produce = AsyncMock(return_value=True)
    with patch("app.services.repository.get_audit_log_producer", return_value=producer):
        yield producer


@pytest.fixture()
def integration_producers() -> Generator[dict[str, MagicMock], None, None]:
    producers: dict[str, MagicMock] = {}
    for kind in ("google", "active_campaign", "hubspot"):
        producer = MagicMock()
        producer.produce = AsyncMock(return_value=True)
        producers[kind] = producer

    with patch(
        "app.services.integrations.get_google_sheet_producer",
        return_value=producers["google"],
    ), patch(
        "app.services.integrations.get_active_campaign_producer",
        return_value=producers["active_campaign"],
    ), patch(
        "app.services.integrations.get_hubspot_producer",
        return_value=producers["hubspot"],
    ):
        yield producers


@pytest.fixture()
def mock_supabase_module() -> Generator[MagicMock, None, None]:
    """Patch the Supabase client at module level in the health router."""
    mock_client = MagicMock()
    mock_table = MagicMock()
    mock_select = MagicMock()
    mock_limit = MagicMock()

    mock_client.table.return_value = mock_table
    mock_table.select.return_value = mock_select
    mock_select.limit.return_value = mock_limit
    mock_limit.execute.return_value = MagicMock()  # non-None result

    with patch("app.routers.health.get_supabase", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def mock_supabase_disconnected() -> Generator[MagicMock, None, None]:
    """Patch ``get_supabase`` to simulate a disconnected database."""
    with patch(
        "app.routers.health.get_supabase",
        side_effect=Exception("Connection refused"),
    ):
        yield MagicMock()


@pytest.fixture()
def test_client(admin_user: UserContext) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient acting as *admin_user*."""
    from app.core.security import get_current_user
    from app.main import app

    app.dependency_overrides[get_current_user] = lambda: admin_user
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

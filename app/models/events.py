"""Event envelopes sent to the audit log and integration producers."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditLogEvent(BaseModel):
    """Audit record of a single profile mutation."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    object_id: UUID = Field(default_factory=uuid4)
    event_name: str
    version: int
    data: dict[str, Any]
    produced_at: datetime = Field(default_factory=_utcnow)
    module: int


class IntegrationEvent(BaseModel):
    """Versioned, timestamped, named payload for an integration producer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event_id: UUID = Field(default_factory=uuid4)
    produced_at: datetime = Field(default_factory=_utcnow)
    event_name: str
    data: dict[str, Any]
    version: int = 1

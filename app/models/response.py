"""Uniform response envelope returned by every candidate profile endpoint."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.enums import ResponseStatus, StatusCode


class ResponseEnvelope(BaseModel):
    """``{responseId, message, status, code, data?, integrations?}``.

    ``integrations`` maps each attempted integration kind to whether its
    producer accepted the event; it is omitted when nothing was attempted.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    response_id: str = ""
    message: str
    status: ResponseStatus
    code: StatusCode
    data: Any = None
    integrations: dict[str, bool] | None = None

    @classmethod
    def success(cls, response_id: str, message: str, data: Any = None) -> "ResponseEnvelope":
        return cls(
            response_id=response_id,
            message=message,
            status=ResponseStatus.success,
            code=StatusCode.ok,
            data=data,
        )

    @classmethod
    def failure(
        cls,
        response_id: str,
        message: str,
        code: StatusCode = StatusCode.internal_server_error,
    ) -> "ResponseEnvelope":
        return cls(
            response_id=response_id,
            message=message,
            status=ResponseStatus.failure,
            code=code,
        )

    def to_content(self) -> dict[str, Any]:
        """JSON-ready camelCase body, without unset optional members."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

"""Enum types shared by the response envelope, plan gate and fan-out."""

from enum import Enum, IntEnum


class ResponseStatus(str, Enum):
    """Outcome carried in every response envelope."""
    success = "success"
    failure = "failure"


class StatusCode(IntEnum):
    """HTTP-like status codes carried in the envelope and used as the HTTP status."""
    ok = 200
    bad_request = 400
    forbidden = 403
    no_data = 404
    internal_server_error = 500


class IntegrationKind(str, Enum):
    """External integrations a profile can be forwarded to."""
    google = "google"
    active_campaign = "active_campaign"
    hubspot = "hubspot"

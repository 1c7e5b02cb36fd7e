"""Supabase client singleton.

Provides ``get_supabase()`` which returns a lazily-initialized, process-wide
Supabase client using credentials from ``settings``.  Missing credentials are
reported on every call rather than at import time, so a misconfigured
deployment still starts and answers ``/health``.
"""

from supabase import Client, create_client

from app.core.config import settings
from app.services.errors import StoreConfigurationError

_client: Client | None = None


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call.

    Raises ``StoreConfigurationError`` if the URL or key is not configured.
    """
    global _client
    if _client is None:
        if not settings.SUPABASE_URL:
            raise StoreConfigurationError("Connection string cannot be null or empty")
        if not settings.SUPABASE_KEY:
            raise StoreConfigurationError("Store API key cannot be null or empty")
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client

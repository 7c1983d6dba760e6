"""Supabase client construction for database operations."""

import httpx
from supabase import Client, create_client
from supabase.lib.client_options import SyncClientOptions
from supabase_auth import SyncMemoryStorage

from src.core.config import get_settings

# PostgREST request timeout (seconds)
DEFAULT_TIMEOUT_SECONDS = 10.0


def create_http_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    """Create the pooled HTTP client shared by all PostgREST requests.

    The caller owns the returned client and must close it on shutdown.

    Args:
        timeout: Per-request timeout in seconds.

    Returns:
        httpx.Client: Connection-pooled HTTP client.
    """
    return httpx.Client(timeout=timeout)


def create_supabase_client(http_client: httpx.Client | None = None) -> Client:
    """Create a Supabase client for database operations.

    Uses the secret key for backend operations, which bypasses RLS at the
    PostgREST level. Sessions are kept in memory and never refreshed since
    this client is never used for auth flows.

    Args:
        http_client: Optional HTTP client to route PostgREST requests through.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    options = SyncClientOptions(
        storage=SyncMemoryStorage(),
        auto_refresh_token=False,
        persist_session=False,
        httpx_client=http_client,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
        options=options,
    )

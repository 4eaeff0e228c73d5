import logging

import httpx
from postgrest.exceptions import APIError
from supabase import create_client, Client

from yoga_admin.config import settings
from yoga_admin.core.exceptions import Conflict, NotFound, StoreUnavailable

logger = logging.getLogger(__name__)

# Postgres error codes surfaced by PostgREST
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Every call through it is gated by the policy layer."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_service_client()


def run_query(query, action: str = "query"):
    """Execute a PostgREST query builder, translating store failures into domain errors."""
    try:
        return query.execute()
    except APIError as e:
        if e.code == FOREIGN_KEY_VIOLATION:
            raise NotFound(f"Referenced record not found while trying to {action}") from e
        if e.code == UNIQUE_VIOLATION:
            raise Conflict(f"Duplicate record while trying to {action}") from e
        logger.error("Store error during %s: %s", action, e.message)
        raise StoreUnavailable(f"Data store error while trying to {action}") from e
    except httpx.HTTPError as e:
        logger.error("Store unreachable during %s: %s", action, e)
        raise StoreUnavailable(f"Data store unreachable while trying to {action}") from e

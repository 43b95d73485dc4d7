"""Shared Supabase client for the service.

The dispatcher runs with the service-role key, so the client is created once
per process and handed to repositories through FastAPI dependencies.
"""

from __future__ import annotations

import logging
from typing import Optional

from supabase import Client, create_client

from app.errors import ConfigurationMissing
from server.config import get_settings

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create the Supabase client.

    Raises:
        ConfigurationMissing: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset.
    """
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ConfigurationMissing(
                "SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY not set",
                public_message="Backend not configured",
            )
        _client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        logger.info("Supabase client initialized", extra={"url": settings.supabase_url})
    return _client


def reset_supabase_client() -> None:
    """Drop the cached client (used when settings change)."""
    global _client
    _client = None

"""Supabase client used by the attendance store."""

import logging
from functools import lru_cache
from urllib.parse import urlparse

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


def supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Cached client for the configured project, or None when storage is not set up.

    Creating the client does not contact the project; connection problems
    surface on the first query.
    """
    if not supabase_configured():
        logger.warning("Supabase credentials not configured (ATT_SUPABASE_URL / ATT_SUPABASE_KEY)")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None
    logger.info(f"Using Supabase project at {urlparse(settings.supabase_url).hostname}")
    return client

"""Storage backends for attendance data."""

import logging
from functools import lru_cache

from ..db.supabase import get_supabase_client
from .store import AttendanceStore, MemoryStore, new_id
from .supabase_store import SupabaseStore


@lru_cache()
def get_store() -> AttendanceStore:
    """Supabase when configured, otherwise a process-local store."""
    client = get_supabase_client()
    if client is None:
        logging.info("Supabase not configured - attendance data is kept in memory only")
        return MemoryStore()
    return SupabaseStore(client)


__all__ = ["AttendanceStore", "MemoryStore", "SupabaseStore", "get_store", "new_id"]

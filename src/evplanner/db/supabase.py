"""Supabase client for the charging-station directory.

The directory lives in the ``charging_stations`` table (see
``settings.stations_table``). When no credentials are configured the station
repository reads the bundled snapshot file instead.
"""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get the cached directory client.

    Returns:
        Supabase Client if ``EVP_SUPABASE_URL`` and ``EVP_SUPABASE_KEY`` are set, None otherwise.
        The connection is not tested here; a failing station query falls back to the file snapshot.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.debug("Station directory not configured, planning will use the station file")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create station directory client: {e}")
        return None

# Supabase client, created on first use so the local backend needs no credentials

from functools import lru_cache

from supabase import create_client  # type: ignore

from hvac_diag.config import SUPABASE_URL, SUPABASE_SERVICE_KEY


@lru_cache(maxsize=1)
def get_supabase():
    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        raise RuntimeError("SUPABASE_URL / SUPABASE_SERVICE_KEY not set")

    return create_client(
        SUPABASE_URL,
        SUPABASE_SERVICE_KEY
    )

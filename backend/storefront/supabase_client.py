from functools import lru_cache

from supabase import Client, create_client

from .config import get_settings


@lru_cache()
def get_supabase() -> Client:
    """Shared catalog read client. Created lazily so tests never need a live project."""
    settings = get_settings()
    url = str(settings.supabase_url)

    if "your-project.supabase.co" in url:
        raise RuntimeError(
            "SUPABASE_URL is still the placeholder (your-project). "
            "Set the storefront project URL and service key before serving the catalog."
        )
    return create_client(url, settings.supabase_key)

from supabase import create_client, Client
from taskflow.config.settings import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def first_row(result):
    """Return the first row of a PostgREST response, or None when it is empty."""
    if result is None or not result.data:
        return None
    return result.data[0]

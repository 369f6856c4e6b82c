from core.errors import StorageError
from core.store import SupabaseStore
from core.supabase_client import get_supabase_client


def get_store() -> SupabaseStore:
    """
    FastAPI dependency returning the Data & Identity Store.
    Tests replace it through app.dependency_overrides.
    """
    client = get_supabase_client()
    if client is None:
        raise StorageError("Supabase client not configured")
    return SupabaseStore(client)

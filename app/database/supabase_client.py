from supabase import create_client, Client, ClientOptions
from app.config.settings import settings


def _request_scoped_options() -> ClientOptions:
    # One client per request: no background refresh timer, session lives in memory only
    return ClientOptions(auto_refresh_token=False, persist_session=False)


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared anonymous client; only used for stateless token checks."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def for_access_token(cls, access_token: str) -> Client:
        """Client whose table queries carry the caller's JWT, so RLS sees auth.uid()."""
        client = create_client(settings.supabase_url, settings.supabase_key, options=_request_scoped_options())
        client.postgrest.auth(access_token)
        return client

    @classmethod
    def for_session(cls) -> Client:
        """Client with its own auth state, for sign-in flows and one HTML view's session."""
        return create_client(settings.supabase_url, settings.supabase_key, options=_request_scoped_options())

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()

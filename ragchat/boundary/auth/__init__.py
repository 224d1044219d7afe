"""Identity boundary (Supabase auth)."""

from ragchat.boundary.auth.supabase_identity import CallerIdentity, SupabaseIdentityResolver

__all__ = ["CallerIdentity", "SupabaseIdentityResolver"]

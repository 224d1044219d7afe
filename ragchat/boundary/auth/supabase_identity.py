"""
Supabase identity resolver.

Resolves the caller behind a bearer access token using Supabase auth.
The Supabase client is synchronous, so lookups run in the threadpool.

Dependencies: supabase, fastapi.concurrency
System role: Caller identity capability
"""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi.concurrency import run_in_threadpool
from supabase import Client, create_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller. `id` is the owner tag for every scoped read and write."""

    id: str
    email: str | None = None


class SupabaseIdentityResolver:
    """Resolve caller identity from a Supabase JWT."""

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        client: Client | Any | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            url: Supabase project URL
            key: Supabase anon or service key
            client: Pre-built Supabase client (tests)
        """
        if client is None:
            if not url or not key:
                raise ValueError("SUPABASE_URL and SUPABASE_KEY are required")
            client = create_client(url, key)
        self._client = client

    async def get_caller(self, token: str | None) -> CallerIdentity | None:
        """
        Resolve the caller for an access token.

        Args:
            token: Raw JWT (without the Bearer prefix)

        Returns:
            CallerIdentity, or None when the token is missing, invalid or expired
        """
        if not token:
            return None

        try:
            response = await run_in_threadpool(self._client.auth.get_user, token)
        except Exception as e:
            logger.warning(f"{__name__}:get_caller - Token rejected: {type(e).__name__}: {e}")
            return None

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            return None

        return CallerIdentity(id=str(user.id), email=getattr(user, "email", None))

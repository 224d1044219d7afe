"""
Test suite for dependency wiring and caller identity.

Covers bearer token parsing, authenticate(), the Supabase identity
resolver (with a mocked client), the vector store factory and the
app-level settings.

System role: Verification of DI container and auth boundary
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from ragchat.api.deps import authenticate, bearer_token, get_service_cache
from ragchat.api.main import create_app
from ragchat.boundary.auth.supabase_identity import CallerIdentity, SupabaseIdentityResolver
from ragchat.boundary.vdb.memory_store import InMemoryVectorIndex
from ragchat.boundary.vdb.vector_store_factory import get_vector_index
from ragchat.configs import get_settings
from ragchat.core.exceptions import AuthenticationError


def _supabase_client(user=None, error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.auth.get_user.side_effect = error
    else:
        client.auth.get_user.return_value = SimpleNamespace(user=user)
    return client


class TestBearerToken:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc", "abc"),
            ("bearer  abc ", "abc"),
            ("Basic abc", None),
            ("Bearer ", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parsing(self, header, expected) -> None:
        assert bearer_token(header) == expected


class TestSupabaseIdentityResolver:
    def test_requires_credentials(self) -> None:
        with pytest.raises(ValueError):
            SupabaseIdentityResolver(url=None, key=None)

    @pytest.mark.asyncio
    async def test_resolves_user(self) -> None:
        client = _supabase_client(user=SimpleNamespace(id="user-1", email="a@b.c"))
        resolver = SupabaseIdentityResolver(client=client)

        caller = await resolver.get_caller("jwt")

        assert caller == CallerIdentity(id="user-1", email="a@b.c")
        client.auth.get_user.assert_called_once_with("jwt")

    @pytest.mark.asyncio
    async def test_missing_token_skips_lookup(self) -> None:
        client = _supabase_client()
        resolver = SupabaseIdentityResolver(client=client)

        assert await resolver.get_caller(None) is None
        client.auth.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_token(self) -> None:
        resolver = SupabaseIdentityResolver(client=_supabase_client(error=RuntimeError("expired")))

        assert await resolver.get_caller("jwt") is None

    @pytest.mark.asyncio
    async def test_no_user_in_response(self) -> None:
        resolver = SupabaseIdentityResolver(client=_supabase_client(user=None))

        assert await resolver.get_caller("jwt") is None


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_returns_caller(self) -> None:
        client = _supabase_client(user=SimpleNamespace(id="user-1", email=None))
        resolver = SupabaseIdentityResolver(client=client)

        caller = await authenticate("Bearer jwt", resolver)

        assert caller.id == "user-1"

    @pytest.mark.asyncio
    async def test_raises_when_unresolved(self) -> None:
        resolver = SupabaseIdentityResolver(client=_supabase_client(user=None))

        with pytest.raises(AuthenticationError):
            await authenticate("Bearer jwt", resolver)


class TestVectorStoreFactory:
    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_memory_store(self, monkeypatch) -> None:
        monkeypatch.setenv("VECTOR_STORE_STORE_TYPE", "memory")

        assert isinstance(get_vector_index(), InMemoryVectorIndex)

    def test_invalid_store_type(self, monkeypatch) -> None:
        monkeypatch.setenv("VECTOR_STORE_STORE_TYPE", "faiss")

        with pytest.raises(ValueError, match="VECTOR_STORE_STORE_TYPE"):
            get_vector_index()


class TestServiceCache:
    def test_vector_index_is_cached_until_cleared(self) -> None:
        cache = get_service_cache()
        cache.clear()
        with patch(
            "ragchat.boundary.vdb.vector_store_factory.get_vector_index",
            side_effect=lambda: InMemoryVectorIndex(),
        ) as factory:
            first = cache.vector_index
            assert cache.vector_index is first
            cache.clear()
            assert cache.vector_index is not first

        assert factory.call_count == 2
        cache.clear()


class TestAppSettings:
    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_defaults(self, monkeypatch) -> None:
        for name in ("RAGCHAT_ENVIRONMENT", "RAGCHAT_LOG_LEVEL", "RAGCHAT_CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = get_settings()

        assert settings.app_name == "RAG Chat API"
        assert settings.log_level == "INFO"
        assert settings.cors_origins == ["*"]
        assert settings.docs_enabled

    def test_reads_prefixed_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("RAGCHAT_LOG_LEVEL", "debug")
        monkeypatch.setenv("RAGCHAT_CORS_ORIGINS", '["https://chat.example.com"]')

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.cors_origins == ["https://chat.example.com"]

    def test_production_hides_docs(self, monkeypatch) -> None:
        monkeypatch.setenv("RAGCHAT_ENVIRONMENT", "production")

        app = create_app()

        assert app.docs_url is None
        assert app.redoc_url is None

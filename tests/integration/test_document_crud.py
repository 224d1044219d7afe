"""
Test suite for DocumentCRUD database operations.

System role: Verification of document metadata persistence
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ragchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from ragchat.boundary.db.models.document_model import DocumentModel


class TestDocumentCRUDInit:
    def test_init_should_set_model_to_document_model(self) -> None:
        assert DocumentCRUD().model == DocumentModel


class TestDocumentCRUDListForOwner:
    @pytest.mark.asyncio
    async def test_lists_newest_first_and_scoped(
        self, test_async_db: AsyncSession, owner_id: str, other_owner_id: str
    ) -> None:
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        await document_crud.create(
            test_async_db, owner_id=owner_id, name="old.pdf", chunk_count=1, created_at=base
        )
        await document_crud.create(
            test_async_db,
            owner_id=owner_id,
            name="new.pdf",
            chunk_count=2,
            created_at=base + timedelta(days=1),
        )
        await document_crud.create(test_async_db, owner_id=other_owner_id, name="theirs.pdf")

        documents = await document_crud.list_for_owner(test_async_db, owner_id)

        assert [d.name for d in documents] == ["new.pdf", "old.pdf"]

    @pytest.mark.asyncio
    async def test_limit(self, test_async_db: AsyncSession, owner_id: str) -> None:
        for i in range(3):
            await document_crud.create(test_async_db, owner_id=owner_id, name=f"{i}.pdf")

        assert len(await document_crud.list_for_owner(test_async_db, owner_id, limit=2)) == 2

    @pytest.mark.asyncio
    async def test_chunk_count_defaults_to_zero(self, test_async_db: AsyncSession, owner_id: str) -> None:
        document = await document_crud.create(test_async_db, owner_id=owner_id, name="a.pdf")

        assert document.chunk_count == 0


class TestDocumentCRUDDeleteForOwner:
    @pytest.mark.asyncio
    async def test_deletes_owned_document(self, test_async_db: AsyncSession, owner_id: str) -> None:
        document = await document_crud.create(test_async_db, owner_id=owner_id, name="a.pdf")

        assert await document_crud.delete_for_owner(test_async_db, document.id, owner_id) is True
        assert await document_crud.list_for_owner(test_async_db, owner_id) == []

    @pytest.mark.asyncio
    async def test_refuses_other_owner(
        self, test_async_db: AsyncSession, owner_id: str, other_owner_id: str
    ) -> None:
        document = await document_crud.create(test_async_db, owner_id=owner_id, name="a.pdf")

        assert await document_crud.delete_for_owner(test_async_db, document.id, other_owner_id) is False
        assert len(await document_crud.list_for_owner(test_async_db, owner_id)) == 1

    @pytest.mark.asyncio
    async def test_unknown_id(self, test_async_db: AsyncSession, owner_id: str) -> None:
        assert await document_crud.delete_for_owner(test_async_db, uuid.uuid4(), owner_id) is False

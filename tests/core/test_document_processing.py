"""
Test suite for document ingestion tasks.

Tests parsing guards, chunking and batched vector upload. Upload uses a
mocked index so batch boundaries can be asserted.

System role: Verification of document processing pipeline stages
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.documents import Document

from ragchat.core.document_processing.tasks import (
    ChunkingTask,
    ParsingTask,
    VectorStoreTask,
    vector_id,
)
from ragchat.core.exceptions import ParsingError


class TestParsingTask:
    """Test suite for ParsingTask.parse()."""

    def test_rejects_non_pdf(self) -> None:
        with pytest.raises(ParsingError) as exc_info:
            ParsingTask().parse(b"hello", "notes.txt")

        assert "PDF" in exc_info.value.message
        assert exc_info.value.details["file_name"] == "notes.txt"

    def test_rejects_empty_content(self) -> None:
        with pytest.raises(ParsingError, match="empty"):
            ParsingTask().parse(b"", "notes.pdf")

    def test_unreadable_pdf_raises_parsing_error(self) -> None:
        with pytest.raises(ParsingError, match="Failed to parse PDF"):
            ParsingTask().parse(b"not really a pdf", "broken.pdf")

    def test_keeps_only_pages_with_text(self) -> None:
        pages = [
            Document(page_content="Page one text", metadata={"page": 0}),
            Document(page_content="   ", metadata={"page": 1}),
        ]
        loader = MagicMock()
        loader.return_value.load.return_value = pages

        with patch("ragchat.core.document_processing.tasks.parsing_task.PyPDFLoader", loader):
            result = ParsingTask().parse(b"%PDF-1.4", "Notes.PDF")

        assert [doc.page_content for doc in result] == ["Page one text"]

    def test_no_text_raises(self) -> None:
        loader = MagicMock()
        loader.return_value.load.return_value = [Document(page_content="")]

        with patch("ragchat.core.document_processing.tasks.parsing_task.PyPDFLoader", loader):
            with pytest.raises(ParsingError, match="no extractable text"):
                ParsingTask().parse(b"%PDF-1.4", "scan.pdf")


class TestChunkingTask:
    """Test suite for ChunkingTask.chunk()."""

    def test_short_document_is_one_chunk(self) -> None:
        chunks = ChunkingTask().chunk([Document(page_content="A short page.")])

        assert chunks == ["A short page."]

    def test_long_document_splits_within_size(self) -> None:
        text = " ".join(f"word{i}" for i in range(600))

        chunks = ChunkingTask(chunk_size=200, chunk_overlap=20).chunk([Document(page_content=text)])

        assert len(chunks) > 1
        assert all(len(chunk) <= 200 for chunk in chunks)
        assert chunks[0].startswith("word0")

    def test_empty_input(self) -> None:
        assert ChunkingTask().chunk([]) == []


class TestVectorStoreTask:
    """Test suite for VectorStoreTask.upload()."""

    def test_vector_id_is_deterministic(self) -> None:
        assert vector_id("doc-1", 3) == "doc-1-3"

    def test_rejects_non_positive_batch_size(self, embedding_client) -> None:
        with pytest.raises(ValueError):
            VectorStoreTask(embedding_client, MagicMock(), batch_size=0)

    @pytest.mark.asyncio
    async def test_upserts_in_batches(self, embedding_client) -> None:
        index = MagicMock()
        index.upsert = AsyncMock()
        task = VectorStoreTask(embedding_client, index, batch_size=2)
        chunks = ["alpha one", "beta two", "gamma three", "alpha four", "beta five"]

        count = await task.upload(chunks, "doc-1", "greek.pdf", "user-1")

        assert count == 5
        batch_sizes = [len(call.args[0]) for call in index.upsert.await_args_list]
        assert batch_sizes == [2, 2, 1]

    @pytest.mark.asyncio
    async def test_records_carry_ids_and_metadata(self, embedding_client) -> None:
        index = MagicMock()
        index.upsert = AsyncMock()
        task = VectorStoreTask(embedding_client, index)

        await task.upload(["alpha one", "beta two"], "doc-1", "greek.pdf", "user-1")

        [records] = [call.args[0] for call in index.upsert.await_args_list]
        assert [r.id for r in records] == ["doc-1-0", "doc-1-1"]
        assert records[0].values == [1.0, 0.0, 0.0]
        assert records[1].metadata == {
            "text": "beta two",
            "filename": "greek.pdf",
            "document_id": "doc-1",
            "user_id": "user-1",
        }

    @pytest.mark.asyncio
    async def test_upload_is_searchable_by_owner(
        self, embedding_client, vector_index, retrieval_client
    ) -> None:
        task = VectorStoreTask(embedding_client, vector_index)

        await task.upload(["alpha facts", "beta facts"], "doc-1", "greek.pdf", "user-1")

        passages = await retrieval_client.retrieve("alpha", "user-1", 1)
        assert passages[0].text == "alpha facts"
        assert passages[0].source_label == "greek.pdf"
        assert await retrieval_client.retrieve("alpha", "user-2", 5) == []

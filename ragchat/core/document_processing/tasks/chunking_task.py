"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits parsed pages into retrievable chunks while preserving context.

Dependencies: langchain_text_splitters
System role: Second stage of document ingestion
"""

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter


class ChunkingTask:
    """Split documents into overlapping character chunks."""

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
        )

    def chunk(self, documents: list[Document]) -> list[str]:
        """
        Split documents into chunk texts.

        Args:
            documents: Parsed page Documents

        Returns:
            list[str]: Non-empty chunk texts in document order
        """
        chunks = self._splitter.split_documents(documents)
        return [chunk.page_content for chunk in chunks if chunk.page_content.strip()]

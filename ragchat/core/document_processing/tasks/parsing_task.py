"""
Document parsing task using LangChain PyPDFLoader.

Converts uploaded PDF bytes into LangChain Documents, one per page.

Dependencies: langchain_community.document_loaders, pypdf
System role: First stage of document ingestion
"""

import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader
from langchain_core.documents import Document

from ragchat.core.exceptions import ParsingError


class ParsingTask:
    """Parse PDF uploads into LangChain Documents."""

    def parse(self, content: bytes, file_name: str) -> list[Document]:
        """
        Parse PDF bytes into page Documents with non-empty text.

        Args:
            content: Raw PDF bytes
            file_name: Original upload name (used in errors)

        Returns:
            list[Document]: Pages that contain extractable text

        Raises:
            ParsingError: When the file is not a PDF, cannot be read, or has no text
        """
        if not file_name.lower().endswith(".pdf"):
            raise ParsingError("Only PDF files are supported", file_name=file_name)
        if not content:
            raise ParsingError("Uploaded file is empty", file_name=file_name)

        # PyPDFLoader reads from a path
        fd, path = tempfile.mkstemp(suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            documents = PyPDFLoader(path).load()
        except Exception as e:
            raise ParsingError(f"Failed to parse PDF: {e}", file_name=file_name) from e
        finally:
            os.remove(path)

        pages = [doc for doc in documents if doc.page_content.strip()]
        if not pages:
            raise ParsingError("PDF document contains no extractable text", file_name=file_name)
        return pages

"""
Document processing module.

Ingestion tasks that turn an uploaded PDF into owner-tagged vectors.

Dependencies: langchain_community, langchain_text_splitters, ragchat.boundary.vdb
System role: Document ingestion
"""

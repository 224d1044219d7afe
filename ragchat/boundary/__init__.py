"""Adapters to external collaborators: storage, vector index, embeddings, identity."""

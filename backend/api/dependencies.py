"""Shared dependencies for API routes."""

from services.embeddings import EmbeddingProvider, get_embedding_provider
from services.example_store import ExampleStore, get_example_store


def get_provider() -> EmbeddingProvider:
    return get_embedding_provider()


def get_store() -> ExampleStore:
    return get_example_store()

"""Embedding generation for resume sections and job descriptions.

The provider is a collaborator behind a small protocol so scoring code can be
exercised with a deterministic stand-in. Input validation and truncation
happen here, before any provider is called.
"""

import asyncio
import logging
from typing import Protocol

from config import settings
from services import gemini_client
from services.errors import EmbeddingInputError, NoMeaningfulSectionsError
from services.section_parser import split_into_sections
from models.schemas.semantic import SectionEmbedding

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4

# Sections shorter than this (after trimming) carry too little signal to embed
MIN_SECTION_CHARS = 20


class EmbeddingProvider(Protocol):
    async def embed(self, text: str) -> list[float]:
        """Return one embedding vector for the input text."""


class GeminiEmbeddingProvider:
    """Embeds through the Gemini embedding model configured in settings."""

    async def embed(self, text: str) -> list[float]:
        return await gemini_client.embed_content(text)


_default_provider: EmbeddingProvider | None = None


def get_embedding_provider() -> EmbeddingProvider:
    global _default_provider
    if _default_provider is None:
        _default_provider = GeminiEmbeddingProvider()
    return _default_provider


def truncate_for_embedding(text: str, max_tokens: int | None = None) -> str:
    """Cut text to the provider's token budget using the ~4 chars/token heuristic."""
    limit = (max_tokens or settings.embedding_max_input_tokens) * CHARS_PER_TOKEN
    return text[:limit] if len(text) > limit else text


async def generate_embedding(
    text: str, provider: EmbeddingProvider | None = None
) -> list[float]:
    """Embed a single text. Empty or whitespace-only text is rejected."""
    if not text or not text.strip():
        raise EmbeddingInputError("Cannot generate embedding for empty text")

    provider = provider or get_embedding_provider()
    return await provider.embed(truncate_for_embedding(text).strip())


async def generate_section_embeddings(
    resume_text: str, provider: EmbeddingProvider | None = None
) -> list[SectionEmbedding]:
    """Split the resume into sections and embed every meaningful one concurrently."""
    meaningful = [
        s for s in split_into_sections(resume_text)
        if len(s.content.strip()) >= MIN_SECTION_CHARS
    ]
    if not meaningful:
        raise NoMeaningfulSectionsError(
            "No meaningful sections found in resume text for embedding generation"
        )

    vectors = await asyncio.gather(
        *(generate_embedding(s.content, provider) for s in meaningful)
    )
    logger.debug("Embedded %d resume sections", len(meaningful))
    return [
        SectionEmbedding(section=s.name, embedding=vec, content=s.content)
        for s, vec in zip(meaningful, vectors)
    ]

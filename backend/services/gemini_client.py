"""Google Gemini API wrapper with error handling.

generate_json is best-effort: every failure is logged and turned into None so
callers can degrade. embed_content raises, because embeddings are required
inputs wherever they are requested.
"""

import json
import logging

from google import genai
from google.genai import types

from config import settings
from services.errors import EmbeddingUnavailableError

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


async def generate_json(prompt: str, temperature: float = 0.3) -> dict | None:
    """Send a prompt to Gemini and parse the JSON response."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=4096,
                response_mime_type="application/json",
            ),
        )
        return json.loads(_strip_code_fences(response.text or ""))

    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        return None
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None


async def embed_content(text: str) -> list[float]:
    """Embed one text with the configured Gemini embedding model."""
    client = get_client()
    if client is None:
        raise EmbeddingUnavailableError("Gemini API key not configured")

    try:
        response = await client.aio.models.embed_content(
            model=settings.embedding_model,
            contents=text,
            config=types.EmbedContentConfig(
                output_dimensionality=settings.embedding_dimensions,
            ),
        )
    except Exception as e:
        logger.error("Gemini embedding error: %s", e)
        raise EmbeddingUnavailableError(f"Embedding request failed: {e}") from e

    if not response.embeddings or response.embeddings[0].values is None:
        raise EmbeddingUnavailableError("Gemini returned no embedding")
    return list(response.embeddings[0].values)

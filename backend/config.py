import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    max_upload_size_mb: int = 5
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    rate_limit_enabled: bool = True

    # Embedding provider
    embedding_model: str = "gemini-embedding-001"
    embedding_dimensions: int = 1536
    embedding_max_input_tokens: int = 8191  # input truncated at ~4 chars per token

    # Historical example store + similarity retrieval
    examples_store_path: str = "data/resume_examples.jsonl"
    similarity_limit: int = 20
    similarity_min: float = 0.65
    similarity_candidate_pool: int = 100

    # Batch auto-labeling window (concurrent LLM calls)
    label_concurrency: int = 5

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})

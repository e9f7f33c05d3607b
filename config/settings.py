# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os

from utility.errors import ConfigurationError


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise ConfigurationError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise ConfigurationError(f"Env var {name} must be a float, got {v!r}") from e


# -----------------------------------------------------------------------------
# Chunking
# -----------------------------------------------------------------------------
DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


# -----------------------------------------------------------------------------
# Vector storage (Chroma)
# -----------------------------------------------------------------------------
DEFAULT_COLLECTION_NAME = "codebase-embeddings"
DEFAULT_CHROMA_ENDPOINT = "http://localhost:8000"
DEFAULT_CHROMA_TIMEOUT_S = 30.0


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
DEFAULT_TOP_K = 5


# -----------------------------------------------------------------------------
# Embedding model
# -----------------------------------------------------------------------------
PROVIDER_SENTENCE_TRANSFORMERS = "sentence-transformers"
PROVIDER_AZURE_OPENAI = "azure-openai"
EMBEDDING_PROVIDERS = (PROVIDER_SENTENCE_TRANSFORMERS, PROVIDER_AZURE_OPENAI)

DEFAULT_EMBEDDING_PROVIDER = PROVIDER_SENTENCE_TRANSFORMERS
DEFAULT_EMBEDDING_MODEL = "all-MiniLM-L6-v2"
DEFAULT_EMBEDDING_DEVICE = "cpu"
DEFAULT_EMBEDDING_BATCH_SIZE = 64
AZURE_OPENAI_API_VERSION = "2024-10-21"

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

from dataclasses import dataclass

from dotenv import load_dotenv, find_dotenv

from config import settings
from config.settings import _env, _env_float, _env_int
from utility.errors import ConfigurationError

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # Chunking
    chunk_size: int = settings.DEFAULT_CHUNK_SIZE
    chunk_overlap: int = settings.DEFAULT_CHUNK_OVERLAP

    # Chroma Vector Database
    collection_name: str = settings.DEFAULT_COLLECTION_NAME
    vector_store_endpoint: str = settings.DEFAULT_CHROMA_ENDPOINT
    chroma_timeout_s: float = settings.DEFAULT_CHROMA_TIMEOUT_S

    # Search
    default_top_k: int = settings.DEFAULT_TOP_K

    # Embedding model
    embedding_provider: str = settings.DEFAULT_EMBEDDING_PROVIDER
    embedding_model: str = settings.DEFAULT_EMBEDDING_MODEL
    embedding_device: str = settings.DEFAULT_EMBEDDING_DEVICE
    embedding_batch_size: int = settings.DEFAULT_EMBEDDING_BATCH_SIZE

    # Azure OpenAI (only for embedding_provider == "azure-openai")
    openai_azure_api_key: str = ""
    openai_azure_endpoint: str = ""
    openai_azure_embed_deployment: str = ""

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "chunk_size": "SEMINDEX_CHUNK_SIZE",
        "chunk_overlap": "SEMINDEX_CHUNK_OVERLAP",
        "collection_name": "SEMINDEX_COLLECTION",
        "vector_store_endpoint": "CHROMA_ENDPOINT",
        "chroma_timeout_s": "CHROMA_TIMEOUT_S",
        "default_top_k": "SEMINDEX_DEFAULT_TOP_K",
        "embedding_provider": "SEMINDEX_EMBEDDING_PROVIDER",
        "embedding_model": "SEMINDEX_EMBEDDING_MODEL",
        "embedding_device": "SEMINDEX_EMBEDDING_DEVICE",
        "embedding_batch_size": "SEMINDEX_EMBEDDING_BATCH_SIZE",
        "openai_azure_api_key": "AZURE_OPENAI_API_KEY",
        "openai_azure_endpoint": "AZURE_OPENAI_ENDPOINT",
        "openai_azure_embed_deployment": "AZURE_OPENAI_EMBED_DEPLOYMENT",
    }

    AZURE_OPENAI_FIELDS = (
        "openai_azure_api_key",
        "openai_azure_endpoint",
        "openai_azure_embed_deployment",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables, falling back to defaults."""
        env = Config.ENV_VARS
        return Config(
            chunk_size=_env_int(env["chunk_size"], settings.DEFAULT_CHUNK_SIZE),
            chunk_overlap=_env_int(env["chunk_overlap"], settings.DEFAULT_CHUNK_OVERLAP),
            collection_name=_env(env["collection_name"], settings.DEFAULT_COLLECTION_NAME),
            vector_store_endpoint=_env(env["vector_store_endpoint"], settings.DEFAULT_CHROMA_ENDPOINT),
            chroma_timeout_s=_env_float(env["chroma_timeout_s"], settings.DEFAULT_CHROMA_TIMEOUT_S),
            default_top_k=_env_int(env["default_top_k"], settings.DEFAULT_TOP_K),
            embedding_provider=_env(env["embedding_provider"], settings.DEFAULT_EMBEDDING_PROVIDER).lower(),
            embedding_model=_env(env["embedding_model"], settings.DEFAULT_EMBEDDING_MODEL),
            embedding_device=_env(env["embedding_device"], settings.DEFAULT_EMBEDDING_DEVICE),
            embedding_batch_size=_env_int(env["embedding_batch_size"], settings.DEFAULT_EMBEDDING_BATCH_SIZE),
            openai_azure_api_key=_env(env["openai_azure_api_key"]),
            openai_azure_endpoint=_env(env["openai_azure_endpoint"]),
            openai_azure_embed_deployment=_env(env["openai_azure_embed_deployment"]),
        )

    def __post_init__(self):
        """
        Fail fast on values the pipeline cannot work with.
        """
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be > 0, got {self.chunk_size}")
        if not 0 <= self.chunk_overlap < self.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.chunk_overlap}) must satisfy 0 <= overlap < chunk_size ({self.chunk_size})"
            )
        if self.default_top_k < 1:
            raise ConfigurationError(f"default_top_k must be >= 1, got {self.default_top_k}")
        if self.embedding_batch_size < 1:
            raise ConfigurationError(f"embedding_batch_size must be >= 1, got {self.embedding_batch_size}")
        if self.chroma_timeout_s <= 0:
            raise ConfigurationError(f"chroma_timeout_s must be > 0, got {self.chroma_timeout_s}")
        if not self.collection_name:
            raise ConfigurationError("collection_name resolved to empty value")
        if self.embedding_provider not in settings.EMBEDDING_PROVIDERS:
            raise ConfigurationError(
                f"Unknown embedding_provider {self.embedding_provider!r}; "
                f"expected one of {settings.EMBEDDING_PROVIDERS}"
            )

        if self.embedding_provider == settings.PROVIDER_AZURE_OPENAI:
            missing_fields = [f for f in self.AZURE_OPENAI_FIELDS if not getattr(self, f)]
            if missing_fields:
                missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
                raise ConfigurationError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "chunk_size": self.chunk_size,
            "chunk_overlap": self.chunk_overlap,
            "collection_name": self.collection_name,
            "vector_store_endpoint": self.vector_store_endpoint,
            "chroma_timeout_s": self.chroma_timeout_s,
            "default_top_k": self.default_top_k,
            "embedding_provider": self.embedding_provider,
            "embedding_model": self.embedding_model,
            "openai_azure_endpoint": self.openai_azure_endpoint,
            "openai_azure_embed_deployment": self.openai_azure_embed_deployment,
        }

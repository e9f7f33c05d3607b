# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: errors.py
# -----------------------------------------------------------------------------
"""
Exception taxonomy for the indexing pipeline.

Every error raised by the pipeline derives from SemanticIndexError.
Wrapped failures keep the original exception as __cause__ (raise ... from e).
Nothing in the pipeline retries on its own; StoreTimeoutError is flagged
retryable so callers can decide.
"""


class SemanticIndexError(Exception):
    """Base class for all pipeline errors."""

    retryable: bool = False


class ConfigurationError(SemanticIndexError):
    """Invalid configuration, e.g. chunk overlap >= chunk size."""


class DocumentReadError(SemanticIndexError):
    """A source document is missing, unreadable or not valid UTF-8."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Could not read document '{path}'")


class ModelLoadError(SemanticIndexError):
    """The embedding model could not be loaded."""


class EmbeddingError(SemanticIndexError):
    """The loaded model failed to produce embeddings for a batch."""


class StoreInitError(SemanticIndexError):
    """The vector store collection could not be created or fetched."""

    def __init__(self, collection_name: str, message: str | None = None):
        self.collection_name = collection_name
        super().__init__(
            message or f"Could not initialize vector store collection '{collection_name}'."
        )


class NotInitializedError(SemanticIndexError):
    """An operation was attempted before initialize() succeeded."""


class StoreTransportError(SemanticIndexError):
    """A vector database call (add/query/count) failed."""


class StoreTimeoutError(StoreTransportError):
    """A vector database call did not complete within the configured timeout."""

    retryable = True

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: VectorBackend
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, runtime_checkable

from embedding.Embedder import EmbeddingFn


@dataclass
class CollectionHandle:
    """A named collection bound to the embedding function used for its documents."""
    name: str
    embedding_fn: EmbeddingFn
    native: Any = None  # the backend's own collection object


@runtime_checkable
class VectorBackend(Protocol):
    """
    The only operations the pipeline needs from a vector database.
    Implementations raise StoreTransportError / StoreTimeoutError.
    """

    async def get_or_create_collection(self, name: str, embedding_fn: EmbeddingFn) -> CollectionHandle:
        ...

    async def add(
            self,
            collection: CollectionHandle,
            ids: Sequence[str],
            documents: Sequence[str],
            embeddings: Sequence[Sequence[float]],
            metadatas: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> None:
        ...

    async def query(
            self,
            collection: CollectionHandle,
            query_embeddings: Sequence[Sequence[float]],
            n_results: int,
    ) -> Mapping[str, Any]:
        ...

    async def count(self, collection: CollectionHandle) -> int:
        ...

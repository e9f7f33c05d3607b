# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: SemanticVectorStore
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, Optional, Sequence

from embedding.Embedder import Embedder
from utility.errors import NotInitializedError, StoreInitError
from utility.logging_utils import get_class_logger
from vectorstore.SearchResult import SearchResult
from vectorstore.VectorBackend import CollectionHandle, VectorBackend


class SemanticVectorStore:
    """
    Wraps one named collection.

    State is Uninitialized until initialize() succeeds, then Ready for the
    rest of its life. Everything except initialize() requires Ready.
    """

    def __init__(
            self,
            backend: VectorBackend,
            embedder: Embedder,
            *,
            collection_name: str,
            logger: logging.Logger | None = None,
    ):
        self.backend = backend
        self.embedder = embedder
        self.collection_name = collection_name
        self.logger = logger or get_class_logger(self.__class__)
        self._collection: Optional[CollectionHandle] = None

    @property
    def is_ready(self) -> bool:
        return self._collection is not None

    def _require_collection(self) -> CollectionHandle:
        if self._collection is None:
            raise NotInitializedError(
                f"Vector store for collection '{self.collection_name}' is not initialized. "
                "Call initialize() first."
            )
        return self._collection

    async def initialize(self) -> None:
        """
        Get-or-create the collection. Safe to call repeatedly.
        """
        try:
            collection = await self.backend.get_or_create_collection(
                self.collection_name, self.embedder.as_embedding_fn()
            )
        except Exception as e:
            self.logger.error(
                "Failed to initialize collection '%s': %s", self.collection_name, e, exc_info=True
            )
            raise StoreInitError(self.collection_name) from e

        self._collection = collection
        self.logger.info("Collection '%s' is ready.", self.collection_name)

    async def add_documents(
            self,
            ids: Sequence[str],
            documents: Sequence[str],
            metadatas: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> None:
        collection = self._require_collection()

        if len(ids) != len(documents):
            raise ValueError(f"ids ({len(ids)}) and documents ({len(documents)}) length mismatch")
        if metadatas is not None and len(metadatas) != len(ids):
            raise ValueError(f"metadatas ({len(metadatas)}) and ids ({len(ids)}) length mismatch")
        if len(set(ids)) != len(ids):
            raise ValueError("ids must be unique within a single add_documents call")
        if not ids:
            self.logger.debug("add_documents called with no documents; nothing to do")
            return

        embeddings = await collection.embedding_fn(list(documents))
        await self.backend.add(
            collection,
            ids=list(ids),
            documents=list(documents),
            embeddings=embeddings,
            metadatas=list(metadatas) if metadatas is not None else None,
        )
        self.logger.info("Added %d documents to collection '%s'", len(ids), self.collection_name)

    async def search(self, query: str, top_k: int = 5) -> SearchResult:
        collection = self._require_collection()
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")

        self.logger.info(
            "Querying collection '%s' with query=%r (top_k=%d)", self.collection_name, query, top_k
        )
        query_embedding = await self.embedder.generate_embedding(query)

        stored = await self.backend.count(collection)
        if stored == 0:
            self.logger.info("Collection '%s' is empty; returning no results", self.collection_name)
            return SearchResult.empty()

        raw = await self.backend.query(
            collection,
            query_embeddings=[query_embedding],
            n_results=min(top_k, stored),
        )
        result = SearchResult.from_chroma(raw)
        self.logger.info("Search complete: returned %d results (requested %d)", len(result), top_k)
        return result

    async def count(self) -> int:
        return await self.backend.count(self._require_collection())

    async def test_connection(self) -> bool:
        """
        Simple health check: can we talk to the database and our collection?
        """
        try:
            await self.count()
            return True
        except Exception as e:
            self.logger.error("Vector store connection check failed: %s", e)
            return False

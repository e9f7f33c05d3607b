# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: ChromaVectorBackend
# -----------------------------------------------------------------------------
import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Set
from urllib.parse import urlparse

import chromadb
from chromadb import ClientAPI

from utility.errors import SemanticIndexError, StoreTimeoutError, StoreTransportError
from utility.logging_utils import get_class_logger
from vectorstore.VectorBackend import CollectionHandle, EmbeddingFn


class ChromaVectorBackend:
    """
    VectorBackend over a synchronous chromadb client.

    The client is created lazily on first use, so an unreachable server shows
    up as a failed get_or_create_collection rather than a constructor error.
    Every call runs in a worker thread and is bounded by `timeout_s`. A
    timed-out add is deleted again by id once the late thread returns.
    """

    def __init__(
            self,
            client_factory: Callable[[], ClientAPI],
            *,
            timeout_s: float = 30.0,
            logger: logging.Logger | None = None,
    ):
        self.client_factory = client_factory
        self.timeout_s = timeout_s
        self.logger = logger or get_class_logger(self.__class__)
        self._client: Optional[ClientAPI] = None
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_endpoint(
            cls,
            endpoint: str,
            *,
            timeout_s: float = 30.0,
            logger: logging.Logger | None = None,
    ) -> "ChromaVectorBackend":
        parsed = urlparse(endpoint if "://" in endpoint else f"http://{endpoint}")
        ssl = parsed.scheme == "https"
        host = parsed.hostname or "localhost"
        port = parsed.port or (443 if ssl else 8000)

        def factory() -> ClientAPI:
            return chromadb.HttpClient(host=host, port=port, ssl=ssl)

        backend = cls(factory, timeout_s=timeout_s, logger=logger)
        backend.logger.info("Chroma backend configured for %s://%s:%d", "https" if ssl else "http", host, port)
        return backend

    def _get_client(self) -> ClientAPI:
        # runs inside a worker thread
        if self._client is None:
            self._client = self.client_factory()
        return self._client

    async def _call(
            self,
            op: str,
            fn: Callable[..., Any],
            *args: Any,
            rollback: Optional[Callable[[], Any]] = None,
            **kwargs: Any,
    ) -> Any:
        # A worker thread cannot be cancelled, so on timeout the call keeps
        # running and `rollback` undoes whatever it writes once it finishes.
        work = asyncio.ensure_future(asyncio.to_thread(fn, *args, **kwargs))
        try:
            return await asyncio.wait_for(asyncio.shield(work), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            self.logger.error("Chroma %s timed out after %.1fs", op, self.timeout_s)
            self._after_timeout(op, work, rollback)
            raise StoreTimeoutError(f"Chroma {op} timed out after {self.timeout_s}s") from e
        except SemanticIndexError:
            raise
        except Exception as e:
            self.logger.error("Chroma %s failed: %s", op, e)
            raise StoreTransportError(f"Chroma {op} failed: {e}") from e

    def _after_timeout(self, op: str, work: asyncio.Future, rollback: Optional[Callable[[], Any]]) -> None:
        if rollback is None:
            # result is discarded; retrieve it so a late failure is not reported as unhandled
            work.add_done_callback(lambda f: f.cancelled() or f.exception())
            return
        task = asyncio.ensure_future(self._rollback_after(op, work, rollback))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _rollback_after(self, op: str, work: asyncio.Future, rollback: Callable[[], Any]) -> None:
        try:
            await work
            self.logger.warning("Chroma %s completed after its timeout, rolling it back", op)
        except Exception as e:
            # may still have been partly applied server side
            self.logger.warning("Chroma %s failed after its timeout (%s), rolling it back", op, e)

        try:
            await asyncio.to_thread(rollback)
        except Exception as e:
            self.logger.error("Rollback of timed-out Chroma %s failed: %s", op, e, exc_info=True)
            return
        self.logger.info("Rolled back timed-out Chroma %s", op)

    async def drain(self) -> None:
        """Wait for rollbacks of timed-out writes to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def get_or_create_collection(self, name: str, embedding_fn: EmbeddingFn) -> CollectionHandle:
        def _get_or_create():
            # Vectors are always supplied by the pipeline, so Chroma's own
            # default embedding function is disabled.
            return self._get_client().get_or_create_collection(name=name, embedding_function=None)

        native = await self._call("get_or_create_collection", _get_or_create)
        return CollectionHandle(name=name, embedding_fn=embedding_fn, native=native)

    async def add(
            self,
            collection: CollectionHandle,
            ids: Sequence[str],
            documents: Sequence[str],
            embeddings: Sequence[Sequence[float]],
            metadatas: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> None:
        kwargs: Dict[str, Any] = {
            "ids": list(ids),
            "documents": list(documents),
            "embeddings": [list(v) for v in embeddings],
        }
        if metadatas is not None:
            kwargs["metadatas"] = list(metadatas)

        # a retry that reuses ids must not be undone by an earlier rollback
        await self.drain()

        ids_list = kwargs["ids"]
        await self._call(
            "add",
            collection.native.add,
            rollback=lambda: collection.native.delete(ids=ids_list),
            **kwargs,
        )
        self.logger.debug("Added %d records to Chroma collection '%s'", len(ids), collection.name)

    async def query(
            self,
            collection: CollectionHandle,
            query_embeddings: Sequence[Sequence[float]],
            n_results: int,
    ) -> Mapping[str, Any]:
        return await self._call(
            "query",
            collection.native.query,
            query_embeddings=[list(v) for v in query_embeddings],
            n_results=n_results,
            include=["documents", "metadatas", "distances"],
        )

    async def count(self, collection: CollectionHandle) -> int:
        return int(await self._call("count", collection.native.count))

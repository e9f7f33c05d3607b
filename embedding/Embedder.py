# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: Embedder
# -----------------------------------------------------------------------------
import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List, Optional

from embedding.ModelHandle import ModelHandle
from embedding.ModelLoaders import EmbeddingModel, as_float_lists
from utility.errors import EmbeddingError
from utility.logging_utils import get_class_logger

EmbeddingFn = Callable[[List[str]], Awaitable[List[List[float]]]]


class Embedder:
    def __init__(
            self,
            handle: ModelHandle,
            *,
            batch_size: int = 64,
            logger: logging.Logger | None = None,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.handle = handle
        self.batch_size = batch_size
        self.logger = logger or get_class_logger(self.__class__)

        # Fixed by the first successful batch; every later vector must match
        self.dimension: Optional[int] = None

    async def generate_embedding(self, text: str) -> List[float]:
        model = await self.handle.get()
        vectors = await self._embed_batch(model, [text])
        return vectors[0]

    async def batch_embed(self, texts: Iterable[str]) -> List[List[float]]:
        """
        Embed texts in order. Output is index-aligned with the input.
        """
        items = list(texts)
        total = len(items)
        if total == 0:
            return []

        model = await self.handle.get()
        self.logger.info("Embedding %d texts (batch=%d)", total, self.batch_size)

        out: List[List[float]] = []
        for i in range(0, total, self.batch_size):
            out.extend(await self._embed_batch(model, items[i:i + self.batch_size]))

        self.logger.debug("Completed embeddings for %d texts (dim=%s)", len(out), self.dimension)
        return out

    def as_embedding_fn(self) -> EmbeddingFn:
        """The callable a collection is bound to for documents added without vectors."""
        return self.batch_embed

    async def _embed_batch(self, model: EmbeddingModel, texts: List[str]) -> List[List[float]]:
        # Model runs off the event loop; only plain float lists leave this
        # method, the model's own arrays/tensors are dropped with this frame.
        try:
            vectors = as_float_lists(await asyncio.to_thread(model.embed, texts))
        except Exception as e:
            self.logger.error("Embedding batch of %d texts failed: %s", len(texts), e)
            raise EmbeddingError(f"Embedding batch of {len(texts)} texts failed") from e

        if len(vectors) != len(texts):
            raise EmbeddingError(f"Embedding count mismatch: {len(vectors)} != {len(texts)}")

        for vec in vectors:
            if self.dimension is None:
                self.dimension = len(vec)
            elif len(vec) != self.dimension:
                raise EmbeddingError(
                    f"Embedding dimension changed: expected {self.dimension}, got {len(vec)}"
                )
        return vectors

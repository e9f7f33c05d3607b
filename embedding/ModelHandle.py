# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: ModelHandle
# -----------------------------------------------------------------------------
import asyncio
import logging
import time
from typing import Optional

from embedding.ModelLoaders import EmbeddingModel, ModelLoader
from utility.errors import ModelLoadError
from utility.logging_utils import get_class_logger


class ModelHandle:
    """
    Owns at most one loaded embedding model for the lifetime of the pipeline.

    The first call to get() starts a single loading task; every caller that
    arrives while it is in flight awaits that same task and gets the same
    model or the same ModelLoadError. A failed load is not remembered: the
    task is dropped and the next get() starts a fresh one.
    """

    def __init__(self, loader: ModelLoader, *, logger: logging.Logger | None = None):
        self.loader = loader
        self.logger = logger or get_class_logger(self.__class__)
        self._model: Optional[EmbeddingModel] = None
        self._loading: Optional[asyncio.Task] = None
        self.load_count = 0

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    async def get(self) -> EmbeddingModel:
        model = self._model
        if model is not None:
            return model

        # No await between the check and the assignment, so only one task is created
        if self._loading is None:
            self._loading = asyncio.ensure_future(self._load())
        task = self._loading

        try:
            # shield: one caller being cancelled must not cancel the shared load
            model = await asyncio.shield(task)
        finally:
            if task.done() and self._loading is task:
                self._loading = None

        self._model = model
        return model

    async def _load(self) -> EmbeddingModel:
        self.load_count += 1
        name = getattr(self.loader, "name", type(self.loader).__name__)
        self.logger.info("Loading embedding model '%s' (attempt %d)", name, self.load_count)

        start_time = time.time()
        try:
            model = await self.loader.load()
        except Exception as e:
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.error(
                "Failed to load embedding model '%s' after %.1f ms: %s", name, elapsed, e
            )
            raise ModelLoadError(f"Could not load the embedding model '{name}'.") from e

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info("Embedding model '%s' loaded (%.1f ms)", name, elapsed)
        return model

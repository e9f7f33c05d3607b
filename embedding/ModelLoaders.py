# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: ModelLoaders
# -----------------------------------------------------------------------------
"""
Embedding model providers.

A loader knows how to bring one embedding model into memory (asynchronously)
and returns an object exposing `embed(texts) -> array-like (n, D)`.
Loaders do not cache anything; ModelHandle owns the loaded instance.
"""
import asyncio
from typing import Any, List, Protocol, Sequence, runtime_checkable

import numpy as np
from openai import AzureOpenAI

from config import settings
from config.Config import Config


@runtime_checkable
class EmbeddingModel(Protocol):
    def embed(self, texts: Sequence[str]) -> Any:
        ...


@runtime_checkable
class ModelLoader(Protocol):
    name: str

    async def load(self) -> EmbeddingModel:
        ...


def l2_normalize(arr: np.ndarray) -> np.ndarray:
    # cosine-friendly unit vectors
    norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
    return arr / norms


class SentenceTransformerModel:
    def __init__(self, model: Any, *, normalize: bool = True):
        self.model = model
        self.normalize = normalize

    @property
    def dimension(self) -> int:
        return int(self.model.get_sentence_embedding_dimension())

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        return self.model.encode(
            list(texts),
            normalize_embeddings=self.normalize,
            convert_to_numpy=True,
            show_progress_bar=False,
        )


class SentenceTransformerLoader:
    """
    Local model weights via sentence-transformers. Download and
    initialisation happen in a worker thread so the event loop stays free.
    """

    def __init__(self, model_name: str, *, device: str = "cpu", normalize: bool = True):
        self.model_name = model_name
        self.device = device
        self.normalize = normalize
        self.name = f"sentence-transformers:{model_name}"

    async def load(self) -> SentenceTransformerModel:
        return await asyncio.to_thread(self._load_blocking)

    def _load_blocking(self) -> SentenceTransformerModel:
        # Imported here: torch is heavy and an unsupported runtime should
        # surface as a load failure, not an import failure of this module.
        from sentence_transformers import SentenceTransformer

        model = SentenceTransformer(self.model_name, device=self.device)
        return SentenceTransformerModel(model, normalize=self.normalize)


class AzureOpenAIEmbeddingModel:
    def __init__(self, client: AzureOpenAI, deployment: str, *, normalize: bool = True):
        self.client = client
        self.deployment = deployment
        self.normalize = normalize

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        resp = self.client.embeddings.create(model=self.deployment, input=list(texts))
        arr = np.asarray([d.embedding for d in resp.data], dtype=np.float32)
        if self.normalize and arr.size:
            arr = l2_normalize(arr)
        return arr


class AzureOpenAILoader:
    """
    Azure OpenAI embeddings deployment. "Loading" builds the client; retries
    are left to the SDK transport (`max_retries`).
    """

    def __init__(self, cfg: Config, *, normalize: bool = True, max_retries: int = 2, timeout_s: float = 60.0):
        self.cfg = cfg
        self.normalize = normalize
        self.max_retries = max_retries
        self.timeout_s = timeout_s
        self.name = f"azure-openai:{cfg.openai_azure_embed_deployment}"

    async def load(self) -> AzureOpenAIEmbeddingModel:
        client = await asyncio.to_thread(
            AzureOpenAI,
            api_key=self.cfg.openai_azure_api_key,
            azure_endpoint=self.cfg.openai_azure_endpoint.rstrip("/"),
            api_version=settings.AZURE_OPENAI_API_VERSION,
            max_retries=self.max_retries,
            timeout=self.timeout_s,
        )
        return AzureOpenAIEmbeddingModel(
            client, self.cfg.openai_azure_embed_deployment, normalize=self.normalize
        )


def build_model_loader(cfg: Config) -> ModelLoader:
    if cfg.embedding_provider == settings.PROVIDER_AZURE_OPENAI:
        return AzureOpenAILoader(cfg)
    return SentenceTransformerLoader(cfg.embedding_model, device=cfg.embedding_device)


def as_float_lists(arr: Any) -> List[List[float]]:
    """Convert a model's (n, D) output into plain Python float lists."""
    return np.asarray(arr, dtype=np.float32).tolist()

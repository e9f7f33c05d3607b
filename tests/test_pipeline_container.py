# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: test_pipeline_container.py
# -----------------------------------------------------------------------------
import os

import chromadb
import pytest

from conftest import CountingLoader
from config import settings
from config.Config import Config
from embedding.ModelLoaders import AzureOpenAILoader, SentenceTransformerLoader, build_model_loader
from services.PipelineContainer import PipelineContainer
from vectorstore.ChromaVectorBackend import ChromaVectorBackend


def test_default_wiring_is_lazy():
    cfg = Config(chunk_size=200, chunk_overlap=50, collection_name="wiring-test")
    container = PipelineContainer(cfg)

    assert isinstance(container.backend, ChromaVectorBackend)
    assert isinstance(container.model_handle.loader, SentenceTransformerLoader)
    assert not container.model_handle.is_loaded
    assert not container.store.is_ready
    assert container.chunker.chunk_size == 200
    assert container.chunker.overlap == 50
    assert container.orchestrator.default_top_k == cfg.default_top_k
    assert container.embedder.batch_size == cfg.embedding_batch_size


def test_build_model_loader_picks_provider():
    azure_cfg = Config(
        embedding_provider=settings.PROVIDER_AZURE_OPENAI,
        openai_azure_api_key="k",
        openai_azure_endpoint="https://example.openai.azure.com/",
        openai_azure_embed_deployment="text-embedding-3-large",
    )
    assert isinstance(build_model_loader(azure_cfg), AzureOpenAILoader)
    assert isinstance(build_model_loader(Config()), SentenceTransformerLoader)


@pytest.mark.asyncio
async def test_container_pipeline_with_injected_collaborators(tmp_path, collection_name):
    cfg = Config(chunk_size=50, chunk_overlap=10, collection_name=collection_name)
    loader = CountingLoader()
    container = PipelineContainer(
        cfg,
        backend=ChromaVectorBackend(lambda: chromadb.EphemeralClient()),
        model_loader=loader,
    )

    path = tmp_path / "readme.txt"
    path.write_text("semantic search over source files " * 5, encoding="utf-8")

    await container.orchestrator.initialize()
    ids = await container.orchestrator.ingest(path)
    result = await container.orchestrator.search("semantic search over source files", top_k=2)

    assert len(ids) > 1
    assert 0 < len(result) <= 2
    assert set(result.ids) <= set(ids)
    assert loader.calls == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_sentence_transformer_loader_real_model():
    """
    Integration: downloads/loads real weights. Opt in with SEMINDEX_RUN_INTEGRATION=1.
    """
    if os.getenv("SEMINDEX_RUN_INTEGRATION") != "1":
        pytest.skip("Set SEMINDEX_RUN_INTEGRATION=1 to load real embedding weights")
    pytest.importorskip("sentence_transformers")

    loader = SentenceTransformerLoader(settings.DEFAULT_EMBEDDING_MODEL)
    model = await loader.load()
    arr = model.embed(["hello world", "goodbye moon"])

    assert arr.shape == (2, model.dimension)

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: PipelineContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

from chunking.TextChunker import TextChunker
from config.Config import Config
from embedding.Embedder import Embedder
from embedding.ModelHandle import ModelHandle
from embedding.ModelLoaders import ModelLoader, build_model_loader
from services.IndexOrchestrator import IndexOrchestrator
from utility.logging_utils import get_class_logger
from vectorstore.ChromaVectorBackend import ChromaVectorBackend
from vectorstore.SemanticVectorStore import SemanticVectorStore
from vectorstore.VectorBackend import VectorBackend


class PipelineContainer:
    """
    Owns object instantiation and wiring for the indexing pipeline.
    Nothing here touches the network or loads the model; that happens on
    orchestrator.initialize() and on the first embedding call.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        *,
        backend: Optional[VectorBackend] = None,
        model_loader: Optional[ModelLoader] = None,
    ) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger = get_class_logger(self.__class__)
        self.logger.info("Building pipeline with config: %s", self.cfg.summary())

        # Embedding model (shared, loaded on first use)
        self.model_handle = ModelHandle(model_loader or build_model_loader(self.cfg))
        self.embedder = Embedder(self.model_handle, batch_size=self.cfg.embedding_batch_size)

        # Vector database
        self.backend = backend or ChromaVectorBackend.from_endpoint(
            self.cfg.vector_store_endpoint, timeout_s=self.cfg.chroma_timeout_s
        )
        self.store = SemanticVectorStore(
            self.backend, self.embedder, collection_name=self.cfg.collection_name
        )

        # Chunking + orchestration
        self.chunker = TextChunker(chunk_size=self.cfg.chunk_size, overlap=self.cfg.chunk_overlap)
        self.orchestrator = IndexOrchestrator(
            chunker=self.chunker,
            store=self.store,
            default_top_k=self.cfg.default_top_k,
        )

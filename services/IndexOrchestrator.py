# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: IndexOrchestrator.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from chunking.TextChunker import TextChunker
from document.ChunkRecord import ChunkRecord
from document.SourceDocument import SourceDocument
from utility.errors import DocumentReadError
from utility.logging_utils import get_class_logger
from vectorstore.SearchResult import SearchResult
from vectorstore.SemanticVectorStore import SemanticVectorStore


class IndexOrchestrator:
    """
    Owns the ingest/search pipeline:
      - read a UTF-8 file
      - chunk (overlapping character windows)
      - assign one fresh id per chunk, in document order
      - add to the vector store (embedding happens there)
      - search delegates straight to the vector store
    """

    def __init__(
        self,
        *,
        chunker: TextChunker,
        store: SemanticVectorStore,
        default_top_k: int = 5,
        logger: logging.Logger | None = None,
    ) -> None:
        self.chunker = chunker
        self.store = store
        self.default_top_k = default_top_k
        self.logger = logger or get_class_logger(self.__class__)

    async def initialize(self) -> None:
        self.logger.info("Initializing orchestrator...")
        await self.store.initialize()
        self.logger.info("Orchestrator initialized.")

    async def read_document(self, file_path: str | Path) -> SourceDocument:
        path = Path(file_path)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error("Failed to read document '%s': %s", path, e)
            raise DocumentReadError(str(path), f"Could not read document '{path}': {e}") from e
        return SourceDocument(source_path=str(path), text=text)

    def build_records(self, document: SourceDocument) -> List[ChunkRecord]:
        chunks = self.chunker.chunk_spans(document.text)
        return [
            ChunkRecord.create(chunk, document.source_path, index, doc_name=document.doc_name)
            for index, chunk in enumerate(chunks)
        ]

    async def ingest(self, file_path: str | Path) -> List[str]:
        """
        Index one file. The file's chunks go to the store in a single call,
        so a failure leaves none of this file's chunks behind from this call.
        Returns the chunk ids in document order.
        """
        self.logger.info("Processing document: %s", file_path)

        document = await self.read_document(file_path)
        records = self.build_records(document)
        if not records:
            self.logger.warning("No chunks produced for '%s' (empty document)", document.source_path)
            return []

        ids = [r.id for r in records]
        await self.store.add_documents(
            ids,
            [r.text for r in records],
            [r.to_metadata() for r in records],
        )

        self.logger.info(
            "Successfully processed and stored %d chunks from %s", len(records), document.source_path
        )
        return ids

    async def ingest_many(self, file_paths: Iterable[str | Path]) -> int:
        """
        Ingest several files concurrently. One file failing does not stop the
        others; returns how many files were indexed.
        """
        paths = list(file_paths)
        outcomes = await asyncio.gather(*(self._ingest_logged(p) for p in paths))
        ingested_count = sum(1 for ok in outcomes if ok)

        self.logger.info(
            "Batch ingest complete: %d/%d files successfully indexed", ingested_count, len(paths)
        )
        return ingested_count

    async def _ingest_logged(self, file_path: str | Path) -> bool:
        try:
            await self.ingest(file_path)
            return True
        except Exception as e:
            self.logger.error("Failed ingest for '%s': %s", file_path, e, exc_info=True)
            return False

    async def search(self, query: str, top_k: Optional[int] = None) -> SearchResult:
        k = self.default_top_k if top_k is None else top_k
        self.logger.info("Performing search for query: %r", query)
        results = await self.store.search(query, k)
        self.logger.info("Search completed.")
        return results

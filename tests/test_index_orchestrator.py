# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: test_index_orchestrator.py
# -----------------------------------------------------------------------------
import uuid

import chromadb
import pytest

from chunking.TextChunker import TextChunker
from services.IndexOrchestrator import IndexOrchestrator
from utility.errors import DocumentReadError, NotInitializedError, StoreTransportError
from vectorstore.ChromaVectorBackend import ChromaVectorBackend
from vectorstore.SearchResult import SearchResult
from vectorstore.SemanticVectorStore import SemanticVectorStore


class RecordingStore:
    """Captures add_documents calls instead of talking to a database."""

    def __init__(self, fail_on_add: bool = False):
        self.fail_on_add = fail_on_add
        self.adds = []
        self.searches = []
        self.initialized = 0

    async def initialize(self):
        self.initialized += 1

    async def add_documents(self, ids, documents, metadatas=None):
        if self.fail_on_add:
            raise StoreTransportError("Chroma add failed")
        self.adds.append((list(ids), list(documents), list(metadatas or [])))

    async def search(self, query, top_k=5):
        self.searches.append((query, top_k))
        return SearchResult.empty()


@pytest.fixture
def chunker() -> TextChunker:
    return TextChunker(chunk_size=100, overlap=20)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("a" * 100 + "b" * 100 + "c" * 60, encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_ingest_assigns_unique_ids_in_document_order(chunker, sample_file):
    store = RecordingStore()
    orchestrator = IndexOrchestrator(chunker=chunker, store=store)

    ids = await orchestrator.ingest(sample_file)

    assert len(store.adds) == 1  # one store call per file
    added_ids, documents, metadatas = store.adds[0]
    assert added_ids == ids
    assert len(set(ids)) == len(ids) == 3
    for chunk_id in ids:
        assert uuid.UUID(chunk_id).version == 4

    assert documents == chunker.chunk(sample_file.read_text(encoding="utf-8"))
    assert [m["chunk_index"] for m in metadatas] == [0, 1, 2]
    assert [m["start_offset"] for m in metadatas] == [0, 80, 160]
    assert all(m["source_path"] == str(sample_file) for m in metadatas)
    assert all(m["doc_name"] == "notes.md" for m in metadatas)


@pytest.mark.asyncio
async def test_ingest_gives_fresh_ids_on_every_run(chunker, sample_file):
    orchestrator = IndexOrchestrator(chunker=chunker, store=RecordingStore())
    first = await orchestrator.ingest(sample_file)
    second = await orchestrator.ingest(sample_file)
    assert not set(first) & set(second)


@pytest.mark.asyncio
async def test_missing_file_raises_document_read_error(chunker, tmp_path):
    store = RecordingStore()
    orchestrator = IndexOrchestrator(chunker=chunker, store=store)
    missing = tmp_path / "nope.txt"

    with pytest.raises(DocumentReadError) as exc_info:
        await orchestrator.ingest(missing)

    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert store.adds == []


@pytest.mark.asyncio
async def test_non_utf8_file_raises_document_read_error(chunker, tmp_path):
    path = tmp_path / "binary.bin"
    path.write_bytes(b"\xff\xfe\xfa not utf-8")
    orchestrator = IndexOrchestrator(chunker=chunker, store=RecordingStore())

    with pytest.raises(DocumentReadError) as exc_info:
        await orchestrator.ingest(path)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


@pytest.mark.asyncio
async def test_empty_file_stores_nothing(chunker, tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    store = RecordingStore()
    orchestrator = IndexOrchestrator(chunker=chunker, store=store)

    assert await orchestrator.ingest(path) == []
    assert store.adds == []


@pytest.mark.asyncio
async def test_store_failure_fails_the_whole_file(chunker, sample_file):
    orchestrator = IndexOrchestrator(chunker=chunker, store=RecordingStore(fail_on_add=True))
    with pytest.raises(StoreTransportError):
        await orchestrator.ingest(sample_file)


@pytest.mark.asyncio
async def test_ingest_many_continues_past_failures(chunker, sample_file, tmp_path):
    store = RecordingStore()
    orchestrator = IndexOrchestrator(chunker=chunker, store=store)
    other = tmp_path / "other.txt"
    other.write_text("short document", encoding="utf-8")

    count = await orchestrator.ingest_many([sample_file, tmp_path / "missing.txt", other])

    assert count == 2
    assert len(store.adds) == 2


@pytest.mark.asyncio
async def test_search_uses_default_top_k(chunker):
    store = RecordingStore()
    orchestrator = IndexOrchestrator(chunker=chunker, store=store, default_top_k=5)

    await orchestrator.initialize()
    await orchestrator.search("where is the config?")
    await orchestrator.search("and now three", top_k=3)

    assert store.initialized == 1
    assert store.searches == [("where is the config?", 5), ("and now three", 3)]


@pytest.mark.asyncio
async def test_end_to_end_ingest_and_search(chunker, embedder, collection_name, tmp_path):
    backend = ChromaVectorBackend(lambda: chromadb.EphemeralClient(), timeout_s=10.0)
    store = SemanticVectorStore(backend, embedder, collection_name=collection_name)
    orchestrator = IndexOrchestrator(chunker=chunker, store=store)

    path = tmp_path / "doc.txt"
    path.write_text("hello world", encoding="utf-8")

    with pytest.raises(NotInitializedError):
        await orchestrator.search("hello world")

    await orchestrator.initialize()
    ids = await orchestrator.ingest(path)
    result = await orchestrator.search("hello world", top_k=1)

    assert result.ids == ids
    assert result.documents == ["hello world"]
    assert result.metadatas[0]["source_path"] == str(path)

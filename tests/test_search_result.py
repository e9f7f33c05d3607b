# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: test_search_result.py
# -----------------------------------------------------------------------------
import pytest

from vectorstore.SearchResult import SearchResult


def test_from_chroma_flattens_single_query_rows():
    raw = {
        "ids": [["id1", "id2"]],
        "documents": [["doc1", "doc2"]],
        "distances": [[0.1, 0.4]],
        "metadatas": [[{"source_path": "a.txt"}, None]],
    }
    result = SearchResult.from_chroma(raw)

    assert result.ids == ["id1", "id2"]
    assert result.documents == ["doc1", "doc2"]
    assert result.distances == [0.1, 0.4]
    assert result.metadatas == [{"source_path": "a.txt"}, {}]


def test_from_chroma_sorts_by_distance():
    raw = {"ids": [["far", "near"]], "documents": [["f", "n"]], "distances": [[0.9, 0.2]]}
    result = SearchResult.from_chroma(raw)
    assert result.ids == ["near", "far"]
    assert result.documents == ["n", "f"]
    assert result.metadatas == []


def test_from_chroma_handles_missing_fields():
    result = SearchResult.from_chroma({"ids": [[]], "documents": None, "distances": [[]]})
    assert result == SearchResult.empty()


def test_misaligned_fields_are_rejected():
    with pytest.raises(ValueError):
        SearchResult(ids=["a"], documents=[], distances=[0.1])


def test_to_hits():
    result = SearchResult(
        ids=["id1"], documents=["doc1"], distances=[0.25], metadatas=[{"source_path": "a.txt"}]
    )
    hits = result.to_hits()
    assert hits == [{
        "chunk_id": "id1",
        "source_path": "a.txt",
        "distance": 0.25,
        "text": "doc1",
        "metadata": {"source_path": "a.txt"},
    }]
    assert "text" not in result.to_hits(include_text=False)[0]

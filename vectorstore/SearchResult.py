# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: SearchResult
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


def _first_row(raw: Mapping[str, Any], key: str) -> List[Any]:
    """
    Chroma returns one list per query embedding; we always send exactly one
    query, so take the first row. Missing/None fields become [].
    """
    rows = raw.get(key) or [[]]
    first = rows[0] if rows else []
    return list(first) if first is not None else []


@dataclass(frozen=True)
class SearchResult:
    """
    Nearest-neighbour hits, index-aligned, ordered by ascending distance.
    """

    ids: List[str] = field(default_factory=list)
    documents: List[str] = field(default_factory=list)
    distances: List[float] = field(default_factory=list)
    metadatas: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        if not len(self.ids) == len(self.documents) == len(self.distances):
            raise ValueError(
                f"SearchResult fields are not aligned: ids={len(self.ids)} "
                f"documents={len(self.documents)} distances={len(self.distances)}"
            )
        if self.metadatas and len(self.metadatas) != len(self.ids):
            raise ValueError(
                f"SearchResult metadatas ({len(self.metadatas)}) not aligned with ids ({len(self.ids)})"
            )

    def __len__(self) -> int:
        return len(self.ids)

    @classmethod
    def empty(cls) -> "SearchResult":
        return cls()

    @classmethod
    def from_chroma(cls, raw: Mapping[str, Any]) -> "SearchResult":
        ids = [str(i) for i in _first_row(raw, "ids")]
        documents = [d if d is not None else "" for d in _first_row(raw, "documents")]
        distances = [float(d) for d in _first_row(raw, "distances")]
        metadatas = [dict(m) if m else {} for m in _first_row(raw, "metadatas")]

        # Keep ascending order even if a backend hands results back unsorted
        order = sorted(range(len(ids)), key=lambda i: distances[i])
        return cls(
            ids=[ids[i] for i in order],
            documents=[documents[i] for i in order],
            distances=[distances[i] for i in order],
            metadatas=[metadatas[i] for i in order] if metadatas else [],
        )

    def to_hits(self, include_text: bool = True, include_metadata: bool = True) -> List[Dict[str, Any]]:
        """
        Flatten into a list of hit dicts. Distances stay distances: lower is closer.
        """
        hits: List[Dict[str, Any]] = []
        for i, chunk_id in enumerate(self.ids):
            md = self.metadatas[i] if i < len(self.metadatas) else {}
            hit: Dict[str, Any] = {
                "chunk_id": chunk_id,
                "source_path": md.get("source_path"),
                "distance": self.distances[i],
            }
            if include_text:
                hit["text"] = self.documents[i]
            if include_metadata:
                hit["metadata"] = md
            hits.append(hit)
        return hits

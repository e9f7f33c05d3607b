# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: ChunkRecord
# -----------------------------------------------------------------------------
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict

from chunking.TextChunk import TextChunk


def new_chunk_id() -> str:
    """128-bit random identifier (uuid4) for a stored chunk."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ChunkRecord:
    """
    One stored chunk: the id is the only handle the vector store and search
    results know about.
    """

    id: str
    chunk: TextChunk
    source_path: str
    chunk_index: int
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, chunk: TextChunk, source_path: str, chunk_index: int, **extra: Any) -> "ChunkRecord":
        return cls(
            id=new_chunk_id(),
            chunk=chunk,
            source_path=source_path,
            chunk_index=chunk_index,
            metadata=dict(extra),
        )

    @property
    def text(self) -> str:
        return self.chunk.text

    def to_metadata(self) -> Dict[str, Any]:
        # Chroma only accepts flat str/int/float/bool values; drop anything else
        base_meta: Dict[str, Any] = {
            k: v for k, v in self.metadata.items() if isinstance(v, (str, int, float, bool))
        }
        base_meta.update({
            "source_path": self.source_path,
            "chunk_index": self.chunk_index,
            "start_offset": self.chunk.start_offset,
            "length": self.chunk.length,
        })
        return base_meta

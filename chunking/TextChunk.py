# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: TextChunk
# -----------------------------------------------------------------------------
from dataclasses import dataclass


@dataclass(frozen=True)
class TextChunk:
    """
    A contiguous slice of one source document, sized for embedding.
    Produced only by TextChunker; never mutated after creation.
    """

    text: str
    start_offset: int
    length: int

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.length

    def short_preview(self, n: int = 80) -> str:
        """Return a compact text preview for logging/debugging."""
        clean = " ".join(self.text.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[{self.start_offset}:{self.end_offset}] {preview}"

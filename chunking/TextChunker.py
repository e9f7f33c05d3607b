# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: TextChunker
# -----------------------------------------------------------------------------
import logging
from typing import List, Optional

from chunking.TextChunk import TextChunk
from config import settings
from utility.errors import ConfigurationError
from utility.logging_utils import get_class_logger


def _validate(chunk_size: int, overlap: int) -> None:
    # guard against bad config that can cause infinite / zero-progress loops
    if chunk_size <= 0:
        raise ConfigurationError(f"chunk_size must be > 0, got {chunk_size}")
    if overlap < 0 or overlap >= chunk_size:
        raise ConfigurationError(
            f"overlap ({overlap}) must satisfy 0 <= overlap < chunk_size ({chunk_size})"
        )


def chunk_spans(text: Optional[str], chunk_size: int, overlap: int) -> List[TextChunk]:
    """
    Slide a window of `chunk_size` characters over `text`, advancing by
    `chunk_size - overlap`. The last window is clipped to the end of the text
    and iteration stops as soon as a window reaches it.
    """
    _validate(chunk_size, overlap)

    if not text:
        return []

    text_len = len(text)
    if text_len <= chunk_size:
        return [TextChunk(text=text, start_offset=0, length=text_len)]

    step = chunk_size - overlap
    chunks: List[TextChunk] = []
    start = 0
    while start < text_len:
        end = min(start + chunk_size, text_len)
        chunks.append(TextChunk(text=text[start:end], start_offset=start, length=end - start))
        if end == text_len:
            break
        start += step

    return chunks


def chunk_text(text: Optional[str], chunk_size: int, overlap: int) -> List[str]:
    return [c.text for c in chunk_spans(text, chunk_size, overlap)]


class TextChunker:
    """
    Splits plain-text documents into overlapping character windows.
    Configuration is checked once at construction.
    """

    def __init__(
        self,
        *,
        chunk_size: int = settings.DEFAULT_CHUNK_SIZE,
        overlap: int = settings.DEFAULT_CHUNK_OVERLAP,
        logger: logging.Logger | None = None,
    ):
        _validate(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.logger = logger or get_class_logger(self.__class__)

    def chunk(self, text: Optional[str]) -> List[str]:
        return [c.text for c in self.chunk_spans(text)]

    def chunk_spans(self, text: Optional[str]) -> List[TextChunk]:
        chunks = chunk_spans(text, self.chunk_size, self.overlap)

        if chunks:
            self.logger.debug(
                "Chunked %d chars into %d chunks (chunk_size=%d overlap=%d) last=%s",
                len(text or ""),
                len(chunks),
                self.chunk_size,
                self.overlap,
                chunks[-1].short_preview(40),
            )
        return chunks

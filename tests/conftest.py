# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: conftest.py
# -----------------------------------------------------------------------------

import asyncio
import sys
import uuid
from pathlib import Path
from typing import List, Sequence

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from embedding.Embedder import Embedder  # noqa: E402
from embedding.ModelHandle import ModelHandle  # noqa: E402

DIM = 16


class CharHistogramModel:
    """
    Deterministic stand-in for a real embedding model: a normalised
    character histogram. Identical texts get identical vectors.
    """

    def __init__(self):
        self.calls: List[List[str]] = []

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        self.calls.append(list(texts))
        arr = np.zeros((len(texts), DIM), dtype=np.float32)
        for row, text in enumerate(texts):
            for ch in text:
                arr[row, ord(ch) % DIM] += 1.0
            arr[row, 0] += 0.5  # keep empty strings off the zero vector
        return arr / np.linalg.norm(arr, axis=1, keepdims=True)


class CountingLoader:
    """Loader that counts load() calls; optionally fails the first N of them."""

    name = "fake:char-histogram"

    def __init__(self, model=None, *, delay_s: float = 0.0, fail_times: int = 0):
        self.model = model or CharHistogramModel()
        self.delay_s = delay_s
        self.fail_times = fail_times
        self.calls = 0

    async def load(self):
        self.calls += 1
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.calls <= self.fail_times:
            raise OSError("model weights not found")
        return self.model


@pytest.fixture
def loader() -> CountingLoader:
    return CountingLoader()


@pytest.fixture
def embedder(loader: CountingLoader) -> Embedder:
    return Embedder(ModelHandle(loader), batch_size=8)


@pytest.fixture
def collection_name() -> str:
    # EphemeralClient instances share state within a process
    return f"test-{uuid.uuid4().hex[:12]}"

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: SourceDocument
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceDocument:
    source_path: str
    text: str

    @property
    def doc_name(self) -> str:
        return Path(self.source_path).name

    def __len__(self) -> int:
        return len(self.text)

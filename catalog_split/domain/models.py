######## models.py
########

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class WrittenModule:
    slug: str
    identifier: str
    path: Path


@dataclass(frozen=True)
class BlockFailure:
    position: int               # 1-based position of the block in the source array
    reason: str
    preview: str                # first line(s) of the block, for reporting


@dataclass(frozen=True)
class SplitResult:
    status: str                 # "ok" | "partial" | "failed"
    source: str
    output_dir: str
    generated_at: str
    duration_seconds: float
    block_count: int
    written: Tuple[WrittenModule, ...] = field(default_factory=tuple)
    failures: Tuple[BlockFailure, ...] = field(default_factory=tuple)

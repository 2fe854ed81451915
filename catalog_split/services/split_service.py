from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from catalog_split.domain.models import BlockFailure, SplitResult, WrittenModule
from catalog_split.repositories.module_repository import ModuleRepository
from catalog_split.services.array_locator import locate_array_body
from catalog_split.services.block_extractor import extract_blocks
from catalog_split.services.module_renderer import (
    ModuleRenderer,
    extract_slug,
    is_safe_slug,
    slug_to_identifier,
)

logger = logging.getLogger(__name__)


def _preview(block: str, max_chars: int = 80) -> str:
    first = " ".join(block.split())
    return first if len(first) <= max_chars else first[: max_chars - 3] + "..."


@dataclass(frozen=True)
class _PlannedWrite:
    position: int
    slug: str
    identifier: str
    filename: str
    content: str


@dataclass
class SplitService:
    """
    Service layer: orchestrates locate -> extract -> render -> write for one source.
    A failing block is reported and skipped; the rest of the batch is still written.
    """
    module_repo: ModuleRepository
    renderer: ModuleRenderer
    array_key: str = "manufacturers"
    strict: bool = True
    max_source_chars: int = 5_000_000
    write_workers: int = 4
    write_retries: int = 2

    def split_file(self, source_path: Path) -> SplitResult:
        source_path = Path(source_path)
        if not source_path.is_file():
            raise FileNotFoundError(f"Source file not found: {source_path}")
        text = source_path.read_text(encoding="utf-8-sig")
        return self.split_text(text, source_label=str(source_path))

    def split_text(self, text: str, source_label: str = "<text>") -> SplitResult:
        text = text or ""
        if self.max_source_chars and len(text) > self.max_source_chars:
            raise ValueError(
                f"Source is {len(text)} chars, limit is {self.max_source_chars}."
            )

        started = datetime.now()

        body = locate_array_body(text, self.array_key)
        blocks = extract_blocks(body, strict=self.strict)

        planned, failures = self._plan(blocks)
        written, write_failures = self._write_all(planned)
        failures = sorted(failures + write_failures, key=lambda f: f.position)

        finished = datetime.now()

        if not failures:
            status = "ok"
        elif written:
            status = "partial"
        else:
            status = "failed"

        logger.info(
            "Split %s: blocks=%d written=%d failed=%d status=%s",
            source_label, len(blocks), len(written), len(failures), status,
        )

        return SplitResult(
            status=status,
            source=source_label,
            output_dir=str(self.module_repo.output_dir),
            generated_at=finished.strftime("%Y-%m-%d %H:%M:%S"),
            duration_seconds=round((finished - started).total_seconds(), 3),
            block_count=len(blocks),
            written=tuple(written),
            failures=tuple(failures),
        )

    def _plan(self, blocks: List[str]) -> Tuple[List[_PlannedWrite], List[BlockFailure]]:
        planned: List[_PlannedWrite] = []
        failures: List[BlockFailure] = []
        seen: dict[str, int] = {}

        for position, block in enumerate(blocks, start=1):
            reason: Optional[str] = None
            slug = extract_slug(block)

            if slug is None:
                reason = "no quoted slug value"
            elif not is_safe_slug(slug):
                reason = f"slug {slug!r} is not a valid file name"
            elif slug.casefold() in seen:
                reason = f"duplicate slug {slug!r} (first seen in block {seen[slug.casefold()]})"

            if reason:
                logger.warning("Skipping block %d: %s", position, reason)
                failures.append(BlockFailure(position=position, reason=reason, preview=_preview(block)))
                continue

            seen[slug.casefold()] = position
            identifier = slug_to_identifier(slug)
            planned.append(
                _PlannedWrite(
                    position=position,
                    slug=slug,
                    identifier=identifier,
                    filename=self.renderer.filename_for(slug),
                    content=self.renderer.render(identifier, block),
                )
            )

        return planned, failures

    def _write_one(self, item: _PlannedWrite) -> Path:
        attempt = 0
        while True:
            try:
                return self.module_repo.write(item.filename, item.content)
            except OSError as e:
                attempt += 1
                if attempt > self.write_retries:
                    raise
                logger.warning("Retrying write of %s (%d/%d): %s", item.filename, attempt, self.write_retries, e)

    def _write_all(self, planned: List[_PlannedWrite]) -> Tuple[List[WrittenModule], List[BlockFailure]]:
        written: List[WrittenModule] = []
        failures: List[BlockFailure] = []
        if not planned:
            return written, failures

        with ThreadPoolExecutor(max_workers=max(1, self.write_workers)) as pool:
            futures = [(item, pool.submit(self._write_one, item)) for item in planned]

            for item, fut in futures:
                try:
                    path = fut.result()
                except (OSError, ValueError) as e:
                    logger.warning("Failed to write %s: %s", item.filename, e)
                    failures.append(
                        BlockFailure(position=item.position, reason=f"write failed: {e}", preview=item.slug)
                    )
                    continue
                written.append(WrittenModule(slug=item.slug, identifier=item.identifier, path=path))

        return written, failures

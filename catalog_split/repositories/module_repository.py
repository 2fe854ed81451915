from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass
class ModuleRepository:
    """
    Repository pattern: encapsulates where generated modules live and how they are written.
    """
    output_dir: Path
    extension: str = "ts"

    def _target(self, filename: str) -> Path:
        base = self.output_dir.resolve()
        full = (base / filename).resolve()
        if full.parent != base:
            raise ValueError(f"Refusing to write outside output dir: {filename!r}")
        return full

    def write(self, filename: str, content: str) -> Path:
        target = self._target(filename)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def list_modules(self) -> List[Path]:
        if not self.output_dir.exists():
            return []
        pattern = f"*.{self.extension}" if self.extension else "*"
        return sorted((p for p in self.output_dir.glob(pattern) if p.is_file()), key=lambda p: p.name)

    def resolve(self, filename: str) -> Optional[Path]:
        try:
            full = self._target(filename)
        except ValueError:
            return None
        if not full.exists() or not full.is_file():
            return None
        return full

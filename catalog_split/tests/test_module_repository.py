from __future__ import annotations

from pathlib import Path

import pytest

from catalog_split.repositories.module_repository import ModuleRepository


def test_write_creates_output_dir_and_file(tmp_path: Path):
    out = tmp_path / "data" / "manufacturers"
    repo = ModuleRepository(output_dir=out, extension="ts")

    path = repo.write("byd.ts", "export default {};\n")

    assert path == (out / "byd.ts").resolve()
    assert path.read_text(encoding="utf-8") == "export default {};\n"


def test_write_overwrites_existing(tmp_path: Path):
    repo = ModuleRepository(output_dir=tmp_path)
    repo.write("a.ts", "old")
    repo.write("a.ts", "new")
    assert (tmp_path / "a.ts").read_text(encoding="utf-8") == "new"


@pytest.mark.parametrize("name", ["../evil.ts", "sub/dir.ts", "", "."])
def test_write_rejects_paths_outside_output_dir(tmp_path: Path, name: str):
    repo = ModuleRepository(output_dir=tmp_path / "out")
    with pytest.raises(ValueError):
        repo.write(name, "x")


def test_list_modules_sorted_and_filtered_by_extension(tmp_path: Path):
    repo = ModuleRepository(output_dir=tmp_path, extension="ts")
    for name in ["keba.ts", "byd.ts", "notes.md"]:
        (tmp_path / name).write_text("x", encoding="utf-8")
    (tmp_path / "nested.ts").mkdir()

    assert [p.name for p in repo.list_modules()] == ["byd.ts", "keba.ts"]


def test_list_modules_when_dir_missing(tmp_path: Path):
    repo = ModuleRepository(output_dir=tmp_path / "missing")
    assert repo.list_modules() == []


def test_resolve(tmp_path: Path):
    repo = ModuleRepository(output_dir=tmp_path)
    repo.write("byd.ts", "x")

    assert repo.resolve("byd.ts") == (tmp_path / "byd.ts").resolve()
    assert repo.resolve("missing.ts") is None
    assert repo.resolve("../byd.ts") is None

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for package tree walking and cleanup."""

from pathlib import Path

import pytest

from pkganon.config import EXCLUDED_DIR_PATTERNS, ExclusionMatcher
from pkganon.tree import (
    delete_file,
    delete_reserved_directories,
    find_source_files,
    find_test_files,
    prune_empty_directories,
    remove_empty_parents,
)


def _write_file(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _matcher() -> ExclusionMatcher:
    return ExclusionMatcher.from_patterns(EXCLUDED_DIR_PATTERNS)


def test_anon_tre_001_finds_sources_and_tests_outside_exclusions(
    tmp_path: Path,
) -> None:
    root = tmp_path / "pkg"
    _write_file(root / "src" / "index.ts")
    _write_file(root / "src" / "a" / "util.ts")
    _write_file(root / "src" / "a" / "util.test.ts")
    _write_file(root / "src" / "a" / "util.spec.ts")
    _write_file(root / "src" / "notes.md")
    _write_file(root / "src" / "node_modules" / "dep" / "index.ts")
    _write_file(root / "src" / "dist" / "index.ts")
    _write_file(root / "test" / "steps.test.ts")

    sources = find_source_files(root / "src", _matcher())
    tests = find_test_files(root, _matcher())

    assert sources == [root / "src" / "a" / "util.ts", root / "src" / "index.ts"]
    assert tests == [root / "src" / "a" / "util.test.ts"]


def test_anon_tre_002_extra_patterns_extend_exclusions(tmp_path: Path) -> None:
    root = tmp_path / "pkg"
    _write_file(root / "src" / "generated" / "api.ts")
    _write_file(root / "src" / "core.ts")
    matcher = ExclusionMatcher.from_patterns([*EXCLUDED_DIR_PATTERNS, "generated/"])

    assert find_source_files(root / "src", matcher) == [root / "src" / "core.ts"]
    assert matcher.is_excluded_dir(root / "src" / "generated", root / "src")
    assert not matcher.is_excluded_dir(root / "src", root / "src")


def test_anon_tre_003_reserved_directories_are_deleted_recursively(
    tmp_path: Path,
) -> None:
    root = tmp_path / "pkg"
    _write_file(root / "test" / "steps.ts")
    _write_file(root / "src" / "feature" / "test" / "fixture.ts")
    _write_file(root / "node_modules" / "dep" / "test" / "keep.ts")
    _write_file(root / "src" / "feature" / "calc.ts")

    deleted = delete_reserved_directories(root, _matcher())

    assert deleted == [root / "test", root / "src" / "feature" / "test"]
    assert (root / "node_modules" / "dep" / "test" / "keep.ts").is_file()
    assert (root / "src" / "feature" / "calc.ts").is_file()


def test_anon_tre_004_delete_file_reports_outcome(tmp_path: Path) -> None:
    target = tmp_path / "a.ts"
    _write_file(target)

    assert delete_file(target)
    assert not target.exists()
    assert not delete_file(target)


def test_anon_tre_005_remove_empty_parents_stops_at_root_and_content(
    tmp_path: Path,
) -> None:
    root = tmp_path / "pkg"
    _write_file(root / "src" / "keep.ts")
    (root / "src" / "a" / "b").mkdir(parents=True)

    removed = remove_empty_parents(root / "src" / "a" / "b", root)

    assert removed == 2
    assert not (root / "src" / "a").exists()
    assert (root / "src").is_dir()

    (root / "empty").mkdir()
    assert remove_empty_parents(root / "empty", root) == 1
    assert root.is_dir()


def test_anon_tre_006_prune_removes_nested_empty_directories(tmp_path: Path) -> None:
    root = tmp_path / "pkg"
    (root / "src" / "a" / "b").mkdir(parents=True)
    (root / "src" / "c").mkdir()
    (root / "node_modules" / "empty").mkdir(parents=True)
    _write_file(root / "src" / "d" / "keep.ts")

    removed = prune_empty_directories(root, _matcher())

    assert removed == 3
    assert sorted(path.name for path in (root / "src").iterdir()) == ["d"]
    assert (root / "node_modules" / "empty").is_dir()
    assert root.is_dir()


def test_anon_tre_007_undeletable_reserved_directory_is_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    root = tmp_path / "pkg"
    _write_file(root / "test" / "steps.ts")

    def _fail(path: Path) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr("pkganon.tree.shutil.rmtree", _fail)

    deleted = delete_reserved_directories(root, _matcher())

    assert deleted == []
    assert (root / "test" / "steps.ts").is_file()
    assert "Could not delete directory" in caplog.text

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for relative specifier resolution."""

from pathlib import Path

from pkganon.resolver import is_within, normalize_path, resolve


def _write_file(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_anon_res_001_resolver_prefers_exact_then_extension_then_index(
    tmp_path: Path,
) -> None:
    root = tmp_path / "pkg"
    importer = root / "src" / "index.ts"
    _write_file(importer)
    _write_file(root / "src" / "exact.ts")
    _write_file(root / "src" / "util.ts")
    _write_file(root / "src" / "shared" / "index.ts")

    exact = resolve(importer, "./exact.ts", root)
    extension = resolve(importer, "./util", root)
    index = resolve(importer, "./shared", root)

    assert exact is not None and exact.kind == "exact"
    assert exact.path == root / "src" / "exact.ts"
    assert extension is not None and extension.kind == "extension"
    assert extension.path == root / "src" / "util.ts"
    assert extension.suffix == ".ts"
    assert index is not None and index.kind == "index"
    assert index.path == root / "src" / "shared" / "index.ts"
    assert index.suffix == "/index.ts"


def test_anon_res_002_resolver_file_beats_directory_of_same_name(
    tmp_path: Path,
) -> None:
    root = tmp_path / "pkg"
    importer = root / "src" / "index.ts"
    _write_file(importer)
    _write_file(root / "src" / "calc.ts")
    _write_file(root / "src" / "calc" / "index.ts")

    resolution = resolve(importer, "./calc", root)

    assert resolution is not None
    assert resolution.path == root / "src" / "calc.ts"


def test_anon_res_003_resolver_skips_external_and_missing_specifiers(
    tmp_path: Path,
) -> None:
    root = tmp_path / "pkg"
    importer = root / "src" / "index.ts"
    _write_file(importer)

    assert resolve(importer, "@acme/other", root) is None
    assert resolve(importer, "zod", root) is None
    assert resolve(importer, "./missing", root) is None


def test_anon_res_004_resolver_rejects_targets_outside_package(tmp_path: Path) -> None:
    root = tmp_path / "pkg"
    importer = root / "src" / "index.ts"
    _write_file(importer)
    _write_file(tmp_path / "other" / "leak.ts")

    assert resolve(importer, "../../other/leak", root) is None


def test_anon_res_005_resolver_uses_injected_existence_check(tmp_path: Path) -> None:
    root = tmp_path / "pkg"
    importer = root / "src" / "index.ts"
    wanted = root / "src" / "ghost" / "index.ts"

    resolution = resolve(importer, "./ghost", root, exists=lambda path: path == wanted)

    assert resolution is not None
    assert resolution.path == wanted
    assert resolution.kind == "index"


def test_anon_res_006_resolver_honors_configured_extensions(tmp_path: Path) -> None:
    root = tmp_path / "pkg"
    importer = root / "src" / "index.ts"
    _write_file(importer)
    _write_file(root / "src" / "view.tsx")

    assert resolve(importer, "./view", root) is None
    resolution = resolve(importer, "./view", root, extensions=(".ts", ".tsx"))
    assert resolution is not None and resolution.suffix == ".tsx"


def test_anon_res_007_path_helpers_normalize_and_bound(tmp_path: Path) -> None:
    root = tmp_path / "pkg"

    assert normalize_path(root / "src" / ".." / "src" / "a") == root / "src" / "a"
    assert is_within(root / "src", root)
    assert is_within(root, root)
    assert not is_within(tmp_path / "pkg-other", root)

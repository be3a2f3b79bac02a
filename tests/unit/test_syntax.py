# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for import and export statement scanning."""

from pkganon.syntax import is_relative_specifier, scan_references


def _kinds(source: str) -> list[tuple[str, str]]:
    return [(ref.kind, ref.specifier) for ref in scan_references(source)]


def test_anon_syn_001_scanner_classifies_statement_forms() -> None:
    source = (
        "import Default from './default';\n"
        "import { named, other as alias } from \"./named\";\n"
        "import * as ns from './namespace';\n"
        "import './side-effect';\n"
        "export * from './star';\n"
        "export { a, b } from './braces';\n"
        "export * as grouped from './grouped';\n"
    )

    assert _kinds(source) == [
        ("import", "./default"),
        ("import", "./named"),
        ("namespace_import", "./namespace"),
        ("side_effect_import", "./side-effect"),
        ("re_export", "./star"),
        ("re_export", "./braces"),
        ("re_export", "./grouped"),
    ]


def test_anon_syn_002_scanner_tolerates_type_qualifiers_and_line_breaks() -> None:
    source = (
        "import type { Rate } from './types';\n"
        "export type { Rate } from './types';\n"
        "import {\n"
        "  first,\n"
        "  second,\n"
        "} from './multi';\n"
        "import Default, { named } from './mixed';\n"
    )

    assert _kinds(source) == [
        ("import", "./types"),
        ("re_export", "./types"),
        ("import", "./multi"),
        ("import", "./mixed"),
    ]


def test_anon_syn_003_scanner_ignores_local_exports_and_dynamic_imports() -> None:
    source = (
        "export const value = 1;\n"
        "export function run() { return 'from'; }\n"
        "const lazy = import('./lazy');\n"
        "export { value };\n"
    )

    assert scan_references(source) == []


def test_anon_syn_004_scanner_reports_specifier_span() -> None:
    source = "export { helper } from './b/helper';\n"

    (reference,) = scan_references(source)

    assert source[reference.start : reference.end] == "./b/helper"
    assert reference.statement_start == 0


def test_anon_syn_005_relative_specifier_detection() -> None:
    assert is_relative_specifier("./a")
    assert is_relative_specifier("../a")
    assert is_relative_specifier("/abs/a")
    assert not is_relative_specifier("@acme/pkg")
    assert not is_relative_specifier("zod")

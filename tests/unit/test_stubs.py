# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for replacement file rendering."""

from pkganon.stubs import (
    EMPTY_STUB,
    STUB_HEADER,
    render_test_stub,
    render_vitest_config,
    stub_source,
)


def test_anon_stb_001_test_stub_uses_index_based_labels() -> None:
    content = render_test_stub(1)

    assert content.startswith("import { assert } from 'vitest';\n")
    assert "describe('test_1', () => {" in content
    assert "it('test_rt', () => {" in content
    assert "assert(true);" in content


def test_anon_stb_002_source_stub_keeps_export_lines_only() -> None:
    source = (
        "import { z } from 'zod';\n"
        "export * from './shared';\n"
        "const hidden = 3;\n"
        "export const total = hidden * 2;\n"
        "function secret() {\n"
        "  return 42;\n"
        "}\n"
    )

    stubbed = stub_source(source)

    assert stubbed == (
        f"{STUB_HEADER}\n"
        "export * from './shared';\n"
        "export const total = hidden * 2;\n"
    )
    assert "secret" not in stubbed


def test_anon_stb_003_multi_line_re_export_survives_whole() -> None:
    source = (
        "export {\n"
        "  first,\n"
        "  second,\n"
        "} from './parts';\n"
        "const local = 1;\n"
    )

    stubbed = stub_source(source)

    assert stubbed == (
        f"{STUB_HEADER}\n"
        "export {\n"
        "  first,\n"
        "  second,\n"
        "} from './parts';\n"
    )


def test_anon_stb_004_source_without_exports_becomes_empty_module() -> None:
    assert stub_source("const hidden = 1;\n") == EMPTY_STUB


def test_anon_stb_005_vitest_config_imports_given_base() -> None:
    content = render_vitest_config("../../vitest.base")

    assert content == (
        "import { createVitestConfig } from '../../vitest.base';\n"
        "\n"
        "export default createVitestConfig();\n"
    )

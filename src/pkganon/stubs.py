# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Render replacement content for test, source and config files."""

from pkganon.naming import anonymized_test_label
from pkganon.syntax import scan_references

STUB_HEADER = "// Anonymized file - implementation removed"
EMPTY_STUB = "// Anonymized file\nexport {};\n"

_TEST_TEMPLATE = """import {{ assert }} from 'vitest';

describe('{suite}', () => {{
  it('{case}', () => {{
    assert(true);
  }});
}});
"""

_VITEST_CONFIG_TEMPLATE = """import {{ createVitestConfig }} from '{base}';

export default createVitestConfig();
"""


def render_test_stub(index: int) -> str:
    """Render a vitest file holding one always-passing assertion.

    Args:
        index: Position of the test file in the discovery order.

    Returns:
        Test file content.
    """
    return _TEST_TEMPLATE.format(
        suite=anonymized_test_label(index),
        case=anonymized_test_label(index + 1000),
    )


def render_vitest_config(base_specifier: str) -> str:
    """Render a package vitest config delegating to the workspace base config."""
    return _VITEST_CONFIG_TEMPLATE.format(base=base_specifier)


def stub_source(source: str) -> str:
    """Strip implementation from a source file, keeping its export lines.

    Lines starting with ``export`` survive, and so does every line of a
    multi-line ``export ... from`` statement.

    Args:
        source: Original file content.

    Returns:
        Stubbed file content.
    """
    lines = source.split("\n")
    keep = _re_export_lines(source)
    keep.update(
        line_no
        for line_no, line in enumerate(lines)
        if line.strip().startswith("export ")
    )
    if not keep:
        return EMPTY_STUB
    kept = [lines[line_no] for line_no in sorted(keep)]
    return "\n".join([STUB_HEADER, *kept]) + "\n"


def _re_export_lines(source: str) -> set[int]:
    """Collect zero-based line numbers spanned by re-export statements."""
    line_numbers: set[int] = set()
    for reference in scan_references(source):
        if reference.kind != "re_export":
            continue
        first = source.count("\n", 0, reference.statement_start)
        last = source.count("\n", 0, reference.end)
        line_numbers.update(range(first, last + 1))
    return line_numbers

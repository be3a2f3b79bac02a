import sys
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Build a workspace holding one package with a small module graph.

    Layout under ``packages/calculators/income-tax``::

        src/index.ts              entry; imports ./a/util, re-exports ./shared
        src/a/util.ts             re-exports ./b/helper
        src/a/b/helper.ts
        src/shared/index.ts
        src/dead/orphan.ts        never referenced
        src/a/util.test.ts
        test/steps.ts             reserved cucumber directory
    """
    root = tmp_path / "ws"
    package = root / "packages" / "calculators" / "income-tax"
    _write_file(
        package / "src" / "index.ts",
        "import { compute } from './a/util';\n"
        "export * from './shared';\n"
        "export const total = compute(1);\n",
    )
    _write_file(
        package / "src" / "a" / "util.ts",
        "import { z } from 'zod';\n"
        "export { helper } from './b/helper';\n"
        "export function compute(value: number) {\n"
        "  return value * 2;\n"
        "}\n",
    )
    _write_file(
        package / "src" / "a" / "b" / "helper.ts",
        "export const helper = () => 'secret algorithm';\n",
    )
    _write_file(
        package / "src" / "shared" / "index.ts",
        "export type Rate = number;\nconst hidden = 3;\n",
    )
    _write_file(package / "src" / "dead" / "orphan.ts", "export const orphan = 1;\n")
    _write_file(
        package / "src" / "a" / "util.test.ts",
        "import { compute } from './util';\n"
        "describe('compute', () => {\n"
        "  it('doubles', () => expect(compute(2)).toBe(4));\n"
        "});\n",
    )
    _write_file(package / "test" / "steps.ts", "Given('a step', () => {});\n")
    _write_file(
        package / "package.json",
        '{\n  "name": "@acme/income-tax",\n  "version": "0.0.1"\n}\n',
    )
    _write_file(
        package / "project.json",
        '{\n  "name": "income-tax",\n  "sourceRoot": "packages/calculators/income-tax/src"\n}\n',
    )
    _write_file(
        root / "tsconfig.base.json",
        "{\n"
        '  "compilerOptions": {\n'
        '    "paths": {\n'
        '      "@acme/income-tax": ["packages/calculators/income-tax/src/index.ts"],\n'
        '      "@acme/income-tax-extra": ["packages/calculators/income-tax-extra/src/index.ts"]\n'
        "    }\n"
        "  }\n"
        "}\n",
    )
    _write_file(root / "vitest.base.ts", "export const createVitestConfig = () => ({});\n")
    return root

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Locate module specifiers in TypeScript import and export statements.

Recognition is lexical. Statements inside comments or string literals are
matched as well; callers accept those false positives.
"""

import re
from dataclasses import dataclass
from typing import Literal

ReferenceKind = Literal["import", "namespace_import", "side_effect_import", "re_export"]

_IDENT = r"[\w$]+"

_RE_EXPORT = (
    r"\bexport\s+(?:type\s+)?"
    rf"(?:\*(?:\s*as\s+{_IDENT})?|\{{[^}}]*\}})"
    r"\s*from\s*(?P<rq>['\"])(?P<re_export>[^'\"\n]+)(?P=rq)"
)
_IMPORT = (
    r"\bimport\s+(?:type\s+)?"
    rf"(?P<binding>(?:{_IDENT}\s*,\s*)?(?:\*\s*as\s+{_IDENT}|\{{[^}}]*\}}|{_IDENT}))"
    r"\s*from\s*(?P<iq>['\"])(?P<import>[^'\"\n]+)(?P=iq)"
)
_SIDE_EFFECT_IMPORT = r"\bimport\s*(?P<sq>['\"])(?P<side_effect>[^'\"\n]+)(?P=sq)"

STATEMENT_PATTERN = re.compile(f"{_RE_EXPORT}|{_IMPORT}|{_SIDE_EFFECT_IMPORT}")


@dataclass(frozen=True)
class ModuleReference:
    """Represent one module specifier found in source text.

    Attributes:
        kind: Statement form the specifier belongs to.
        specifier: Specifier text without quotes.
        start: Offset of the first specifier character.
        end: Offset just past the last specifier character.
        statement_start: Offset of the ``import`` or ``export`` keyword.
    """

    kind: ReferenceKind
    specifier: str
    start: int
    end: int
    statement_start: int = 0


def scan_references(text: str) -> list[ModuleReference]:
    """Find module specifiers of static import and export statements.

    Args:
        text: Source file content.

    Returns:
        References in source order.
    """
    references: list[ModuleReference] = []
    for match in STATEMENT_PATTERN.finditer(text):
        if match.group("re_export") is not None:
            group = "re_export"
            kind: ReferenceKind = "re_export"
        elif match.group("import") is not None:
            group = "import"
            binding = match.group("binding")
            kind = "namespace_import" if binding.startswith("*") else "import"
        else:
            group = "side_effect"
            kind = "side_effect_import"
        references.append(
            ModuleReference(
                kind=kind,
                specifier=match.group(group),
                start=match.start(group),
                end=match.end(group),
                statement_start=match.start(),
            )
        )
    return references


def is_relative_specifier(specifier: str) -> bool:
    """Check whether a specifier names a path inside the package."""
    return specifier.startswith(".") or specifier.startswith("/")

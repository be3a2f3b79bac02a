# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Extract in-package module references from one source file."""

import logging
from dataclasses import dataclass
from pathlib import Path

from pkganon.config import DEFAULT_EXTENSIONS, DEFAULT_INDEX_NAME
from pkganon.resolver import resolve
from pkganon.syntax import scan_references

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedReferences:
    """Store resolved references of one file grouped by statement form.

    Args:
        direct_imports: Files bound by default or named imports.
        re_exports: Files forwarded by ``export ... from`` statements.
        indirect_imports: Files reached by namespace or side-effect imports.
    """

    direct_imports: tuple[Path, ...] = ()
    re_exports: tuple[Path, ...] = ()
    indirect_imports: tuple[Path, ...] = ()

    def all_targets(self) -> tuple[Path, ...]:
        """Return every referenced file, direct imports first."""
        return self.direct_imports + self.re_exports + self.indirect_imports


def extract_references(
    file_path: Path,
    package_root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    index_name: str = DEFAULT_INDEX_NAME,
) -> ExtractedReferences:
    """Extract resolved module references from a source file.

    External and unresolved specifiers are dropped.

    Args:
        file_path: Source file to scan.
        package_root: Package root used to bound resolution.
        extensions: Implementation file extensions.
        index_name: Directory index module name.

    Returns:
        Resolved references grouped by statement form; empty when the file
        is missing or cannot be decoded.
    """
    if not file_path.is_file():
        return ExtractedReferences()
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file (path=%s error=%s)", file_path, exc)
        return ExtractedReferences()

    direct_imports: list[Path] = []
    re_exports: list[Path] = []
    indirect_imports: list[Path] = []
    for reference in scan_references(text):
        resolution = resolve(
            from_file=file_path,
            specifier=reference.specifier,
            package_root=package_root,
            extensions=extensions,
            index_name=index_name,
        )
        if resolution is None:
            continue
        if reference.kind == "import":
            direct_imports.append(resolution.path)
        elif reference.kind == "re_export":
            re_exports.append(resolution.path)
        else:
            indirect_imports.append(resolution.path)

    logger.debug(
        "Extracted references (path=%s direct=%d re_exports=%d indirect=%d)",
        file_path,
        len(direct_imports),
        len(re_exports),
        len(indirect_imports),
    )
    return ExtractedReferences(
        direct_imports=tuple(direct_imports),
        re_exports=tuple(re_exports),
        indirect_imports=tuple(indirect_imports),
    )

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Resolve relative module specifiers to files inside a package."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal

from pkganon.config import DEFAULT_EXTENSIONS, DEFAULT_INDEX_NAME
from pkganon.syntax import is_relative_specifier

logger = logging.getLogger(__name__)

ResolutionKind = Literal["exact", "extension", "index"]


@dataclass(frozen=True)
class Resolution:
    """Represent a specifier resolved to a concrete file.

    Attributes:
        path: Absolute normalized file path.
        kind: Which fallback rule produced the path.
        suffix: Text appended to the specifier to reach the file.
    """

    path: Path
    kind: ResolutionKind
    suffix: str = ""


def resolve(
    from_file: Path,
    specifier: str,
    package_root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    index_name: str = DEFAULT_INDEX_NAME,
    exists: Callable[[Path], bool] | None = None,
) -> Resolution | None:
    """Resolve a module specifier written in ``from_file``.

    Candidates are tried in order: the specifier as written, the specifier
    with each extension appended, then ``<specifier>/<index><extension>``.

    Args:
        from_file: File containing the specifier.
        specifier: Module specifier text.
        package_root: Root that resolved paths must stay under.
        extensions: Implementation file extensions.
        index_name: Directory index module name.
        exists: File existence predicate; defaults to checking the disk.

    Returns:
        Resolution when a candidate exists inside the package, else ``None``.
    """
    if not is_relative_specifier(specifier):
        return None
    is_file = exists if exists is not None else _is_file
    root = normalize_path(package_root)
    base = normalize_path(from_file.parent / specifier)

    candidates: list[tuple[ResolutionKind, str]] = [("exact", "")]
    candidates.extend(("extension", extension) for extension in extensions)
    candidates.extend(
        ("index", f"/{index_name}{extension}") for extension in extensions
    )
    for kind, suffix in candidates:
        candidate = Path(f"{base}{suffix}")
        if not is_within(candidate, root):
            continue
        if is_file(candidate):
            return Resolution(path=candidate, kind=kind, suffix=suffix)
    logger.debug(
        "Specifier left unresolved (file=%s specifier=%s)", from_file, specifier
    )
    return None


def normalize_path(path: Path) -> Path:
    """Build an absolute path with ``.`` and ``..`` segments collapsed.

    Symlinks are not followed so that paths stay comparable with the
    rename plan entries.
    """
    return Path(os.path.normpath(os.path.abspath(path)))


def is_within(path: Path, root: Path) -> bool:
    """Check whether ``path`` equals ``root`` or lies beneath it."""
    return path == root or root in path.parents


def _is_file(path: Path) -> bool:
    return path.is_file()

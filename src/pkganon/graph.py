# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Build the module dependency graph of a package from its entry module."""

import logging
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from pkganon.config import DEFAULT_EXTENSIONS, DEFAULT_INDEX_NAME
from pkganon.extractor import extract_references
from pkganon.resolver import normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyGraph:
    """Represent files reachable from an entry module.

    Args:
        entry: Normalized entry module path.
        reachable: Reachable files in breadth-first visit order.
        edges: Referenced files per visited file.
        directly_imported: Files bound by at least one direct import.
        re_export_only: Reachable files never directly imported, entry excluded.
    """

    entry: Path
    reachable: tuple[Path, ...] = ()
    edges: dict[Path, tuple[Path, ...]] = field(default_factory=dict)
    directly_imported: frozenset[Path] = frozenset()
    re_export_only: frozenset[Path] = frozenset()

    def is_reachable(self, path: Path) -> bool:
        """Check whether a file is transitively referenced from the entry."""
        return normalize_path(path) in self.edges

    def unreachable(self, files: list[Path]) -> list[Path]:
        """Select files that the entry module never reaches.

        Args:
            files: Candidate source files.

        Returns:
            Unreachable files, in the given order.
        """
        return [path for path in files if not self.is_reachable(path)]


def build_dependency_graph(
    entry_file: Path,
    package_root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    index_name: str = DEFAULT_INDEX_NAME,
) -> DependencyGraph:
    """Traverse module references breadth-first from the entry module.

    Already visited files are never processed again, so reference cycles
    terminate.

    Args:
        entry_file: Entry module, conventionally ``src/index.ts``.
        package_root: Package root bounding resolution.
        extensions: Implementation file extensions.
        index_name: Directory index module name.

    Returns:
        Dependency graph; empty when the entry module does not exist.
    """
    entry = normalize_path(entry_file)
    if not entry.is_file():
        logger.warning("Entry module not found (path=%s)", entry)
        return DependencyGraph(entry=entry)

    visited: dict[Path, tuple[Path, ...]] = {}
    directly_imported: set[Path] = set()
    queue: deque[Path] = deque([entry])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        references = extract_references(
            file_path=current,
            package_root=package_root,
            extensions=extensions,
            index_name=index_name,
        )
        visited[current] = references.all_targets()
        directly_imported.update(references.direct_imports)
        for target in references.all_targets():
            if target not in visited:
                queue.append(target)

    re_export_only = {
        path for path in visited if path not in directly_imported and path != entry
    }
    logger.info(
        "Dependency graph built (entry=%s reachable=%d re_export_only=%d)",
        entry,
        len(visited),
        len(re_export_only),
    )
    return DependencyGraph(
        entry=entry,
        reachable=tuple(visited),
        edges=visited,
        directly_imported=frozenset(directly_imported),
        re_export_only=frozenset(re_export_only),
    )

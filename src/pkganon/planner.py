# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Rename source directories to opaque names and record the rename plan."""

import logging
from collections.abc import Iterator
from pathlib import Path

from pkganon.config import EXCLUDED_DIR_PATTERNS, ExclusionMatcher
from pkganon.naming import directory_name
from pkganon.resolver import is_within, normalize_path

logger = logging.getLogger(__name__)


class RenameError(RuntimeError):
    """Represent a directory rename failure."""


class RenamePlan:
    """Ordered mapping of original directory paths to their final paths.

    Keys are expressed in the tree as it was before planning; values are
    the locations after every rename of the run, so entries nested below a
    renamed ancestor point into the renamed ancestor.
    """

    def __init__(self) -> None:
        """Initialize an empty plan."""
        self._entries: list[tuple[Path, Path]] = []

    def record(self, old: Path, new: Path) -> None:
        """Record one applied rename.

        Entries already recorded below ``old`` are moved below ``new``.

        Args:
            old: Directory path before the rename.
            new: Directory path after the rename.
        """
        old = normalize_path(old)
        new = normalize_path(new)
        rebased: list[tuple[Path, Path]] = []
        for entry_old, entry_new in self._entries:
            if is_within(entry_new, old):
                entry_new = new / entry_new.relative_to(old)
            rebased.append((entry_old, entry_new))
        rebased.append((old, new))
        self._entries = rebased

    @property
    def entries(self) -> tuple[tuple[Path, Path], ...]:
        """Return ``(old, new)`` pairs in the order they were applied."""
        return tuple(self._entries)

    def as_dict(self) -> dict[Path, Path]:
        """Return the plan as an insertion-ordered dictionary."""
        return dict(self._entries)

    def map_path(self, path: Path) -> Path:
        """Translate an original path to its location after renaming.

        The deepest matching directory wins.

        Args:
            path: Path in original coordinates.

        Returns:
            Path in renamed coordinates; unchanged when no entry matches.
        """
        path = normalize_path(path)
        for old, new in self._most_specific_first(key_index=0):
            if is_within(path, old):
                return new / path.relative_to(old)
        return path

    def original_path(self, path: Path) -> Path:
        """Translate a renamed path back to its original location.

        Args:
            path: Path in renamed coordinates.

        Returns:
            Path in original coordinates; unchanged when no entry matches.
        """
        path = normalize_path(path)
        for old, new in self._most_specific_first(key_index=1):
            if is_within(path, new):
                return old / path.relative_to(new)
        return path

    def covers(self, path: Path) -> bool:
        """Check whether an original path lies under a renamed directory."""
        path = normalize_path(path)
        return any(is_within(path, old) for old, _ in self._entries)

    def is_renamed(self, directory: Path) -> bool:
        """Check whether an original directory path was itself renamed."""
        directory = normalize_path(directory)
        return any(directory == old for old, _ in self._entries)

    def _most_specific_first(self, key_index: int) -> list[tuple[Path, Path]]:
        return sorted(
            self._entries,
            key=lambda entry: len(entry[key_index].parts),
            reverse=True,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[Path, Path]]:
        return iter(self._entries)


def plan_directory_renames(
    source_root: Path,
    exclusions: ExclusionMatcher | None = None,
    counter: int = 0,
) -> RenamePlan:
    """Rename every directory under ``source_root`` and return the plan.

    Subdirectories are renamed before their parent, siblings in name order.
    One counter is threaded through the walk and advanced once per visited
    directory, so an unchanged tree and seed reproduce the same names.

    Args:
        source_root: Directory whose descendants are renamed; it keeps its name.
        exclusions: Directory exclusion matcher.
        counter: Starting counter value.

    Returns:
        Plan of renames already applied on disk.

    Raises:
        RenameError: If a directory cannot be renamed.
    """
    root = normalize_path(source_root)
    plan = RenamePlan()
    if not root.is_dir():
        logger.warning("Source root not found; nothing to rename (path=%s)", root)
        return plan
    matcher = exclusions or ExclusionMatcher.from_patterns(EXCLUDED_DIR_PATTERNS)
    _rename_subdirectories(
        directory=root, root=root, plan=plan, counter=counter, matcher=matcher
    )
    logger.info("Directory renames applied (root=%s count=%d)", root, len(plan))
    return plan


def _rename_subdirectories(
    directory: Path,
    root: Path,
    plan: RenamePlan,
    counter: int,
    matcher: ExclusionMatcher,
) -> int:
    """Rename the subdirectories of one directory in post-order.

    Args:
        directory: Directory whose children are processed.
        root: Source root, for exclusion matching.
        plan: Plan receiving the applied renames.
        counter: Next counter value.
        matcher: Directory exclusion matcher.

    Returns:
        Next counter value after this subtree.
    """
    children = sorted(
        (
            child
            for child in directory.iterdir()
            if child.is_dir() and not child.is_symlink()
        ),
        key=lambda item: item.name,
    )
    for child in children:
        if matcher.is_excluded_dir(child, root):
            logger.debug("Skipping excluded directory (path=%s)", child)
            continue
        counter = _rename_subdirectories(
            directory=child, root=root, plan=plan, counter=counter, matcher=matcher
        )
        new_name, counter = _free_name(child=child, counter=counter)
        if new_name == child.name:
            continue
        target = child.with_name(new_name)
        try:
            child.rename(target)
        except OSError as exc:
            logger.warning("Failed renaming directory (path=%s error=%s)", child, exc)
            raise RenameError(f"Failed renaming {child}: {exc}") from exc
        plan.record(child, target)
        logger.info(
            "Renamed directory (old=%s new=%s)",
            child.relative_to(root).as_posix(),
            target.relative_to(root).as_posix(),
        )
    return counter


def _free_name(child: Path, counter: int) -> tuple[str, int]:
    """Generate a name that does not clash with an existing sibling.

    Args:
        child: Directory being renamed.
        counter: Counter value to start from.

    Returns:
        Generated name and the next counter value.
    """
    while True:
        candidate = directory_name(child.name, counter)
        counter += 1
        if candidate == child.name or not child.with_name(candidate).exists():
            return candidate, counter
        logger.debug(
            "Generated directory name taken; advancing counter (name=%s)", candidate
        )

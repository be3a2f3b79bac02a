# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Walk, delete and prune files of a package tree."""

import logging
import shutil
from collections import deque
from collections.abc import Iterator
from pathlib import Path

from pkganon.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_SKIPPED_SOURCE_SUFFIXES,
    DEFAULT_TEST_SUFFIXES,
    RESERVED_TEST_DIR,
    VITEST_CONFIG_NAME,
    ExclusionMatcher,
)

logger = logging.getLogger(__name__)


def walk_files(root: Path, matcher: ExclusionMatcher) -> Iterator[Path]:
    """Yield files below ``root`` depth-first in name order.

    Excluded directories are not entered.

    Args:
        root: Directory to walk.
        matcher: Directory exclusion matcher, relative to ``root``.

    Yields:
        File paths.
    """
    yield from _walk(directory=root, root=root, matcher=matcher)


def _walk(directory: Path, root: Path, matcher: ExclusionMatcher) -> Iterator[Path]:
    if not directory.is_dir():
        return
    for child in sorted(directory.iterdir(), key=lambda item: item.name):
        if child.is_dir() and not child.is_symlink():
            if matcher.is_excluded_dir(child, root):
                continue
            yield from _walk(directory=child, root=root, matcher=matcher)
        elif child.is_file():
            yield child


def find_test_files(
    root: Path,
    matcher: ExclusionMatcher,
    suffixes: tuple[str, ...] = DEFAULT_TEST_SUFFIXES,
) -> list[Path]:
    """Find unit test files below ``root``."""
    return [
        path for path in walk_files(root, matcher) if path.name.endswith(suffixes)
    ]


def find_source_files(
    root: Path,
    matcher: ExclusionMatcher,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """Find implementation files below ``root``.

    Test files and the package vitest config are not implementation files.

    Args:
        root: Directory to search.
        matcher: Directory exclusion matcher.
        extensions: Implementation file extensions.

    Returns:
        Source files in walk order.
    """
    return [
        path
        for path in walk_files(root, matcher)
        if path.name.endswith(extensions)
        and not path.name.endswith(DEFAULT_SKIPPED_SOURCE_SUFFIXES)
        and path.name != VITEST_CONFIG_NAME
    ]


def delete_file(path: Path) -> bool:
    """Delete one file, tolerating failures.

    Args:
        path: File to delete.

    Returns:
        True when the file was removed.
    """
    try:
        path.unlink()
    except OSError as exc:
        logger.warning("Could not delete file (path=%s error=%s)", path, exc)
        return False
    return True


def delete_reserved_directories(
    root: Path,
    matcher: ExclusionMatcher,
    name: str = RESERVED_TEST_DIR,
) -> list[Path]:
    """Delete every directory called ``name`` below ``root``.

    Other excluded directories are neither entered nor deleted.

    Args:
        root: Directory to search.
        matcher: Directory exclusion matcher.
        name: Reserved directory name.

    Returns:
        Directories that are gone; failures are logged and left out.
    """
    deleted: list[Path] = []
    queue: deque[Path] = deque([root])
    while queue:
        current = queue.popleft()
        for child in sorted(current.iterdir(), key=lambda item: item.name):
            if not child.is_dir() or child.is_symlink():
                continue
            if child.name == name:
                logger.info(
                    "Deleting reserved directory (path=%s)",
                    child.relative_to(root).as_posix(),
                )
                if _delete_tree(child):
                    deleted.append(child)
            elif not matcher.is_excluded_dir(child, root):
                queue.append(child)
    return deleted


def _delete_tree(directory: Path) -> bool:
    try:
        shutil.rmtree(directory)
    except OSError as exc:
        logger.warning(
            "Could not delete directory (path=%s error=%s)", directory, exc
        )
    return not directory.exists()


def remove_empty_parents(directory: Path, root: Path) -> int:
    """Remove ``directory`` and its ancestors while they are empty.

    ``root`` itself is never removed.

    Args:
        directory: Directory that may have become empty.
        root: Package root.

    Returns:
        Number of removed directories.
    """
    removed = 0
    current = directory
    while current != root and root in current.parents:
        try:
            if any(current.iterdir()):
                break
            current.rmdir()
        except OSError as exc:
            logger.debug("Directory left in place (path=%s error=%s)", current, exc)
            break
        logger.info(
            "Removed empty directory (path=%s)", current.relative_to(root).as_posix()
        )
        removed += 1
        current = current.parent
    return removed


def prune_empty_directories(root: Path, matcher: ExclusionMatcher) -> int:
    """Remove empty directories below ``root`` bottom-up.

    Args:
        root: Package root; never removed.
        matcher: Directory exclusion matcher; excluded directories are kept.

    Returns:
        Number of removed directories.
    """
    return _prune(directory=root, root=root, matcher=matcher)


def _prune(directory: Path, root: Path, matcher: ExclusionMatcher) -> int:
    removed = 0
    for child in sorted(directory.iterdir(), key=lambda item: item.name):
        if not child.is_dir() or child.is_symlink():
            continue
        if matcher.is_excluded_dir(child, root):
            continue
        removed += _prune(directory=child, root=root, matcher=matcher)
    if directory == root or any(directory.iterdir()):
        return removed
    try:
        directory.rmdir()
    except OSError as exc:
        logger.debug("Directory left in place (path=%s error=%s)", directory, exc)
        return removed
    logger.info(
        "Removed empty directory (path=%s)", directory.relative_to(root).as_posix()
    )
    return removed + 1

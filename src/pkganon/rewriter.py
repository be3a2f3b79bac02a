# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Rewrite relative module specifiers after directories have been renamed."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pkganon.config import DEFAULT_EXTENSIONS, DEFAULT_INDEX_NAME
from pkganon.planner import RenamePlan
from pkganon.resolver import Resolution, normalize_path, resolve
from pkganon.syntax import is_relative_specifier, scan_references

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteResult:
    """Store transformed source and rewrite counters.

    Args:
        transformed_source: Source text with updated specifiers.
        specifiers_rewritten: Count of specifiers replaced.
    """

    transformed_source: str
    specifiers_rewritten: int

    @property
    def changed(self) -> bool:
        """Whether any specifier was replaced."""
        return self.specifiers_rewritten > 0


class RewriteError(RuntimeError):
    """Represent rewrite-phase failure."""


def rewrite_source(
    source: str,
    file_path: Path,
    plan: RenamePlan,
    package_root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    index_name: str = DEFAULT_INDEX_NAME,
) -> RewriteResult:
    """Rewrite specifiers of a file that now lives at ``file_path``.

    Each relative specifier is resolved from the file's location before the
    renames, against the renamed tree. Specifiers that spell out the name of
    a renamed directory are replaced by a path from the file's current
    directory to the target's new location.

    Args:
        source: File content.
        file_path: Current location of the file.
        plan: Applied directory renames.
        package_root: Package root bounding resolution.
        extensions: Implementation file extensions.
        index_name: Directory index module name.

    Returns:
        Rewritten source and the number of replaced specifiers.
    """
    current_file = normalize_path(file_path)
    original_file = plan.original_path(current_file)

    def exists_after_rename(path: Path) -> bool:
        return plan.map_path(path).is_file()

    pieces: list[str] = []
    cursor = 0
    rewritten = 0
    for reference in scan_references(source):
        if not is_relative_specifier(reference.specifier):
            continue
        resolution = resolve(
            from_file=original_file,
            specifier=reference.specifier,
            package_root=package_root,
            extensions=extensions,
            index_name=index_name,
            exists=exists_after_rename,
        )
        if resolution is None or not names_renamed_directory(
            specifier=reference.specifier,
            from_dir=original_file.parent,
            plan=plan,
        ):
            continue
        replacement = relocate_specifier(
            specifier=reference.specifier,
            resolution=resolution,
            new_target=plan.map_path(resolution.path),
            from_dir=current_file.parent,
            index_name=index_name,
        )
        if replacement == reference.specifier:
            continue
        pieces.append(source[cursor : reference.start])
        pieces.append(replacement)
        cursor = reference.end
        rewritten += 1
        logger.debug(
            "Rewrote specifier (path=%s old=%s new=%s)",
            current_file,
            reference.specifier,
            replacement,
        )
    pieces.append(source[cursor:])
    return RewriteResult(
        transformed_source="".join(pieces),
        specifiers_rewritten=rewritten,
    )


def names_renamed_directory(specifier: str, from_dir: Path, plan: RenamePlan) -> bool:
    """Check whether a specifier walks into a renamed directory by name.

    Renames keep directory depth, so a specifier made only of ``.`` and
    ``..`` segments, or of names that were not renamed, still resolves.

    Args:
        specifier: Relative specifier text.
        from_dir: Directory of the referencing file before the renames.
        plan: Applied directory renames.

    Returns:
        True when some segment names a directory the plan renamed.
    """
    current = Path("/") if specifier.startswith("/") else normalize_path(from_dir)
    for segment in specifier.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            current = current.parent
            continue
        current = current / segment
        if plan.is_renamed(current):
            return True
    return False


def relocate_specifier(
    specifier: str,
    resolution: Resolution,
    new_target: Path,
    from_dir: Path,
    index_name: str = DEFAULT_INDEX_NAME,
) -> str:
    """Build a relative specifier for a relocated target.

    The written form is kept: a full file name stays a full file name, an
    extension-less specifier stays extension-less, and a directory or
    ``/index`` specifier drops the index segment.

    Args:
        specifier: Original specifier text.
        resolution: How the original specifier resolved.
        new_target: Target file location after renaming.
        from_dir: Directory of the referencing file after renaming.
        index_name: Directory index module name.

    Returns:
        Forward-slash relative specifier starting with ``.``.
    """
    relative = os.path.relpath(new_target, from_dir).replace(os.sep, "/")
    if resolution.kind == "index":
        stripped = _strip_suffix(relative, resolution.suffix)
        if stripped == relative:
            # index module of the referencing file's own directory
            extension = resolution.suffix.removeprefix(f"/{index_name}")
            stripped = _strip_suffix(relative, extension)
        relative = stripped
    elif resolution.kind == "extension":
        relative = _strip_suffix(relative, resolution.suffix)
        if specifier.rstrip("/").endswith(f"/{index_name}"):
            relative = _strip_suffix(relative, f"/{index_name}")
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative


def _strip_suffix(relative: str, suffix: str) -> str:
    if suffix and relative.endswith(suffix) and len(relative) > len(suffix):
        return relative[: -len(suffix)]
    return relative


def rewrite_file(
    file_path: Path,
    plan: RenamePlan,
    package_root: Path,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
    index_name: str = DEFAULT_INDEX_NAME,
) -> RewriteResult:
    """Rewrite specifiers of one file in place.

    Args:
        file_path: Current location of the file.
        plan: Applied directory renames.
        package_root: Package root bounding resolution.
        extensions: Implementation file extensions.
        index_name: Directory index module name.

    Returns:
        Rewrite result; the file is written only when it changed.

    Raises:
        RewriteError: If the file cannot be read or written.
    """
    try:
        source = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed reading file (path=%s error=%s)", file_path, exc)
        raise RewriteError(str(exc)) from exc
    result = rewrite_source(
        source=source,
        file_path=file_path,
        plan=plan,
        package_root=package_root,
        extensions=extensions,
        index_name=index_name,
    )
    if not result.changed:
        return result
    tmp_path = file_path.with_suffix(f"{file_path.suffix}.tmp")
    try:
        tmp_path.write_text(result.transformed_source, encoding="utf-8")
        tmp_path.replace(file_path)
    except OSError as exc:
        logger.warning("Failed writing file (path=%s error=%s)", file_path, exc)
        raise RewriteError(str(exc)) from exc
    return result

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Run every anonymization phase over one package directory."""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path

from pkganon.config import VITEST_BASE_NAME, VITEST_CONFIG_NAME, AnonymizerConfig
from pkganon.graph import DependencyGraph, build_dependency_graph
from pkganon.manifests import (
    PACKAGE_JSON,
    PROJECT_JSON,
    TSCONFIG_API,
    TSCONFIG_BASE,
    anonymized_import_path,
    read_import_path,
    replace_quoted_path,
    update_package_json,
    update_project_json,
)
from pkganon.naming import anonymized_test_file, package_name
from pkganon.planner import RenameError, RenamePlan, plan_directory_renames
from pkganon.resolver import normalize_path
from pkganon.rewriter import RewriteError, rewrite_file
from pkganon.stubs import render_test_stub, render_vitest_config, stub_source
from pkganon.tree import (
    delete_file,
    delete_reserved_directories,
    find_source_files,
    find_test_files,
    prune_empty_directories,
    remove_empty_parents,
    walk_files,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnonymizeSummary:
    """Represent the outcome of one anonymization run.

    Attributes:
        package_name: Original package directory name.
        new_package_name: Anonymized package directory name.
        new_package_path: Package location after renaming.
        test_files_anonymized: Test files replaced and renamed.
        source_files_found: Implementation files found under the source root.
        source_files_deleted: Implementation files deleted.
        source_files_stubbed: Implementation files reduced to their exports.
        reserved_dirs_deleted: Reserved test directories deleted.
        directories_renamed: Source directories renamed.
        files_rewritten: Files whose specifiers changed.
        specifiers_rewritten: Specifiers replaced across all files.
        empty_dirs_removed: Directories removed by the final prune.
        descriptor_updates: Path substitutions in workspace descriptors.
        elapsed_ms: Wall-clock duration.
        plan: Applied directory renames.
    """

    package_name: str
    new_package_name: str
    new_package_path: Path
    test_files_anonymized: int
    source_files_found: int
    source_files_deleted: int
    source_files_stubbed: int
    reserved_dirs_deleted: int
    directories_renamed: int
    files_rewritten: int
    specifiers_rewritten: int
    empty_dirs_removed: int
    descriptor_updates: int
    elapsed_ms: int
    plan: RenamePlan

    def counters(self) -> dict[str, int]:
        """Return the numeric counters keyed by name."""
        return {
            "test_files_anonymized": self.test_files_anonymized,
            "source_files_found": self.source_files_found,
            "source_files_deleted": self.source_files_deleted,
            "source_files_stubbed": self.source_files_stubbed,
            "reserved_dirs_deleted": self.reserved_dirs_deleted,
            "directories_renamed": self.directories_renamed,
            "files_rewritten": self.files_rewritten,
            "specifiers_rewritten": self.specifiers_rewritten,
            "empty_dirs_removed": self.empty_dirs_removed,
            "descriptor_updates": self.descriptor_updates,
            "elapsed_ms": self.elapsed_ms,
        }


def anonymize_package(package_path: Path, config: AnonymizerConfig) -> AnonymizeSummary:
    """Anonymize one package of the workspace in place.

    Phases run in a fixed order; a failure leaves earlier phases applied.

    Args:
        package_path: Package directory.
        config: Run settings.

    Returns:
        Run summary.

    Raises:
        RenameError: If a directory cannot be renamed.
        RewriteError: If a source file cannot be rewritten.
        ManifestError: If a manifest cannot be read or written.
    """
    started = time.monotonic()
    root = normalize_path(package_path)
    source_root = root / config.source_root
    matcher = config.exclusions()
    new_name = package_name(root.name)
    logger.info("Anonymizing package (name=%s new_name=%s)", root.name, new_name)

    old_import_path = read_import_path(root / PACKAGE_JSON)
    graph = build_dependency_graph(
        entry_file=root / config.entry_module,
        package_root=root,
        extensions=config.extensions,
        index_name=config.index_name,
    )

    test_files = find_test_files(root, matcher, config.test_suffixes)
    for index, test_file in enumerate(test_files):
        _anonymize_test_file(test_file=test_file, index=index, root=root)

    source_files = find_source_files(source_root, matcher, config.extensions)
    reserved_dirs = delete_reserved_directories(root, matcher)
    deleted, stubbed = _strip_sources(
        source_files=source_files, graph=graph, root=root, config=config
    )
    _ensure_vitest_config(root=root, workspace_root=config.workspace_root)

    plan = plan_directory_renames(
        source_root, exclusions=matcher, counter=config.counter_seed
    )
    files_rewritten = 0
    specifiers_rewritten = 0
    for module_file in walk_files(source_root, matcher):
        if not module_file.name.endswith(config.extensions):
            continue
        result = rewrite_file(
            file_path=module_file,
            plan=plan,
            package_root=root,
            extensions=config.extensions,
            index_name=config.index_name,
        )
        if result.changed:
            files_rewritten += 1
            specifiers_rewritten += result.specifiers_rewritten

    empty_dirs_removed = prune_empty_directories(root, matcher)
    update_package_json(root / PACKAGE_JSON, new_name)
    update_project_json(root / PROJECT_JSON, new_name)

    new_root = root.with_name(new_name)
    if new_root != root:
        try:
            root.rename(new_root)
        except OSError as exc:
            logger.warning("Failed renaming package (path=%s error=%s)", root, exc)
            raise RenameError(f"Failed renaming {root}: {exc}") from exc
        logger.info("Renamed package directory (old=%s new=%s)", root, new_root)

    descriptor_updates = _update_workspace_descriptors(
        workspace_root=normalize_path(config.workspace_root),
        old_root=root,
        new_root=new_root,
        old_import_path=old_import_path,
        new_import_path=anonymized_import_path(new_name) if old_import_path else None,
    )

    elapsed_ms = int(round((time.monotonic() - started) * 1000))
    return AnonymizeSummary(
        package_name=root.name,
        new_package_name=new_name,
        new_package_path=new_root,
        test_files_anonymized=len(test_files),
        source_files_found=len(source_files),
        source_files_deleted=deleted,
        source_files_stubbed=stubbed,
        reserved_dirs_deleted=len(reserved_dirs),
        directories_renamed=len(plan),
        files_rewritten=files_rewritten,
        specifiers_rewritten=specifiers_rewritten,
        empty_dirs_removed=empty_dirs_removed,
        descriptor_updates=descriptor_updates,
        elapsed_ms=elapsed_ms,
        plan=plan,
    )


def _anonymize_test_file(test_file: Path, index: int, root: Path) -> Path:
    """Replace a test file body and give it an opaque name.

    Args:
        test_file: Test file path.
        index: Position of the file in discovery order.
        root: Package root, for log messages.

    Returns:
        Test file location after renaming.
    """
    test_file.write_text(render_test_stub(index), encoding="utf-8")
    target = test_file.with_name(anonymized_test_file(test_file.name, index))
    if target == test_file:
        return test_file
    test_file.rename(target)
    logger.info(
        "Renamed test file (old=%s new=%s)",
        test_file.relative_to(root).as_posix(),
        target.relative_to(root).as_posix(),
    )
    return target


def _strip_sources(
    source_files: list[Path],
    graph: DependencyGraph,
    root: Path,
    config: AnonymizerConfig,
) -> tuple[int, int]:
    """Delete or stub implementation files according to the source policy.

    Args:
        source_files: Implementation files found before any deletion.
        graph: Dependency graph built before any mutation.
        root: Package root.
        config: Run settings.

    Returns:
        Deleted and stubbed file counts.
    """
    if config.policy == "purge":
        doomed = list(source_files)
    else:
        doomed = graph.unreachable(source_files)
    doomed_set = set(doomed)

    deleted = 0
    for source_file in doomed:
        if not source_file.exists():
            continue
        logger.info("Deleting (path=%s)", source_file.relative_to(root).as_posix())
        if delete_file(source_file):
            deleted += 1
            remove_empty_parents(source_file.parent, root)

    stubbed = 0
    for source_file in source_files:
        if source_file in doomed_set or not source_file.exists():
            continue
        try:
            source = source_file.read_text(encoding="utf-8")
            source_file.write_text(stub_source(source), encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed stubbing file (path=%s error=%s)", source_file, exc)
            raise RewriteError(f"Failed stubbing {source_file}: {exc}") from exc
        stubbed += 1
    logger.info(
        "Source files processed (policy=%s deleted=%d stubbed=%d)",
        config.policy,
        deleted,
        stubbed,
    )
    return deleted, stubbed


def _ensure_vitest_config(root: Path, workspace_root: Path) -> bool:
    """Create the package vitest config when it is missing.

    Args:
        root: Package root.
        workspace_root: Workspace root holding the base vitest config.

    Returns:
        True when a config was created.
    """
    config_path = root / VITEST_CONFIG_NAME
    if config_path.exists():
        return False
    base = normalize_path(workspace_root) / VITEST_BASE_NAME
    relative = os.path.relpath(base, root).replace(os.sep, "/")
    relative = relative.removesuffix(".ts")
    config_path.write_text(render_vitest_config(relative), encoding="utf-8")
    logger.info("Created vitest config (path=%s)", config_path)
    return True


def _update_workspace_descriptors(
    workspace_root: Path,
    old_root: Path,
    new_root: Path,
    old_import_path: str | None,
    new_import_path: str | None,
) -> int:
    """Rewrite workspace path maps to the renamed package.

    Args:
        workspace_root: Workspace root directory.
        old_root: Package directory before renaming.
        new_root: Package directory after renaming.
        old_import_path: Package import path before renaming.
        new_import_path: Package import path after renaming.

    Returns:
        Number of substitutions across descriptors.
    """
    old_path = os.path.relpath(old_root, workspace_root).replace(os.sep, "/")
    new_path = os.path.relpath(new_root, workspace_root).replace(os.sep, "/")
    updates = 0
    for descriptor_name in (TSCONFIG_BASE, TSCONFIG_API):
        updates += replace_quoted_path(
            workspace_root / descriptor_name,
            old_path=old_path,
            new_path=new_path,
            old_import_path=old_import_path,
            new_import_path=new_import_path,
        )
    return updates

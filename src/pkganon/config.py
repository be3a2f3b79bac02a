# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Runtime settings and directory exclusion rules for package anonymization."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import pathspec

SourcePolicy = Literal["stub", "purge"]

DEFAULT_EXTENSIONS: tuple[str, ...] = (".ts",)
DEFAULT_INDEX_NAME = "index"
DEFAULT_SOURCE_ROOT = "src"
DEFAULT_ENTRY_MODULE = "src/index.ts"
DEFAULT_TEST_SUFFIXES: tuple[str, ...] = (".test.ts",)
DEFAULT_SKIPPED_SOURCE_SUFFIXES: tuple[str, ...] = (".test.ts", ".spec.ts")
RESERVED_TEST_DIR = "test"
VITEST_CONFIG_NAME = "vitest.config.ts"
VITEST_BASE_NAME = "vitest.base.ts"
ANONYMIZED_SCOPE = "@anonymized"
EXCLUDED_DIR_PATTERNS: tuple[str, ...] = (
    "node_modules/",
    "dist/",
    ".git/",
    f"{RESERVED_TEST_DIR}/",
)


class ExclusionMatcher:
    """Match package paths against excluded directory patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore-style matcher.
        """
        self._spec = spec

    @classmethod
    def from_patterns(cls, patterns: tuple[str, ...] | list[str]) -> "ExclusionMatcher":
        """Build matcher from gitignore-style patterns.

        Args:
            patterns: Patterns such as ``node_modules/``.

        Returns:
            Configured exclusion matcher.
        """
        spec = pathspec.GitIgnoreSpec.from_lines(list(patterns))
        return cls(spec=spec)

    def is_excluded_dir(self, directory: Path, root: Path) -> bool:
        """Check whether a directory must be skipped.

        Args:
            directory: Directory to check.
            root: Root the patterns are relative to.

        Returns:
            True when the directory is excluded.
        """
        try:
            relative = directory.relative_to(root).as_posix()
        except ValueError:
            relative = directory.name
        normalized = relative.replace(os.sep, "/").strip("/")
        if not normalized or normalized == ".":
            return False
        return self._spec.match_file(f"{normalized}/")


@dataclass(frozen=True)
class AnonymizerConfig:
    """Describe one anonymization run.

    Attributes:
        workspace_root: Workspace directory holding the root descriptors.
        source_root: Package-relative source directory name.
        entry_module: Package-relative entry module path.
        extensions: Implementation file extensions, tried in order.
        index_name: Directory index module name without extension.
        test_suffixes: File suffixes identifying unit test files.
        extra_exclusions: Additional gitignore-style directory patterns.
        counter_seed: Starting value of the directory naming counter.
        policy: ``stub`` keeps reachable sources as stubs, ``purge`` deletes all.
    """

    workspace_root: Path = field(default_factory=Path.cwd)
    source_root: str = DEFAULT_SOURCE_ROOT
    entry_module: str = DEFAULT_ENTRY_MODULE
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    index_name: str = DEFAULT_INDEX_NAME
    test_suffixes: tuple[str, ...] = DEFAULT_TEST_SUFFIXES
    extra_exclusions: tuple[str, ...] = ()
    counter_seed: int = 0
    policy: SourcePolicy = "stub"

    def exclusions(self) -> ExclusionMatcher:
        """Build the directory exclusion matcher for this run."""
        return ExclusionMatcher.from_patterns(
            EXCLUDED_DIR_PATTERNS + tuple(self.extra_exclusions)
        )

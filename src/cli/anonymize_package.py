# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Anonymize one workspace package in place."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from pkganon import (
    AnonymizerConfig,
    AnonymizeSummary,
    ManifestError,
    RenameError,
    RewriteError,
    anonymize_package,
)
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

logger = logging.getLogger(__name__)


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(prog="pkg-anonymize")
    parser.add_argument("package_path", help="Package directory to anonymize.")
    parser.add_argument(
        "--workspace-root",
        default=None,
        help="Workspace root holding tsconfig.base.json (default: current directory).",
    )
    parser.add_argument(
        "--policy",
        choices=("stub", "purge"),
        default="stub",
        help="stub: delete unreachable sources and stub the rest; purge: delete all.",
    )
    parser.add_argument(
        "--counter-seed",
        type=int,
        default=0,
        help="Starting value of the directory naming counter.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Extra gitignore-style directory pattern to leave untouched.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run anonymization command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning("Argument parsing failed (argv=%s)", argv)
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    _emit_marker(console=console, phase="validation", state="start")
    try:
        package_path = _validate_package_path(Path(args.package_path))
        if args.counter_seed < 0:
            raise ValidationError("Counter seed must be >= 0")
    except ValidationError as exc:
        logger.warning("Validation failed (error=%s)", exc)
        stderr.write(f"{exc}\n")
        return 2
    _emit_marker(console=console, phase="validation", state="done")

    workspace_root = (
        Path(args.workspace_root) if args.workspace_root is not None else Path.cwd()
    )
    config = AnonymizerConfig(
        workspace_root=workspace_root.resolve(),
        extra_exclusions=tuple(args.exclude),
        counter_seed=args.counter_seed,
        policy=args.policy,
    )

    _emit_marker(console=console, phase="anonymize", state="start")
    try:
        summary = anonymize_package(package_path=package_path, config=config)
    except (RenameError, RewriteError, ManifestError, OSError) as exc:
        logger.warning("Anonymization failed (error=%s)", exc)
        stderr.write(f"Anonymization failed: {exc}\n")
        return 2
    _emit_marker(console=console, phase="anonymize", state="done")
    console.print(
        f"package={summary.package_name} new_package={summary.new_package_name}"
    )
    _emit_summary(console=console, summary=summary.counters())
    if len(summary.plan) > 0:
        console.print(_plan_table(summary=summary, package_root=package_path))
    console.print("status=success")
    return 0


def _emit_marker(console: Console, phase: str, state: str) -> None:
    console.print(f"{phase}:{state}")


def _emit_summary(console: Console, summary: dict[str, int]) -> None:
    fields = " ".join(f"{key}={value}" for key, value in summary.items())
    console.print(fields)


def _plan_table(summary: AnonymizeSummary, package_root: Path) -> Table:
    """Render applied directory renames as a table.

    Args:
        summary: Run summary holding the rename plan.
        package_root: Package directory before it was renamed.

    Returns:
        Table with one row per renamed directory.
    """
    table = Table(title="Directory renames", show_lines=False)
    table.add_column("old", overflow="fold")
    table.add_column("new", overflow="fold")
    for old, new in summary.plan:
        table.add_row(
            old.relative_to(package_root).as_posix(),
            new.relative_to(package_root).as_posix(),
        )
    return table


def _validate_package_path(package_path: Path) -> Path:
    """Validate the package directory argument.

    Args:
        package_path: Package path from user args.

    Returns:
        Normalized absolute package path.

    Raises:
        ValidationError: If the path is missing or not a directory.
    """
    package_abs = package_path.resolve()
    if not package_abs.exists():
        raise ValidationError(f"Package path does not exist: {package_abs}")
    if not package_abs.is_dir():
        raise ValidationError(f"Package path is not a directory: {package_abs}")
    return package_abs


def main() -> None:
    """Run anonymization CLI."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()

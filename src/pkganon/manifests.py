# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Update package manifests and workspace path maps after anonymization."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from pkganon.config import ANONYMIZED_SCOPE

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
PROJECT_JSON = "project.json"
TSCONFIG_BASE = "tsconfig.base.json"
TSCONFIG_API = "tsconfig.api.json"


class ManifestError(RuntimeError):
    """Represent a manifest read or write failure."""


def read_import_path(package_json: Path) -> str | None:
    """Read the package import path from ``package.json``.

    Args:
        package_json: Manifest path.

    Returns:
        Declared package name, or ``None`` when absent.
    """
    if not package_json.exists():
        return None
    name = _load_json(package_json).get("name")
    return name or None


def anonymized_import_path(new_package_name: str) -> str:
    """Build the scoped import path of an anonymized package."""
    return f"{ANONYMIZED_SCOPE}/{new_package_name}"


def update_package_json(package_json: Path, new_package_name: str) -> bool:
    """Point the package name at the anonymized scope.

    Args:
        package_json: Manifest path.
        new_package_name: Anonymized package directory name.

    Returns:
        True when the manifest was rewritten.
    """
    return _set_name(package_json, anonymized_import_path(new_package_name))


def update_project_json(project_json: Path, new_package_name: str) -> bool:
    """Rename the project in ``project.json``.

    Args:
        project_json: Project descriptor path.
        new_package_name: Anonymized package directory name.

    Returns:
        True when the descriptor was rewritten.
    """
    return _set_name(project_json, new_package_name)


def replace_quoted_path(
    descriptor: Path,
    old_path: str,
    new_path: str,
    old_import_path: str | None = None,
    new_import_path: str | None = None,
) -> int:
    """Substitute quoted path strings in a workspace descriptor.

    The descriptor is edited as text. A quoted string equal to ``old_path``
    or starting with ``old_path/`` has that prefix replaced; a quoted string
    equal to ``old_import_path`` (optionally followed by ``/``) gets the new
    import path.

    Args:
        descriptor: Workspace descriptor path.
        old_path: Workspace-relative package path before renaming.
        new_path: Workspace-relative package path after renaming.
        old_import_path: Package import path before renaming.
        new_import_path: Package import path after renaming.

    Returns:
        Number of substitutions; 0 when the descriptor does not exist.

    Raises:
        ManifestError: If the descriptor cannot be read or written.
    """
    if not descriptor.exists():
        return 0
    try:
        content = descriptor.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Failed reading {descriptor}: {exc}") from exc

    content, count = _replace_quoted_prefix(content, old_path, new_path)
    if old_import_path and new_import_path:
        content, import_count = _replace_quoted_prefix(
            content, old_import_path, new_import_path
        )
        count += import_count
    if count == 0:
        logger.info("No path references found (path=%s)", descriptor)
        return 0
    try:
        descriptor.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed writing {descriptor}: {exc}") from exc
    logger.info("Updated path references (path=%s count=%d)", descriptor, count)
    return count


def _replace_quoted_prefix(content: str, old: str, new: str) -> tuple[str, int]:
    pattern = re.compile(f'"{re.escape(old)}(?=["/])')
    return pattern.subn(lambda _: f'"{new}', content)


def _set_name(manifest: Path, value: str) -> bool:
    """Replace the ``name`` field of a JSON manifest when it has one."""
    if not manifest.exists():
        return False
    data = _load_json(manifest)
    if not data.get("name"):
        return False
    data["name"] = value
    serialized = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    try:
        manifest.write_text(serialized, encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed writing {manifest}: {exc}") from exc
    logger.info("Updated manifest name (path=%s name=%s)", manifest, value)
    return True


def _load_json(manifest: Path) -> dict[str, Any]:
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Failed reading {manifest}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest is not a JSON object: {manifest}")
    return data

# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for package anonymization components."""

from pkganon.config import AnonymizerConfig, ExclusionMatcher
from pkganon.extractor import ExtractedReferences, extract_references
from pkganon.graph import DependencyGraph, build_dependency_graph
from pkganon.manifests import ManifestError
from pkganon.orchestrator import AnonymizeSummary, anonymize_package
from pkganon.planner import RenameError, RenamePlan, plan_directory_renames
from pkganon.resolver import Resolution, resolve
from pkganon.rewriter import RewriteError, RewriteResult, rewrite_file, rewrite_source

__all__ = [
    "AnonymizeSummary",
    "AnonymizerConfig",
    "DependencyGraph",
    "ExclusionMatcher",
    "ExtractedReferences",
    "ManifestError",
    "RenameError",
    "RenamePlan",
    "Resolution",
    "RewriteError",
    "RewriteResult",
    "anonymize_package",
    "build_dependency_graph",
    "extract_references",
    "plan_directory_renames",
    "resolve",
    "rewrite_file",
    "rewrite_source",
]

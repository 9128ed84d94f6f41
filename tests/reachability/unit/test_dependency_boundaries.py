"""Boundary tests for the reachability core dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_reachability_core_has_no_io_or_presentation_dependencies() -> None:
    reachability_dir = _project_root() / "src" / "schema_pruner" / "reachability"
    core_modules = (
        reachability_dir / "reachability_filter.py",
        reachability_dir / "filter_contracts.py",
    )
    forbidden_import_fragments = (
        "import click",
        "import yaml",
        "import logging",
        "schema_pruner.configuration",
        "schema_pruner.schema_tree.tree_loader",
        "schema_pruner.tree_inspection",
    )

    for module_path in core_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"

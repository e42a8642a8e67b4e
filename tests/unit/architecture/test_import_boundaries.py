"""Tests for architecture import boundaries.

These tests ensure that the layer boundaries are maintained:
- Core layers (application, domain, infrastructure) must not import from CLI
- The domain must not import from infrastructure or application
"""

from __future__ import annotations

import ast
import re
from pathlib import Path

import pytest


# Root of the openclinica_connector package
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / "openclinica_connector"

CLI_PATTERN = r"(^|\.)cli(\.|$)"
INFRASTRUCTURE_PATTERN = r"(^|\.)infrastructure(\.|$)"
APPLICATION_PATTERN = r"(^|\.)application(\.|$)"


def get_python_files(directory: Path) -> list[Path]:
    """Get all Python files in a directory recursively."""
    return list(directory.rglob("*.py"))


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Extract all imported module names from a Python file.

    Relative imports are returned without their leading dots, so
    ``from ..cli import app`` yields ``cli``.
    """
    imports: list[str] = []
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            imports.append(node.module)
    return imports


def has_forbidden_import(imports: list[str], forbidden_pattern: str) -> list[str]:
    pattern = re.compile(forbidden_pattern)
    return [imp for imp in imports if pattern.search(imp)]


def find_violations(layer: str, forbidden_pattern: str) -> list[str]:
    layer_dir = PACKAGE_ROOT / layer
    if not layer_dir.exists():
        pytest.skip(f"{layer} directory not found")

    violations = []
    for py_file in get_python_files(layer_dir):
        imports = extract_imports_from_file(py_file)
        forbidden = has_forbidden_import(imports, forbidden_pattern)
        if forbidden:
            rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
            violations.append(f"{rel_path}: {forbidden}")
    return violations


class TestCLIImportBoundary:
    """The CLI is the outermost layer; nothing outside it may import it."""

    @pytest.mark.parametrize("layer", ["application", "domain", "infrastructure"])
    def test_layer_does_not_import_cli(self, layer: str):
        violations = find_violations(layer, CLI_PATTERN)

        assert not violations, f"{layer} layer imports CLI modules:\n" + "\n".join(
            violations
        )

    def test_no_cli_helpers_outside_cli(self):
        violations = []
        for py_file in get_python_files(PACKAGE_ROOT):
            if py_file.is_relative_to(PACKAGE_ROOT / "cli"):
                continue
            imports = extract_imports_from_file(py_file)
            forbidden = has_forbidden_import(imports, r"cli\.helpers")
            if forbidden:
                rel_path = py_file.relative_to(PACKAGE_ROOT.parent)
                violations.append(f"{rel_path}: {forbidden}")

        assert not violations, "cli.helpers imported outside CLI:\n" + "\n".join(
            violations
        )


class TestDomainBoundary:
    def test_domain_does_not_import_infrastructure(self):
        violations = find_violations("domain", INFRASTRUCTURE_PATTERN)

        assert not violations, "Domain imports infrastructure:\n" + "\n".join(
            violations
        )

    def test_domain_does_not_import_application(self):
        violations = find_violations("domain", APPLICATION_PATTERN)

        assert not violations, "Domain imports application:\n" + "\n".join(
            violations
        )


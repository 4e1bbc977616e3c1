"""
Engine and domain boundary contract.

Tests that enforce the architectural layering:

1. asset_engines/** may NOT import the store or the seed pipeline.
   Engines are pure functions over a CatalogState snapshot.

2. asset_kernel/domain/** may NOT import engines, services, config or
   logging. The domain is a pure core with zero I/O.

3. The catalog invariants declaration is complete and non-empty.

These tests read source code via AST -- they cannot break anything.
"""

import ast
from pathlib import Path

from asset_kernel.invariants import (
    ALL_CATALOG_INVARIANTS,
    FORBIDDEN_ENGINE_IMPORTS,
    CatalogInvariant,
)

REPO_ROOT = Path(__file__).resolve().parents[2]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _python_files(root: str) -> list[Path]:
    return sorted((REPO_ROOT / root).rglob("*.py"))


def _extract_imports(filepath: Path) -> list[tuple[int, str]]:
    """Extract (line_number, module_string) for all imports in a file."""
    tree = ast.parse(filepath.read_text(), filename=str(filepath))

    results: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                results.append((node.lineno, alias.name))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                results.append((node.lineno, node.module))
    return results


def _violations(root: str, forbidden: tuple[str, ...]) -> list[str]:
    found: list[str] = []
    for filepath in _python_files(root):
        for lineno, module in _extract_imports(filepath):
            for prefix in forbidden:
                if module == prefix or module.startswith(f"{prefix}."):
                    rel = filepath.relative_to(REPO_ROOT)
                    found.append(f"  {rel}:{lineno} imports '{module}'")
    return found


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestEnginesArePure:
    def test_engines_exist(self):
        assert _python_files("asset_engines")

    def test_engines_do_not_import_store_or_config(self):
        violations = _violations("asset_engines", FORBIDDEN_ENGINE_IMPORTS)
        assert not violations, (
            "Engine boundary violation -- asset_engines/** must not import "
            "the store or the seed pipeline:\n" + "\n".join(violations)
        )


class TestDomainHasNoUpwardDependencies:
    FORBIDDEN_PREFIXES = (
        "asset_engines",
        "asset_kernel.services",
        "asset_kernel.logging_config",
        "asset_config",
        "logging",
    )

    def test_domain_does_not_import_forbidden_packages(self):
        violations = _violations("asset_kernel/domain", self.FORBIDDEN_PREFIXES)
        assert not violations, (
            "Domain boundary violation -- asset_kernel/domain/** must stay "
            "pure:\n" + "\n".join(violations)
        )


class TestInvariantsDeclared:
    def test_invariants_non_empty(self):
        assert len(ALL_CATALOG_INVARIANTS) == len(CatalogInvariant) > 0

    def test_every_invariant_documented(self):
        source = (REPO_ROOT / "asset_kernel" / "invariants.py").read_text()
        for invariant in CatalogInvariant:
            assert f"{invariant.name} = " in source

    def test_forbidden_engine_imports_declared(self):
        assert "asset_config" in FORBIDDEN_ENGINE_IMPORTS
        assert "asset_kernel.services" in FORBIDDEN_ENGINE_IMPORTS


class TestImportHygiene:
    ABC_NAMES = frozenset({"Callable", "Iterable", "Iterator", "Mapping", "Sequence"})

    def test_abstract_collections_come_from_collections_abc(self):
        violations: list[str] = []
        for root in ("asset_kernel", "asset_engines", "asset_config"):
            for filepath in _python_files(root):
                tree = ast.parse(filepath.read_text(), filename=str(filepath))
                for node in ast.walk(tree):
                    if isinstance(node, ast.ImportFrom) and node.module == "typing":
                        names = {alias.name for alias in node.names} & self.ABC_NAMES
                        if names:
                            rel = filepath.relative_to(REPO_ROOT)
                            violations.append(f"  {rel}:{node.lineno} {sorted(names)}")
        assert not violations, (
            "Import from collections.abc instead of typing:\n" + "\n".join(violations)
        )

    def test_package_init_has_only_imports(self):
        source = (REPO_ROOT / "asset_engines" / "__init__.py").read_text()
        tree = ast.parse(source)
        allowed = (ast.Import, ast.ImportFrom, ast.Expr, ast.Assign)
        for node in tree.body:
            assert isinstance(node, allowed)
            if isinstance(node, ast.Assign):
                assert [t.id for t in node.targets] == ["__all__"]

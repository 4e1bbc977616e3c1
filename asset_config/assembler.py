"""
asset_config.assembler -- composes YAML fragments into one SeedCatalogSet.

Responsibility:
    Humans edit small, well-owned YAML fragments.  This module composes
    them into a single ``SeedCatalogSet``.  Runtime only ever sees the
    resulting ``CatalogState``; this module is strictly load-time tooling.

Architecture position:
    Configuration -- YAML-driven seed pipeline.  Called by
    ``asset_config.get_seed_state()`` and by tests that build seed
    fixtures.  The assembler reads the filesystem (I/O boundary); the
    resulting ``SeedCatalogSet`` is a pure, frozen data structure.

Fragment structure::

    sets/default/
    +-- root.yaml                # set_id, version, settings
    +-- global_attributes.yaml   # Global catalog, grouped by section
    +-- categories.yaml          # Category tree and per-category configs
    +-- system_attributes.yaml   # Predefined bodies keyed by category id
    +-- custom_attributes.yaml   # User bodies keyed by category id (optional)
    +-- manufacturers.yaml       # Manufacturers and models (optional)

Invariants enforced:
    - ``root.yaml`` must exist in every fragment directory.
    - A category that omits ``children`` gets them from the ``parent_id``
      links of the categories declared after it, in declaration order.
    - A deterministic SHA-256 checksum is computed over all raw fragment
      data.

Failure modes:
    - ``AssemblyError`` -- fragment directory or ``root.yaml`` missing, or
      ``root.yaml`` lacks ``set_id``.
    - ``yaml.YAMLError`` (propagated from loader) -- invalid YAML syntax.
    - ``KeyError`` / ``ValueError`` (propagated from loader) -- malformed
      entries.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

from asset_config.loader import (
    compute_checksum,
    load_yaml_file,
    parse_category,
    parse_global_attribute,
    parse_manufacturer,
    parse_pools,
    parse_settings,
)
from asset_config.schema import SeedCatalogSet
from asset_kernel.domain.categories import Category
from asset_kernel.exceptions import AssetKernelError

FRAGMENT_FILES = (
    "global_attributes.yaml",
    "categories.yaml",
    "system_attributes.yaml",
    "custom_attributes.yaml",
    "manufacturers.yaml",
)


class AssemblyError(AssetKernelError):
    """Error during fragment assembly.

    Raised when a fragment directory is missing, ``root.yaml`` is absent
    or lacks its identity.  Field-level parse errors propagate from the
    loader as ``KeyError`` / ``ValueError``.
    """

    code: str = "SEED_ASSEMBLY_FAILED"


def _link_children(categories: list[Category]) -> list[Category]:
    """Fill ``children`` from ``parent_id`` for categories that declare none."""
    derived: dict[str, list[str]] = {c.id: [] for c in categories}
    for category in categories:
        if category.parent_id in derived:
            derived[category.parent_id].append(category.id)
    return [
        c if c.children else replace(c, children=tuple(derived[c.id]))
        for c in categories
    ]


def _load_optional(fragment_dir: Path, name: str) -> dict[str, Any]:
    path = fragment_dir / name
    return load_yaml_file(path) if path.exists() else {}


def assemble_from_directory(fragment_dir: Path) -> SeedCatalogSet:
    """Compose fragments from a directory into one SeedCatalogSet.

    Args:
        fragment_dir: Path to the fragment directory (e.g.,
            ``asset_config/sets/default/``).

    Returns:
        Assembled ``SeedCatalogSet`` with a deterministic ``checksum``.

    Raises:
        AssemblyError: If the directory or ``root.yaml`` is missing.
    """
    if not fragment_dir.is_dir():
        raise AssemblyError(f"Fragment directory not found: {fragment_dir}")

    root_path = fragment_dir / "root.yaml"
    if not root_path.exists():
        raise AssemblyError(f"root.yaml not found in {fragment_dir}")
    root_data = load_yaml_file(root_path)
    if not root_data.get("set_id"):
        raise AssemblyError(f"root.yaml in {fragment_dir} has no set_id")

    raw = {name: _load_optional(fragment_dir, name) for name in FRAGMENT_FILES}

    global_attributes = tuple(
        parse_global_attribute(a)
        for a in raw["global_attributes.yaml"].get("global_attributes") or ()
    )
    categories = _link_children(
        [parse_category(c) for c in raw["categories.yaml"].get("categories") or ()]
    )
    system_attributes = parse_pools(
        raw["system_attributes.yaml"].get("system_attributes"), is_system=True
    )
    custom_attributes = parse_pools(
        raw["custom_attributes.yaml"].get("custom_attributes"), is_system=False
    )
    manufacturers = tuple(
        parse_manufacturer(m)
        for m in raw["manufacturers.yaml"].get("manufacturers") or ()
    )

    checksum = compute_checksum({"root": root_data, **raw})

    return SeedCatalogSet(
        set_id=root_data["set_id"],
        version=int(root_data.get("version", 1)),
        checksum=checksum,
        settings=parse_settings(root_data.get("settings")),
        global_attributes=global_attributes,
        categories=tuple(categories),
        system_attributes=system_attributes,
        custom_attributes=custom_attributes,
        manufacturers=manufacturers,
        description=root_data.get("description", ""),
    )

"""
Module: asset_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    reader engines: tree walks, inheritance resolution and form
    organization.  This is the canonical import surface for the store and
    for scripts.

Architecture position:
    Engines -- pure reader layer, zero I/O.
    May only import asset_kernel.domain, asset_kernel.exceptions,
    asset_kernel.logging_config and sibling engine modules.
    MUST NOT import asset_kernel.services or asset_config.

Invariants enforced:
    - Every engine takes the ``CatalogState`` snapshot explicitly; there is
      no ambient state.
    - Determinism: identical snapshots and arguments give identical results.

Audit relevance:
    Resolver and organizer invocations are traced via ``@traced_engine``
    (see ``asset_engines.tracer``), emitting ASSET_ENGINE_TRACE records.

Usage:
    from asset_engines import get_category_path, organize_attributes_for_form
"""

from asset_engines.category_tree import (
    AncestorWalk,
    CategoryTreeNode,
    WalkTermination,
    build_category_tree,
    get_category_depth,
    get_category_path,
    get_children,
    get_descendants,
    get_orphaned_categories,
    get_root_categories,
    walk_ancestors,
)
from asset_engines.form_organizer import (
    FormAttribute,
    FormSource,
    OrganizedAttributes,
    organize_attributes_for_form,
)
from asset_engines.inheritance import (
    InheritedAttribute,
    InheritedSource,
    get_inherited_attributes,
)
from asset_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "AncestorWalk",
    "CategoryTreeNode",
    "FormAttribute",
    "FormSource",
    "InheritedAttribute",
    "InheritedSource",
    "OrganizedAttributes",
    "WalkTermination",
    "build_category_tree",
    "compute_input_fingerprint",
    "get_category_depth",
    "get_category_path",
    "get_children",
    "get_descendants",
    "get_inherited_attributes",
    "get_orphaned_categories",
    "get_root_categories",
    "organize_attributes_for_form",
    "traced_engine",
    "walk_ancestors",
]

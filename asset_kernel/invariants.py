"""
Catalog Invariants Contract.

These are the guarantees the attribute store and the engines provide
regardless of what the seed catalog contains.

This module exists solely to declare them explicitly. Enforcement is
distributed across AttributeStore, the engines in ``asset_engines`` and
the seed validator in ``asset_config``.
"""

from enum import Enum, unique


@unique
class CatalogInvariant(str, Enum):
    """Non-configurable invariants of the attribute catalog."""

    SINGLE_WRITER = "single_writer"
    """Only AttributeStore replaces the CatalogState. Engines receive a
    snapshot and never mutate it (frozen dataclasses, tuple collections)."""

    ALL_OR_NOTHING = "all_or_nothing"
    """A mutation either swaps in a complete new snapshot or leaves the
    previous one in place and reports NOT_FOUND / LOCKED."""

    BOUNDED_WALK = "bounded_walk"
    """Every ancestor walk terminates: a visited set stops cycles and a
    maximum depth stops runaway chains. Enforced by
    asset_engines.category_tree.walk_ancestors."""

    LIST_SCOPED_ORDER = "list_scoped_order"
    """``order`` ranks are meaningful only inside one category's system or
    custom list. Enforced by AttributeStore.add_attribute, which ranks new
    custom attributes after every existing rank in the category."""

    REQUIRED_STAYS_ENABLED = "required_stays_enabled"
    """A required global attribute cannot be toggled. Enforced by
    AttributeStore.toggle_global_attribute only."""

    SYSTEM_BODY_READ_ONLY = "system_body_read_only"
    """Predefined attribute bodies change only through toggle_preferred.
    Enforced by AttributeStore.edit_attribute / delete_attribute."""


# All invariants as a frozenset for programmatic checks.
ALL_CATALOG_INVARIANTS: frozenset[CatalogInvariant] = frozenset(CatalogInvariant)

# The engines package may not import from these packages.
# This is enforced by tests/architecture/test_engine_boundary.py.
FORBIDDEN_ENGINE_IMPORTS: tuple[str, ...] = (
    "asset_kernel.services",
    "asset_config",
)

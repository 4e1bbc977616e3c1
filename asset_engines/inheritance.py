"""
asset_engines.inheritance -- ancestor attribute inheritance resolver.

Responsibility:
    Collect the attributes a category inherits: every ENABLED system and
    custom attribute declared directly on each of its ancestors.

Architecture position:
    Engines -- pure reader layer, zero I/O.
    May only import asset_kernel.domain types and sibling engine modules.

Invariants enforced:
    - Inheritance is recomputed on every call by walking all the way up
      from the requested category; ancestors' own inherited sets are never
      pre-merged.
    - BOUNDED_WALK via ``walk_ancestors``.
    - Ordering: stable ascending sort by ``order``.  Ranks are scoped to
      one ancestor's list, so entries from different levels may tie; ties
      keep walk order (nearest ancestor first, system before custom).

Failure modes:
    - Unknown category or a root category -> empty list.
    - A config entry whose body is missing from the ancestor's pool is
      skipped.
    - An orphaned ancestor or a cycle ends the walk (see category_tree).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from asset_engines.category_tree import walk_ancestors
from asset_engines.tracer import traced_engine
from asset_kernel.domain.attributes import Attribute
from asset_kernel.domain.categories import Category, CategoryAttributeConfig
from asset_kernel.domain.state import CatalogState


class InheritedSource(str, Enum):
    """Which list of the ancestor declared the attribute."""

    SYSTEM = "system"
    CUSTOM = "custom"


@dataclass(frozen=True)
class InheritedAttribute:
    """
    An enabled ancestor attribute surfaced to a descendant.

    Read-only from the descendant: it can only be toggled or reordered
    through ``parent_category_id``.
    """

    attribute_id: str
    is_enabled: bool
    order: int
    attribute: Attribute
    source: InheritedSource
    parent_category_id: str
    parent_category_name: str


def _collect(
    ancestor: Category,
    configs: tuple[CategoryAttributeConfig, ...],
    pool_lookup,
    source: InheritedSource,
) -> list[InheritedAttribute]:
    collected: list[InheritedAttribute] = []
    for config in configs:
        if not config.is_enabled:
            continue
        attribute = pool_lookup(ancestor.id, config.attribute_id)
        if attribute is None:
            continue
        collected.append(
            InheritedAttribute(
                attribute_id=config.attribute_id,
                is_enabled=config.is_enabled,
                order=config.order,
                attribute=attribute,
                source=source,
                parent_category_id=ancestor.id,
                parent_category_name=ancestor.name,
            )
        )
    return collected


@traced_engine("inheritance", "1.0", fingerprint_fields=("category_id", "max_depth"))
def get_inherited_attributes(
    state: CatalogState,
    category_id: str,
    max_depth: int | None = None,
) -> list[InheritedAttribute]:
    """Enabled attributes declared on the ancestors of ``category_id``.

    Args:
        state: Catalog snapshot.
        category_id: Descendant category.
        max_depth: Bound on the ancestor walk (defaults to settings).

    Returns:
        Entries tagged with source and declaring ancestor, sorted by order.
    """
    category = state.get_category(category_id)
    if category is None or not category.parent_id:
        return []

    walk = walk_ancestors(state, category_id, max_depth)

    inherited: list[InheritedAttribute] = []
    for ancestor in walk.ancestors:
        inherited.extend(
            _collect(
                ancestor,
                ancestor.system_attributes,
                state.find_system_attribute,
                InheritedSource.SYSTEM,
            )
        )
        inherited.extend(
            _collect(
                ancestor,
                ancestor.custom_attributes,
                state.find_custom_attribute,
                InheritedSource.CUSTOM,
            )
        )

    inherited.sort(key=lambda item: item.order)
    return inherited

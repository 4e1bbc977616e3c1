"""
CatalogState -- the immutable snapshot every reader works from.

Responsibility:
    Holds the whole attribute configuration: the category tree, the
    global catalog, the per-category system and custom pools, and the
    manufacturer catalog.  Offers read-only lookups.  Writers build a new
    snapshot with ``evolve`` and the ``with_*`` helpers; nothing here
    mutates in place.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Passed explicitly
    into every engine call; there is no ambient or global state.

Invariants enforced:
    - BOUNDED_WALK input: ``settings.max_tree_depth`` is the default bound
      the engines apply to ancestor walks.
    - Pools are keyed by category id; a missing key reads as an empty pool.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from asset_kernel.domain.attributes import Attribute, GlobalAttribute, GlobalSection
from asset_kernel.domain.categories import Category
from asset_kernel.domain.manufacturers import Manufacturer

Pool = tuple[Attribute, ...]

DEFAULT_MAX_TREE_DEPTH = 64


@dataclass(frozen=True)
class CatalogSettings:
    """Tunables carried by the seed set's ``root.yaml``."""

    max_tree_depth: int = DEFAULT_MAX_TREE_DEPTH

    def __post_init__(self) -> None:
        if self.max_tree_depth < 1:
            raise ValueError(f"max_tree_depth must be positive, got {self.max_tree_depth}")


def _freeze_pools(pools: Mapping[str, Any]) -> Mapping[str, Pool]:
    return MappingProxyType({cid: tuple(attrs) for cid, attrs in pools.items()})


@dataclass(frozen=True, eq=False)
class CatalogState:
    """Immutable snapshot of the attribute catalog."""

    categories: tuple[Category, ...] = ()
    global_attributes: tuple[GlobalAttribute, ...] = ()
    system_attributes: Mapping[str, Pool] = field(default_factory=dict)
    custom_attributes: Mapping[str, Pool] = field(default_factory=dict)
    manufacturers: tuple[Manufacturer, ...] = ()
    settings: CatalogSettings = field(default_factory=CatalogSettings)

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))
        object.__setattr__(self, "global_attributes", tuple(self.global_attributes))
        object.__setattr__(self, "system_attributes", _freeze_pools(self.system_attributes))
        object.__setattr__(self, "custom_attributes", _freeze_pools(self.custom_attributes))
        object.__setattr__(self, "manufacturers", tuple(self.manufacturers))

    # -- categories ---------------------------------------------------------

    def get_category(self, category_id: str | None) -> Category | None:
        if not category_id:
            return None
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def has_category(self, category_id: str | None) -> bool:
        return self.get_category(category_id) is not None

    # -- category pools -----------------------------------------------------

    def system_pool(self, category_id: str) -> Pool:
        return self.system_attributes.get(category_id, ())

    def custom_pool(self, category_id: str) -> Pool:
        return self.custom_attributes.get(category_id, ())

    def find_system_attribute(self, category_id: str, attribute_id: str) -> Attribute | None:
        return _find(self.system_pool(category_id), attribute_id)

    def find_custom_attribute(self, category_id: str, attribute_id: str) -> Attribute | None:
        return _find(self.custom_pool(category_id), attribute_id)

    # -- globals ------------------------------------------------------------

    def get_global_attribute(self, attribute_id: str) -> GlobalAttribute | None:
        for attr in self.global_attributes:
            if attr.id == attribute_id:
                return attr
        return None

    def ordered_global_attributes(self) -> tuple[GlobalAttribute, ...]:
        """Globals in read-time order: by section, then by rank.

        The sort is stable, so equal ranks keep declaration order.
        """
        return tuple(
            sorted(self.global_attributes, key=lambda a: (a.section.position, a.order))
        )

    def enabled_global_attributes(self) -> tuple[GlobalAttribute, ...]:
        return tuple(a for a in self.ordered_global_attributes() if a.is_enabled)

    def section_attributes(self, section: GlobalSection) -> tuple[GlobalAttribute, ...]:
        return tuple(a for a in self.ordered_global_attributes() if a.section == section)

    # -- manufacturers ------------------------------------------------------

    def get_manufacturer(self, manufacturer_id: str) -> Manufacturer | None:
        for manufacturer in self.manufacturers:
            if manufacturer.id == manufacturer_id:
                return manufacturer
        return None

    # -- copy-on-write helpers ----------------------------------------------

    def evolve(self, **changes: Any) -> CatalogState:
        return replace(self, **changes)

    def with_category(self, updated: Category) -> CatalogState:
        """Replace the category with the same id."""
        return self.evolve(
            categories=tuple(updated if c.id == updated.id else c for c in self.categories)
        )

    def with_custom_pool(self, category_id: str, pool: Pool) -> CatalogState:
        pools = dict(self.custom_attributes)
        pools[category_id] = tuple(pool)
        return self.evolve(custom_attributes=pools)

    def with_system_pool(self, category_id: str, pool: Pool) -> CatalogState:
        pools = dict(self.system_attributes)
        pools[category_id] = tuple(pool)
        return self.evolve(system_attributes=pools)

    def with_manufacturer(self, updated: Manufacturer) -> CatalogState:
        return self.evolve(
            manufacturers=tuple(
                updated if m.id == updated.id else m for m in self.manufacturers
            )
        )


def _find(pool: Pool, attribute_id: str) -> Attribute | None:
    for attr in pool:
        if attr.id == attribute_id:
            return attr
    return None

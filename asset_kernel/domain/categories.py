"""
Categories -- category tree nodes and per-category attribute configuration.

Responsibility:
    ``Category`` is one node of the asset-classification tree.  It does not
    embed attribute bodies; it holds two lists of
    ``CategoryAttributeConfig`` entries (system and custom) that reference
    bodies by id and carry enablement and order.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - ``order`` is an integer rank scoped to one list of one category.
    - ``children`` is maintained by the store, never re-derived here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CategoryAttributeConfig:
    """Enablement and rank of one attribute within one category list."""

    attribute_id: str
    is_enabled: bool = True
    order: int = 0

    def toggled(self) -> CategoryAttributeConfig:
        return replace(self, is_enabled=not self.is_enabled)


ConfigList = tuple[CategoryAttributeConfig, ...]


@dataclass(frozen=True)
class Category:
    """A node in the category tree.

    A category without ``parent_id`` is a root.
    """

    id: str
    name: str
    parent_id: str | None = None
    children: tuple[str, ...] = ()
    system_attributes: ConfigList = ()
    custom_attributes: ConfigList = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "system_attributes", tuple(self.system_attributes))
        object.__setattr__(self, "custom_attributes", tuple(self.custom_attributes))

    @property
    def is_root(self) -> bool:
        return not self.parent_id

    def config_list(self, is_system: bool) -> ConfigList:
        return self.system_attributes if is_system else self.custom_attributes

    def find_config(self, attribute_id: str, is_system: bool) -> CategoryAttributeConfig | None:
        for config in self.config_list(is_system):
            if config.attribute_id == attribute_id:
                return config
        return None

    def max_order(self) -> int:
        """Highest rank across both lists, -1 when the category has none."""
        orders = [c.order for c in self.system_attributes]
        orders.extend(c.order for c in self.custom_attributes)
        return max(orders, default=-1)

    def with_config_list(self, is_system: bool, configs: Iterable[CategoryAttributeConfig]) -> Category:
        key = "system_attributes" if is_system else "custom_attributes"
        return replace(self, **{key: tuple(configs)})

    def map_configs(
        self,
        is_system: bool,
        fn: Callable[[CategoryAttributeConfig], CategoryAttributeConfig],
    ) -> Category:
        return self.with_config_list(is_system, (fn(c) for c in self.config_list(is_system)))

    def with_child(self, child_id: str) -> Category:
        return replace(self, children=self.children + (child_id,))

    def without_child(self, child_id: str) -> Category:
        return replace(self, children=tuple(c for c in self.children if c != child_id))

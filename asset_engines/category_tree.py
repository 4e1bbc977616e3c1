"""
asset_engines.category_tree -- bounded walks over the category tree.

Responsibility:
    Path and ancestry queries over a ``CatalogState``: the ancestor walk
    shared by the inheritance resolver, root-to-leaf paths, children,
    descendants and a nested tree view for navigation.

Architecture position:
    Engines -- pure reader layer, zero I/O.
    May only import asset_kernel.domain types and the kernel logger.

Invariants enforced:
    - BOUNDED_WALK: every upward walk keeps a visited set and stops after
      ``max_depth`` steps (default ``state.settings.max_tree_depth``);
      every downward walk skips already-visited ids.
    - A dangling ``parent_id`` ends the walk as if the chain had reached a
      root; it never raises.

Failure modes:
    - Orphaned ancestors, cycles and the depth bound are reported through
      ``AncestorWalk`` and logged at WARNING (``orphaned_ancestor``,
      ``category_cycle_detected``, ``category_walk_depth_exceeded``);
      callers receive the partial chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from asset_kernel.domain.categories import Category
from asset_kernel.domain.state import CatalogState
from asset_kernel.exceptions import (
    CategoryCycleError,
    CategoryDepthExceededError,
    OrphanedAncestorError,
)
from asset_kernel.logging_config import get_logger

logger = get_logger("engines.category_tree")


class WalkTermination(str, Enum):
    """Why an ancestor walk stopped."""

    ROOT = "root"  # Reached a category without parent_id
    ORPHANED = "orphaned"  # parent_id did not resolve
    CYCLE = "cycle"  # parent_id pointed back into the chain
    DEPTH = "depth"  # max_depth reached
    UNKNOWN_START = "unknown_start"  # start id did not resolve


@dataclass(frozen=True)
class AncestorWalk:
    """Result of walking ``parent_id`` links upward from one category.

    ``ancestors`` is nearest-first and excludes the start category.
    """

    start: Category | None
    ancestors: tuple[Category, ...]
    terminated_by: WalkTermination
    error: OrphanedAncestorError | CategoryCycleError | CategoryDepthExceededError | None = None

    @property
    def is_complete(self) -> bool:
        """True when the walk ended at a genuine root."""
        return self.terminated_by == WalkTermination.ROOT


@dataclass(frozen=True)
class CategoryTreeNode:
    """Nested view of one category and its resolved children."""

    category: Category
    depth: int
    children: tuple[CategoryTreeNode, ...] = field(default_factory=tuple)

    @property
    def id(self) -> str:
        return self.category.id

    @property
    def name(self) -> str:
        return self.category.name

    @property
    def children_count(self) -> int:
        return len(self.children)


def _depth_bound(state: CatalogState, max_depth: int | None) -> int:
    return max_depth if max_depth is not None else state.settings.max_tree_depth


def walk_ancestors(
    state: CatalogState,
    category_id: str,
    max_depth: int | None = None,
) -> AncestorWalk:
    """Walk ``parent_id`` links upward from ``category_id``.

    Args:
        state: Catalog snapshot.
        category_id: Category to start from.
        max_depth: Maximum number of ancestors to visit.  Defaults to the
            snapshot's ``settings.max_tree_depth``.

    Returns:
        AncestorWalk with the nearest-first ancestor chain and the reason
        the walk stopped.
    """
    start = state.get_category(category_id)
    if start is None:
        return AncestorWalk(None, (), WalkTermination.UNKNOWN_START)

    bound = _depth_bound(state, max_depth)
    visited = {start.id}
    ancestors: list[Category] = []
    current = start

    while current.parent_id:
        if len(ancestors) >= bound:
            error = CategoryDepthExceededError(start.id, bound)
            logger.warning(
                "category_walk_depth_exceeded",
                extra={"start_category_id": start.id, "max_depth": bound},
            )
            return AncestorWalk(start, tuple(ancestors), WalkTermination.DEPTH, error)

        parent_id = current.parent_id
        if parent_id in visited:
            chain = (start.id, *(a.id for a in ancestors), parent_id)
            error = CategoryCycleError(start.id, chain)
            logger.warning(
                "category_cycle_detected",
                extra={"start_category_id": start.id, "chain": list(chain)},
            )
            return AncestorWalk(start, tuple(ancestors), WalkTermination.CYCLE, error)

        parent = state.get_category(parent_id)
        if parent is None:
            error = OrphanedAncestorError(current.id, parent_id)
            logger.warning(
                "orphaned_ancestor",
                extra={"child_category_id": current.id, "missing_parent_id": parent_id},
            )
            return AncestorWalk(start, tuple(ancestors), WalkTermination.ORPHANED, error)

        visited.add(parent.id)
        ancestors.append(parent)
        current = parent

    return AncestorWalk(start, tuple(ancestors), WalkTermination.ROOT)


def get_category_path(
    state: CatalogState,
    category_id: str,
    max_depth: int | None = None,
) -> list[Category]:
    """Root-to-leaf list of categories ending at ``category_id``.

    An unresolvable ancestor ends the path there: the result then starts at
    the highest ancestor that did resolve.  Unknown ``category_id`` returns
    an empty list.
    """
    walk = walk_ancestors(state, category_id, max_depth)
    if walk.start is None:
        return []
    return [*reversed(walk.ancestors), walk.start]


def get_category_depth(state: CatalogState, category_id: str) -> int:
    """Number of resolvable ancestors; roots are depth 0, unknown ids -1."""
    walk = walk_ancestors(state, category_id)
    return -1 if walk.start is None else len(walk.ancestors)


def get_root_categories(state: CatalogState) -> list[Category]:
    return [c for c in state.categories if c.is_root]


def get_orphaned_categories(state: CatalogState) -> list[Category]:
    """Categories whose ``parent_id`` no longer resolves.

    Deleting a category leaves its children pointing at it; this is how
    callers find them.
    """
    return [
        c for c in state.categories
        if c.parent_id and not state.has_category(c.parent_id)
    ]


def get_children(state: CatalogState, category_id: str) -> list[Category]:
    """Resolve a category's ``children`` ids, skipping ids that do not resolve."""
    category = state.get_category(category_id)
    if category is None:
        return []
    resolved = (state.get_category(child_id) for child_id in category.children)
    return [c for c in resolved if c is not None]


def get_descendants(
    state: CatalogState,
    category_id: str,
    max_depth: int | None = None,
) -> list[Category]:
    """All categories below ``category_id``, depth-first, pre-order."""
    bound = _depth_bound(state, max_depth)
    visited = {category_id}
    result: list[Category] = []

    def visit(parent_id: str, depth: int) -> None:
        if depth >= bound:
            return
        for child in get_children(state, parent_id):
            if child.id in visited:
                continue
            visited.add(child.id)
            result.append(child)
            visit(child.id, depth + 1)

    visit(category_id, 0)
    return result


def build_category_tree(
    state: CatalogState,
    include_orphans: bool = True,
    max_depth: int | None = None,
) -> tuple[CategoryTreeNode, ...]:
    """Nested tree of the whole catalog, following ``children`` links.

    Args:
        state: Catalog snapshot.
        include_orphans: Also start a tree at every category whose parent
            no longer resolves, so nothing becomes unreachable after a
            parent is deleted.
        max_depth: Depth bound for the descent.
    """
    bound = _depth_bound(state, max_depth)
    visited: set[str] = set()

    def build(category: Category, depth: int) -> CategoryTreeNode:
        visited.add(category.id)
        nodes: list[CategoryTreeNode] = []
        if depth < bound:
            for child in get_children(state, category.id):
                if child.id not in visited:
                    nodes.append(build(child, depth + 1))
        return CategoryTreeNode(category=category, depth=depth, children=tuple(nodes))

    starts = get_root_categories(state)
    if include_orphans:
        starts.extend(get_orphaned_categories(state))
    return tuple(build(c, 0) for c in starts if c.id not in visited)

"""
Tests for the category tree engine.

Covers:
- Root-to-leaf paths and depth
- Termination on dangling ancestors, cycles and the depth bound
- Roots, children, descendants, orphans and the nested tree view
"""

from asset_engines.category_tree import (
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
from asset_kernel.domain import CatalogSettings, CatalogState
from asset_kernel.exceptions import (
    CategoryCycleError,
    CategoryDepthExceededError,
    OrphanedAncestorError,
)
from tests.factories import make_category, make_chain_state


def _ids(categories) -> list[str]:
    return [c.id for c in categories]


def _cycle_state() -> CatalogState:
    # x -> y -> z -> x, plus w hanging off z
    return CatalogState(
        categories=(
            make_category("x", parent_id="z", children=("y",)),
            make_category("y", parent_id="x", children=("z",)),
            make_category("z", parent_id="y", children=("x", "w")),
            make_category("w", parent_id="z"),
        )
    )


class TestCategoryPath:
    def test_path_root_to_leaf(self):
        assert _ids(get_category_path(make_chain_state(), "c")) == ["a", "b", "c"]

    def test_root_path_is_itself(self):
        assert _ids(get_category_path(make_chain_state(), "a")) == ["a"]

    def test_unknown_category(self):
        assert get_category_path(make_chain_state(), "missing") == []

    def test_dangling_ancestor_terminates(self):
        state = CatalogState(
            categories=(
                make_category("mid", parent_id="gone"),
                make_category("leaf", parent_id="mid"),
            )
        )
        assert _ids(get_category_path(state, "leaf")) == ["mid", "leaf"]

    def test_cycle_terminates(self):
        path = get_category_path(_cycle_state(), "w")
        assert _ids(path) == ["x", "y", "z", "w"]

    def test_depth_bound_terminates(self):
        state = make_chain_state(max_tree_depth=1)
        assert _ids(get_category_path(state, "c")) == ["b", "c"]

    def test_explicit_bound_overrides_settings(self):
        assert _ids(get_category_path(make_chain_state(), "c", max_depth=1)) == ["b", "c"]


class TestWalkAncestors:
    def test_complete_walk(self):
        walk = walk_ancestors(make_chain_state(), "c")
        assert walk.is_complete
        assert _ids(walk.ancestors) == ["b", "a"]
        assert walk.error is None

    def test_orphaned_walk_reports_error(self, captured_logs):
        state = CatalogState(categories=(make_category("leaf", parent_id="gone"),))
        walk = walk_ancestors(state, "leaf")
        assert walk.terminated_by is WalkTermination.ORPHANED
        assert isinstance(walk.error, OrphanedAncestorError)
        assert walk.error.parent_id == "gone"

        records = [r for r in captured_logs() if r["message"] == "orphaned_ancestor"]
        assert records and records[0]["level"] == "WARNING"
        assert records[0]["missing_parent_id"] == "gone"

    def test_cycle_walk_reports_error(self, captured_logs):
        walk = walk_ancestors(_cycle_state(), "x")
        assert walk.terminated_by is WalkTermination.CYCLE
        assert isinstance(walk.error, CategoryCycleError)
        assert _ids(walk.ancestors) == ["z", "y"]
        assert any(r["message"] == "category_cycle_detected" for r in captured_logs())

    def test_depth_walk(self):
        walk = walk_ancestors(make_chain_state(max_tree_depth=1), "c")
        assert walk.terminated_by is WalkTermination.DEPTH
        assert _ids(walk.ancestors) == ["b"]
        assert isinstance(walk.error, CategoryDepthExceededError)
        assert not isinstance(walk.error, CategoryCycleError)
        assert walk.error.max_depth == 1

    def test_deep_acyclic_chain_is_not_a_cycle(self, captured_logs):
        ids = [f"level-{i}" for i in range(6)]
        state = CatalogState(
            categories=tuple(
                make_category(cid, parent_id=ids[i - 1] if i else None)
                for i, cid in enumerate(ids)
            ),
            settings=CatalogSettings(max_tree_depth=3),
        )
        walk = walk_ancestors(state, "level-5")
        assert walk.terminated_by is WalkTermination.DEPTH
        assert walk.error.code == "CATEGORY_DEPTH_EXCEEDED"
        messages = [r["message"] for r in captured_logs()]
        assert "category_walk_depth_exceeded" in messages
        assert "category_cycle_detected" not in messages

    def test_self_parent(self):
        state = CatalogState(categories=(make_category("loop", parent_id="loop"),))
        walk = walk_ancestors(state, "loop")
        assert walk.terminated_by is WalkTermination.CYCLE
        assert walk.ancestors == ()

    def test_unknown_start(self):
        walk = walk_ancestors(make_chain_state(), "missing")
        assert walk.terminated_by is WalkTermination.UNKNOWN_START
        assert walk.start is None


class TestDepth:
    def test_depths(self):
        state = make_chain_state()
        assert get_category_depth(state, "a") == 0
        assert get_category_depth(state, "c") == 2
        assert get_category_depth(state, "missing") == -1


class TestNavigation:
    def test_roots(self):
        state = CatalogState(
            categories=(
                make_category("r1"),
                make_category("kid", parent_id="r1"),
                make_category("r2"),
            )
        )
        assert _ids(get_root_categories(state)) == ["r1", "r2"]

    def test_children_skip_dangling_ids(self):
        state = CatalogState(
            categories=(
                make_category("p", children=("k1", "ghost", "k2")),
                make_category("k1", parent_id="p"),
                make_category("k2", parent_id="p"),
            )
        )
        assert _ids(get_children(state, "p")) == ["k1", "k2"]
        assert get_children(state, "missing") == []

    def test_descendants_pre_order(self):
        state = CatalogState(
            categories=(
                make_category("r", children=("a", "b")),
                make_category("a", parent_id="r", children=("a1",)),
                make_category("a1", parent_id="a"),
                make_category("b", parent_id="r"),
            )
        )
        assert _ids(get_descendants(state, "r")) == ["a", "a1", "b"]

    def test_descendants_survive_cycles(self):
        assert _ids(get_descendants(_cycle_state(), "x")) == ["y", "z", "w"]

    def test_orphans(self):
        state = CatalogState(
            categories=(
                make_category("root"),
                make_category("stray", parent_id="deleted"),
            )
        )
        assert _ids(get_orphaned_categories(state)) == ["stray"]


class TestBuildCategoryTree:
    def test_nested_tree(self):
        tree = build_category_tree(make_chain_state())
        assert len(tree) == 1
        root = tree[0]
        assert root.id == "a" and root.depth == 0
        assert root.children_count == 1
        leaf = root.children[0].children[0]
        assert leaf.id == "c" and leaf.depth == 2
        assert leaf.children == ()

    def test_orphans_become_extra_roots(self):
        state = CatalogState(
            categories=(
                make_category("root"),
                make_category("stray", parent_id="deleted", children=("kid",)),
                make_category("kid", parent_id="stray"),
            )
        )
        assert [n.id for n in build_category_tree(state)] == ["root", "stray"]
        assert [n.id for n in build_category_tree(state, include_orphans=False)] == ["root"]

    def test_depth_bound_cuts_descent(self):
        tree = build_category_tree(make_chain_state(), max_depth=1)
        assert tree[0].children[0].children == ()

    def test_settings_bound_used_by_default(self):
        state = CatalogState(
            categories=make_chain_state().categories,
            settings=CatalogSettings(max_tree_depth=1),
        )
        assert build_category_tree(state)[0].children[0].children == ()

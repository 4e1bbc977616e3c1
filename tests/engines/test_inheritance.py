"""
Tests for the inheritance resolver.

Covers:
- Collection from every ancestor, tagged with source and declaring ancestor
- Enabled-only filtering and missing bodies
- Ordering and tie-breaking
- Termination on broken chains
"""

from asset_engines.inheritance import InheritedSource, get_inherited_attributes
from asset_kernel.domain import CatalogState
from tests.factories import make_attribute, make_category, make_chain_state, make_config


def _ids(items) -> list[str]:
    return [i.attribute_id for i in items]


class TestChainInheritance:
    def test_leaf_inherits_from_all_ancestors(self):
        inherited = get_inherited_attributes(make_chain_state(), "c")
        assert sorted(_ids(inherited)) == ["bar", "foo"]

        by_id = {i.attribute_id: i for i in inherited}
        assert by_id["foo"].source is InheritedSource.CUSTOM
        assert by_id["foo"].parent_category_id == "a"
        assert by_id["foo"].parent_category_name == "A"
        assert by_id["bar"].source is InheritedSource.SYSTEM
        assert by_id["bar"].parent_category_id == "b"
        assert by_id["bar"].attribute.label == "Bar"

    def test_middle_inherits_from_root_only(self):
        assert _ids(get_inherited_attributes(make_chain_state(), "b")) == ["foo"]

    def test_root_inherits_nothing(self):
        assert get_inherited_attributes(make_chain_state(), "a") == []

    def test_unknown_category(self):
        assert get_inherited_attributes(make_chain_state(), "missing") == []

    def test_disabled_ancestor_attribute_not_inherited(self):
        state = make_chain_state()
        a = state.get_category("a")
        state = state.with_category(a.map_configs(False, lambda c: c.toggled()))
        assert _ids(get_inherited_attributes(state, "c")) == ["bar"]

    def test_own_attributes_not_included(self):
        state = make_chain_state()
        assert "bar" not in _ids(get_inherited_attributes(state, "b"))


class TestOrdering:
    def test_sorted_by_order_ties_nearest_first(self):
        state = CatalogState(
            categories=(
                make_category("top", children=("mid",), system=(make_config("t0", 0), make_config("t5", 5))),
                make_category(
                    "mid",
                    parent_id="top",
                    children=("leaf",),
                    system=(make_config("m0", 0),),
                    custom=(make_config("m2", 2),),
                ),
                make_category("leaf", parent_id="mid"),
            ),
            system_attributes={
                "top": (make_attribute("t0"), make_attribute("t5")),
                "mid": (make_attribute("m0"),),
            },
            custom_attributes={"mid": (make_attribute("m2", is_system=False),)},
        )
        assert _ids(get_inherited_attributes(state, "leaf")) == ["m0", "t0", "m2", "t5"]


class TestDegradedChains:
    def test_config_without_body_skipped(self):
        state = CatalogState(
            categories=(
                make_category("p", children=("k",), system=(make_config("ghost"), make_config("real", 1))),
                make_category("k", parent_id="p"),
            ),
            system_attributes={"p": (make_attribute("real"),)},
        )
        assert _ids(get_inherited_attributes(state, "k")) == ["real"]

    def test_orphaned_parent_yields_nothing(self):
        state = CatalogState(categories=(make_category("k", parent_id="deleted"),))
        assert get_inherited_attributes(state, "k") == []

    def test_cycle_terminates(self):
        state = CatalogState(
            categories=(
                make_category("x", parent_id="y", system=(make_config("xa"),)),
                make_category("y", parent_id="x", system=(make_config("ya"),)),
            ),
            system_attributes={
                "x": (make_attribute("xa"),),
                "y": (make_attribute("ya"),),
            },
        )
        assert _ids(get_inherited_attributes(state, "x")) == ["ya"]

    def test_depth_bound(self):
        inherited = get_inherited_attributes(make_chain_state(), "c", max_depth=1)
        assert _ids(inherited) == ["bar"]


class TestTracing:
    def test_trace_emitted(self, captured_logs):
        get_inherited_attributes(make_chain_state(), "c")
        traces = [r for r in captured_logs() if r["message"] == "ASSET_ENGINE_TRACE"]
        assert traces
        assert traces[-1]["engine_name"] == "inheritance"
        assert traces[-1]["result_size"] == 2

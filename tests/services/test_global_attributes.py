"""
Tests for global attribute management on AttributeStore.

Required globals stay enabled; new globals rank last in their section;
reorders are scoped to one section.
"""

import pytest

from asset_kernel.domain import AttributeType, GlobalSection, MutationStatus
from asset_kernel.exceptions import (
    GlobalAttributeNotFoundError,
    RequiredAttributeLockedError,
)
from asset_kernel.services import AttributeStore


def _section_ids(store: AttributeStore, section: GlobalSection) -> list[str]:
    return [a.id for a in store.state.section_attributes(section)]


class TestToggleGlobal:
    def test_toggle_optional(self, seeded_store):
        assert seeded_store.toggle_global_attribute("global-barcode").is_success
        assert seeded_store.state.get_global_attribute("global-barcode").is_enabled is False
        seeded_store.toggle_global_attribute("global-barcode")
        assert seeded_store.state.get_global_attribute("global-barcode").is_enabled is True

    def test_required_stays_enabled(self, seeded_store):
        before = seeded_store.state
        result = seeded_store.toggle_global_attribute("global-category")
        assert result.status is MutationStatus.LOCKED
        assert isinstance(result.error, RequiredAttributeLockedError)
        assert seeded_store.state is before
        assert seeded_store.state.get_global_attribute("global-category").is_enabled is True

    def test_unknown(self, seeded_store):
        result = seeded_store.toggle_global_attribute("global-nope")
        assert result.status is MutationStatus.NOT_FOUND
        assert isinstance(result.error, GlobalAttributeNotFoundError)

    def test_disabled_global_leaves_form(self, seeded_store):
        assert "global-purchase-cost" in seeded_store.organize_attributes_for_form("pump").ids("attributes")
        seeded_store.toggle_global_attribute("global-purchase-cost")
        assert "global-purchase-cost" not in seeded_store.organize_attributes_for_form("pump").ids("attributes")


class TestAddGlobal:
    def test_defaults_to_your_attributes_and_ranks_last(self, seeded_store):
        result = seeded_store.add_global_attribute({"label": "Asset tag colour"})
        assert result.target_id == "global-custom-1"
        attribute = seeded_store.state.get_global_attribute(result.target_id)
        assert attribute.section is GlobalSection.YOUR_ATTRIBUTES
        assert attribute.order == 1
        assert _section_ids(seeded_store, GlobalSection.YOUR_ATTRIBUTES)[-1] == result.target_id

    def test_explicit_section(self, seeded_store):
        result = seeded_store.add_global_attribute({"label": "Extended warranty"}, "warranty")
        attribute = seeded_store.state.get_global_attribute(result.target_id)
        assert attribute.section is GlobalSection.WARRANTY
        assert attribute.order == 2

    def test_section_from_fields(self, seeded_store):
        result = seeded_store.add_global_attribute({"label": "Pager", "section": "contact"})
        attribute = seeded_store.state.get_global_attribute(result.target_id)
        assert attribute.section is GlobalSection.CONTACT
        assert attribute.order == 3

    def test_empty_section_starts_at_zero(self, empty_store):
        result = empty_store.add_global_attribute({"label": "First", "type": "date"}, GlobalSection.DATES)
        attribute = empty_store.state.get_global_attribute(result.target_id)
        assert attribute.order == 0
        assert attribute.type is AttributeType.DATE

    def test_supplied_id_ignored(self, empty_store):
        result = empty_store.add_global_attribute({"id": "global-forged", "label": "X"})
        assert result.target_id != "global-forged"
        assert empty_store.state.get_global_attribute("global-forged") is None

    def test_search_type_allowed_on_globals(self, empty_store):
        result = empty_store.add_global_attribute({"label": "Linked asset", "type": "search"})
        assert empty_store.state.get_global_attribute(result.target_id).type is AttributeType.SEARCH

    def test_user_created_detection(self, seeded_store):
        new_id = seeded_store.add_global_attribute({"label": "Mine"}).target_id
        assert AttributeStore.is_user_created(new_id)
        assert seeded_store.is_user_created(seeded_store.state.get_global_attribute(new_id))
        assert not AttributeStore.is_user_created("global-barcode")


class TestEditDeleteGlobal:
    def test_edit_merges(self, seeded_store):
        seeded_store.edit_global_attribute(
            "global-warranty-provider", {"label": "Warrantor", "is_required": True}
        )
        attribute = seeded_store.state.get_global_attribute("global-warranty-provider")
        assert attribute.label == "Warrantor"
        assert attribute.is_required is True
        assert attribute.section is GlobalSection.WARRANTY

    def test_edit_ignores_id(self, seeded_store):
        seeded_store.edit_global_attribute("global-barcode", {"id": "other", "label": "Tag"})
        assert seeded_store.state.get_global_attribute("global-barcode").label == "Tag"
        assert seeded_store.state.get_global_attribute("other") is None

    def test_edit_unknown_field_raises(self, seeded_store):
        with pytest.raises(ValueError):
            seeded_store.edit_global_attribute("global-barcode", {"colour": "red"})

    def test_edit_unknown(self, seeded_store):
        result = seeded_store.edit_global_attribute("global-nope", {"label": "X"})
        assert result.status is MutationStatus.NOT_FOUND

    def test_delete(self, seeded_store):
        count = len(seeded_store.global_attributes)
        assert seeded_store.delete_global_attribute("global-warranty-provider").is_success
        assert len(seeded_store.global_attributes) == count - 1
        assert seeded_store.state.get_global_attribute("global-warranty-provider") is None

    def test_delete_unknown(self, seeded_store):
        before = seeded_store.state
        assert seeded_store.delete_global_attribute("global-nope").status is MutationStatus.NOT_FOUND
        assert seeded_store.state is before


class TestReorderGlobals:
    def test_listed_ids_take_positions(self, seeded_store):
        seeded_store.reorder_global_attributes(
            GlobalSection.CONTACT,
            ["global-access-notes", "global-location", "global-contact"],
        )
        assert _section_ids(seeded_store, GlobalSection.CONTACT) == [
            "global-access-notes",
            "global-location",
            "global-contact",
        ]

    def test_unlisted_members_follow_in_relative_order(self, seeded_store):
        seeded_store.reorder_global_attributes("contact", ["global-access-notes"])
        assert _section_ids(seeded_store, GlobalSection.CONTACT) == [
            "global-access-notes",
            "global-contact",
            "global-location",
        ]

    def test_ids_from_other_sections_ignored(self, seeded_store):
        before = seeded_store.state.get_global_attribute("global-status")
        seeded_store.reorder_global_attributes(
            "warranty", ["global-status", "global-warranty-provider"]
        )
        assert seeded_store.state.get_global_attribute("global-status") == before
        assert _section_ids(seeded_store, GlobalSection.WARRANTY) == [
            "global-warranty-provider",
            "global-warranty-expiry",
        ]

    def test_other_sections_untouched(self, seeded_store):
        asset_info = _section_ids(seeded_store, GlobalSection.ASSET_INFO)
        seeded_store.reorder_global_attributes("dates", ["global-end-of-life"])
        assert _section_ids(seeded_store, GlobalSection.ASSET_INFO) == asset_info

    def test_read_order_is_section_then_rank(self, seeded_store):
        seeded_store.reorder_global_attributes("your-attributes", ["global-purchase-cost"])
        positions = [a.section.position for a in seeded_store.global_attributes]
        assert positions == sorted(positions)

    def test_logged_with_section(self, seeded_store, captured_logs):
        seeded_store.reorder_global_attributes("warranty", ["global-warranty-provider"])
        record = next(
            r for r in captured_logs() if r["message"] == "global_attributes_reordered"
        )
        assert record["target_id"] == "warranty"
        assert record["attribute_ids"] == ["global-warranty-provider", "global-warranty-expiry"]

    def test_unknown_section_raises(self, seeded_store):
        with pytest.raises(ValueError):
            seeded_store.reorder_global_attributes("nowhere", [])

"""
AttributeStore -- the single writer of the attribute catalog.

Responsibility:
    Owns the current ``CatalogState`` and applies every mutation to it:
    category tree edits, category-scoped attribute add/edit/delete/toggle/
    reorder, global attribute management, and the manufacturer catalog.
    Also exposes read accessors and convenience readers that delegate to
    the pure engines.

Architecture position:
    Kernel > Services -- imperative shell around the pure domain and
    engines.  Callers hold one store per catalog; nothing is global.

Invariants enforced:
    SINGLE_WRITER       -- ``self._state`` is replaced only here.
    ALL_OR_NOTHING      -- each mutation computes a complete new snapshot
                           and swaps it in only when the mutation applies;
                           a rejected mutation leaves the previous
                           snapshot untouched.
    SYSTEM_BODY_READ_ONLY -- predefined attribute bodies change only in
                           ``is_preferred``; edit/delete return LOCKED.
    REQUIRED_STAYS_ENABLED -- toggling a required global returns LOCKED.
    LIST_SCOPED_ORDER   -- new category attributes rank after the highest
                           rank across both lists of that category; new
                           globals rank last within their section.

Failure modes:
    - Mutations never raise for a missing target or a locked attribute;
      they return ``MutationResult`` with NOT_FOUND / LOCKED and log
      ``mutation_rejected`` at INFO.
    - ValueError from the domain (bad attribute type, unknown update
      field) propagates; those are caller bugs, not catalog conditions.

Audit relevance:
    Every applied mutation is logged at INFO with its event name and the
    ids it touched; LogContext fields bound by the caller ride along.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from asset_engines.category_tree import get_category_path
from asset_engines.form_organizer import OrganizedAttributes, organize_attributes_for_form
from asset_engines.inheritance import InheritedAttribute, get_inherited_attributes
from asset_kernel.domain.attributes import Attribute, GlobalAttribute, GlobalSection
from asset_kernel.domain.categories import Category, CategoryAttributeConfig
from asset_kernel.domain.manufacturers import Manufacturer, Model
from asset_kernel.domain.results import MutationResult
from asset_kernel.domain.state import CatalogState, Pool
from asset_kernel.exceptions import (
    AttributeNotFoundError,
    CategoryNotFoundError,
    GlobalAttributeNotFoundError,
    ManufacturerNotFoundError,
    ModelNotFoundError,
    RequiredAttributeLockedError,
    SystemAttributeLockedError,
)
from asset_kernel.logging_config import get_logger
from asset_kernel.utils.ids import (
    CATEGORY_PREFIX,
    CUSTOM_ATTRIBUTE_PREFIX,
    GLOBAL_CUSTOM_PREFIX,
    MANUFACTURER_PREFIX,
    MODEL_PREFIX,
    IdGenerator,
    UuidIdGenerator,
    is_user_created_global,
)

logger = get_logger("services.attribute_store")

# Fields an edit may never change on a category attribute body
_IMMUTABLE_ATTRIBUTE_FIELDS = frozenset({"id", "is_system"})


class AttributeStore:
    """
    Owner of the attribute catalog snapshot.

    Contract:
        Every mutator returns a ``MutationResult``.  On APPLIED the store
        holds a new snapshot; otherwise the snapshot is the same object as
        before the call.  Add-operations report the generated id in
        ``result.target_id``.

    Non-goals:
        - No persistence, no undo, no cross-process sharing.
        - No cycle check on ``add_category``; walks are bounded instead.

    Usage:
        store = AttributeStore(get_seed_state())
        result = store.add_attribute({"label": "Flow rate"}, "boiler")
        form = store.organize_attributes_for_form("boiler")
    """

    def __init__(
        self,
        state: CatalogState | None = None,
        id_generator: IdGenerator | None = None,
    ):
        self._state = state if state is not None else CatalogState()
        self._ids = id_generator or UuidIdGenerator()

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._state.categories

    @property
    def global_attributes(self) -> tuple[GlobalAttribute, ...]:
        """Globals in read-time order (section position, then rank)."""
        return self._state.ordered_global_attributes()

    @property
    def manufacturers(self) -> tuple[Manufacturer, ...]:
        return self._state.manufacturers

    def get_category(self, category_id: str) -> Category | None:
        return self._state.get_category(category_id)

    def system_attributes(self, category_id: str) -> Pool:
        return self._state.system_pool(category_id)

    def custom_attributes(self, category_id: str) -> Pool:
        return self._state.custom_pool(category_id)

    def get_category_path(self, category_id: str) -> list[Category]:
        return get_category_path(self._state, category_id)

    def get_inherited_attributes(self, category_id: str) -> list[InheritedAttribute]:
        return get_inherited_attributes(self._state, category_id)

    def organize_attributes_for_form(
        self,
        category_id: str | None,
        include_category_field: bool = False,
    ) -> OrganizedAttributes:
        return organize_attributes_for_form(
            self._state, category_id, include_category_field
        )

    @staticmethod
    def is_user_created(attribute: GlobalAttribute | str) -> bool:
        """True for globals created through ``add_global_attribute``."""
        attribute_id = attribute if isinstance(attribute, str) else attribute.id
        return is_user_created_global(attribute_id)

    # =========================================================================
    # Internal
    # =========================================================================

    def _commit(
        self,
        new_state: CatalogState,
        event: str,
        target_id: str | None,
        **extra: Any,
    ) -> MutationResult:
        self._state = new_state
        logger.info(event, extra={"target_id": target_id, **extra})
        return MutationResult.applied(target_id)

    def _reject(self, operation: str, result: MutationResult) -> MutationResult:
        logger.info(
            "mutation_rejected",
            extra={
                "operation": operation,
                "status": result.status.value,
                "target_id": result.target_id,
                "error_code": result.error.code if result.error else None,
            },
        )
        return result

    def _category_or_reject(
        self, operation: str, category_id: str
    ) -> tuple[Category | None, MutationResult | None]:
        category = self._state.get_category(category_id)
        if category is None:
            return None, self._reject(
                operation,
                MutationResult.not_found(category_id, CategoryNotFoundError(category_id)),
            )
        return category, None

    # =========================================================================
    # Category tree
    # =========================================================================

    def add_category(self, name: str, parent_id: str | None = None) -> MutationResult:
        """Create an empty category, linking it under ``parent_id`` if it resolves.

        An unresolvable ``parent_id`` is still recorded on the new category;
        it then shows up among the orphaned categories.
        """
        new_id = self._ids.new_id(CATEGORY_PREFIX)
        category = Category(id=new_id, name=name, parent_id=parent_id)

        categories = tuple(
            c.with_child(new_id) if parent_id and c.id == parent_id else c
            for c in self._state.categories
        )
        new_state = self._state.evolve(categories=categories + (category,))

        return self._commit(
            new_state,
            "category_added",
            new_id,
            parent_id=parent_id,
            parent_resolved=self._state.has_category(parent_id),
        )

    def edit_category(self, category_id: str, name: str) -> MutationResult:
        category, rejected = self._category_or_reject("edit_category", category_id)
        if rejected:
            return rejected
        return self._commit(
            self._state.with_category(replace(category, name=name)),
            "category_renamed",
            category_id,
        )

    def delete_category(self, category_id: str) -> MutationResult:
        """Remove a category, unlink it from its parent and drop its custom pool.

        Children are left in place with their ``parent_id`` pointing at the
        deleted id; see ``asset_engines.category_tree.get_orphaned_categories``.
        """
        category, rejected = self._category_or_reject("delete_category", category_id)
        if rejected:
            return rejected

        categories = tuple(
            c.without_child(category_id) if c.id == category.parent_id else c
            for c in self._state.categories
            if c.id != category_id
        )
        custom_pools = {
            cid: pool
            for cid, pool in self._state.custom_attributes.items()
            if cid != category_id
        }
        new_state = self._state.evolve(
            categories=categories, custom_attributes=custom_pools
        )
        return self._commit(
            new_state,
            "category_deleted",
            category_id,
            orphaned_children=list(category.children),
        )

    # =========================================================================
    # Category-scoped attributes
    # =========================================================================

    def add_attribute(
        self,
        attribute_fields: Mapping[str, Any],
        category_id: str,
    ) -> MutationResult:
        """Create a custom attribute on ``category_id`` and enable it.

        Its rank is one past the highest rank across both of the category's
        lists, so it lands last.
        """
        category, rejected = self._category_or_reject("add_attribute", category_id)
        if rejected:
            return rejected

        fields = {k: v for k, v in attribute_fields.items() if k not in _IMMUTABLE_ATTRIBUTE_FIELDS}
        new_id = self._ids.new_id(CUSTOM_ATTRIBUTE_PREFIX)
        attribute = Attribute(id=new_id, is_system=False, **fields)

        order = category.max_order() + 1
        config = CategoryAttributeConfig(attribute_id=new_id, is_enabled=True, order=order)
        updated = category.with_config_list(False, category.custom_attributes + (config,))

        new_state = self._state.with_custom_pool(
            category_id, self._state.custom_pool(category_id) + (attribute,)
        ).with_category(updated)

        return self._commit(
            new_state,
            "attribute_added",
            new_id,
            category_id=category_id,
            order=order,
            attribute_type=attribute.type,
        )

    def _custom_attribute_or_reject(
        self, operation: str, attribute_id: str, category_id: str
    ) -> tuple[Attribute | None, MutationResult | None]:
        attribute = self._state.find_custom_attribute(category_id, attribute_id)
        if attribute is not None:
            return attribute, None
        if self._state.find_system_attribute(category_id, attribute_id) is not None:
            error = SystemAttributeLockedError(attribute_id, category_id)
            return None, self._reject(operation, MutationResult.locked(attribute_id, error))
        error = AttributeNotFoundError(attribute_id, category_id)
        return None, self._reject(operation, MutationResult.not_found(attribute_id, error))

    def edit_attribute(
        self,
        attribute_id: str,
        category_id: str,
        updates: Mapping[str, Any],
    ) -> MutationResult:
        """Merge ``updates`` into a custom attribute body.

        ``id`` and ``is_system`` in ``updates`` are ignored.
        """
        attribute, rejected = self._custom_attribute_or_reject(
            "edit_attribute", attribute_id, category_id
        )
        if rejected:
            return rejected

        changes = {k: v for k, v in updates.items() if k not in _IMMUTABLE_ATTRIBUTE_FIELDS}
        edited = attribute.with_updates(changes)
        pool = tuple(
            edited if a.id == attribute_id else a
            for a in self._state.custom_pool(category_id)
        )
        return self._commit(
            self._state.with_custom_pool(category_id, pool),
            "attribute_edited",
            attribute_id,
            category_id=category_id,
            fields=sorted(changes),
        )

    def _detach_custom(self, attribute_id: str, category_id: str) -> CatalogState:
        pool = tuple(
            a for a in self._state.custom_pool(category_id) if a.id != attribute_id
        )
        new_state = self._state.with_custom_pool(category_id, pool)
        category = new_state.get_category(category_id)
        if category is not None:
            new_state = new_state.with_category(
                category.with_config_list(
                    False,
                    (c for c in category.custom_attributes if c.attribute_id != attribute_id),
                )
            )
        return new_state

    def delete_attribute(self, attribute_id: str, category_id: str) -> MutationResult:
        """Remove a custom attribute body and its config entry."""
        _, rejected = self._custom_attribute_or_reject(
            "delete_attribute", attribute_id, category_id
        )
        if rejected:
            return rejected
        return self._commit(
            self._detach_custom(attribute_id, category_id),
            "attribute_deleted",
            attribute_id,
            category_id=category_id,
        )

    def remove_attribute_from_category(
        self, attribute_id: str, category_id: str
    ) -> MutationResult:
        """Detach a custom attribute from a category.

        Unlike ``delete_attribute`` this also cleans up a dangling config
        entry whose body is already gone.
        """
        category, rejected = self._category_or_reject(
            "remove_attribute_from_category", category_id
        )
        if rejected:
            return rejected

        has_body = self._state.find_custom_attribute(category_id, attribute_id) is not None
        has_config = category.find_config(attribute_id, is_system=False) is not None
        if not (has_body or has_config):
            _, rejected = self._custom_attribute_or_reject(
                "remove_attribute_from_category", attribute_id, category_id
            )
            return rejected

        return self._commit(
            self._detach_custom(attribute_id, category_id),
            "attribute_removed_from_category",
            attribute_id,
            category_id=category_id,
        )

    def toggle_attribute(
        self,
        category_id: str,
        attribute_id: str,
        is_system: bool,
    ) -> MutationResult:
        """Flip ``is_enabled`` on the config entry in the indicated list."""
        category, rejected = self._category_or_reject("toggle_attribute", category_id)
        if rejected:
            return rejected

        config = category.find_config(attribute_id, is_system)
        if config is None:
            return self._reject(
                "toggle_attribute",
                MutationResult.not_found(
                    attribute_id, AttributeNotFoundError(attribute_id, category_id)
                ),
            )

        updated = category.map_configs(
            is_system,
            lambda c: c.toggled() if c.attribute_id == attribute_id else c,
        )
        return self._commit(
            self._state.with_category(updated),
            "attribute_toggled",
            attribute_id,
            category_id=category_id,
            is_system=is_system,
            is_enabled=not config.is_enabled,
        )

    def toggle_preferred(self, attribute_id: str, category_id: str) -> MutationResult:
        """Flip ``is_preferred`` on the body, system pool first."""
        state = self._state
        for is_system, pool in (
            (True, state.system_pool(category_id)),
            (False, state.custom_pool(category_id)),
        ):
            attribute = next((a for a in pool if a.id == attribute_id), None)
            if attribute is None:
                continue
            flipped = attribute.with_updates({"is_preferred": not attribute.is_preferred})
            new_pool = tuple(flipped if a.id == attribute_id else a for a in pool)
            if is_system:
                new_state = state.with_system_pool(category_id, new_pool)
            else:
                new_state = state.with_custom_pool(category_id, new_pool)
            return self._commit(
                new_state,
                "attribute_preference_toggled",
                attribute_id,
                category_id=category_id,
                is_preferred=flipped.is_preferred,
            )

        return self._reject(
            "toggle_preferred",
            MutationResult.not_found(
                attribute_id, AttributeNotFoundError(attribute_id, category_id)
            ),
        )

    def reorder_attributes(
        self,
        category_id: str,
        ordered_ids: Iterable[str],
    ) -> MutationResult:
        """Give each listed id its list position as rank, across both lists.

        Omitted ids keep their rank; ids with no config entry are ignored.
        """
        category, rejected = self._category_or_reject("reorder_attributes", category_id)
        if rejected:
            return rejected

        positions: dict[str, int] = {}
        for index, attribute_id in enumerate(ordered_ids):
            positions[attribute_id] = index

        def rerank(config: CategoryAttributeConfig) -> CategoryAttributeConfig:
            if config.attribute_id not in positions:
                return config
            return CategoryAttributeConfig(
                attribute_id=config.attribute_id,
                is_enabled=config.is_enabled,
                order=positions[config.attribute_id],
            )

        updated = category.map_configs(True, rerank).map_configs(False, rerank)
        return self._commit(
            self._state.with_category(updated),
            "attributes_reordered",
            category_id,
            attribute_ids=list(positions),
        )

    # =========================================================================
    # Global attributes
    # =========================================================================

    def _global_or_reject(
        self, operation: str, attribute_id: str
    ) -> tuple[GlobalAttribute | None, MutationResult | None]:
        attribute = self._state.get_global_attribute(attribute_id)
        if attribute is None:
            return None, self._reject(
                operation,
                MutationResult.not_found(
                    attribute_id, GlobalAttributeNotFoundError(attribute_id)
                ),
            )
        return attribute, None

    def _replace_global(self, updated: GlobalAttribute) -> CatalogState:
        return self._state.evolve(
            global_attributes=tuple(
                updated if a.id == updated.id else a
                for a in self._state.global_attributes
            )
        )

    def toggle_global_attribute(self, attribute_id: str) -> MutationResult:
        """Flip ``is_enabled`` on a global; required globals stay enabled."""
        attribute, rejected = self._global_or_reject("toggle_global_attribute", attribute_id)
        if rejected:
            return rejected
        if attribute.is_required:
            return self._reject(
                "toggle_global_attribute",
                MutationResult.locked(
                    attribute_id, RequiredAttributeLockedError(attribute_id)
                ),
            )
        toggled = attribute.with_updates({"is_enabled": not attribute.is_enabled})
        return self._commit(
            self._replace_global(toggled),
            "global_attribute_toggled",
            attribute_id,
            is_enabled=toggled.is_enabled,
        )

    def add_global_attribute(
        self,
        attribute_fields: Mapping[str, Any],
        section: GlobalSection | str | None = None,
    ) -> MutationResult:
        """Create a user global attribute ranked last in its section.

        The section is ``section`` if given, else the one in
        ``attribute_fields``, else "your-attributes".
        """
        fields = {k: v for k, v in attribute_fields.items() if k != "id"}
        target = GlobalSection(
            section or fields.pop("section", None) or GlobalSection.YOUR_ATTRIBUTES
        )
        fields.pop("section", None)

        ranks = [a.order for a in self._state.global_attributes if a.section == target]
        fields["order"] = max(ranks, default=-1) + 1

        new_id = self._ids.new_id(GLOBAL_CUSTOM_PREFIX)
        attribute = GlobalAttribute(id=new_id, section=target, **fields)
        new_state = self._state.evolve(
            global_attributes=self._state.global_attributes + (attribute,)
        )
        return self._commit(
            new_state,
            "global_attribute_added",
            new_id,
            section=target,
            order=attribute.order,
        )

    def edit_global_attribute(
        self,
        attribute_id: str,
        updates: Mapping[str, Any],
    ) -> MutationResult:
        """Merge ``updates`` into a global attribute; ``id`` is ignored."""
        attribute, rejected = self._global_or_reject("edit_global_attribute", attribute_id)
        if rejected:
            return rejected
        changes = {k: v for k, v in updates.items() if k != "id"}
        return self._commit(
            self._replace_global(attribute.with_updates(changes)),
            "global_attribute_edited",
            attribute_id,
            fields=sorted(changes),
        )

    def delete_global_attribute(self, attribute_id: str) -> MutationResult:
        _, rejected = self._global_or_reject("delete_global_attribute", attribute_id)
        if rejected:
            return rejected
        new_state = self._state.evolve(
            global_attributes=tuple(
                a for a in self._state.global_attributes if a.id != attribute_id
            )
        )
        return self._commit(new_state, "global_attribute_deleted", attribute_id)

    def reorder_global_attributes(
        self,
        section: GlobalSection | str,
        ordered_ids: Iterable[str],
    ) -> MutationResult:
        """Re-rank one section.

        Listed ids get their list position.  Section members that were not
        listed follow, keeping their relative order.  Other sections and
        ids outside ``section`` are untouched.
        """
        target = GlobalSection(section)
        members = self._state.section_attributes(target)
        member_ids = {a.id for a in members}

        ranks: dict[str, int] = {}
        for index, attribute_id in enumerate(ordered_ids):
            if attribute_id in member_ids:
                ranks[attribute_id] = index
        next_rank = max(ranks.values(), default=-1) + 1
        for attribute in members:
            if attribute.id not in ranks:
                ranks[attribute.id] = next_rank
                next_rank += 1

        new_state = self._state.evolve(
            global_attributes=tuple(
                a.with_updates({"order": ranks[a.id]}) if a.id in ranks else a
                for a in self._state.global_attributes
            )
        )
        return self._commit(
            new_state,
            "global_attributes_reordered",
            target.value,
            attribute_ids=[a.id for a in sorted(members, key=lambda a: ranks[a.id])],
        )

    # =========================================================================
    # Manufacturers
    # =========================================================================

    def _manufacturer_or_reject(
        self, operation: str, manufacturer_id: str
    ) -> tuple[Manufacturer | None, MutationResult | None]:
        manufacturer = self._state.get_manufacturer(manufacturer_id)
        if manufacturer is None:
            return None, self._reject(
                operation,
                MutationResult.not_found(
                    manufacturer_id, ManufacturerNotFoundError(manufacturer_id)
                ),
            )
        return manufacturer, None

    def _model_missing(
        self, operation: str, manufacturer: Manufacturer, model_id: str
    ) -> MutationResult | None:
        if manufacturer.get_model(model_id) is not None:
            return None
        return self._reject(
            operation,
            MutationResult.not_found(model_id, ModelNotFoundError(model_id, manufacturer.id)),
        )

    def add_manufacturer(self, name: str) -> MutationResult:
        new_id = self._ids.new_id(MANUFACTURER_PREFIX)
        new_state = self._state.evolve(
            manufacturers=self._state.manufacturers + (Manufacturer(id=new_id, name=name),)
        )
        return self._commit(new_state, "manufacturer_added", new_id)

    def edit_manufacturer(self, manufacturer_id: str, name: str) -> MutationResult:
        manufacturer, rejected = self._manufacturer_or_reject(
            "edit_manufacturer", manufacturer_id
        )
        if rejected:
            return rejected
        return self._commit(
            self._state.with_manufacturer(replace(manufacturer, name=name)),
            "manufacturer_renamed",
            manufacturer_id,
        )

    def delete_manufacturer(self, manufacturer_id: str) -> MutationResult:
        _, rejected = self._manufacturer_or_reject("delete_manufacturer", manufacturer_id)
        if rejected:
            return rejected
        new_state = self._state.evolve(
            manufacturers=tuple(
                m for m in self._state.manufacturers if m.id != manufacturer_id
            )
        )
        return self._commit(new_state, "manufacturer_deleted", manufacturer_id)

    def add_model(self, manufacturer_id: str, name: str) -> MutationResult:
        manufacturer, rejected = self._manufacturer_or_reject("add_model", manufacturer_id)
        if rejected:
            return rejected
        new_id = self._ids.new_id(MODEL_PREFIX)
        updated = manufacturer.with_model(Model(id=new_id, name=name))
        return self._commit(
            self._state.with_manufacturer(updated),
            "model_added",
            new_id,
            manufacturer_id=manufacturer_id,
        )

    def edit_model(self, manufacturer_id: str, model_id: str, name: str) -> MutationResult:
        manufacturer, rejected = self._manufacturer_or_reject("edit_model", manufacturer_id)
        if rejected:
            return rejected
        rejected = self._model_missing("edit_model", manufacturer, model_id)
        if rejected:
            return rejected
        return self._commit(
            self._state.with_manufacturer(manufacturer.renamed_model(model_id, name)),
            "model_renamed",
            model_id,
            manufacturer_id=manufacturer_id,
        )

    def delete_model(self, manufacturer_id: str, model_id: str) -> MutationResult:
        manufacturer, rejected = self._manufacturer_or_reject("delete_model", manufacturer_id)
        if rejected:
            return rejected
        rejected = self._model_missing("delete_model", manufacturer, model_id)
        if rejected:
            return rejected
        return self._commit(
            self._state.with_manufacturer(manufacturer.without_model(model_id)),
            "model_deleted",
            model_id,
            manufacturer_id=manufacturer_id,
        )

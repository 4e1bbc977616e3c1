"""
asset_engines.form_organizer -- resolve the schema into form sections.

Responsibility:
    Combine enabled global attributes, a category's own enabled attributes
    and its inherited attributes into the six fixed buckets an asset form
    renders: asset_info, location, manufacturer, attributes, installation,
    warranty.

Architecture position:
    Engines -- pure reader layer, zero I/O.
    May only import asset_kernel.domain types and sibling engine modules.

Invariants enforced:
    - Only enabled attributes reach a bucket.
    - Routing of global attributes is a fixed mapping on (section, id).
    - ``attributes`` is stably sorted by the category's own config order,
      with ``UNRANKED_ORDER`` for entries the category does not rank
      (globals and inherited entries).
    - ``asset_info`` puts the category field first and the customer
      reference second; everything else keeps arrival order.

Failure modes:
    - No category and ``include_category_field=False`` -> all buckets empty.
    - An unknown ``category_id`` still yields the global buckets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from asset_engines.inheritance import get_inherited_attributes
from asset_engines.tracer import traced_engine
from asset_kernel.domain.attributes import (
    AnyAttribute,
    AttributeType,
    GlobalAttribute,
    GlobalSection,
)
from asset_kernel.domain.state import CatalogState
from asset_kernel.domain.units import resolve_units

# Well-known global attribute ids
GLOBAL_CATEGORY = "global-category"
GLOBAL_CUSTOMER_REFERENCE = "global-customer-reference"
GLOBAL_ASSET_ID = "global-asset-id"
GLOBAL_MANUFACTURER = "global-manufacturer"
GLOBAL_MODEL = "global-model"
GLOBAL_MANUFACTURER_SERIAL = "global-manufacturer-serial"
GLOBAL_DATE_MANUFACTURE = "global-date-manufacture"
GLOBAL_DATE_INSTALLATION = "global-date-installation"
GLOBAL_DATE_LAST_SERVICE = "global-date-last-service"
GLOBAL_CONTACT = "global-contact"
GLOBAL_LOCATION = "global-location"
GLOBAL_CONDITION = "global-condition"
GLOBAL_END_OF_LIFE = "global-end-of-life"

# Routed by the special pass, never through asset-info
MANUFACTURER_SECTION_IDS: tuple[str, ...] = (
    GLOBAL_MANUFACTURER,
    GLOBAL_MODEL,
    GLOBAL_MANUFACTURER_SERIAL,
    GLOBAL_DATE_MANUFACTURE,
)
INSTALLATION_SECTION_IDS: tuple[str, ...] = (
    GLOBAL_DATE_INSTALLATION,
    GLOBAL_DATE_LAST_SERVICE,
)
ASSET_INFO_EXCLUDED_IDS: frozenset[str] = frozenset(
    MANUFACTURER_SECTION_IDS + INSTALLATION_SECTION_IDS + (GLOBAL_ASSET_ID,)
)
LOCATION_IDS: frozenset[str] = frozenset({GLOBAL_CONTACT, GLOBAL_LOCATION})

UNRANKED_ORDER = 999


class FormSource(str, Enum):
    """Where a form field came from."""

    GLOBAL = "global"
    CATEGORY_SYSTEM = "category-system"
    CATEGORY_CUSTOM = "category-custom"
    INHERITED = "inherited"


@dataclass(frozen=True)
class FormAttribute:
    """One field as the form renderer consumes it."""

    id: str
    label: str
    type: AttributeType
    is_required: bool
    is_enabled: bool
    source: FormSource
    description: str | None = None
    dropdown_options: tuple[str, ...] | None = None
    units: str | None = None


@dataclass(frozen=True)
class OrganizedAttributes:
    """The six form buckets."""

    asset_info: tuple[FormAttribute, ...] = field(default_factory=tuple)
    location: tuple[FormAttribute, ...] = field(default_factory=tuple)
    manufacturer: tuple[FormAttribute, ...] = field(default_factory=tuple)
    attributes: tuple[FormAttribute, ...] = field(default_factory=tuple)
    installation: tuple[FormAttribute, ...] = field(default_factory=tuple)
    warranty: tuple[FormAttribute, ...] = field(default_factory=tuple)

    BUCKETS = (
        "asset_info",
        "location",
        "manufacturer",
        "attributes",
        "installation",
        "warranty",
    )

    @property
    def total(self) -> int:
        return sum(len(getattr(self, name)) for name in self.BUCKETS)

    def ids(self, bucket: str) -> list[str]:
        return [a.id for a in getattr(self, bucket)]

    def as_dict(self) -> dict[str, list[dict]]:
        """Plain-dict view for renderers and scripts."""
        return {
            name: [
                {
                    "id": a.id,
                    "label": a.label,
                    "type": a.type.value,
                    "is_required": a.is_required,
                    "is_enabled": a.is_enabled,
                    "description": a.description,
                    "dropdown_options": list(a.dropdown_options) if a.dropdown_options else None,
                    "units": a.units,
                    "source": a.source.value,
                }
                for a in getattr(self, name)
            ]
            for name in self.BUCKETS
        }


def _form_attribute(
    attribute: AnyAttribute,
    source: FormSource,
    is_required: bool,
    is_enabled: bool,
) -> FormAttribute:
    return FormAttribute(
        id=attribute.id,
        label=attribute.label,
        type=attribute.type,
        is_required=is_required,
        is_enabled=is_enabled,
        source=source,
        description=attribute.description,
        dropdown_options=attribute.dropdown_options,
        units=resolve_units(attribute),
    )


def _global_field(attribute: GlobalAttribute) -> FormAttribute:
    return _form_attribute(
        attribute, FormSource.GLOBAL, attribute.is_required, attribute.is_enabled
    )


def _route_global(
    attribute: GlobalAttribute,
    buckets: dict[str, list[FormAttribute]],
    include_category_field: bool,
) -> None:
    """Place one enabled global attribute by (section, id)."""
    section = attribute.section
    if section == GlobalSection.ASSET_INFO:
        excluded = attribute.id in ASSET_INFO_EXCLUDED_IDS or (
            attribute.id == GLOBAL_CATEGORY and not include_category_field
        )
        if not excluded:
            buckets["asset_info"].append(_global_field(attribute))
    elif section == GlobalSection.CONTACT:
        if attribute.id in LOCATION_IDS:
            buckets["location"].append(_global_field(attribute))
    elif section == GlobalSection.STATUS:
        if attribute.id == GLOBAL_CONDITION:
            buckets["asset_info"].append(_global_field(attribute))
    elif section == GlobalSection.DATES:
        if attribute.id == GLOBAL_END_OF_LIFE:
            buckets["warranty"].append(_global_field(attribute))
        else:
            buckets["installation"].append(_global_field(attribute))
    elif section == GlobalSection.WARRANTY:
        buckets["warranty"].append(_global_field(attribute))
    elif section == GlobalSection.YOUR_ATTRIBUTES:
        buckets["attributes"].append(_global_field(attribute))
    # GlobalSection.CUSTOM has no form bucket


def _asset_info_rank(form_attribute: FormAttribute) -> int:
    if form_attribute.id == GLOBAL_CATEGORY:
        return 0
    if form_attribute.id == GLOBAL_CUSTOMER_REFERENCE:
        return 1
    return 2


@traced_engine(
    "form_organizer",
    "1.0",
    fingerprint_fields=("category_id", "include_category_field"),
)
def organize_attributes_for_form(
    state: CatalogState,
    category_id: str | None,
    include_category_field: bool = False,
) -> OrganizedAttributes:
    """Organize every enabled attribute for ``category_id`` into form buckets.

    Args:
        state: Catalog snapshot.
        category_id: Selected category, or None when none is selected yet.
        include_category_field: Keep the category picker in asset_info
            (asset creation); editing an existing asset leaves it out.

    Returns:
        OrganizedAttributes with all six buckets populated.
    """
    if not category_id and not include_category_field:
        return OrganizedAttributes()

    buckets: dict[str, list[FormAttribute]] = {
        name: [] for name in OrganizedAttributes.BUCKETS
    }

    enabled_globals = state.enabled_global_attributes()
    for attribute in enabled_globals:
        _route_global(attribute, buckets, include_category_field)

    # Special pass, in fixed order
    by_id = {a.id: a for a in enabled_globals}
    for attribute_id in MANUFACTURER_SECTION_IDS:
        if attribute_id in by_id:
            buckets["manufacturer"].append(_global_field(by_id[attribute_id]))
    for attribute_id in INSTALLATION_SECTION_IDS:
        if attribute_id in by_id:
            buckets["installation"].append(_global_field(by_id[attribute_id]))

    category = state.get_category(category_id) if category_id else None
    if category is not None:
        attributes = buckets["attributes"]

        for config in category.system_attributes:
            if not config.is_enabled:
                continue
            body = state.find_system_attribute(category.id, config.attribute_id)
            if body is not None:
                attributes.append(
                    _form_attribute(body, FormSource.CATEGORY_SYSTEM, False, config.is_enabled)
                )

        for config in category.custom_attributes:
            if not config.is_enabled:
                continue
            body = state.find_custom_attribute(category.id, config.attribute_id)
            if body is not None:
                attributes.append(
                    _form_attribute(body, FormSource.CATEGORY_CUSTOM, False, config.is_enabled)
                )

        for item in get_inherited_attributes(state, category.id):
            if item.is_enabled:
                attributes.append(
                    _form_attribute(item.attribute, FormSource.INHERITED, False, item.is_enabled)
                )

        system_order = {c.attribute_id: c.order for c in category.system_attributes}
        custom_order = {c.attribute_id: c.order for c in category.custom_attributes}

        def rank(form_attribute: FormAttribute) -> int:
            if form_attribute.id in system_order:
                return system_order[form_attribute.id]
            return custom_order.get(form_attribute.id, UNRANKED_ORDER)

        attributes.sort(key=rank)

    buckets["asset_info"].sort(key=_asset_info_rank)

    return OrganizedAttributes(**{name: tuple(items) for name, items in buckets.items()})

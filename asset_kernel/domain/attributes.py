"""
Attributes -- immutable attribute definitions.

Responsibility:
    Defines the two attribute bodies the catalog holds: category-scoped
    ``Attribute`` (predefined "system" or user-created "custom") and
    ``GlobalAttribute`` (present on every asset).  Both expose an explicit
    ``kind`` discriminant so callers can dispatch without guessing from
    the shape of the object.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - ``id`` and ``is_system`` never change through ``with_updates``.
    - Enum-valued fields are normalized on construction, so YAML strings
      and enum members are interchangeable at the boundary.
    - Collections are tuples; bodies are hashable and safe to share
      between snapshots.

Failure modes:
    - ValueError for an unknown attribute type, section, or a protected
      field in ``with_updates``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any


class AttributeType(str, Enum):
    """Input type of an attribute."""

    TEXT = "text"
    NUMBER = "number"
    DROPDOWN = "dropdown"
    DATE = "date"
    BOOLEAN = "boolean"
    SEARCH = "search"  # Global attributes only

    @property
    def info(self) -> AttributeTypeInfo:
        return ATTRIBUTE_TYPE_INFO[self]


class AttributeKind(str, Enum):
    """Which catalog an attribute body belongs to."""

    GLOBAL = "global"
    SYSTEM = "system"
    CUSTOM = "custom"


class GlobalSection(str, Enum):
    """Section a global attribute is declared in.

    Declaration order is the read-time order of sections.
    """

    ASSET_INFO = "asset-info"
    STATUS = "status"
    CONTACT = "contact"
    DATES = "dates"
    WARRANTY = "warranty"
    CUSTOM = "custom"
    YOUR_ATTRIBUTES = "your-attributes"

    @property
    def position(self) -> int:
        return list(GlobalSection).index(self)


@dataclass(frozen=True)
class AttributeTypeInfo:
    """Display and capability metadata for one attribute type."""

    label: str
    description: str
    supports_dropdown_options: bool = False
    supports_number_format: bool = False


ATTRIBUTE_TYPE_INFO: dict[AttributeType, AttributeTypeInfo] = {
    AttributeType.TEXT: AttributeTypeInfo("Text", "Single line text input"),
    AttributeType.NUMBER: AttributeTypeInfo(
        "Number",
        "Numeric value with optional formatting",
        supports_number_format=True,
    ),
    AttributeType.DROPDOWN: AttributeTypeInfo(
        "Dropdown",
        "Select from predefined options",
        supports_dropdown_options=True,
    ),
    AttributeType.DATE: AttributeTypeInfo("Date", "Date picker"),
    AttributeType.BOOLEAN: AttributeTypeInfo("Yes/No", "True or false value"),
    AttributeType.SEARCH: AttributeTypeInfo("Search", "Lookup against another record"),
}

# Types a category-scoped attribute may use.
CATEGORY_ATTRIBUTE_TYPES: frozenset[AttributeType] = frozenset(AttributeType) - {
    AttributeType.SEARCH
}


# ---------------------------------------------------------------------------
# Number format metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MeasurementConfig:
    """Measurement format: a unit within a measurement category."""

    category: str  # "length", "weight", ...
    unit: str  # unit value within the category, e.g. "mm"


@dataclass(frozen=True)
class CurrencyConfig:
    """Currency format."""

    currency: str  # ISO code, e.g. "GBP"


def _coerce_measurement(value: Any) -> MeasurementConfig | None:
    if value is None or isinstance(value, MeasurementConfig):
        return value
    return MeasurementConfig(category=value["category"], unit=value["unit"])


def _coerce_currency(value: Any) -> CurrencyConfig | None:
    if value is None or isinstance(value, CurrencyConfig):
        return value
    return CurrencyConfig(currency=value["currency"])


def _coerce_options(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(value)


# ---------------------------------------------------------------------------
# Attribute bodies
# ---------------------------------------------------------------------------


class _UpdatableMixin:
    """Partial field merge shared by both attribute bodies."""

    _PROTECTED_FIELDS: frozenset[str] = frozenset({"id"})

    def with_updates(self, updates: dict[str, Any]):
        """Return a copy with ``updates`` merged in.

        Raises:
            ValueError: if ``updates`` names a protected or unknown field.
        """
        known = {f.name for f in fields(self)}  # type: ignore[arg-type]
        protected = self._PROTECTED_FIELDS & updates.keys()
        if protected:
            raise ValueError(f"Cannot update protected fields: {sorted(protected)}")
        unknown = updates.keys() - known
        if unknown:
            raise ValueError(f"Unknown attribute fields: {sorted(unknown)}")
        return replace(self, **updates)  # type: ignore[type-var]


@dataclass(frozen=True)
class Attribute(_UpdatableMixin):
    """
    Category-scoped attribute body.

    Contract:
        ``is_system=True`` bodies are predefined by the platform and live in
        the category's system pool; ``is_system=False`` bodies are
        user-created and live in the category's custom pool.  Enablement
        and order are NOT part of the body; they live in the category's
        ``CategoryAttributeConfig`` entries.
    """

    _PROTECTED_FIELDS = frozenset({"id", "is_system"})

    id: str
    label: str
    type: AttributeType = AttributeType.TEXT
    is_system: bool = False
    is_preferred: bool = False
    description: str | None = None
    dropdown_options: tuple[str, ...] | None = None
    measurement_config: MeasurementConfig | None = None
    currency_config: CurrencyConfig | None = None
    suffix: str | None = None
    units: str | None = None

    def __post_init__(self) -> None:
        attr_type = AttributeType(self.type)
        if attr_type not in CATEGORY_ATTRIBUTE_TYPES:
            raise ValueError(f"Category attributes cannot use type {attr_type.value!r}")
        object.__setattr__(self, "type", attr_type)
        object.__setattr__(self, "dropdown_options", _coerce_options(self.dropdown_options))
        object.__setattr__(
            self, "measurement_config", _coerce_measurement(self.measurement_config)
        )
        object.__setattr__(self, "currency_config", _coerce_currency(self.currency_config))

    @property
    def kind(self) -> AttributeKind:
        return AttributeKind.SYSTEM if self.is_system else AttributeKind.CUSTOM


@dataclass(frozen=True)
class GlobalAttribute(_UpdatableMixin):
    """
    Attribute present on every asset regardless of category.

    Contract:
        ``order`` ranks the attribute within its ``section`` only.
        Read-time order across the catalog is (section position, order),
        see ``asset_kernel.domain.state.CatalogState.ordered_global_attributes``.
        ``is_required`` is advisory except for toggling.
    """

    id: str
    label: str
    type: AttributeType = AttributeType.TEXT
    section: GlobalSection = GlobalSection.YOUR_ATTRIBUTES
    is_enabled: bool = True
    is_required: bool = False
    order: int = 0
    description: str | None = None
    detailed_description: str | None = None
    dropdown_options: tuple[str, ...] | None = None
    measurement_config: MeasurementConfig | None = None
    currency_config: CurrencyConfig | None = None
    suffix: str | None = None
    units: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", AttributeType(self.type))
        object.__setattr__(self, "section", GlobalSection(self.section))
        object.__setattr__(self, "dropdown_options", _coerce_options(self.dropdown_options))
        object.__setattr__(
            self, "measurement_config", _coerce_measurement(self.measurement_config)
        )
        object.__setattr__(self, "currency_config", _coerce_currency(self.currency_config))

    @property
    def kind(self) -> AttributeKind:
        return AttributeKind.GLOBAL


AnyAttribute = Attribute | GlobalAttribute

"""
Pure domain layer.

This module contains the immutable attribute catalog types with NO
dependencies on:
- Persistence
- Time/clock
- I/O

All domain objects are frozen and deterministic.
"""

from asset_kernel.domain.attributes import (
    ATTRIBUTE_TYPE_INFO,
    AnyAttribute,
    Attribute,
    AttributeKind,
    AttributeType,
    AttributeTypeInfo,
    CurrencyConfig,
    GlobalAttribute,
    GlobalSection,
    MeasurementConfig,
)
from asset_kernel.domain.categories import Category, CategoryAttributeConfig
from asset_kernel.domain.manufacturers import Manufacturer, Model
from asset_kernel.domain.results import MutationResult, MutationStatus
from asset_kernel.domain.state import CatalogSettings, CatalogState
from asset_kernel.domain.units import (
    CurrencyOption,
    MeasurementCategoryInfo,
    MeasurementUnit,
    UnitRegistry,
    resolve_units,
)

__all__ = [
    "ATTRIBUTE_TYPE_INFO",
    "AnyAttribute",
    "Attribute",
    "AttributeKind",
    "AttributeType",
    "AttributeTypeInfo",
    "CatalogSettings",
    "CatalogState",
    "Category",
    "CategoryAttributeConfig",
    "CurrencyConfig",
    "CurrencyOption",
    "GlobalAttribute",
    "GlobalSection",
    "Manufacturer",
    "MeasurementCategoryInfo",
    "MeasurementConfig",
    "MeasurementUnit",
    "Model",
    "MutationResult",
    "MutationStatus",
    "UnitRegistry",
    "resolve_units",
]

"""
Seed Loader (``asset_config.loader``).

Responsibility
--------------
Loads individual YAML fragment files and parses their entries into the
frozen domain types of ``asset_kernel.domain``.  This is build/test
tooling: the only runtime entry point is ``asset_config.get_seed_state()``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Consumed by
``asset_config.assembler``.  Depends on the kernel domain only.

Invariants enforced
-------------------
* Required keys are never defaulted: a missing ``id``, ``label`` or
  ``name`` raises ``KeyError``.
* ``parse_attribute`` sets ``is_system`` from the pool it is loaded into,
  never from the YAML entry.
* ``compute_checksum`` is deterministic over the raw fragment data.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Unknown type or section  -> ``ValueError`` from the enum constructors.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from asset_kernel.domain.attributes import Attribute, GlobalAttribute
from asset_kernel.domain.categories import Category, CategoryAttributeConfig
from asset_kernel.domain.manufacturers import Manufacturer, Model
from asset_kernel.domain.state import DEFAULT_MAX_TREE_DEPTH, CatalogSettings

# Optional body fields shared by both attribute kinds
_FORMAT_FIELDS = (
    "description",
    "dropdown_options",
    "measurement_config",
    "currency_config",
    "suffix",
    "units",
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_settings(data: dict[str, Any] | None) -> CatalogSettings:
    data = data or {}
    return CatalogSettings(
        max_tree_depth=int(data.get("max_tree_depth", DEFAULT_MAX_TREE_DEPTH)),
    )


def _format_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {name: data[name] for name in _FORMAT_FIELDS if data.get(name) is not None}


def parse_global_attribute(data: dict[str, Any]) -> GlobalAttribute:
    """
    Parse a ``GlobalAttribute`` from a dict.

    Raises:
        KeyError: if ``id``, ``label`` or ``section`` is missing.
        ValueError: if ``type`` or ``section`` is not a known value.
    """
    return GlobalAttribute(
        id=data["id"],
        label=data["label"],
        type=data.get("type", "text"),
        section=data["section"],
        is_enabled=bool(data.get("is_enabled", True)),
        is_required=bool(data.get("is_required", False)),
        order=int(data.get("order", 0)),
        detailed_description=data.get("detailed_description"),
        **_format_fields(data),
    )


def parse_attribute(data: dict[str, Any], is_system: bool) -> Attribute:
    """
    Parse a category-scoped ``Attribute`` from a dict.

    Args:
        data: One pool entry.
        is_system: True for ``system_attributes.yaml`` entries.

    Raises:
        KeyError: if ``id`` or ``label`` is missing.
        ValueError: if ``type`` is unknown or not allowed on categories.
    """
    return Attribute(
        id=data["id"],
        label=data["label"],
        type=data.get("type", "text"),
        is_system=is_system,
        is_preferred=bool(data.get("is_preferred", False)),
        **_format_fields(data),
    )


def parse_category_config(data: dict[str, Any] | str, position: int) -> CategoryAttributeConfig:
    """Parse one config entry; a bare string is shorthand for an enabled id.

    Entries without ``order`` are ranked by their position in the list.
    """
    if isinstance(data, str):
        return CategoryAttributeConfig(attribute_id=data, is_enabled=True, order=position)
    return CategoryAttributeConfig(
        attribute_id=data["attribute_id"],
        is_enabled=bool(data.get("is_enabled", True)),
        order=int(data.get("order", position)),
    )


def parse_category(data: dict[str, Any]) -> Category:
    """
    Parse a ``Category`` from a dict.

    ``children`` is taken as written; the assembler fills it in from
    ``parent_id`` links when the fragment omits it.
    """
    return Category(
        id=data["id"],
        name=data["name"],
        parent_id=data.get("parent_id"),
        children=tuple(data.get("children") or ()),
        system_attributes=tuple(
            parse_category_config(c, i)
            for i, c in enumerate(data.get("system_attributes") or ())
        ),
        custom_attributes=tuple(
            parse_category_config(c, i)
            for i, c in enumerate(data.get("custom_attributes") or ())
        ),
    )


def parse_pools(data: dict[str, Any] | None, is_system: bool) -> dict[str, tuple[Attribute, ...]]:
    """Parse a ``{category_id: [attribute, ...]}`` mapping."""
    return {
        category_id: tuple(parse_attribute(a, is_system) for a in entries or ())
        for category_id, entries in (data or {}).items()
    }


def parse_manufacturer(data: dict[str, Any]) -> Manufacturer:
    return Manufacturer(
        id=data["id"],
        name=data["name"],
        models=tuple(
            Model(id=m["id"], name=m["name"]) for m in data.get("models") or ()
        ),
        used_by_categories=tuple(data.get("used_by_categories") or ()),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()

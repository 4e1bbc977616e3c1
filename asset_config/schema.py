"""
SeedCatalogSet schema.

Defines the human-authored, reviewable seed of the attribute catalog.
YAML fragments are parsed into these types by the loader, composed by the
assembler, checked by the validator and finally turned into the runtime
``CatalogState`` with ``to_state()``.

Key distinction:
  SeedCatalogSet = source artifact (human-authored, versioned, checksummed)
  CatalogState   = runtime snapshot (owned and evolved by AttributeStore)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from asset_kernel.domain.attributes import Attribute, GlobalAttribute
from asset_kernel.domain.categories import Category
from asset_kernel.domain.manufacturers import Manufacturer
from asset_kernel.domain.state import CatalogSettings, CatalogState


@dataclass(frozen=True)
class SeedCatalogSet:
    """Assembled seed catalog.

    Attributes:
        set_id: Unique identifier (e.g., "default")
        version: Seed version number
        checksum: SHA-256 of the canonical serialization of all fragments
        settings: Tunables applied to the runtime snapshot
        global_attributes: Globals in declaration order
        categories: Categories in declaration order
        system_attributes: Category id -> predefined attribute bodies
        custom_attributes: Category id -> user attribute bodies (usually empty)
        manufacturers: Manufacturer catalog
        description: Free-text note from root.yaml
    """

    set_id: str
    version: int
    checksum: str
    settings: CatalogSettings = field(default_factory=CatalogSettings)
    global_attributes: tuple[GlobalAttribute, ...] = ()
    categories: tuple[Category, ...] = ()
    system_attributes: Mapping[str, tuple[Attribute, ...]] = field(default_factory=dict)
    custom_attributes: Mapping[str, tuple[Attribute, ...]] = field(default_factory=dict)
    manufacturers: tuple[Manufacturer, ...] = ()
    description: str = ""

    def to_state(self) -> CatalogState:
        return CatalogState(
            categories=self.categories,
            global_attributes=self.global_attributes,
            system_attributes=self.system_attributes,
            custom_attributes=self.custom_attributes,
            manufacturers=self.manufacturers,
            settings=self.settings,
        )
